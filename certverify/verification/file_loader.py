import mimetypes
from pathlib import Path

from certverify.verification.exceptions import UnreadableInputError
from certverify.verification.models import UploadedFile


class FileLoader:
    """Reads a document from disk into an UploadedFile."""

    def load(self, path: Path, media_type: str | None = None) -> UploadedFile:
        """Read file bytes and declared metadata.

        The media type is guessed from the file name when not given; it is
        left empty when unknown.

        Raises:
            UnreadableInputError: if the file does not exist or cannot be read.
        """
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise UnreadableInputError(f"Cannot read {path}: {exc}") from exc
        if media_type is None:
            media_type = mimetypes.guess_type(path.name)[0] or ""
        return UploadedFile(
            name=path.name,
            content=content,
            media_type=media_type,
            size=len(content),
        )
