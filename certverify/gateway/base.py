from abc import ABC, abstractmethod
from typing import Any

from certverify.gateway.models import (
    ForgeryDetection,
    OcrResult,
    RemoteVerification,
    UploadReceipt,
)
from certverify.verification.models import UploadedFile


class BaseSignalGateway(ABC):
    """Contract for the four remote authenticity signals.

    Every call is stateless and fails independently with its own error
    class. Implementations never retry.
    """

    @abstractmethod
    def upload(self, file: UploadedFile) -> UploadReceipt:
        """Register the file with the backing store.

        Raises:
            UploadError: on transport failure, non-success status or malformed payload.
        """

    @abstractmethod
    def extract_text(self, file: UploadedFile) -> OcrResult:
        """Run OCR over an image file.

        Raises:
            OcrError: on any failure.
        """

    @abstractmethod
    def detect_forgery(
        self,
        file: UploadedFile,
        text: str | None = None,
        upload_id: str | None = None,
    ) -> ForgeryDetection:
        """Score the file with the ML fake detector, optionally with OCR context.

        Raises:
            DetectionError: on any failure. A ``success=False`` response is
                returned, not raised.
        """

    @abstractmethod
    def verify(self, upload_id: str) -> RemoteVerification:
        """Verify a previously uploaded file against the authoritative registry.

        Raises:
            VerifyError: on any failure.
        """

    @abstractmethod
    def health(self) -> dict[str, Any]:
        """Return the backend health report.

        Raises:
            GatewayError: when the backend cannot be reached.
        """

    @abstractmethod
    def model_status(self) -> dict[str, Any]:
        """Return the ML model loading status.

        Raises:
            GatewayError: when the backend cannot be reached.
        """

    def close(self) -> None:
        """Release network resources held by the gateway."""
