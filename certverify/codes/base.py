from abc import ABC, abstractmethod


class BaseCodeReader(ABC):
    """Contract for all embedded-code reader adapters."""

    @abstractmethod
    def try_decode(self, image_bytes: bytes) -> str | None:
        """Search an image for a machine-readable 2D code.

        Args:
            image_bytes: Raw image file content (PNG, JPEG, ...).

        Returns:
            The decoded payload, or None when the image carries no code.

        Raises:
            CodeDecodeError: if the bytes cannot be decoded into pixels.
        """
