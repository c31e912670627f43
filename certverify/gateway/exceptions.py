class GatewayError(Exception):
    """Base exception for all remote signal gateway failures."""


class UploadError(GatewayError):
    """Raised when the file cannot be registered with the backing store."""


class OcrError(GatewayError):
    """Raised when OCR text extraction fails."""


class DetectionError(GatewayError):
    """Raised when the forgery-detection service call fails."""


class VerifyError(GatewayError):
    """Raised when authoritative registry verification fails."""


class PayloadValidationError(ValueError):
    """Raised when a service response does not match its expected shape."""
