class CodeDecodeError(Exception):
    """Raised when image bytes cannot be decoded into pixel data."""
