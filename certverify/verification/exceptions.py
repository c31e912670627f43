class VerificationError(Exception):
    """Base exception for verification pipeline errors."""


class UnreadableInputError(VerificationError):
    """Raised when an input file cannot be read into memory."""
