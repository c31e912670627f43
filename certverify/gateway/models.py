from dataclasses import dataclass, field
from typing import Literal

RemoteStatus = Literal["valid", "suspect", "invalid"]


@dataclass(frozen=True)
class UploadReceipt:
    """Backing-store registration returned by the upload service."""

    id: str
    filename: str = ""
    size: int = 0
    mime_type: str = ""
    status: str = ""


@dataclass(frozen=True)
class OcrResult:
    """Text extracted from an image by the OCR service."""

    text: str
    confidence: float = 0.0
    language: str = ""
    processing_time: float = 0.0


@dataclass(frozen=True)
class ModelPrediction:
    """One model's vote inside a forgery-detection response."""

    model: str
    prediction: float
    confidence: float
    error: str | None = None


@dataclass(frozen=True)
class ForgeryDetection:
    """ML authenticity scoring.

    ``success=False`` means the model declined to decide; it is a valid
    response, not a transport failure.
    """

    success: bool
    is_fake: bool
    confidence: float
    authenticity_score: float = 0.0
    models_used: int = 0
    individual_predictions: list[ModelPrediction] = field(default_factory=list)
    suspicious_patterns: list[str] = field(default_factory=list)
    error_message: str | None = None


@dataclass(frozen=True)
class RemoteMatchedRecord:
    """Registry record in the verification service's wire shape."""

    certificate_number: str
    name: str
    institution: str
    course: str
    year: int


@dataclass(frozen=True)
class RemoteVerification:
    """Outcome of authoritative remote verification."""

    status: RemoteStatus
    confidence: float
    issues: list[str] = field(default_factory=list)
    matched_record: RemoteMatchedRecord | None = None
    id: str = ""

