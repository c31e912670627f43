from dataclasses import asdict, dataclass, field
from typing import Any, Literal

from certverify.gateway.models import ForgeryDetection, RemoteVerification
from certverify.registry.models import RegistryRecord

Status = Literal["valid", "suspect", "invalid"]

VALID: Status = "valid"
SUSPECT: Status = "suspect"
INVALID: Status = "invalid"


@dataclass(frozen=True)
class UploadedFile:
    """A document submitted for verification. Owned by a single pipeline run."""

    name: str
    content: bytes = field(repr=False)
    media_type: str
    size: int

    @property
    def is_image(self) -> bool:
        return self.media_type.startswith("image/")


@dataclass(slots=True)
class EvidenceBundle:
    """Accumulates signals as one file moves through the pipeline.

    ``forgery_latched`` is set once a high-confidence fake detection is seen
    and is never cleared within the run.
    """

    file_name: str
    fingerprint: str
    media_type: str
    size: int
    decoded_code: str | None = None
    upload_id: str | None = None
    ocr_text: str | None = None
    remote_verification: RemoteVerification | None = None
    ml_detection: ForgeryDetection | None = None
    issues: list[str] = field(default_factory=list)
    forgery_latched: bool = False


@dataclass(frozen=True)
class VerificationResult:
    """Final verdict of a pipeline run."""

    status: Status
    issues: tuple[str, ...]
    evidence: EvidenceBundle
    matched_record: RegistryRecord | None = None

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serializable view of the result."""
        evidence = asdict(self.evidence)
        evidence.pop("issues")
        return {
            "status": self.status,
            "issues": list(self.issues),
            "evidence": evidence,
            "matched_record": (
                asdict(self.matched_record) if self.matched_record is not None else None
            ),
        }
