"""Gateway adapter for running without any remote services.

Every signal call fails with its own error class, so the aggregator takes
the local registry fallback on every run.
"""

from typing import Any

from certverify.gateway.base import BaseSignalGateway
from certverify.gateway.exceptions import DetectionError, OcrError, UploadError, VerifyError
from certverify.gateway.models import (
    ForgeryDetection,
    OcrResult,
    RemoteVerification,
    UploadReceipt,
)
from certverify.verification.models import UploadedFile

_DISABLED = "remote services disabled (offline mode)"


class OfflineSignalGateway(BaseSignalGateway):
    """Gateway that never reaches a remote service."""

    def upload(self, file: UploadedFile) -> UploadReceipt:
        raise UploadError(_DISABLED)

    def extract_text(self, file: UploadedFile) -> OcrResult:
        raise OcrError(_DISABLED)

    def detect_forgery(
        self,
        file: UploadedFile,
        text: str | None = None,
        upload_id: str | None = None,
    ) -> ForgeryDetection:
        raise DetectionError(_DISABLED)

    def verify(self, upload_id: str) -> RemoteVerification:
        raise VerifyError(_DISABLED)

    def health(self) -> dict[str, Any]:
        return {"status": "offline"}

    def model_status(self) -> dict[str, Any]:
        return {"status": "offline", "success": False}
