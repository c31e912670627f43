from certverify.codes.base import BaseCodeReader
from certverify.codes.exceptions import CodeDecodeError
from certverify.codes.factory import CodeReaderFactory
from certverify.config.settings import Settings
from certverify.gateway.base import BaseSignalGateway
from certverify.gateway.exceptions import DetectionError, OcrError, UploadError, VerifyError
from certverify.gateway.factory import GatewayFactory
from certverify.gateway.models import ForgeryDetection, RemoteMatchedRecord, RemoteVerification
from certverify.logging.logger import Log
from certverify.registry.factory import RegistryFactory
from certverify.registry.matcher import LocalRegistryMatcher
from certverify.registry.models import RegistryRecord
from certverify.verification.fingerprint import fingerprint
from certverify.verification.models import (
    INVALID,
    EvidenceBundle,
    Status,
    UploadedFile,
    VerificationResult,
)
from certverify.verification.outcome import Failed, Ok, Outcome, attempt

# Fake confidence above this latches the run to ``invalid``.
FORGERY_LATCH_THRESHOLD = 0.8

CODE_DECODE_FAILED_ISSUE = "Failed to read QR code from image"
DETECTION_UNAVAILABLE_ISSUE = "AI-powered fake detection unavailable"
DETECTION_WITH_OCR_UNAVAILABLE_ISSUE = "AI-powered fake detection with OCR unavailable"
OCR_FAILED_ISSUE = "OCR text extraction failed"
BACKEND_UNAVAILABLE_ISSUE = "Backend verification unavailable - using local verification"


def describe_detection(detection: ForgeryDetection) -> str:
    """Render a forgery-detection response as a human-readable issue."""
    if not detection.success:
        if detection.error_message:
            return f"AI detection inconclusive: {detection.error_message}"
        return "AI detection inconclusive"
    confidence = f"{detection.confidence * 100:.1f}% confidence"
    if detection.is_fake:
        return f"AI detected this certificate as FAKE ({confidence})"
    return f"AI verified certificate as AUTHENTIC ({confidence})"


class VerdictAggregator:
    """Combines independently failable authenticity signals into one verdict.

    Pipeline: fingerprint -> embedded code -> forgery detection ->
    upload -> OCR -> forgery detection with OCR context -> registry verify.
    When upload or verify fails the local registry matcher decides instead.
    ``analyze`` never raises for a readable file.
    """

    def __init__(
        self,
        *,
        gateway: BaseSignalGateway,
        code_reader: BaseCodeReader,
        matcher: LocalRegistryMatcher,
    ) -> None:
        self._gateway = gateway
        self._code_reader = code_reader
        self._matcher = matcher

    def analyze(self, file: UploadedFile) -> VerificationResult:
        """Run the full verification pipeline for one file."""
        Log.info(f"Analyzing {file.name} ({file.media_type or 'unknown type'}, {file.size} bytes)")

        # Step 1: Fingerprint
        evidence = EvidenceBundle(
            file_name=file.name,
            fingerprint=fingerprint(file.content),
            media_type=file.media_type,
            size=file.size,
        )

        # Steps 2-3: Local code and first forgery check, images only
        if file.is_image:
            self._read_embedded_code(file, evidence)
            self._detect_forgery(file, evidence, DETECTION_UNAVAILABLE_ISSUE)

        # Step 4: Authoritative path, or local fallback
        remote = self._run_authoritative_path(file, evidence)
        if isinstance(remote, Failed):
            Log.warning(f"Authoritative verification failed, using local registry: {remote.reason}")
            evidence.issues.append(f"{BACKEND_UNAVAILABLE_ISSUE} ({remote.reason})")
            local = self._matcher.match(evidence)
            return self._finalize(evidence, local.status, local.matched_record)

        verification = remote.value
        evidence.issues.extend(verification.issues)
        record: RegistryRecord | None = None
        if verification.matched_record is not None:
            record = self._to_registry_record(verification.matched_record, evidence.fingerprint)
        return self._finalize(evidence, verification.status, record)

    def _read_embedded_code(self, file: UploadedFile, evidence: EvidenceBundle) -> None:
        outcome = attempt(self._code_reader.try_decode, file.content, errors=(CodeDecodeError,))
        if isinstance(outcome, Failed):
            Log.warning(f"Code decode failed for {file.name}: {outcome.reason}")
            evidence.issues.append(CODE_DECODE_FAILED_ISSUE)
            return
        evidence.decoded_code = outcome.value
        if outcome.value is not None:
            Log.info(f"Decoded embedded code from {file.name}")

    def _detect_forgery(
        self,
        file: UploadedFile,
        evidence: EvidenceBundle,
        unavailable_issue: str,
    ) -> None:
        outcome = attempt(
            self._gateway.detect_forgery,
            file,
            text=evidence.ocr_text,
            upload_id=evidence.upload_id,
            errors=(DetectionError,),
        )
        if isinstance(outcome, Failed):
            Log.warning(f"Forgery detection failed: {outcome.reason}")
            evidence.issues.append(unavailable_issue)
            return

        detection = outcome.value
        evidence.ml_detection = detection
        evidence.issues.append(describe_detection(detection))
        if (
            detection.success
            and detection.is_fake
            and detection.confidence > FORGERY_LATCH_THRESHOLD
        ):
            evidence.forgery_latched = True
            Log.warning(f"Forgery latched for {file.name} at {detection.confidence:.2f}")

    def _run_authoritative_path(
        self,
        file: UploadedFile,
        evidence: EvidenceBundle,
    ) -> Outcome[RemoteVerification]:
        upload = attempt(self._gateway.upload, file, errors=(UploadError,))
        if isinstance(upload, Failed):
            return Failed(f"upload failed: {upload.reason}")
        evidence.upload_id = upload.value.id
        Log.info(f"Uploaded {file.name} as {upload.value.id}")

        if file.is_image:
            ocr = attempt(self._gateway.extract_text, file, errors=(OcrError,))
            if isinstance(ocr, Ok):
                evidence.ocr_text = ocr.value.text
                Log.info(f"OCR extracted {len(ocr.value.text)} chars")
            else:
                Log.warning(f"OCR failed: {ocr.reason}")
                evidence.issues.append(OCR_FAILED_ISSUE)

            if evidence.ml_detection is None:
                self._detect_forgery(file, evidence, DETECTION_WITH_OCR_UNAVAILABLE_ISSUE)

        verification = attempt(self._gateway.verify, upload.value.id, errors=(VerifyError,))
        if isinstance(verification, Failed):
            return Failed(f"verify failed: {verification.reason}")
        evidence.remote_verification = verification.value
        Log.info(f"Remote verification returned {verification.value.status}")
        return verification

    @staticmethod
    def _finalize(
        evidence: EvidenceBundle,
        proposed: Status,
        record: RegistryRecord | None,
    ) -> VerificationResult:
        status = INVALID if evidence.forgery_latched else proposed
        Log.info(f"Verdict for {evidence.file_name}: {status}")
        return VerificationResult(
            status=status,
            issues=tuple(evidence.issues),
            evidence=evidence,
            matched_record=record,
        )

    @staticmethod
    def _to_registry_record(remote: RemoteMatchedRecord, local_fingerprint: str) -> RegistryRecord:
        return RegistryRecord(
            certificate_number=remote.certificate_number,
            fingerprint=local_fingerprint,
            holder_name=remote.name,
            institution=remote.institution,
            course=remote.course,
            year=remote.year,
        )


def build_aggregator(settings: Settings) -> tuple[VerdictAggregator, BaseSignalGateway]:
    """Build a VerdictAggregator with all configured adapters.

    The gateway is returned as well so the caller can close it.
    """
    gateway = GatewayFactory.create(settings)
    code_reader = CodeReaderFactory.create(settings)
    matcher = LocalRegistryMatcher(RegistryFactory.create(settings))
    aggregator = VerdictAggregator(
        gateway=gateway,
        code_reader=code_reader,
        matcher=matcher,
    )
    return aggregator, gateway
