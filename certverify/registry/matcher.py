"""Deterministic fallback matching against the local registry mirror.

Used only when authoritative remote verification cannot be reached. The
matcher never reports ``invalid``: missing confirmation is ``suspect``.
"""

import re

from certverify.logging.logger import Log
from certverify.registry.base import BaseRegistry
from certverify.registry.models import RegistryRecord
from certverify.verification.models import (
    SUSPECT,
    VALID,
    EvidenceBundle,
    Status,
    VerificationResult,
)

# Loose heuristic: unrelated names of the same shape will also match.
CERTIFICATE_NUMBER_PATTERN = re.compile(r"[A-Z]{2}-[A-Z]{2}-\d{4}-\d{6,}", re.IGNORECASE)

HASH_MISMATCH_ISSUE = "Certificate number found but file hash does not match registry record"
DUPLICATE_NUMBER_ISSUE = "Duplicate certificate number detected in registry (possible clone)"
NO_MATCH_ISSUE = "No registry match. Please contact issuing institution for manual validation"
MISSING_MEDIA_TYPE_ISSUE = "Missing file type metadata"
EMPTY_FILE_ISSUE = "Empty file content"


def extract_certificate_number(text: str | None) -> str | None:
    """Return the first certificate-number-like token in ``text``, uppercased."""
    if not text:
        return None
    match = CERTIFICATE_NUMBER_PATTERN.search(text)
    return match.group(0).upper() if match else None


class LocalRegistryMatcher:
    """Matches accumulated evidence against a read-only registry."""

    def __init__(self, registry: BaseRegistry) -> None:
        self._registry = registry

    def match(self, evidence: EvidenceBundle) -> VerificationResult:
        """Resolve a verdict from the fingerprint, then the certificate number.

        Matcher issues are appended to ``evidence.issues``; the returned
        result carries the full accumulated list.
        """
        status: Status
        record: RegistryRecord | None = self._registry.find_by_fingerprint(evidence.fingerprint)

        if record is not None:
            status = VALID
            Log.info(f"Local registry fingerprint match: {record.certificate_number}")
        else:
            status = SUSPECT
            record = self._match_by_number(evidence)

        if not evidence.media_type:
            evidence.issues.append(MISSING_MEDIA_TYPE_ISSUE)
        if evidence.size == 0:
            evidence.issues.append(EMPTY_FILE_ISSUE)

        return VerificationResult(
            status=status,
            issues=tuple(evidence.issues),
            evidence=evidence,
            matched_record=record,
        )

    def _match_by_number(self, evidence: EvidenceBundle) -> RegistryRecord | None:
        number = extract_certificate_number(evidence.decoded_code) or extract_certificate_number(
            evidence.file_name
        )
        matches = self._registry.find_by_certificate_number(number) if number else []
        if not matches:
            Log.info("No local registry match")
            evidence.issues.append(NO_MATCH_ISSUE)
            return None

        Log.info(f"Local registry number match without fingerprint: {number}")
        evidence.issues.append(HASH_MISMATCH_ISSUE)
        if len(matches) > 1:
            Log.warning(f"Certificate number {number} appears {len(matches)} times in registry")
            evidence.issues.append(DUPLICATE_NUMBER_ISSUE)
        return matches[0]
