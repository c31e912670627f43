"""Builds typed gateway models from raw service JSON payloads."""

import math
from typing import Any

from certverify.gateway.exceptions import PayloadValidationError
from certverify.gateway.models import (
    ForgeryDetection,
    ModelPrediction,
    OcrResult,
    RemoteMatchedRecord,
    RemoteVerification,
    UploadReceipt,
)

_VALID_STATUSES = frozenset({"valid", "suspect", "invalid"})


def build_upload_receipt(data: Any) -> UploadReceipt:
    payload = _require_object(data, "upload response")
    upload_id = payload.get("id")
    if isinstance(upload_id, bool) or not isinstance(upload_id, (str, int)) or upload_id == "":
        raise PayloadValidationError("'id' must be a non-empty string")
    try:
        receipt_id = str(upload_id)
    except ValueError as exc:
        raise PayloadValidationError("'id' is too long") from exc
    return UploadReceipt(
        id=receipt_id,
        filename=_optional_str(payload, "filename"),
        size=int(_optional_number(payload, "size")),
        mime_type=_optional_str(payload, "mime_type"),
        status=_optional_str(payload, "status"),
    )


def build_ocr_result(data: Any) -> OcrResult:
    payload = _require_object(data, "OCR response")
    text = payload.get("extracted_text")
    if not isinstance(text, str):
        raise PayloadValidationError("'extracted_text' must be a string")
    return OcrResult(
        text=text,
        confidence=_optional_number(payload, "confidence"),
        language=_optional_str(payload, "language"),
        processing_time=_optional_number(payload, "processing_time"),
    )


def build_forgery_detection(data: Any) -> ForgeryDetection:
    payload = _require_object(data, "detection response")
    success = payload.get("success")
    if not isinstance(success, bool):
        raise PayloadValidationError("'success' must be a boolean")
    is_fake = payload.get("is_fake", False)
    if not isinstance(is_fake, bool):
        raise PayloadValidationError("'is_fake' must be a boolean")
    error_message = payload.get("error_message")
    if error_message is not None and not isinstance(error_message, str):
        raise PayloadValidationError("'error_message' must be a string or null")
    return ForgeryDetection(
        success=success,
        is_fake=is_fake,
        confidence=_optional_number(payload, "confidence"),
        authenticity_score=_optional_number(payload, "authenticity_score"),
        models_used=int(_optional_number(payload, "models_used")),
        individual_predictions=_build_predictions(payload.get("individual_predictions")),
        suspicious_patterns=_build_suspicious_patterns(payload.get("text_analysis")),
        error_message=error_message or None,
    )


def build_remote_verification(data: Any) -> RemoteVerification:
    payload = _require_object(data, "verification response")
    status = payload.get("status")
    if status not in _VALID_STATUSES:
        raise PayloadValidationError(
            f"'status' must be one of {sorted(_VALID_STATUSES)}, got {status!r}"
        )
    issues = payload.get("issues", [])
    if not isinstance(issues, list) or not all(isinstance(i, str) for i in issues):
        raise PayloadValidationError("'issues' must be a list of strings")
    return RemoteVerification(
        status=status,
        confidence=_optional_number(payload, "confidence"),
        issues=list(issues),
        matched_record=_build_matched_record(payload.get("matched_record")),
        id=_optional_str(payload, "id"),
    )


def _build_matched_record(raw: Any) -> RemoteMatchedRecord | None:
    if raw is None:
        return None
    record = _require_object(raw, "'matched_record'")
    for key in ("certificate_number", "name", "institution", "course"):
        if not isinstance(record.get(key), str):
            raise PayloadValidationError(f"'matched_record.{key}' must be a string")
    year = record.get("year")
    if isinstance(year, bool) or not isinstance(year, int):
        raise PayloadValidationError("'matched_record.year' must be an integer")
    return RemoteMatchedRecord(
        certificate_number=record["certificate_number"],
        name=record["name"],
        institution=record["institution"],
        course=record["course"],
        year=year,
    )


def _build_predictions(raw: Any) -> list[ModelPrediction]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise PayloadValidationError("'individual_predictions' must be a list")
    predictions: list[ModelPrediction] = []
    for index, item in enumerate(raw):
        entry = _require_object(item, f"prediction at index {index}")
        error = entry.get("error")
        predictions.append(
            ModelPrediction(
                model=_optional_str(entry, "model"),
                prediction=_optional_number(entry, "prediction"),
                confidence=_optional_number(entry, "confidence"),
                error=error if isinstance(error, str) else None,
            )
        )
    return predictions


def _build_suspicious_patterns(raw: Any) -> list[str]:
    if raw is None:
        return []
    analysis = _require_object(raw, "'text_analysis'")
    patterns = analysis.get("suspicious_patterns", [])
    if not isinstance(patterns, list):
        raise PayloadValidationError("'text_analysis.suspicious_patterns' must be a list")
    return [str(p) for p in patterns]


def _require_object(raw: Any, label: str) -> dict[str, Any]:
    if not isinstance(raw, dict):
        raise PayloadValidationError(f"{label} must be an object")
    return raw


def _optional_str(payload: dict[str, Any], key: str) -> str:
    value = payload.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise PayloadValidationError(f"'{key}' must be a string")
    return value


def _optional_number(payload: dict[str, Any], key: str) -> float:
    value = payload.get(key)
    if value is None:
        return 0.0
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise PayloadValidationError(f"'{key}' must be a number")
    try:
        number = float(value)
    except OverflowError as exc:
        raise PayloadValidationError(f"'{key}' is out of range") from exc
    if not math.isfinite(number):
        raise PayloadValidationError(f"'{key}' must be a finite number")
    return number
