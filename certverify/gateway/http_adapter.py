from collections.abc import Callable
from typing import Any, TypeVar
from urllib.parse import quote

import httpx

from certverify.gateway.base import BaseSignalGateway
from certverify.gateway.exceptions import (
    DetectionError,
    GatewayError,
    OcrError,
    PayloadValidationError,
    UploadError,
    VerifyError,
)
from certverify.gateway.models import (
    ForgeryDetection,
    OcrResult,
    RemoteVerification,
    UploadReceipt,
)
from certverify.gateway.validator import (
    build_forgery_detection,
    build_ocr_result,
    build_remote_verification,
    build_upload_receipt,
)
from certverify.logging.logger import Log
from certverify.verification.models import UploadedFile

T = TypeVar("T")


class HttpSignalGateway(BaseSignalGateway):
    """Remote signal gateway backed by the verification REST API."""

    UPLOAD_PATH = "/api/v1/upload/certificate"
    OCR_PATH = "/api/v1/ocr/extract-text"
    DETECT_PATH = "/api/v1/ml/detect-fake"
    VERIFY_PATH = "/api/v1/verify/certificate/{upload_id}"
    HEALTH_PATH = "/health"
    MODEL_STATUS_PATH = "/api/v1/ml/model-status"

    def __init__(
        self,
        *,
        base_url: str,
        api_token: str = "",
        upload_timeout_seconds: float = 30,
        ocr_timeout_seconds: float = 60,
        detection_timeout_seconds: float = 60,
        verify_timeout_seconds: float = 30,
        health_timeout_seconds: float = 10,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        headers = {"Authorization": f"Bearer {api_token}"} if api_token else {}
        self._client = httpx.Client(
            base_url=base_url.rstrip("/"),
            headers=headers,
            transport=transport,
        )
        self._upload_timeout = upload_timeout_seconds
        self._ocr_timeout = ocr_timeout_seconds
        self._detection_timeout = detection_timeout_seconds
        self._verify_timeout = verify_timeout_seconds
        self._health_timeout = health_timeout_seconds

    def upload(self, file: UploadedFile) -> UploadReceipt:
        return self._request(
            "POST",
            self.UPLOAD_PATH,
            error_cls=UploadError,
            builder=build_upload_receipt,
            timeout=self._upload_timeout,
            files=self._multipart(file),
        )

    def extract_text(self, file: UploadedFile) -> OcrResult:
        return self._request(
            "POST",
            self.OCR_PATH,
            error_cls=OcrError,
            builder=build_ocr_result,
            timeout=self._ocr_timeout,
            files=self._multipart(file),
        )

    def detect_forgery(
        self,
        file: UploadedFile,
        text: str | None = None,
        upload_id: str | None = None,
    ) -> ForgeryDetection:
        form: dict[str, str] = {}
        if text:
            form["certificate_text"] = text
        if upload_id:
            form["certificate_id"] = upload_id
        return self._request(
            "POST",
            self.DETECT_PATH,
            error_cls=DetectionError,
            builder=build_forgery_detection,
            timeout=self._detection_timeout,
            files=self._multipart(file),
            data=form,
        )

    def verify(self, upload_id: str) -> RemoteVerification:
        return self._request(
            "POST",
            self.VERIFY_PATH.format(upload_id=quote(upload_id, safe="")),
            error_cls=VerifyError,
            builder=build_remote_verification,
            timeout=self._verify_timeout,
        )

    def health(self) -> dict[str, Any]:
        return self._request(
            "GET",
            self.HEALTH_PATH,
            error_cls=GatewayError,
            builder=_as_object,
            timeout=self._health_timeout,
        )

    def model_status(self) -> dict[str, Any]:
        return self._request(
            "GET",
            self.MODEL_STATUS_PATH,
            error_cls=GatewayError,
            builder=_as_object,
            timeout=self._health_timeout,
        )

    def close(self) -> None:
        self._client.close()

    def _request(
        self,
        method: str,
        path: str,
        *,
        error_cls: type[GatewayError],
        builder: Callable[[Any], T],
        timeout: float,
        **kwargs: Any,
    ) -> T:
        Log.debug(f"{method} {path}")
        try:
            response = self._client.request(method, path, timeout=timeout, **kwargs)
            response.raise_for_status()
            payload = response.json()
        except httpx.HTTPStatusError as exc:
            raise error_cls(
                f"{path} returned HTTP {exc.response.status_code}"
            ) from exc
        except httpx.InvalidURL as exc:
            raise error_cls(f"{path} is not a valid request URL: {exc}") from exc
        except httpx.HTTPError as exc:
            raise error_cls(f"{path} request failed: {exc}") from exc
        except ValueError as exc:
            raise error_cls(f"{path} returned invalid JSON: {exc}") from exc

        try:
            return builder(payload)
        except PayloadValidationError as exc:
            raise error_cls(f"{path} returned malformed payload: {exc}") from exc

    @staticmethod
    def _multipart(file: UploadedFile) -> dict[str, tuple[str, bytes, str]]:
        media_type = file.media_type or "application/octet-stream"
        return {"file": (file.name, file.content, media_type)}


def _as_object(data: Any) -> dict[str, Any]:
    if not isinstance(data, dict):
        raise PayloadValidationError("response must be an object")
    return data
