import json
from collections.abc import Callable

import httpx
import pytest

from certverify.gateway.exceptions import (
    DetectionError,
    GatewayError,
    OcrError,
    UploadError,
    VerifyError,
)
from certverify.gateway.http_adapter import HttpSignalGateway
from certverify.verification.models import UploadedFile

Handler = Callable[[httpx.Request], httpx.Response]


def _gateway(handler: Handler, api_token: str = "secret-token") -> HttpSignalGateway:
    return HttpSignalGateway(
        base_url="http://backend.test/",
        api_token=api_token,
        transport=httpx.MockTransport(handler),
    )


def _file() -> UploadedFile:
    content = b"\x89PNG fake image"
    return UploadedFile(
        name="JH-NU-2019-000123.png",
        content=content,
        media_type="image/png",
        size=len(content),
    )


class TestUpload:
    def test_posts_multipart_and_returns_receipt(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={"id": "cert-42", "filename": "JH-NU-2019-000123.png", "size": 15},
            )

        receipt = _gateway(handler).upload(_file())

        assert receipt.id == "cert-42"
        assert receipt.size == 15
        request = seen[0]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/upload/certificate"
        assert request.headers["Authorization"] == "Bearer secret-token"
        assert b'filename="JH-NU-2019-000123.png"' in request.content
        assert b"\x89PNG fake image" in request.content

    def test_omits_authorization_without_token(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "1"})

        _gateway(handler, api_token="").upload(_file())

        assert "Authorization" not in seen[0].headers

    def test_non_success_status_raises_upload_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(503, text="unavailable"))

        with pytest.raises(UploadError, match="HTTP 503"):
            gateway.upload(_file())

    def test_connection_failure_raises_upload_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        with pytest.raises(UploadError, match="request failed"):
            _gateway(handler).upload(_file())

    def test_missing_id_raises_upload_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(200, json={"filename": "x"}))

        with pytest.raises(UploadError, match="malformed payload"):
            gateway.upload(_file())

    @pytest.mark.parametrize(
        "body",
        [
            b'{"id": "u1", "size": 1e400}',
            b'{"id": "u1", "size": NaN}',
            b'{"id": "u1", "size": 1' + b"0" * 400 + b"}",
        ],
    )
    def test_non_finite_size_raises_upload_error(self, body: bytes) -> None:
        gateway = _gateway(lambda request: httpx.Response(200, content=body))

        with pytest.raises(UploadError, match="malformed payload"):
            gateway.upload(_file())


class TestExtractText:
    def test_returns_ocr_text(self) -> None:
        gateway = _gateway(
            lambda request: httpx.Response(
                200,
                json={"id": "o1", "extracted_text": "Aarav Kumar", "confidence": 0.91},
            )
        )

        result = gateway.extract_text(_file())

        assert result.text == "Aarav Kumar"
        assert result.confidence == pytest.approx(0.91)

    def test_invalid_json_raises_ocr_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(200, text="<html>oops</html>"))

        with pytest.raises(OcrError, match="invalid JSON"):
            gateway.extract_text(_file())


class TestDetectForgery:
    def test_sends_ocr_context_fields(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "success": True,
                    "is_fake": True,
                    "confidence": 0.88,
                    "models_used": 2,
                    "individual_predictions": [
                        {"model": "cnn", "prediction": 1, "confidence": 0.9},
                        {"model": "text", "prediction": 1, "confidence": 0.86},
                    ],
                    "text_analysis": {"suspicious_patterns": ["font mismatch"]},
                },
            )

        result = _gateway(handler).detect_forgery(_file(), text="Aarav", upload_id="cert-42")

        assert result.is_fake is True
        assert result.models_used == 2
        assert [p.model for p in result.individual_predictions] == ["cnn", "text"]
        assert result.suspicious_patterns == ["font mismatch"]
        body = seen[0].content
        assert seen[0].url.path == "/api/v1/ml/detect-fake"
        assert b'name="certificate_text"' in body
        assert b'name="certificate_id"' in body
        assert b"cert-42" in body

    def test_omits_context_fields_when_absent(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"success": False, "is_fake": False})

        result = _gateway(handler).detect_forgery(_file())

        assert result.success is False
        assert b"certificate_text" not in seen[0].content
        assert b"certificate_id" not in seen[0].content

    def test_timeout_raises_detection_error(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("timed out", request=request)

        with pytest.raises(DetectionError, match="request failed"):
            _gateway(handler).detect_forgery(_file())


class TestVerify:
    def test_posts_to_upload_specific_path(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(
                200,
                json={
                    "id": "v1",
                    "status": "valid",
                    "confidence": 0.99,
                    "issues": [],
                    "matched_record": {
                        "certificate_number": "JH-NU-2019-000123",
                        "name": "Aarav Kumar",
                        "institution": "Nilamber-Pitamber University",
                        "course": "B.Sc",
                        "year": 2019,
                    },
                },
            )

        result = _gateway(handler).verify("cert-42")

        assert seen[0].url.path == "/api/v1/verify/certificate/cert-42"
        assert result.status == "valid"
        assert result.matched_record is not None
        assert result.matched_record.name == "Aarav Kumar"

    def test_unknown_status_raises_verify_error(self) -> None:
        gateway = _gateway(
            lambda request: httpx.Response(
                200, json={"status": "maybe", "confidence": 0.5, "issues": []}
            )
        )

        with pytest.raises(VerifyError, match="malformed payload"):
            gateway.verify("cert-42")

    def test_not_found_raises_verify_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(404, json={"detail": "missing"}))

        with pytest.raises(VerifyError, match="HTTP 404"):
            gateway.verify("cert-42")

    @pytest.mark.parametrize(
        ("upload_id", "encoded"),
        [
            ("a/b", b"a%2Fb"),
            ("../x", b"..%2Fx"),
            ("a\nb", b"a%0Ab"),
            ("a\x00b", b"a%00b"),
            ("cert 7?x=1#f", b"cert%207%3Fx%3D1%23f"),
        ],
    )
    def test_upload_id_is_escaped_as_one_path_segment(
        self, upload_id: str, encoded: bytes
    ) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"status": "suspect", "issues": []})

        result = _gateway(handler).verify(upload_id)

        assert result.status == "suspect"
        assert seen[0].url.raw_path == b"/api/v1/verify/certificate/" + encoded


class TestServiceStatus:
    def test_health_returns_report(self) -> None:
        report = {"status": "healthy", "version": "1.0"}
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, content=json.dumps(report))

        assert _gateway(handler).health() == report
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/health"

    def test_model_status_failure_raises_gateway_error(self) -> None:
        gateway = _gateway(lambda request: httpx.Response(500))

        with pytest.raises(GatewayError):
            gateway.model_status()
