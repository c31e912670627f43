from unittest.mock import patch

import pytest

from certverify.codes.exceptions import CodeDecodeError
from certverify.codes.factory import CodeReaderFactory
from certverify.codes.opencv_adapter import OpenCvCodeReader


class TestOpenCvCodeReader:
    def test_decodes_qr_payload(self, qr_png_bytes: bytes) -> None:
        result = OpenCvCodeReader().try_decode(qr_png_bytes)
        assert result == "https://registry.example/verify/JH-RU-2021-004567"

    def test_returns_none_without_code(self, plain_png_bytes: bytes) -> None:
        assert OpenCvCodeReader().try_decode(plain_png_bytes) is None

    def test_raises_for_corrupt_image(self, corrupt_png_bytes: bytes) -> None:
        with pytest.raises(CodeDecodeError, match="could not be decoded"):
            OpenCvCodeReader().try_decode(corrupt_png_bytes)

    def test_raises_for_empty_bytes(self) -> None:
        with pytest.raises(CodeDecodeError):
            OpenCvCodeReader().try_decode(b"")


def _make_settings(engine: str):  # type: ignore[no-untyped-def]
    with patch("certverify.config.settings.Settings") as mock_cls:
        settings = mock_cls.return_value
        settings.code_reader_engine = engine
        return settings


class TestCodeReaderFactory:
    def test_creates_opencv_reader(self) -> None:
        assert isinstance(CodeReaderFactory.create(_make_settings("opencv")), OpenCvCodeReader)

    def test_is_case_insensitive(self) -> None:
        assert isinstance(CodeReaderFactory.create(_make_settings("OpenCV")), OpenCvCodeReader)

    def test_raises_for_unknown_engine(self) -> None:
        with pytest.raises(ValueError, match="Unknown code reader engine"):
            CodeReaderFactory.create(_make_settings("zbar"))
