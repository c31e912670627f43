import io

import pytest
import qrcode
from PIL import Image


@pytest.fixture()
def plain_png_bytes() -> bytes:
    """Generate a blank white PNG with no code on it."""
    buf = io.BytesIO()
    Image.new("RGB", (240, 240), color="white").save(buf, format="PNG")
    return buf.getvalue()


@pytest.fixture()
def qr_png_bytes() -> bytes:
    """Generate a PNG carrying a QR code with a known certificate number."""
    buf = io.BytesIO()
    qrcode.make("https://registry.example/verify/JH-RU-2021-004567").save(buf)
    return buf.getvalue()


@pytest.fixture()
def corrupt_png_bytes() -> bytes:
    """PNG signature followed by bytes that are not an image."""
    return b"\x89PNG\r\n\x1a\n" + b"not really an image" * 4
