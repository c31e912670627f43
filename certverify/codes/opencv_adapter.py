import io

import cv2
import numpy as np
from PIL import Image

from certverify.codes.base import BaseCodeReader
from certverify.codes.exceptions import CodeDecodeError


class OpenCvCodeReader(BaseCodeReader):
    """Finds QR codes using Pillow for decoding and OpenCV for detection."""

    def try_decode(self, image_bytes: bytes) -> str | None:
        pixels = self._load_pixels(image_bytes)
        detector = cv2.QRCodeDetector()
        try:
            data, _points, _straight = detector.detectAndDecode(pixels)
        except cv2.error:
            return None
        return data or None

    @staticmethod
    def _load_pixels(image_bytes: bytes) -> np.ndarray:
        try:
            with Image.open(io.BytesIO(image_bytes)) as image:
                rgb = image.convert("RGB")
        except Exception as exc:
            raise CodeDecodeError(f"image could not be decoded: {exc}") from exc
        return cv2.cvtColor(np.asarray(rgb), cv2.COLOR_RGB2BGR)
