from __future__ import annotations

import base64
import math
from io import BytesIO

from PIL import Image


def image_bytes_to_pil(image_bytes: bytes) -> Image.Image:
    return Image.open(BytesIO(image_bytes)).convert("RGB")


def pil_to_jpeg_bytes(image: Image.Image, quality: int = 82) -> bytes:
    out = BytesIO()
    image.convert("RGB").save(out, format="JPEG", quality=quality, optimize=True)
    return out.getvalue()


def jpeg_data_uri(image_bytes: bytes) -> str:
    return "data:image/jpeg;base64," + base64.b64encode(image_bytes).decode("ascii")


def round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; box edges need x.5 -> x+1.
    return int(math.floor(value + 0.5))
