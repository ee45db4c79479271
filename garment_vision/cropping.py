"""Bounding-box geometry and garment crops.

Detectors report boxes as center + size in source-image pixels. Crops are
taken from a single decoded source image so the source is fetched and
decoded once per run no matter how many garments were detected.
"""

from __future__ import annotations

from dataclasses import dataclass

from PIL import Image

from .utils import pil_to_jpeg_bytes, round_half_up


class CropError(ValueError):
    pass


@dataclass(frozen=True, slots=True)
class Detection:
    class_name: str
    confidence: float
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True, slots=True)
class CropBox:
    left: int
    top: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.left + self.width

    @property
    def bottom(self) -> int:
        return self.top + self.height

    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


def crop_box(detection: Detection, image_width: int, image_height: int) -> CropBox:
    left = max(0, round_half_up(detection.x - detection.width / 2))
    top = max(0, round_half_up(detection.y - detection.height / 2))
    width = min(round_half_up(detection.width), image_width - left)
    height = min(round_half_up(detection.height), image_height - top)
    return CropBox(left=left, top=top, width=width, height=height)


def crop_region(
    image: Image.Image,
    detection: Detection,
    image_width: int = 0,
    image_height: int = 0,
) -> bytes:
    """Crop one detection out of ``image`` and return it as JPEG bytes.

    ``image_width``/``image_height`` are the dimensions the detector reported;
    when the detector did not report them the decoded image's size is used.
    """
    width = image_width if image_width > 0 else image.width
    height = image_height if image_height > 0 else image.height
    box = crop_box(detection, width, height)
    if box.is_empty():
        raise CropError(
            f"Empty crop for {detection.class_name!r}: "
            f"left={box.left} top={box.top} width={box.width} height={box.height}"
        )
    region = image.crop((box.left, box.top, box.right, box.bottom))
    return pil_to_jpeg_bytes(region)
