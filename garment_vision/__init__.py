"""Image-side helpers for garment matching."""

from .cropping import CropBox, CropError, Detection, crop_box, crop_region
from .utils import image_bytes_to_pil, jpeg_data_uri, pil_to_jpeg_bytes

__all__ = [
    "CropBox",
    "CropError",
    "Detection",
    "crop_box",
    "crop_region",
    "image_bytes_to_pil",
    "jpeg_data_uri",
    "pil_to_jpeg_bytes",
]
