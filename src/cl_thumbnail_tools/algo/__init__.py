"""Dimension resolution and Pillow resize algorithms."""

from .dimensions import classify_orientation, resolve_dimensions
from .image_thumbnail import decode_image, encode_image, image_thumbnail, resample_image

__all__ = [
    "classify_orientation",
    "resolve_dimensions",
    "decode_image",
    "encode_image",
    "image_thumbnail",
    "resample_image",
]
