"""Data models shared by the resolver, the pipeline and the routes."""

import math
from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Orientation(StrEnum):
    LANDSCAPE = "landscape"
    PORTRAIT = "portrait"
    SQUARE = "square"


class NoShrinkPolicy(StrEnum):
    """What to do when the target size does not shrink the source."""

    PASS_THROUGH = "pass_through"
    REJECT = "reject"


class ResizeAction(StrEnum):
    RESIZE = "resize"
    PASS_THROUGH = "pass_through"


class OutputFormat(StrEnum):
    """Raster encodings a thumbnail can be written as.

    EXIF, WMF and EMF are listed for completeness but Pillow has no writer
    for them; see ``is_supported``.
    """

    JPEG = "jpeg"
    BMP = "bmp"
    PNG = "png"
    GIF = "gif"
    TIFF = "tiff"
    ICON = "icon"
    EXIF = "exif"
    WMF = "wmf"
    EMF = "emf"

    @property
    def pil_format(self) -> str | None:
        return _PIL_FORMATS.get(self)

    @property
    def mime_type(self) -> str:
        return _MIME_TYPES[self]

    @property
    def is_supported(self) -> bool:
        return self.pil_format is not None

    @classmethod
    def supported(cls) -> list["OutputFormat"]:
        return [fmt for fmt in cls if fmt.is_supported]


_PIL_FORMATS: dict[OutputFormat, str] = {
    OutputFormat.JPEG: "JPEG",
    OutputFormat.BMP: "BMP",
    OutputFormat.PNG: "PNG",
    OutputFormat.GIF: "GIF",
    OutputFormat.TIFF: "TIFF",
    OutputFormat.ICON: "ICO",
}

_MIME_TYPES: dict[OutputFormat, str] = {
    OutputFormat.JPEG: "image/jpeg",
    OutputFormat.BMP: "image/bmp",
    OutputFormat.PNG: "image/png",
    OutputFormat.GIF: "image/gif",
    OutputFormat.TIFF: "image/tiff",
    OutputFormat.ICON: "image/x-icon",
    OutputFormat.EXIF: "image/jpeg",
    OutputFormat.WMF: "image/wmf",
    OutputFormat.EMF: "image/emf",
}


def _check_magnitude(value: object) -> float:
    if (
        isinstance(value, bool)
        or not isinstance(value, (int, float))
        or not math.isfinite(value)
        or value <= 0
    ):
        raise ValueError(f"must be a positive finite number, got {value!r}")
    return value


class ImageDimensions(BaseModel):
    """Pixel extent of a decoded image."""

    width: float
    height: float

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("width", "height", mode="before")
    @classmethod
    def positive_finite(cls, v: object) -> float:
        return _check_magnitude(v)

    @property
    def orientation(self) -> Orientation:
        if self.height > self.width:
            return Orientation.PORTRAIT
        if self.width > self.height:
            return Orientation.LANDSCAPE
        return Orientation.SQUARE


class ResizeOutcome(BaseModel):
    """Result of resolving thumbnail dimensions.

    ``width`` and ``height`` are the output size; for a pass-through they
    are the source size.
    """

    action: ResizeAction
    width: int = Field(gt=0)
    height: int = Field(gt=0)
    orientation: Orientation

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    @property
    def is_pass_through(self) -> bool:
        return self.action == ResizeAction.PASS_THROUGH


class ThumbnailRequest(BaseModel):
    """Per-call thumbnail parameters."""

    target_size: int = Field(gt=0, description="Size of the constrained axis in pixels")
    format: OutputFormat = Field(OutputFormat.JPEG, description="Output encoding")
    orientation_override: Orientation | None = Field(
        None, description="Force the constrained axis instead of deriving it"
    )

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    @field_validator("target_size", mode="before")
    @classmethod
    def reject_bool(cls, v: object) -> object:
        if isinstance(v, bool):
            raise ValueError("target_size must be an integer, got a bool")
        return v

    @field_validator("orientation_override")
    @classmethod
    def landscape_or_portrait(cls, v: Orientation | None) -> Orientation | None:
        if v == Orientation.SQUARE:
            raise ValueError("orientation_override must be landscape or portrait")
        return v
