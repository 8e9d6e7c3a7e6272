"""Thumbnail configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from PIL import Image
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .schemas import NoShrinkPolicy, OutputFormat

ResampleName = Literal["bicubic", "lanczos", "bilinear", "nearest"]

_RESAMPLE_FILTERS: dict[str, Image.Resampling] = {
    "bicubic": Image.Resampling.BICUBIC,
    "lanczos": Image.Resampling.LANCZOS,
    "bilinear": Image.Resampling.BILINEAR,
    "nearest": Image.Resampling.NEAREST,
}


class ThumbnailSettings(BaseSettings):
    """Defaults applied when a call does not say otherwise.

    Every field can be set with a ``CL_THUMBNAIL_`` prefixed environment
    variable, e.g. ``CL_THUMBNAIL_ON_NO_SHRINK=reject``.
    """

    model_config = SettingsConfigDict(
        env_prefix="CL_THUMBNAIL_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    default_format: OutputFormat = Field(OutputFormat.JPEG)
    on_no_shrink: NoShrinkPolicy = Field(NoShrinkPolicy.PASS_THROUGH)
    resample: ResampleName = Field("bicubic")
    quality: int = Field(90, ge=1, le=100, description="JPEG encoder quality")
    fetch_timeout: float = Field(30.0, gt=0, description="HTTP timeout in seconds")

    @property
    def resample_filter(self) -> Image.Resampling:
        return _RESAMPLE_FILTERS[self.resample]


@lru_cache(maxsize=1)
def get_settings() -> ThumbnailSettings:
    return ThumbnailSettings()
