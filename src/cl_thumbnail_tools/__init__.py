"""cl_thumbnail_tools - aspect-ratio preserving image thumbnails."""

from .algo.dimensions import classify_orientation, resolve_dimensions
from .common.byte_source import (
    BufferByteSource,
    ByteSource,
    FileByteSource,
    StreamByteSource,
    as_byte_source,
)
from .common.errors import (
    DecodeFailureError,
    EncodeFailureError,
    FetchFailureError,
    InvalidArgumentError,
    NoShrinkNeededError,
    NotFoundError,
    ThumbnailError,
)
from .common.schemas import (
    ImageDimensions,
    NoShrinkPolicy,
    Orientation,
    OutputFormat,
    ResizeAction,
    ResizeOutcome,
    ThumbnailRequest,
)
from .common.settings import ThumbnailSettings, get_settings
from .creator import ThumbnailCreator, create_thumbnail, get_thumbnail_creator
from .utils.remote_fetch import RemoteFetcher

__version__ = "0.1.0"

__all__ = [
    "BufferByteSource",
    "ByteSource",
    "FileByteSource",
    "StreamByteSource",
    "as_byte_source",
    "DecodeFailureError",
    "EncodeFailureError",
    "FetchFailureError",
    "InvalidArgumentError",
    "NoShrinkNeededError",
    "NotFoundError",
    "ThumbnailError",
    "ImageDimensions",
    "NoShrinkPolicy",
    "Orientation",
    "OutputFormat",
    "ResizeAction",
    "ResizeOutcome",
    "ThumbnailRequest",
    "ThumbnailSettings",
    "get_settings",
    "ThumbnailCreator",
    "create_thumbnail",
    "get_thumbnail_creator",
    "RemoteFetcher",
    "classify_orientation",
    "resolve_dimensions",
    "__version__",
]
