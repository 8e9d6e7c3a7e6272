"""Error types raised by thumbnail creation."""

from typing_extensions import override


class ThumbnailError(Exception):
    """Base class for every failure surfaced by cl_thumbnail_tools.

    Callers can catch this to handle any thumbnail failure, or one of the
    subclasses to branch on the cause.
    """

    def __init__(self, message: str = "Thumbnail creation failed."):
        self.message: str = message
        super().__init__(self.message)

    @override
    def __str__(self):
        return f"{type(self).__name__}: {self.message}"


class InvalidArgumentError(ThumbnailError, ValueError):
    """A required input is missing, empty, or out of range."""


class NotFoundError(ThumbnailError, FileNotFoundError):
    """A file-path source does not exist."""

    def __init__(self, path: str):
        self.path: str = path
        super().__init__(f"'{path}' cannot be found")

    @override
    def __reduce__(self):
        return (type(self), (self.path,))


class DecodeFailureError(ThumbnailError):
    """The source bytes could not be decoded as a raster image."""


class NoShrinkNeededError(ThumbnailError):
    """Target size is not smaller than the source's constrained axis."""

    def __init__(self, width: float, height: float, target_size: int):
        self.width: float = width
        self.height: float = height
        self.target_size: int = target_size
        super().__init__(
            f"Thumbnail size {target_size} must be less than the constrained "
            + f"axis of a {width:g}x{height:g} image"
        )

    @override
    def __reduce__(self):
        return (type(self), (self.width, self.height, self.target_size))


class FetchFailureError(ThumbnailError):
    """Remote retrieval failed (network error or non-success status)."""

    def __init__(self, url: str, message: str, status_code: int | None = None):
        self.url: str = url
        self.status_code: int | None = status_code
        super().__init__(message)

    @override
    def __reduce__(self):
        return (type(self), (self.url, self.message, self.status_code))


class EncodeFailureError(ThumbnailError):
    """The resized image could not be serialized to the requested format."""

    def __init__(self, format: str, message: str):
        self.format: str = format
        super().__init__(message)

    @override
    def __reduce__(self):
        return (type(self), (self.format, self.message))
