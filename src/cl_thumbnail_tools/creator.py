"""ThumbnailCreator - public entry points for thumbnail creation."""

import asyncio
from io import BytesIO
from typing import BinaryIO

from loguru import logger
from pydantic import ValidationError

from .algo.image_thumbnail import image_thumbnail
from .common.byte_source import SourceLike, as_byte_source
from .common.errors import InvalidArgumentError
from .common.schemas import NoShrinkPolicy, Orientation, OutputFormat, ThumbnailRequest
from .common.settings import ThumbnailSettings, get_settings
from .utils.remote_fetch import RemoteFetcher


class ThumbnailCreator:
    """Create thumbnails from files, streams, byte buffers and URLs.

    Every source shape is adapted to a readable byte source and handed to
    the same resize routine. All failures are raised as ``ThumbnailError``
    subclasses; nothing is reported by returning ``None``.

    Example:
        creator = ThumbnailCreator(on_no_shrink=NoShrinkPolicy.REJECT)
        data = creator.create_thumbnail_from_file("photo.jpg", 480, OutputFormat.PNG)
    """

    def __init__(
        self,
        settings: ThumbnailSettings | None = None,
        *,
        orientation_override: Orientation | None = None,
        on_no_shrink: NoShrinkPolicy | None = None,
        fetcher: RemoteFetcher | None = None,
    ):
        """Initialize the creator.

        Args:
            settings: Defaults for format, policy, resampling and quality.
                Falls back to environment driven ``get_settings()``.
            orientation_override: Default axis to constrain (landscape or
                portrait) for calls that do not pass their own
            on_no_shrink: Overrides ``settings.on_no_shrink``
            fetcher: Used by the URL variants. Created lazily when omitted.
        """
        if orientation_override == Orientation.SQUARE:
            raise InvalidArgumentError("Orientation override must be landscape or portrait")
        self.settings: ThumbnailSettings = settings if settings is not None else get_settings()
        self.orientation_override: Orientation | None = orientation_override
        self.on_no_shrink: NoShrinkPolicy = (
            on_no_shrink if on_no_shrink is not None else self.settings.on_no_shrink
        )
        self._fetcher: RemoteFetcher | None = fetcher
        self._owns_fetcher: bool = fetcher is None

    @property
    def fetcher(self) -> RemoteFetcher:
        if self._fetcher is None:
            self._fetcher = RemoteFetcher(timeout=self.settings.fetch_timeout)
        return self._fetcher

    def _request(
        self,
        target_size: int,
        format: OutputFormat | str | None,
        orientation_override: Orientation | None = None,
    ) -> ThumbnailRequest:
        try:
            return ThumbnailRequest(
                target_size=target_size,
                format=format if format is not None else self.settings.default_format,
                orientation_override=(
                    orientation_override
                    if orientation_override is not None
                    else self.orientation_override
                ),
            )
        except ValidationError as exc:
            raise InvalidArgumentError(
                f"Invalid thumbnail request (size={target_size!r}, format={format!r}): "
                + "; ".join(str(err["msg"]) for err in exc.errors())
            ) from exc

    def create_thumbnail(
        self,
        source: SourceLike,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> bytes:
        """Create a thumbnail from any supported source and return its bytes.

        Args:
            source: File path, binary stream, bytes-like buffer or ByteSource
            target_size: Size of the constrained axis. For portrait images
                this is the height, for landscape the width, for square both.
            format: Output encoding; defaults to ``settings.default_format``
            orientation_override: Constrain this axis for this call only;
                falls back to the creator default

        Raises:
            InvalidArgumentError: Missing source or non-positive size
            NotFoundError: File path does not exist
            DecodeFailureError: Source is not a decodable image
            NoShrinkNeededError: Size does not shrink the source and the
                policy is REJECT
            EncodeFailureError: Thumbnail cannot be written in ``format``
        """
        request = self._request(target_size, format, orientation_override)
        byte_source = as_byte_source(source)
        logger.debug(
            f"Creating {request.format} thumbnail of size {request.target_size} "
            + f"from {byte_source.describe()}"
        )
        with byte_source.open() as stream:
            return image_thumbnail(
                stream=stream,
                target_size=request.target_size,
                format=request.format,
                orientation_override=request.orientation_override,
                on_no_shrink=self.on_no_shrink,
                resample=self.settings.resample_filter,
                quality=self.settings.quality,
            )

    def create_thumbnail_stream(
        self,
        source: SourceLike,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> BytesIO:
        """Same as ``create_thumbnail`` but returns a stream positioned at 0."""
        return BytesIO(
            self.create_thumbnail(
                source, target_size, format, orientation_override=orientation_override
            )
        )

    def create_thumbnail_from_file(
        self,
        path: str,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> bytes:
        if path is None or not str(path):
            raise InvalidArgumentError("'path' cannot be empty")
        return self.create_thumbnail(
            path, target_size, format, orientation_override=orientation_override
        )

    def create_thumbnail_from_stream(
        self,
        stream: BinaryIO,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> bytes:
        if stream is None:
            raise InvalidArgumentError("'stream' cannot be None")
        return self.create_thumbnail(
            stream, target_size, format, orientation_override=orientation_override
        )

    def create_thumbnail_from_bytes(
        self,
        data: bytes | bytearray | memoryview,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> bytes:
        if data is None:
            raise InvalidArgumentError("'data' cannot be None")
        return self.create_thumbnail(
            bytes(data), target_size, format, orientation_override=orientation_override
        )

    async def create_thumbnail_from_url(
        self,
        url: str,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> bytes:
        """Download ``url`` and create a thumbnail from the response body.

        Decoding and encoding run in a worker thread so the event loop stays
        responsive.

        Raises:
            FetchFailureError: Download failed or returned a non-2xx status
            plus everything ``create_thumbnail`` raises
        """
        if url is None or not str(url):
            raise InvalidArgumentError("'url' cannot be None")
        # Reject bad sizes and formats before touching the network.
        _ = self._request(target_size, format, orientation_override)
        data = await self.fetcher.fetch(url)
        return await asyncio.to_thread(
            self.create_thumbnail,
            data,
            target_size,
            format,
            orientation_override=orientation_override,
        )

    async def create_thumbnail_stream_from_url(
        self,
        url: str,
        target_size: int,
        format: OutputFormat | str | None = None,
        *,
        orientation_override: Orientation | None = None,
    ) -> BytesIO:
        return BytesIO(
            await self.create_thumbnail_from_url(
                url, target_size, format, orientation_override=orientation_override
            )
        )

    async def aclose(self) -> None:
        """Release the HTTP client of a fetcher this creator created."""
        if self._owns_fetcher and self._fetcher is not None:
            await self._fetcher.aclose()


_default_creator: ThumbnailCreator | None = None


def get_thumbnail_creator() -> ThumbnailCreator:
    """Get the shared creator configured from the environment."""
    global _default_creator
    if _default_creator is None:
        _default_creator = ThumbnailCreator()
    return _default_creator


def create_thumbnail(
    source: SourceLike,
    target_size: int,
    format: OutputFormat | str | None = None,
    *,
    orientation_override: Orientation | None = None,
) -> bytes:
    """Create a thumbnail with the shared creator."""
    return get_thumbnail_creator().create_thumbnail(
        source, target_size, format, orientation_override=orientation_override
    )
