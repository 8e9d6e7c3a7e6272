"""Thumbnail route factory."""

import asyncio
from typing import Annotated

from fastapi import APIRouter, File, Form, HTTPException, Response, UploadFile
from loguru import logger

from .common.errors import (
    DecodeFailureError,
    EncodeFailureError,
    FetchFailureError,
    InvalidArgumentError,
    NoShrinkNeededError,
    NotFoundError,
    ThumbnailError,
)
from .common.schemas import Orientation, OutputFormat
from .creator import ThumbnailCreator

_STATUS_CODES: dict[type[ThumbnailError], int] = {
    InvalidArgumentError: 422,
    DecodeFailureError: 422,
    NotFoundError: 404,
    NoShrinkNeededError: 409,
    EncodeFailureError: 415,
    FetchFailureError: 502,
}


def _http_error(exc: ThumbnailError) -> HTTPException:
    status_code = next(
        (code for cls, code in _STATUS_CODES.items() if isinstance(exc, cls)),
        500,
    )
    logger.warning(f"Thumbnail request failed with {status_code}: {exc}")
    return HTTPException(status_code=status_code, detail=exc.message)


def create_router(creator: ThumbnailCreator) -> APIRouter:
    """Create router with an injected creator.

    Args:
        creator: ThumbnailCreator whose settings, policy and fetcher are used
            for every request

    Returns:
        Configured APIRouter with thumbnail endpoints
    """
    router = APIRouter()

    @router.post("/thumbnail")
    async def create_thumbnail(
        file: Annotated[UploadFile, File(description="Image to thumbnail")],
        size: Annotated[int, Form(gt=0, description="Size of the constrained axis in pixels")],
        format: Annotated[
            OutputFormat | None, Form(description="Output encoding, defaults to the configured one")
        ] = None,
        orientation: Annotated[
            Orientation | None, Form(description="Force the constrained axis")
        ] = None,
    ) -> Response:
        """Upload an image and receive its thumbnail in the response body."""
        data = await file.read()
        output_format = format if format is not None else creator.settings.default_format
        try:
            # Decode and encode run in a worker thread.
            content = await asyncio.to_thread(
                creator.create_thumbnail_from_bytes,
                data,
                size,
                output_format,
                orientation_override=orientation,
            )
        except ThumbnailError as exc:
            raise _http_error(exc) from exc
        return Response(content=content, media_type=output_format.mime_type)

    @router.post("/thumbnail/url")
    async def create_thumbnail_from_url(
        url: Annotated[str, Form(min_length=1, description="Absolute http(s) image URL")],
        size: Annotated[int, Form(gt=0, description="Size of the constrained axis in pixels")],
        format: Annotated[
            OutputFormat | None, Form(description="Output encoding, defaults to the configured one")
        ] = None,
        orientation: Annotated[
            Orientation | None, Form(description="Force the constrained axis")
        ] = None,
    ) -> Response:
        """Fetch an image by URL and receive its thumbnail in the response body."""
        output_format = format if format is not None else creator.settings.default_format
        try:
            content = await creator.create_thumbnail_from_url(
                url, size, output_format, orientation_override=orientation
            )
        except ThumbnailError as exc:
            raise _http_error(exc) from exc
        return Response(content=content, media_type=output_format.mime_type)

    # Mark functions as used (accessed via FastAPI decorator)
    _ = create_thumbnail
    _ = create_thumbnail_from_url

    return router
