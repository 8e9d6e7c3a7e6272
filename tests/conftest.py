"""Test configuration and fixtures for cl_thumbnail_tools.

This module provides:
- Pytest configuration (markers)
- Synthetic image fixtures generated with PIL (no media files on disk needed)
- Creator, fetcher and API client fixtures backed by httpx.MockTransport
"""

from collections.abc import Callable
from io import BytesIO
from pathlib import Path

import httpx
import pytest
from PIL import Image, ImageDraw

from cl_thumbnail_tools import NoShrinkPolicy, RemoteFetcher, ThumbnailCreator, ThumbnailSettings

# ============================================================================
# Pytest Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line(
        "markers",
        "network: talks to a (mocked) HTTP endpoint",
    )


# ============================================================================
# Image Fixtures
# ============================================================================

ImageFactory = Callable[..., bytes]


def render_image(width: int, height: int, mode: str = "RGB", format: str = "PNG") -> bytes:
    """Render a patterned test image and return it encoded."""
    img = Image.new("RGB", (width, height), color=(73, 109, 137))
    draw = ImageDraw.Draw(img)

    step = max(min(width, height) // 8, 1)
    for i in range(0, width, step):
        draw.line([(i, 0), (i, height)], fill=(255, 255, 255), width=1)
    for i in range(0, height, step):
        draw.line([(0, i), (width, i)], fill=(255, 255, 255), width=1)
    draw.ellipse([width // 4, height // 4, 3 * width // 4, 3 * height // 4], fill=(200, 100, 100))

    if mode != "RGB":
        img = img.convert(mode)

    buffer = BytesIO()
    img.save(buffer, format=format)
    return buffer.getvalue()


@pytest.fixture
def make_image() -> ImageFactory:
    """Factory producing encoded synthetic images of any size."""
    return render_image


@pytest.fixture
def landscape_jpeg_path(tmp_path: Path) -> Path:
    """1920x1080 JPEG on disk."""
    path = tmp_path / "landscape.jpg"
    _ = path.write_bytes(render_image(1920, 1080, format="JPEG"))
    return path


@pytest.fixture
def portrait_png_bytes() -> bytes:
    """480x1920 PNG in memory."""
    return render_image(480, 1920)


@pytest.fixture
def square_png_bytes() -> bytes:
    """500x500 PNG in memory."""
    return render_image(500, 500)


def image_size(data: bytes) -> tuple[int, int]:
    with Image.open(BytesIO(data)) as img:
        return img.size


def image_format(data: bytes) -> str | None:
    with Image.open(BytesIO(data)) as img:
        return img.format


# ============================================================================
# Service Fixtures
# ============================================================================


@pytest.fixture
def settings() -> ThumbnailSettings:
    """Settings independent of the environment running the tests."""
    return ThumbnailSettings(
        default_format="jpeg",
        on_no_shrink=NoShrinkPolicy.PASS_THROUGH,
        resample="bicubic",
        quality=90,
        fetch_timeout=5.0,
    )


@pytest.fixture
def creator(settings: ThumbnailSettings) -> ThumbnailCreator:
    return ThumbnailCreator(settings)


@pytest.fixture
def image_server() -> dict[str, tuple[int, bytes]]:
    """URL -> (status, body) table served by ``mock_transport``."""
    return {}


@pytest.fixture
def mock_transport(image_server: dict[str, tuple[int, bytes]]) -> httpx.MockTransport:
    def handler(request: httpx.Request) -> httpx.Response:
        status_code, body = image_server.get(str(request.url), (404, b"not found"))
        return httpx.Response(status_code, content=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def fetcher(mock_transport: httpx.MockTransport) -> RemoteFetcher:
    return RemoteFetcher(httpx.AsyncClient(transport=mock_transport))


@pytest.fixture
def url_creator(settings: ThumbnailSettings, fetcher: RemoteFetcher) -> ThumbnailCreator:
    return ThumbnailCreator(settings, fetcher=fetcher)


@pytest.fixture
def api_client(url_creator: ThumbnailCreator):
    """Provide FastAPI TestClient for route testing."""
    from fastapi import FastAPI
    from fastapi.testclient import TestClient

    from cl_thumbnail_tools.routes import create_router

    app = FastAPI()
    app.include_router(create_router(url_creator))

    return TestClient(app)
