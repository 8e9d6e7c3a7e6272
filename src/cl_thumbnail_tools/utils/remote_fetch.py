"""HTTP retrieval of source images.

The fetcher only downloads bytes; it does not retry, cache, or decode.
"""

from types import TracebackType
from typing import Self

import httpx
from loguru import logger

from ..common.errors import FetchFailureError, InvalidArgumentError


class RemoteFetcher:
    """Download image bytes over HTTP(S).

    A client passed in by the caller is reused and left open, so one
    connection pool can be shared. Without one, the fetcher creates its own
    client and closes it in ``aclose()``.

    Example:
        async with RemoteFetcher(timeout=10.0) as fetcher:
            data = await fetcher.fetch("https://example.com/photo.jpg")
    """

    def __init__(self, client: httpx.AsyncClient | None = None, *, timeout: float = 30.0):
        self._owns_client: bool = client is None
        self.client: httpx.AsyncClient = (
            client
            if client is not None
            else httpx.AsyncClient(follow_redirects=True, timeout=timeout)
        )

    async def fetch(self, url: str | httpx.URL) -> bytes:
        """GET ``url`` and return the response body.

        Args:
            url: Absolute http or https URL

        Returns:
            Response body bytes

        Raises:
            InvalidArgumentError: If url is empty or not http(s)
            FetchFailureError: On transport errors, timeouts and non-2xx
                responses
        """
        if url is None or not str(url):
            raise InvalidArgumentError("'url' cannot be empty")
        try:
            parsed = httpx.URL(str(url))
        except httpx.InvalidURL as exc:
            raise InvalidArgumentError(f"Invalid url '{url}': {exc}") from exc
        if parsed.scheme not in ("http", "https") or not parsed.host:
            raise InvalidArgumentError(f"url must be an absolute http(s) address, got '{url}'")

        logger.info(f"Fetching image from {parsed}")
        try:
            response = await self.client.get(parsed)
            _ = response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.error(f"Failed to fetch {parsed}: HTTP {status_code}")
            raise FetchFailureError(
                str(parsed), f"GET {parsed} returned HTTP {status_code}", status_code
            ) from exc
        except httpx.HTTPError as exc:
            logger.error(f"Failed to fetch {parsed}: {exc!r}")
            raise FetchFailureError(str(parsed), f"GET {parsed} failed: {exc!r}") from exc

        content = response.content
        logger.debug(f"Fetched {len(content)} bytes from {parsed}")
        return content

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
