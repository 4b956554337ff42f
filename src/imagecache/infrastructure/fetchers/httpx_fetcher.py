"""httpx-based image fetcher."""

import logging
from collections.abc import Mapping
from types import TracebackType

import httpx

from imagecache.core.errors import FetchError
from imagecache.core.interfaces.image_fetcher import ProgressCallback

logger = logging.getLogger(__name__)


class HttpxImageFetcher:
    """Fetches images with an ``httpx.AsyncClient``.

    The body is streamed so progress can be reported per chunk. No
    retries are attempted; failures surface as ``FetchError``.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        chunk_size: int = 64 * 1024,
    ) -> None:
        """Initialize the fetcher.

        Args:
            client: Optional client to use. A client created here is
                closed by ``aclose``; an injected one is left open.
            timeout: Request timeout in seconds for an owned client.
            chunk_size: Size of the chunks read from the response.
        """
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
        )
        self._chunk_size = chunk_size

    async def fetch(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> bytes:
        """Download the image at url.

        Args:
            url: The image URL.
            headers: Optional extra request headers.
            on_progress: Optional callback invoked after every chunk.

        Returns:
            The raw response body.

        Raises:
            FetchError: If the request failed or the status is not 2xx.
        """
        body = bytearray()
        try:
            async with self._client.stream(
                "GET", url, headers=dict(headers) if headers else None
            ) as response:
                if not response.is_success:
                    raise FetchError(
                        f"Failed to fetch {url}: HTTP {response.status_code}",
                        status_code=response.status_code,
                    )

                total = _content_length(response)
                async for chunk in response.aiter_bytes(self._chunk_size):
                    body.extend(chunk)
                    if on_progress is not None:
                        on_progress(len(body), total)
        except httpx.HTTPError as e:
            raise FetchError(f"Failed to fetch {url}: {e}") from e

        logger.debug("Fetched %d bytes from %s", len(body), url)
        return bytes(body)

    async def aclose(self) -> None:
        """Close the underlying client if this fetcher created it."""
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpxImageFetcher":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def _content_length(response: httpx.Response) -> int | None:
    value = response.headers.get("content-length")
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        return None
