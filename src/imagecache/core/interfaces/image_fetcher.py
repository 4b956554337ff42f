"""Image fetcher interface."""

from collections.abc import Mapping
from typing import Protocol


class ProgressCallback(Protocol):
    """Receives download progress as ``(received, total)``.

    ``total`` is None when the server did not announce a size.
    """

    def __call__(self, received: int, total: int | None) -> None: ...


class IImageFetcher(Protocol):
    """Contract for retrieving image bytes from the network.

    The cache never fetches by itself; a loader asks the fetcher on a
    cache miss and stores the returned bytes.
    """

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
        ...
