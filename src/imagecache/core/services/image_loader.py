"""Image loader - ties a fetcher to the cache manager."""

import logging
from collections.abc import Callable, Mapping

from imagecache.core.entities.image_response import ImageResponse, ProgressData
from imagecache.core.errors import EmptyPayloadError, ImageCacheError, StorageError
from imagecache.core.interfaces.image_fetcher import IImageFetcher
from imagecache.core.services.cache_manager import CacheManager

logger = logging.getLogger(__name__)


class ImageLoader:
    """Loads images from the cache, falling back to the network.

    Returns an ``ImageResponse`` instead of raising, so the display
    side always gets either bytes or an error message to render. Only
    using an uninitialized cache raises, since that is a setup bug.
    """

    def __init__(self, cache_manager: CacheManager, fetcher: IImageFetcher) -> None:
        """Initialize the loader.

        Args:
            cache_manager: The initialized cache manager.
            fetcher: Fetcher used on cache misses.
        """
        self._cache_manager = cache_manager
        self._fetcher = fetcher

    async def load(
        self,
        url: str,
        headers: Mapping[str, str] | None = None,
        on_progress: Callable[[ProgressData], None] | None = None,
    ) -> ImageResponse:
        """Load the image for a URL.

        Args:
            url: The image URL.
            headers: Optional extra request headers for the fetch.
            on_progress: Optional callback receiving download progress.

        Returns:
            The image bytes or an error description.

        Raises:
            UninitializedCacheError: If the cache manager is not initialized.
        """
        self._cache_manager.check_init()

        try:
            cached = await self._cache_manager.get_image(url)
        except StorageError as e:
            logger.warning("Cache lookup failed for %s: %s", url, e)
            cached = None

        if cached:
            return ImageResponse(image_data=cached, from_cache=True)

        progress = ProgressData(is_downloading=True)

        def report(received: int, total: int | None) -> None:
            progress.update(received, total)
            if on_progress is not None:
                on_progress(progress)

        try:
            data = await self._fetcher.fetch(url, headers=headers, on_progress=report)
            if not data:
                raise EmptyPayloadError(f"Image is an empty file: {url}")
        except ImageCacheError as e:
            logger.warning("Failed to load image %s: %s", url, e)
            return ImageResponse(image_data=None, error=str(e))
        finally:
            progress.is_downloading = False

        try:
            await self._cache_manager.save_image(url, data)
        except StorageError as e:
            logger.warning("Failed to cache image %s: %s", url, e)

        return ImageResponse(image_data=data)

    async def invalidate(self, url: str) -> bool:
        """Drop a cached image that could not be decoded.

        Args:
            url: The image URL.

        Returns:
            True if a cached image was removed.
        """
        return await self._cache_manager.delete_cached_image(url)
