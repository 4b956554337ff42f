"""Cache manager - main orchestrator for image cache operations."""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager
from datetime import datetime, timedelta, timezone
from types import TracebackType

from imagecache.core.entities.cache_config import CacheConfig
from imagecache.core.entities.cache_entry import CacheEntry
from imagecache.core.errors import ImageCacheError, UninitializedCacheError
from imagecache.core.interfaces.key_builder import IKeyBuilder
from imagecache.core.interfaces.key_value_store import IKeyValueStore
from imagecache.utils.hashing import key_from_url

logger = logging.getLogger(__name__)

_NOT_INITIALIZED_MESSAGE = (
    "Image cache is not initialized. "
    "Call CacheManager.initialize() before using it."
)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class CacheManager:
    """Domain service that owns the image cache.

    Composes a metadata store (key -> creation time) and a blob store
    (key -> image bytes). Both are addressed by the key derived from
    the image URL, and a key only counts as cached when both records
    exist. The manager is the only writer of either store.

    Construct one instance per storage location and pass it to
    whatever needs the cache. ``initialize`` must complete before any
    other operation.
    """

    def __init__(
        self,
        metadata_store: IKeyValueStore[datetime],
        blob_store: IKeyValueStore[bytes],
        config: CacheConfig | None = None,
        key_builder: IKeyBuilder | None = None,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        """Initialize the cache manager.

        Args:
            metadata_store: Store mapping keys to creation timestamps.
            blob_store: Store mapping keys to image bytes.
            config: Optional cache configuration. Uses defaults if not provided.
            key_builder: Optional key builder. Uses version 5 UUIDs if not provided.
            clock: Optional source of "now" timestamps. Naive values are
                taken as UTC.
        """
        self._metadata_store = metadata_store
        self._blob_store = blob_store
        self._config = config or CacheConfig()
        self._key_builder = key_builder
        self._clock = clock or _utcnow
        self._initialized = False

        # Clearing waits for in-flight operations; new ones wait for it
        self._gate = asyncio.Condition()
        self._active = 0
        self._clearing = False

        # Statistics
        self._hits = 0
        self._misses = 0

    @property
    def config(self) -> CacheConfig:
        """Get the cache configuration."""
        return self._config

    @property
    def is_initialized(self) -> bool:
        """Return True once ``initialize`` completed."""
        return self._initialized

    @property
    def stats(self) -> dict[str, int]:
        """Get lookup statistics.

        Returns:
            Dictionary with hits, misses, and total lookups.
        """
        return {
            "hits": self._hits,
            "misses": self._misses,
            "total": self._hits + self._misses,
        }

    async def initialize(self) -> None:
        """Open both stores and evict expired images.

        Calling this again on an initialized manager does nothing.
        """
        if self._initialized:
            return

        await self._metadata_store.open()
        await self._blob_store.open()
        self._initialized = True

        await self.evict_expired(self._config.retention)

    async def close(self) -> None:
        """Close both stores. The manager must be initialized again to be used."""
        self._initialized = False
        await self._metadata_store.close()
        await self._blob_store.close()

    def check_init(self) -> None:
        """Ensure the cache is initialized and both stores are open.

        Stores being recreated by ``clear_all_cached_images`` still count
        as open.

        Raises:
            UninitializedCacheError: If the cache cannot be used yet.
        """
        if not self._initialized:
            raise UninitializedCacheError(_NOT_INITIALIZED_MESSAGE)
        if self._clearing:
            return
        if not self._metadata_store.is_open or not self._blob_store.is_open:
            raise UninitializedCacheError(_NOT_INITIALIZED_MESSAGE)

    async def get_image(self, url: str) -> bytes | None:
        """Get the cached image for a URL.

        Records stored under the raw URL by older releases are moved
        to the derived key first.

        Args:
            url: The image URL.

        Returns:
            The stored bytes (possibly empty), or None if not cached.
        """
        async with self._operation():
            key = self._key(url)

            if key != url:
                await self._migrate_legacy_key(url, key)

            if await self._has_both(key):
                data = await self._blob_store.get(key)
                if data is not None:
                    self._hits += 1
                    logger.debug("Cache hit for %s", url)
                    return data

            self._misses += 1
            logger.debug("Cache miss for %s", url)
            return None

    async def get_entry(self, url: str) -> CacheEntry | None:
        """Get the cached image for a URL together with its timestamp.

        Unlike ``get_image`` this never migrates legacy records.

        Args:
            url: The image URL.

        Returns:
            The CacheEntry, or None if not cached.
        """
        async with self._operation():
            key = self._key(url)

            created_at = await self._metadata_store.get(key)
            payload = await self._blob_store.get(key)
            if created_at is None or payload is None:
                return None
            return CacheEntry(key=key, created_at=created_at, payload=payload)

    async def save_image(self, url: str, data: bytes) -> None:
        """Store image bytes for a URL, refreshing its timestamp.

        Empty payloads are stored as well.

        Args:
            url: The image URL.
            data: The image bytes.

        Raises:
            StorageWriteError: If either store cannot be written.
        """
        async with self._operation():
            key = self._key(url)

            await self._metadata_store.put(key, self._now())
            await self._blob_store.put(key, data)

    async def evict_expired(self, retention: timedelta | None = None) -> int:
        """Remove images older than the retention period.

        A failure on one key is logged and the sweep moves on.

        Args:
            retention: Retention period. Uses the configured one if not provided.

        Returns:
            Number of images evicted.
        """
        async with self._operation():
            retention = self._config.retention if retention is None else retention
            now = self._now()

            evicted = 0
            for key in await self._metadata_store.keys():
                try:
                    created_at = await self._metadata_store.get(key)
                    if created_at is None:
                        continue

                    if now - _as_utc(created_at) > retention:
                        await self._metadata_store.delete(key)
                        await self._blob_store.delete(key)
                        evicted += 1
                except ImageCacheError as e:
                    logger.warning("Failed to evict cache key %s: %s", key, e)

            if evicted:
                logger.debug("Evicted %d expired images", evicted)
            return evicted

    async def delete_cached_image(self, url: str, show_log: bool = True) -> bool:
        """Remove the cached image for a URL, if present.

        Args:
            url: The image URL.
            show_log: Whether to log the removal.

        Returns:
            True if an image was removed, False otherwise.
        """
        async with self._operation():
            key = self._key(url)

            if not await self._has_both(key):
                return False

            await self._metadata_store.delete(key)
            await self._blob_store.delete(key)
            if show_log:
                logger.info("Removed image %s from cache", url)
            return True

    async def clear_all_cached_images(self, show_log: bool = True) -> None:
        """Remove every cached image and start with empty stores.

        Waits for running operations to finish; operations started
        meanwhile wait until both stores are recreated.

        Args:
            show_log: Whether to log the clear.
        """
        self.check_init()
        async with self._gate:
            await self._gate.wait_for(lambda: not self._clearing)
            self._clearing = True

        try:
            async with self._gate:
                await self._gate.wait_for(lambda: self._active == 0)

            await self._metadata_store.clear()
            await self._blob_store.clear()
            self._hits = 0
            self._misses = 0
        finally:
            async with self._gate:
                self._clearing = False
                self._gate.notify_all()

        if show_log:
            logger.info("All cached images cleared")

    async def is_cached(self, url: str) -> bool:
        """Check if an image is cached, without touching any record.

        Args:
            url: The image URL.

        Returns:
            True if both records exist for the URL's key.
        """
        async with self._operation():
            return await self._has_both(self._key(url))

    @asynccontextmanager
    async def _operation(self) -> AsyncIterator[None]:
        self.check_init()
        async with self._gate:
            await self._gate.wait_for(lambda: not self._clearing)
            self.check_init()
            self._active += 1
        try:
            yield
        finally:
            async with self._gate:
                self._active -= 1
                self._gate.notify_all()

    def _now(self) -> datetime:
        return _as_utc(self._clock())

    def _key(self, url: str) -> str:
        if self._key_builder is None:
            return key_from_url(url)
        return self._key_builder.build(url)

    async def _has_both(self, key: str) -> bool:
        return (
            await self._metadata_store.contains_key(key)
            and await self._blob_store.contains_key(key)
        )

    async def _migrate_legacy_key(self, url: str, key: str) -> None:
        """Move records stored under the raw URL to the derived key.

        The original timestamp is kept, so migration never extends
        the retention of an old image.
        """
        if not await self._has_both(url):
            return

        created_at = await self._metadata_store.get(url)
        payload = await self._blob_store.get(url)
        if created_at is None or payload is None:
            return

        await self._metadata_store.put(key, created_at)
        await self._blob_store.put(key, payload)
        await self._metadata_store.delete(url)
        await self._blob_store.delete(url)
        logger.debug("Migrated legacy cache entry for %s", url)

    async def __aenter__(self) -> "CacheManager":
        await self.initialize()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()
