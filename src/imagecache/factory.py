"""Helpers for wiring a disk-backed cache manager.

Example:
    manager = await init_cache(
        storage_location="/var/cache/myapp/images",
        clear_cache_after=timedelta(days=3),
    )
    loader = ImageLoader(manager, HttpxImageFetcher())
    response = await loader.load("https://example.com/a.png")
"""

from datetime import timedelta
from pathlib import Path

from imagecache.core.entities.cache_config import CacheConfig
from imagecache.core.services.cache_manager import CacheManager
from imagecache.infrastructure.key_builders.default import UrlKeyBuilder
from imagecache.infrastructure.serializers.raw import RawSerializer
from imagecache.infrastructure.serializers.timestamp import TimestampSerializer
from imagecache.infrastructure.stores.sqlite import SqliteKeyValueStore


def create_cache_manager(config: CacheConfig | None = None) -> CacheManager:
    """Build a cache manager backed by two SQLite stores.

    The returned manager is not initialized yet.

    Args:
        config: Optional cache configuration. Uses defaults if not provided.

    Returns:
        A new CacheManager instance.
    """
    config = config or CacheConfig()
    location = config.resolved_location

    return CacheManager(
        metadata_store=SqliteKeyValueStore(
            location, config.metadata_store_name, TimestampSerializer()
        ),
        blob_store=SqliteKeyValueStore(
            location, config.blob_store_name, RawSerializer()
        ),
        config=config,
        key_builder=UrlKeyBuilder(),
    )


async def init_cache(
    storage_location: str | Path | None = None,
    clear_cache_after: timedelta | None = None,
) -> CacheManager:
    """Create and initialize a disk-backed cache manager.

    Call this once at startup and pass the manager to whatever needs it.

    Args:
        storage_location: Directory for the stores.
        clear_cache_after: Retention period. Defaults to 7 days.

    Returns:
        An initialized CacheManager.
    """
    manager = create_cache_manager(
        CacheConfig(
            storage_location=storage_location,
            clear_cache_after=clear_cache_after,
        )
    )
    await manager.initialize()
    return manager
