"""imagecache - Disk-backed cache for remotely fetched images.

Images are cached by URL in two SQLite stores (creation timestamps
and image bytes), expire after a retention period (7 days by
default), and are loaded through a fetcher on a cache miss.

Example:
    from datetime import timedelta

    from imagecache import HttpxImageFetcher, ImageLoader, init_cache

    manager = await init_cache(
        storage_location="/tmp/images",
        clear_cache_after=timedelta(days=7),
    )

    async with HttpxImageFetcher() as fetcher:
        loader = ImageLoader(manager, fetcher)
        response = await loader.load(
            "https://example.com/logo.png",
            on_progress=lambda p: print(f"{p.progress_percentage:.0%}"),
        )

    if response.ok:
        render(response.image_data)
    else:
        show_error(response.error)

Cache maintenance:
    await manager.is_cached("https://example.com/logo.png")
    await manager.delete_cached_image("https://example.com/logo.png")
    await manager.clear_all_cached_images()
"""

import logging

from imagecache.core.entities import (
    CacheConfig,
    CacheEntry,
    ImageResponse,
    ProgressData,
)
from imagecache.core.errors import (
    EmptyPayloadError,
    FetchError,
    ImageCacheError,
    SerializationError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    UninitializedCacheError,
)
from imagecache.core.interfaces import (
    IImageFetcher,
    IKeyBuilder,
    IKeyValueStore,
    ISerializer,
    ProgressCallback,
)
from imagecache.core.services import CacheManager, ImageLoader
from imagecache.factory import create_cache_manager, init_cache
from imagecache.infrastructure import (
    HttpxImageFetcher,
    InMemoryKeyValueStore,
    RawSerializer,
    SqliteKeyValueStore,
    TimestampSerializer,
    UrlKeyBuilder,
)
from imagecache.utils.hashing import key_from_url

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # Version
    "__version__",
    # Core entities
    "CacheConfig",
    "CacheEntry",
    "ImageResponse",
    "ProgressData",
    # Errors
    "ImageCacheError",
    "UninitializedCacheError",
    "StorageError",
    "StorageReadError",
    "StorageWriteError",
    "SerializationError",
    "EmptyPayloadError",
    "FetchError",
    # Core interfaces
    "IKeyValueStore",
    "IKeyBuilder",
    "ISerializer",
    "IImageFetcher",
    "ProgressCallback",
    # Core services
    "CacheManager",
    "ImageLoader",
    # Infrastructure implementations
    "SqliteKeyValueStore",
    "InMemoryKeyValueStore",
    "UrlKeyBuilder",
    "RawSerializer",
    "TimestampSerializer",
    "HttpxImageFetcher",
    # Wiring
    "create_cache_manager",
    "init_cache",
    "key_from_url",
]
