"""Core domain layer for imagecache."""

from imagecache.core.entities import CacheConfig, CacheEntry, ImageResponse, ProgressData
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

__all__ = [
    # Entities
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
    # Interfaces
    "IKeyValueStore",
    "IKeyBuilder",
    "ISerializer",
    "IImageFetcher",
    "ProgressCallback",
    # Services
    "CacheManager",
    "ImageLoader",
]
