"""Domain entities for imagecache."""

from imagecache.core.entities.cache_config import CacheConfig
from imagecache.core.entities.cache_entry import CacheEntry
from imagecache.core.entities.image_response import ImageResponse, ProgressData

__all__ = [
    "CacheConfig",
    "CacheEntry",
    "ImageResponse",
    "ProgressData",
]
