"""Domain services for imagecache."""

from imagecache.core.services.cache_manager import CacheManager
from imagecache.core.services.image_loader import ImageLoader

__all__ = [
    "CacheManager",
    "ImageLoader",
]
