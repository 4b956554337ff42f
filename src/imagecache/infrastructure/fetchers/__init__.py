"""Image fetcher implementations."""

from imagecache.infrastructure.fetchers.httpx_fetcher import HttpxImageFetcher

__all__ = ["HttpxImageFetcher"]
