"""Error types raised by imagecache."""


class ImageCacheError(Exception):
    """Base class for all imagecache errors."""

    pass


class UninitializedCacheError(ImageCacheError):
    """Raised when the cache is used before ``initialize`` completed."""

    pass


class StorageError(ImageCacheError):
    """Raised when the durable storage layer fails."""

    pass


class StorageReadError(StorageError):
    """Raised when reading from a store fails."""

    pass


class StorageWriteError(StorageError):
    """Raised when writing to a store fails."""

    pass


class SerializationError(ImageCacheError):
    """Raised when serialization or deserialization fails."""

    pass


class EmptyPayloadError(ImageCacheError):
    """Raised when a fetched image turned out to have no content."""

    pass


class FetchError(ImageCacheError):
    """Raised when an image could not be retrieved from the network."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
