"""Loader result and download progress entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ImageResponse:
    """Outcome of loading an image.

    Exactly one of ``image_data`` and ``error`` is normally set. The
    display side decodes ``image_data`` or renders ``error``.
    """

    image_data: bytes | None
    error: str | None = None
    from_cache: bool = False

    @property
    def ok(self) -> bool:
        """Return True if image bytes are available."""
        return self.image_data is not None and self.error is None


@dataclass
class ProgressData:
    """Download progress of a single image."""

    downloaded_bytes: int = 0
    total_bytes: int | None = None
    is_downloading: bool = False

    @property
    def progress_percentage(self) -> float:
        """Return progress as a fraction between 0.0 and 1.0.

        Returns 0.0 while the total size is unknown.
        """
        if not self.total_bytes:
            return 0.0
        return min(self.downloaded_bytes / self.total_bytes, 1.0)

    def update(self, received: int, total: int | None) -> None:
        """Record a progress event from the fetcher."""
        self.downloaded_bytes = received
        self.total_bytes = total
