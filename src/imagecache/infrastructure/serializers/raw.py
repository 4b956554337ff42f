"""Raw bytes serializer implementation."""

from imagecache.core.errors import SerializationError


class RawSerializer:
    """Pass-through serializer for image payloads."""

    def serialize(self, value: bytes) -> bytes:
        """Return value unchanged, rejecting anything but binary data."""
        if not isinstance(value, (bytes, bytearray, memoryview)):
            raise SerializationError(
                f"Expected bytes, got {type(value).__name__}"
            )
        return bytes(value)

    def deserialize(self, data: bytes) -> bytes:
        """Return data unchanged."""
        return bytes(data)
