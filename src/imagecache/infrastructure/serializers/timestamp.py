"""Timestamp serializer implementation."""

from datetime import datetime, timezone

from imagecache.core.errors import SerializationError


class TimestampSerializer:
    """ISO-8601 serializer for creation timestamps.

    Timestamps are normalized to UTC before they are written. Naive
    datetimes are taken to already be in UTC.
    """

    def __init__(self, encoding: str = "utf-8") -> None:
        """Initialize the timestamp serializer.

        Args:
            encoding: Character encoding to use.
        """
        self._encoding = encoding

    def serialize(self, value: datetime) -> bytes:
        """Serialize a datetime to bytes.

        Args:
            value: The timestamp to serialize.

        Returns:
            The ISO-8601 representation as bytes.

        Raises:
            SerializationError: If value is not a datetime.
        """
        if not isinstance(value, datetime):
            raise SerializationError(
                f"Expected datetime, got {type(value).__name__}"
            )
        return self._as_utc(value).isoformat().encode(self._encoding)

    def deserialize(self, data: bytes) -> datetime:
        """Deserialize bytes to a timezone-aware datetime.

        Args:
            data: The bytes to deserialize.

        Returns:
            The stored timestamp in UTC.

        Raises:
            SerializationError: If the data is not a valid timestamp.
        """
        try:
            value = datetime.fromisoformat(data.decode(self._encoding))
        except (UnicodeDecodeError, ValueError) as e:
            raise SerializationError(f"Failed to deserialize timestamp: {e}") from e
        return self._as_utc(value)

    @staticmethod
    def _as_utc(value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
