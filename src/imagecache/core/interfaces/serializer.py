"""Serializer interface."""

from typing import Protocol, TypeVar

T = TypeVar("T")


class ISerializer(Protocol[T]):
    """Contract for serializing/deserializing stored values.

    Serializers convert store values to bytes for SQLite and back.
    """

    def serialize(self, value: T) -> bytes:
        """Serialize value to bytes.

        Args:
            value: The value to serialize.

        Returns:
            The serialized value as bytes.

        Raises:
            SerializationError: If the value cannot be serialized.
        """
        ...

    def deserialize(self, data: bytes) -> T:
        """Deserialize bytes to value.

        Args:
            data: The bytes to deserialize.

        Returns:
            The deserialized value.

        Raises:
            SerializationError: If the data cannot be deserialized.
        """
        ...
