"""Serializer implementations."""

from imagecache.infrastructure.serializers.raw import RawSerializer
from imagecache.infrastructure.serializers.timestamp import TimestampSerializer

__all__ = ["RawSerializer", "TimestampSerializer"]
