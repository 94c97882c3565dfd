"""
128-bit identifier: 48-bit millisecond timestamp + 80-bit random payload.

Canonical text is 26 characters, timestamp first, so lexicographic order
matches numeric order. The "prettified" form puts the 16 payload
characters ahead of the 10 timestamp characters.
"""
from __future__ import annotations
import uuid
from typing import Any, Tuple
from ulidkit.base import Identifier, register_kind
from ulidkit.codec import Base32Codec, decode_segment, encode_segment
from ulidkit.monotonic import MonotonicGenerator

WORD_MASK = (1 << 64) - 1

_RANDOM_CHARS = 16
_TIMESTAMP_CHARS = 10


@register_kind("ulid")
class Ulid(Identifier):
    __slots__ = ()

    BITS = 128
    RANDOM_BITS = 80
    BYTE_LENGTH = 16
    codec = Base32Codec(BITS)
    generator = MonotonicGenerator(RANDOM_BITS, name="ulid")

    @classmethod
    def from_words(cls, high: int, low: int) -> "Ulid":
        return cls(((high & WORD_MASK) << 64) | (low & WORD_MASK))

    @property
    def high(self) -> int:
        """Timestamp followed by the top 16 payload bits."""
        return self._value >> 64

    @property
    def low(self) -> int:
        """Low 64 payload bits."""
        return self._value & WORD_MASK

    @property
    def words(self) -> Tuple[int, int]:
        return self.high, self.low

    def prettify(self) -> str:
        """Payload segment first, then timestamp segment."""
        return (
            encode_segment(self.random, _RANDOM_CHARS)
            + encode_segment(self.timestamp, _TIMESTAMP_CHARS)
        )

    def to_alternate(self) -> str:
        return self.prettify()

    @classmethod
    def parse_pretty(cls, text: str) -> "Ulid":
        """Inverse of prettify(). Trailing input is ignored."""
        random = decode_segment(text, 0, _RANDOM_CHARS)
        timestamp = decode_segment(text, _RANDOM_CHARS, _TIMESTAMP_CHARS)
        return cls(((timestamp << cls.RANDOM_BITS) | random) & cls.codec.mask)

    @classmethod
    def parse_alternate(cls, text: str) -> "Ulid":
        return cls.parse_pretty(text)

    def to_uuid(self) -> uuid.UUID:
        """UUID sharing this value's 16-byte layout (mixed-endian GUID field order)."""
        return uuid.UUID(bytes_le=self.to_bytes())

    @classmethod
    def from_uuid(cls, value: uuid.UUID) -> "Ulid":
        return cls.from_bytes(value.bytes_le)

    @classmethod
    def _validate(cls, value: Any) -> "Ulid":
        if isinstance(value, uuid.UUID):
            return cls.from_uuid(value)
        return super()._validate(value)


Ulid.EMPTY = Ulid(0)
