"""
64-bit identifier: 48-bit millisecond timestamp + 16-bit random payload.

The payload has no carry target: more than 65536 mints in one
millisecond wrap it around silently and break monotonic order.
"""
from __future__ import annotations
from ulidkit.base import Identifier, register_kind
from ulidkit.codec import Base32Codec, decode_segment, encode_segment
from ulidkit.monotonic import MonotonicGenerator

# lexic form: low 45 bits first, remaining high bits last
_LOW_CHARS = 9
_HIGH_CHARS = 4
_LOW_BITS = _LOW_CHARS * 5


@register_kind("slid")
class Slid(Identifier):
    __slots__ = ()

    BITS = 64
    RANDOM_BITS = 16
    BYTE_LENGTH = 8
    codec = Base32Codec(BITS)
    generator = MonotonicGenerator(RANDOM_BITS, name="slid")

    def to_int(self) -> int:
        return self._value

    @classmethod
    def from_int(cls, value: int) -> "Slid":
        return cls(value)

    def __int__(self) -> int:
        return self._value

    def lexic(self) -> str:
        return (
            encode_segment(self._value, _LOW_CHARS)
            + encode_segment(self._value >> _LOW_BITS, _HIGH_CHARS)
        )

    def to_alternate(self) -> str:
        return self.lexic()

    @classmethod
    def parse_lexic(cls, text: str) -> "Slid":
        """Inverse of lexic(). Trailing input is ignored."""
        low = decode_segment(text, 0, _LOW_CHARS)
        high = decode_segment(text, _LOW_CHARS, _HIGH_CHARS)
        return cls(((high << _LOW_BITS) | low) & cls.codec.mask)

    @classmethod
    def parse_alternate(cls, text: str) -> "Slid":
        return cls.parse_lexic(text)


Slid.EMPTY = Slid(0)
