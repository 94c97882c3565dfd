"""
Base-32 codec over the 32-symbol alphabet (no I, L, O, U).

Values are plain unsigned ints; the codec emits the most significant
5-bit group first and drops bits beyond the configured width on decode.
"""
from __future__ import annotations
from typing import List, Optional, Tuple
from ulidkit.errors import InvalidCharError, InsufficientLengthError

ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"

INVALID = -1

# code point -> 5-bit value, INVALID for anything outside the alphabet
LOOKUP: List[int] = [INVALID] * 128
for _index, _char in enumerate(ALPHABET):
    LOOKUP[ord(_char)] = _index
del _index, _char

_MAX_CODE_POINT = ord(ALPHABET[-1])


def encode_segment(value: int, length: int) -> str:
    """Encode the low `length * 5` bits of value into `length` characters."""
    result = []
    for _ in range(length):
        result.append(ALPHABET[value & 31])
        value >>= 5
    return "".join(reversed(result))


def decode_segment(text: str, start: int, length: int) -> int:
    """
    Decode `length` characters of text beginning at `start`.
    Raises InsufficientLengthError before reading anything if the text
    is too short, InvalidCharError on the first rejected character.
    """
    end = start + length
    if len(text) < end:
        raise InsufficientLengthError(end, len(text))
    value = 0
    for position in range(start, end):
        char = text[position]
        code = ord(char)
        if code > _MAX_CODE_POINT:
            raise InvalidCharError(char, position)
        n = LOOKUP[code]
        if n == INVALID:
            raise InvalidCharError(char, position)
        value = (value << 5) | n
    return value


class Base32Codec:
    """Fixed-width codec: `bits` wide values <-> `ceil(bits / 5)` characters."""

    def __init__(self, bits: int):
        self.bits = bits
        self.length = -(-bits // 5)
        self.mask = (1 << bits) - 1

    def encode(self, value: int) -> str:
        return encode_segment(value & self.mask, self.length)

    def decode(self, text: str) -> int:
        """Decode the first `length` characters; trailing input is ignored."""
        return decode_segment(text, 0, self.length) & self.mask

    def try_decode(self, text: str) -> Tuple[bool, Optional[int]]:
        try:
            return True, self.decode(text)
        except (InvalidCharError, InsufficientLengthError):
            return False, None

    def __repr__(self) -> str:
        return f"Base32Codec(bits={self.bits})"
