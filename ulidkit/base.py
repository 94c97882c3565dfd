
from __future__ import annotations
import logging
from abc import ABC, abstractmethod
from datetime import datetime, timedelta, timezone
from typing import Any, ClassVar, Optional, Tuple, Type, TypeVar
from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic_core import core_schema
from ulidkit.codec import Base32Codec
from ulidkit.errors import InsufficientLengthError, UlidError
from ulidkit.models import IdentifierInfo
from ulidkit.monotonic import MonotonicGenerator

logger = logging.getLogger(__name__)

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)

# Byte layout of to_bytes/from_bytes. Little-endian, low word first: the
# layout native-endian writers produced on little-endian hosts.
BYTE_ORDER = "little"

_PATTERN_CLASS = "0-9A-HJKMNP-TV-Z"

_registry: dict[str, Type['Identifier']] = {}

IdentifierT = TypeVar("IdentifierT", bound="Identifier")


def register_kind(name: str):
    def deco(cls):
        cls.KIND = name
        _registry[name] = cls
        return cls
    return deco


def get_kind(name: str) -> Type['Identifier']:
    if name not in _registry:
        raise ValueError(f"Unknown identifier kind: {name}")
    return _registry[name]


def list_kinds() -> list[str]:
    return sorted(_registry.keys())


class Identifier(ABC):
    """
    Immutable time-sortable identifier: a 48-bit millisecond timestamp in
    the most significant bits followed by RANDOM_BITS of payload.

    Subclasses set the width, their codec and their default generator, and
    provide the alternate (segment-reordered) string form.
    """

    __slots__ = ("_value",)

    KIND: ClassVar[str] = ""
    BITS: ClassVar[int]
    RANDOM_BITS: ClassVar[int]
    BYTE_LENGTH: ClassVar[int]
    codec: ClassVar[Base32Codec]
    generator: ClassVar[MonotonicGenerator]

    def __init__(self, value: int = 0):
        if not isinstance(value, int) or isinstance(value, bool):
            raise TypeError(f"{type(self).__name__} value must be int, got {type(value).__name__}")
        if value < 0 or value >> self.BITS:
            raise ValueError(f"{type(self).__name__} value out of range for {self.BITS} bits")
        object.__setattr__(self, "_value", value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    # Minting

    @classmethod
    def new(cls: Type[IdentifierT], generator: Optional[MonotonicGenerator] = None) -> IdentifierT:
        """Mint a new value from `generator`, or the kind's process-wide default."""
        return cls((generator or cls.generator).next_value())

    # Text

    @classmethod
    def parse(cls: Type[IdentifierT], text: str) -> IdentifierT:
        """Decode canonical text. Raises InvalidCharError or InsufficientLengthError."""
        return cls(cls.codec.decode(text))

    @classmethod
    def try_parse(cls: Type[IdentifierT], text: str) -> Tuple[bool, Optional[IdentifierT]]:
        try:
            return True, cls.parse(text)
        except UlidError as e:
            logger.debug(f"{cls.__name__} parse failed: {e}", extra={"kind": cls.KIND})
            return False, None

    @classmethod
    @abstractmethod
    def parse_alternate(cls: Type[IdentifierT], text: str) -> IdentifierT:
        ...

    @classmethod
    def try_parse_alternate(cls: Type[IdentifierT], text: str) -> Tuple[bool, Optional[IdentifierT]]:
        try:
            return True, cls.parse_alternate(text)
        except UlidError as e:
            logger.debug(f"{cls.__name__} alternate parse failed: {e}", extra={"kind": cls.KIND})
            return False, None

    @abstractmethod
    def to_alternate(self) -> str:
        ...

    def __str__(self) -> str:
        return self.codec.encode(self._value)

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self}')"

    # Bytes

    def to_bytes(self) -> bytes:
        return self._value.to_bytes(self.BYTE_LENGTH, BYTE_ORDER)

    @classmethod
    def from_bytes(cls: Type[IdentifierT], data: bytes) -> IdentifierT:
        """Read the first BYTE_LENGTH bytes of data."""
        if len(data) < cls.BYTE_LENGTH:
            raise InsufficientLengthError(cls.BYTE_LENGTH, len(data))
        return cls(int.from_bytes(bytes(data[:cls.BYTE_LENGTH]), BYTE_ORDER))

    def __bytes__(self) -> bytes:
        return self.to_bytes()

    # Components

    @property
    def value(self) -> int:
        return self._value

    @property
    def timestamp(self) -> int:
        """Embedded milliseconds since the Unix epoch."""
        return self._value >> self.RANDOM_BITS

    @property
    def random(self) -> int:
        return self._value & ((1 << self.RANDOM_BITS) - 1)

    @property
    def datetime(self) -> datetime:
        """Embedded timestamp as an aware UTC datetime."""
        return EPOCH + timedelta(milliseconds=self.timestamp)

    def info(self) -> IdentifierInfo:
        try:
            dt = self.datetime
        except OverflowError:
            # 48-bit timestamps run past datetime.max
            dt = None
        return IdentifierInfo(
            kind=self.KIND,
            canonical=str(self),
            alternate=self.to_alternate(),
            timestamp=self.timestamp,
            timestamp_utc=dt,
            random=self.random,
            hex=f"{self._value:0{self.BITS // 4}x}",
        )

    # Equality and ordering over the full value

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value == other._value

    def __lt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value < other._value

    def __le__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value <= other._value

    def __gt__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value > other._value

    def __ge__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._value >= other._value

    def __hash__(self) -> int:
        return hash((self.KIND, self._value))

    def __reduce__(self):
        return (type(self), (self._value,))

    # Pydantic

    @classmethod
    def _validate(cls: Type[IdentifierT], value: Any) -> IdentifierT:
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (bytes, bytearray, memoryview)):
            return cls.from_bytes(value)
        raise ValueError(f"Cannot convert {type(value).__name__} to {cls.__name__}")

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> dict[str, Any]:
        return {
            "type": "string",
            "minLength": cls.codec.length,
            "maxLength": cls.codec.length,
            "pattern": f"^[{_PATTERN_CLASS}]{{{cls.codec.length}}}$",
            "title": cls.__name__,
        }
