"""
Exceptions raised while decoding identifiers.
"""


class UlidError(ValueError):
    """Base exception for identifier decoding errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)


class InvalidCharError(UlidError):
    """Input contains a character outside the base-32 alphabet."""
    def __init__(self, char: str, position: int):
        self.char = char
        self.position = position
        super().__init__(
            "invalid_char",
            f"Invalid character {char!r} at position {position}",
        )


class InsufficientLengthError(UlidError):
    """Input is shorter than the fixed width of the identifier."""
    def __init__(self, expected: int, actual: int):
        self.expected = expected
        self.actual = actual
        super().__init__(
            "insufficient_length",
            f"Expected at least {expected} characters, got {actual}",
        )
