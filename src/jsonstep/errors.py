from __future__ import annotations


class PointerError(Exception):
    """Base exception for all JSON Pointer errors."""


class ParseError(PointerError, ValueError):
    """Raised when pointer text does not conform to RFC 6901.

    ``position`` is the character offset into ``text`` where parsing failed,
    or ``None`` when no single offending position applies.
    """

    def __init__(self, message: str, text: str, position: int | None = None) -> None:
        self.message = message
        self.text = text
        self.position = position
        super().__init__(message, text, position)

    def __str__(self) -> str:
        if self.position is None:
            return f"Invalid JSON Pointer: {self.message}"
        return f"Invalid JSON Pointer: {self.message} at position {self.position}"


class InvalidEscapeError(ParseError):
    """Raised for a ``~`` not followed by ``0`` or ``1``."""


class PointerIndexError(PointerError, IndexError):
    """Raised when a pointer mutation targets a position outside the pointer."""
