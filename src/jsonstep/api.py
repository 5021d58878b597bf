from __future__ import annotations

from typing import Any

from .json_pointer import ParseOptions
from .pointer import Pointer
from .types import ValueRef, ValueRefMut


def _as_pointer(pointer: str | Pointer) -> Pointer:
    if isinstance(pointer, Pointer):
        return pointer
    return Pointer.parse(pointer)


def parse(text: str, *, options: ParseOptions | None = None) -> Pointer:
    """
    Parse RFC 6901 pointer text (optionally in ``#`` fragment form).
    """
    return Pointer.parse(text, options=options)


def traverse(value: Any, pointer: str | Pointer) -> ValueRef | None:
    """
    Resolve *pointer* against *value* without modifying it.

    Pointer text is parsed first; a malformed pointer raises
    :class:`~jsonstep.errors.ParseError`, while a pointer that does not match
    the value returns ``None``.
    """
    return _as_pointer(pointer).traverse(value)


def traverse_mut(value: Any, pointer: str | Pointer) -> ValueRefMut | None:
    return _as_pointer(pointer).traverse_mut(value)


def find(value: Any, pointer: str | Pointer, default: Any = None) -> Any:
    return _as_pointer(pointer).find(value, default)
