from __future__ import annotations

from collections.abc import MutableMapping, MutableSequence, Sequence
from dataclasses import dataclass
from typing import Any

from .errors import PointerError

# ---------------------------------------------------------------------------
# Reference tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Name:
    """A map key. May be the empty string."""

    text: str

    def __post_init__(self) -> None:
        if not isinstance(self.text, str):
            raise TypeError(f"Name text must be a str, got {type(self.text).__name__}")


@dataclass(frozen=True, slots=True)
class Index:
    """A position in a sequence."""

    value: int

    def __post_init__(self) -> None:
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise TypeError(f"Index value must be an int, got {type(self.value).__name__}")
        if self.value < 0:
            raise ValueError(f"Index value must be non-negative, got {self.value}")


@dataclass(frozen=True, slots=True)
class NewElement:
    """The ``-`` marker: one past the last element of a sequence."""


NEW_ELEMENT = NewElement()

Step = Name | Index | NewElement


# ---------------------------------------------------------------------------
# Traversal results
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Existing:
    value: Any


@dataclass(frozen=True, slots=True)
class NewUnder:
    """A location that does not exist yet but can be appended to.

    ``index`` is always ``len(parent)`` at the time of traversal.
    """

    parent: Sequence[Any]
    index: int


@dataclass(frozen=True, slots=True)
class ExistingMut:
    """Writable handle to an existing node.

    ``value`` is the node as found. ``parent`` and ``key`` name the slot that
    holds it; both are ``None`` when the handle points at the root.
    """

    value: Any
    parent: MutableMapping[str, Any] | MutableSequence[Any] | None = None
    key: str | int | None = None

    def get(self) -> Any:
        """Read the slot's current content (reflects earlier :meth:`set` calls)."""
        if self.parent is None:
            return self.value
        return self.parent[self.key]  # type: ignore[index]

    def set(self, value: Any) -> None:
        """Replace the node in its parent container."""
        if self.parent is None:
            raise PointerError("Cannot replace the document root through a pointer")
        self.parent[self.key] = value  # type: ignore[index]


@dataclass(frozen=True, slots=True)
class NewUnderMut:
    parent: MutableSequence[Any]
    index: int

    def append(self, value: Any) -> None:
        """Append *value* to the parent sequence at :attr:`index`."""
        if len(self.parent) != self.index:
            raise PointerError(
                f"Sequence length changed since traversal "
                f"(expected {self.index}, got {len(self.parent)})"
            )
        self.parent.append(value)


ValueRef = Existing | NewUnder
ValueRefMut = ExistingMut | NewUnderMut
