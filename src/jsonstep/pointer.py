from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from pydantic import GetCoreSchemaHandler, GetJsonSchemaHandler
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import core_schema

from .errors import PointerIndexError
from .json_pointer import ParseOptions, build_json_pointer, parse_json_pointer
from .traversal import traverse, traverse_mut
from .types import Existing, ExistingMut, Index, Name, NewElement, Step, ValueRef, ValueRefMut


def _check_step(step: Any) -> Step:
    if not isinstance(step, (Name, Index, NewElement)):
        raise TypeError(f"Expected a pointer step, got {type(step).__name__}")
    return step


class Pointer(Sequence[Step]):
    """An RFC 6901 JSON Pointer: an ordered list of reference tokens.

    The empty pointer refers to the whole value.  A pointer only changes
    through :meth:`push`, :meth:`pop`, :meth:`insert` and :meth:`remove`,
    so it is unhashable but can be reused across any number of traversals.

    >>> p = Pointer.parse("/users/0/name")
    >>> p.find({"users": [{"name": "Ada"}]})
    'Ada'
    """

    __slots__ = ("_steps",)

    def __init__(self, steps: Iterable[Step] = ()) -> None:
        self._steps: list[Step] = [_check_step(step) for step in steps]

    # -- construction / conversion ------------------------------------------

    @classmethod
    def parse(cls, text: str, *, options: ParseOptions | None = None) -> Pointer:
        """Parse pointer text; raises :class:`~jsonstep.errors.ParseError`."""
        return cls(parse_json_pointer(text, options=options))

    @classmethod
    def from_steps(cls, steps: Iterable[Step]) -> Pointer:
        return cls(steps)

    def to_steps(self) -> list[Step]:
        """Return the tokens as a new list."""
        return list(self._steps)

    # -- mutation -------------------------------------------------------------

    def push(self, step: Step) -> Pointer:
        self._steps.append(_check_step(step))
        return self

    def pop(self) -> Step | None:
        """Remove and return the last step, or ``None`` for the root pointer."""
        if not self._steps:
            return None
        return self._steps.pop()

    def insert(self, index: int, step: Step) -> None:
        """Insert *step* before position *index* (``0 <= index <= len``)."""
        if not 0 <= index <= len(self._steps):
            raise PointerIndexError(
                f"Insert position {index} out of bounds (length {len(self._steps)})"
            )
        self._steps.insert(index, _check_step(step))

    def remove(self, index: int) -> Step:
        """Remove and return the step at *index* (``0 <= index < len``)."""
        if not 0 <= index < len(self._steps):
            raise PointerIndexError(
                f"Remove position {index} out of bounds (length {len(self._steps)})"
            )
        return self._steps.pop(index)

    # -- traversal ------------------------------------------------------------

    def traverse(self, value: Any) -> ValueRef | None:
        return traverse(value, self._steps)

    def traverse_mut(self, value: Any) -> ValueRefMut | None:
        return traverse_mut(value, self._steps)

    def find(self, value: Any, default: Any = None) -> Any:
        """Return the existing value this pointer points to, or *default*.

        An append location (``.../-``) counts as not found.
        """
        found = self.traverse(value)
        if isinstance(found, Existing):
            return found.value
        return default

    def find_mut(self, value: Any) -> ExistingMut | None:
        found = self.traverse_mut(value)
        if isinstance(found, ExistingMut):
            return found
        return None

    # -- sequence protocol ----------------------------------------------------

    @overload
    def __getitem__(self, index: int) -> Step: ...

    @overload
    def __getitem__(self, index: slice) -> Pointer: ...

    def __getitem__(self, index: int | slice) -> Step | Pointer:
        if isinstance(index, slice):
            return Pointer(self._steps[index])
        return self._steps[index]

    def __len__(self) -> int:
        return len(self._steps)

    def __iter__(self) -> Iterator[Step]:
        return iter(self._steps)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pointer):
            return NotImplemented
        return self._steps == other._steps

    __hash__ = None  # type: ignore[assignment]

    def __str__(self) -> str:
        return build_json_pointer(self._steps)

    def __repr__(self) -> str:
        return f"Pointer({self._steps!r})"

    # -- pydantic integration -------------------------------------------------

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(
                str, when_used="json"
            ),
        )

    @classmethod
    def __get_pydantic_json_schema__(
        cls, schema: core_schema.CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        return {"type": "string", "format": "json-pointer"}

    @classmethod
    def _validate(cls, value: Any) -> Pointer:
        if isinstance(value, Pointer):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, (list, tuple)):
            try:
                return cls(value)
            except TypeError as exc:
                raise ValueError(str(exc)) from exc
        raise ValueError(
            f"Expected JSON Pointer text or a list of steps, got {type(value).__name__}"
        )
