"""Walk a tree-shaped value along a sequence of pointer steps.

Values are consumed through three shapes only: map-like (any
:class:`~collections.abc.Mapping`), sequence-like (any
:class:`~collections.abc.Sequence` except text and bytes), and scalar
(everything else).  Traversal never copies the value; results hold
references into it.

A walk that cannot reach its target returns ``None``.  Missing keys,
out-of-range indices, shape mismatches and a ``-`` that is not the last
step are not distinguished in the result; the reason is logged at
``DEBUG`` level.
"""

from __future__ import annotations

import enum
import logging
from collections.abc import Mapping, MutableMapping, MutableSequence, Sequence
from typing import Any

from .types import (
    Existing,
    ExistingMut,
    Index,
    Name,
    NewElement,
    NewUnder,
    NewUnderMut,
    Step,
    ValueRef,
    ValueRefMut,
)

logger = logging.getLogger(__name__)

_TEXT_TYPES = (str, bytes, bytearray)


class Shape(str, enum.Enum):
    MAP = "map"
    SEQUENCE = "sequence"
    SCALAR = "scalar"


def value_shape(value: Any) -> Shape:
    if isinstance(value, Mapping):
        return Shape.MAP
    if isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES):
        return Shape.SEQUENCE
    return Shape.SCALAR


def _is_mutable_map(value: Any) -> bool:
    return isinstance(value, MutableMapping)


def _is_mutable_sequence(value: Any) -> bool:
    return isinstance(value, MutableSequence) and not isinstance(value, bytearray)


def traverse(value: Any, steps: Sequence[Step]) -> ValueRef | None:
    """Locate the node *steps* point to inside *value*.

    Returns :class:`Existing` for a node that exists, :class:`NewUnder` when
    the last step is ``-`` applied to a sequence, or ``None``.
    """
    current = value
    last = len(steps) - 1
    for depth, step in enumerate(steps):
        shape = value_shape(current)
        if isinstance(step, Name):
            if shape is not Shape.MAP:
                _log_mismatch(depth, step, shape)
                return None
            if step.text not in current:
                logger.debug("Step %d: key %r not found", depth, step.text)
                return None
            current = current[step.text]
        elif isinstance(step, Index):
            if shape is not Shape.SEQUENCE:
                _log_mismatch(depth, step, shape)
                return None
            if step.value >= len(current):
                logger.debug(
                    "Step %d: index %d out of range (length %d)", depth, step.value, len(current)
                )
                return None
            current = current[step.value]
        elif isinstance(step, NewElement):
            if shape is not Shape.SEQUENCE:
                _log_mismatch(depth, step, shape)
                return None
            if depth != last:
                logger.debug(
                    "Step %d: '-' must be the last step (%d more follow)", depth, last - depth
                )
                return None
            return NewUnder(current, len(current))
        else:
            raise TypeError(f"Expected a pointer step, got {type(step).__name__}")
    return Existing(current)


def traverse_mut(value: Any, steps: Sequence[Step]) -> ValueRefMut | None:
    """Like :func:`traverse`, but the result can write back into *value*.

    Every container on the path must be mutable (``MutableMapping`` or
    ``MutableSequence``); a read-only container ends the walk with ``None``.
    The returned handle remembers the parent slot of the located node so that
    :meth:`ExistingMut.set` replaces it in place.
    """
    current = value
    parent: MutableMapping[str, Any] | MutableSequence[Any] | None = None
    key: str | int | None = None
    last = len(steps) - 1
    for depth, step in enumerate(steps):
        if isinstance(step, Name):
            if not _is_mutable_map(current):
                _log_mismatch(depth, step, value_shape(current), mutable=True)
                return None
            if step.text not in current:
                logger.debug("Step %d: key %r not found", depth, step.text)
                return None
            parent, key = current, step.text
        elif isinstance(step, Index):
            if not _is_mutable_sequence(current):
                _log_mismatch(depth, step, value_shape(current), mutable=True)
                return None
            if step.value >= len(current):
                logger.debug(
                    "Step %d: index %d out of range (length %d)", depth, step.value, len(current)
                )
                return None
            parent, key = current, step.value
        elif isinstance(step, NewElement):
            if not _is_mutable_sequence(current):
                _log_mismatch(depth, step, value_shape(current), mutable=True)
                return None
            if depth != last:
                logger.debug(
                    "Step %d: '-' must be the last step (%d more follow)", depth, last - depth
                )
                return None
            return NewUnderMut(current, len(current))
        else:
            raise TypeError(f"Expected a pointer step, got {type(step).__name__}")
        current = parent[key]  # type: ignore[index]
    return ExistingMut(current, parent, key)


def _log_mismatch(depth: int, step: Step, shape: Shape, *, mutable: bool = False) -> None:
    expected = "mapping" if isinstance(step, Name) else "sequence"
    if mutable:
        expected = f"mutable {expected}"
    logger.debug("Step %d: %r needs a %s, found %s", depth, step, expected, shape.value)
