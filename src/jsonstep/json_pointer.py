"""RFC 6901 JSON Pointer text: parsing, token escaping, and formatting.

Grammar, after discarding one optional leading ``#`` (URI fragment form)::

    json-pointer    = *( "/" reference-token )
    reference-token = *( unescaped / escaped )
    escaped         = "~" ( "0" / "1" )

Each reference token is classified as a whole:

* ``0`` or a run of digits without a leading zero becomes an :class:`Index`
  (``007`` stays a :class:`Name`),
* a lone ``-`` becomes :class:`NewElement`,
* anything else is a :class:`Name` with ``~0``/``~1`` decoded.
"""

from __future__ import annotations

import re
import sys
from collections.abc import Iterable
from dataclasses import dataclass

from .errors import InvalidEscapeError, ParseError
from .types import NEW_ELEMENT, Index, Name, NewElement, Step

_INDEX_RE = re.compile(r"0|[1-9][0-9]*")


@dataclass(slots=True)
class ParseOptions:
    """Knobs for :func:`parse_json_pointer`.

    Attributes
    ----------
    allow_fragment : bool
        Accept (and discard) one leading ``#``.
    max_depth : int | None
        Maximum number of reference tokens; ``None`` means unbounded.
    max_index : int
        Digit tokens above this value are kept as :class:`Name` instead of
        :class:`Index`.
    """

    allow_fragment: bool = True
    max_depth: int | None = None
    max_index: int = sys.maxsize

    def __post_init__(self) -> None:
        if self.max_depth is not None and self.max_depth < 0:
            raise ValueError("max_depth must be >= 0")
        if self.max_index < 0:
            raise ValueError("max_index must be >= 0")


def escape_json_pointer_token(token: str) -> str:
    """Escape a single JSON Pointer token (RFC 6901)."""
    return token.replace("~", "~0").replace("/", "~1")


def unescape_json_pointer_token(token: str) -> str:
    """Unescape a single JSON Pointer token (RFC 6901).

    Raises :class:`InvalidEscapeError` for ``~`` not followed by ``0`` or ``1``.
    """
    return _decode_name(token, 0, len(token))


def parse_json_pointer(text: str, *, options: ParseOptions | None = None) -> list[Step]:
    """Parse pointer text into its reference tokens.

    The root pointers ``""`` and ``"#"`` return an empty list.
    """
    opts = options or ParseOptions()
    pos = 0
    if opts.allow_fragment and text.startswith("#"):
        pos = 1

    steps: list[Step] = []
    end_of_text = len(text)
    while pos < end_of_text:
        if text[pos] != "/":
            raise ParseError(f"expected '/' or end of input, found {text[pos]!r}", text, pos)
        start = pos + 1
        end = text.find("/", start)
        if end == -1:
            end = end_of_text
        steps.append(_parse_segment(text, start, end, opts))
        if opts.max_depth is not None and len(steps) > opts.max_depth:
            raise ParseError(
                f"pointer has more than max_depth={opts.max_depth} reference tokens",
                text,
                pos,
            )
        pos = end
    return steps


def build_json_pointer(steps: Iterable[Step]) -> str:
    """Build plain (non-fragment) JSON Pointer text from reference tokens.

    A :class:`Name` whose text looks like an index or ``-`` is written
    unchanged and will parse back as an :class:`Index`/:class:`NewElement`.
    """
    parts: list[str] = []
    for step in steps:
        if isinstance(step, Name):
            parts.append(escape_json_pointer_token(step.text))
        elif isinstance(step, Index):
            parts.append(str(step.value))
        elif isinstance(step, NewElement):
            parts.append("-")
        else:
            raise TypeError(f"Expected a pointer step, got {type(step).__name__}")
    if not parts:
        return ""
    return "/" + "/".join(parts)


def _parse_segment(text: str, start: int, end: int, opts: ParseOptions) -> Step:
    segment = text[start:end]
    # Longer digit runs cannot fit under max_index; skip int() on huge input.
    if len(segment) <= len(str(opts.max_index)) and _INDEX_RE.fullmatch(segment):
        value = int(segment)
        if value <= opts.max_index:
            return Index(value)
        return Name(segment)
    if segment == "-":
        return NEW_ELEMENT
    return Name(_decode_name(text, start, end))


def _decode_name(text: str, start: int, end: int) -> str:
    tilde = text.find("~", start, end)
    if tilde == -1:
        return text[start:end]

    chunks: list[str] = []
    pos = start
    while tilde != -1:
        chunks.append(text[pos:tilde])
        code = text[tilde + 1] if tilde + 1 < end else ""
        if code == "0":
            chunks.append("~")
        elif code == "1":
            chunks.append("/")
        elif code:
            raise InvalidEscapeError(f"invalid escape sequence '~{code}'", text, tilde)
        else:
            raise InvalidEscapeError("unterminated escape sequence '~'", text, tilde)
        pos = tilde + 2
        tilde = text.find("~", pos, end)
    chunks.append(text[pos:end])
    return "".join(chunks)
