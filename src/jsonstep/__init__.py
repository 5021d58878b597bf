from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("jsonstep")
except PackageNotFoundError:  # pragma: no cover - local source tree without installed metadata
    __version__ = "0.1.0"

from .api import find, parse, traverse, traverse_mut
from .errors import InvalidEscapeError, ParseError, PointerError, PointerIndexError
from .json_pointer import (
    ParseOptions,
    build_json_pointer,
    escape_json_pointer_token,
    parse_json_pointer,
    unescape_json_pointer_token,
)
from .pointer import Pointer
from .types import (
    NEW_ELEMENT,
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

__all__ = [
    "NEW_ELEMENT",
    "Existing",
    "ExistingMut",
    "Index",
    "InvalidEscapeError",
    "Name",
    "NewElement",
    "NewUnder",
    "NewUnderMut",
    "ParseError",
    "ParseOptions",
    "Pointer",
    "PointerError",
    "PointerIndexError",
    "Step",
    "ValueRef",
    "ValueRefMut",
    "build_json_pointer",
    "escape_json_pointer_token",
    "find",
    "parse",
    "parse_json_pointer",
    "traverse",
    "traverse_mut",
    "unescape_json_pointer_token",
]
