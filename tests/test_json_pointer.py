"""Tests for jsonstep.json_pointer: parsing, escaping and formatting."""

from __future__ import annotations

import pytest

from jsonstep.errors import InvalidEscapeError, ParseError
from jsonstep.json_pointer import (
    ParseOptions,
    build_json_pointer,
    escape_json_pointer_token,
    parse_json_pointer,
    unescape_json_pointer_token,
)
from jsonstep.types import NEW_ELEMENT, Index, Name, NewElement

# ===================================================================
# Root and empty segments
# ===================================================================


class TestRootAndEmptySegments:
    def test_empty_string_is_root(self):
        assert parse_json_pointer("") == []

    def test_hash_is_root(self):
        assert parse_json_pointer("#") == []

    def test_trailing_slash_is_empty_name(self):
        assert parse_json_pointer("#/") == [Name("")]

    def test_double_slash_is_two_empty_names(self):
        assert parse_json_pointer("#//") == [Name(""), Name("")]

    def test_empty_name_in_middle(self):
        assert parse_json_pointer("/a//b") == [Name("a"), Name(""), Name("b")]

    def test_space_is_a_name(self):
        assert parse_json_pointer("/ ") == [Name(" ")]


# ===================================================================
# Index classification
# ===================================================================


class TestIndexClassification:
    def test_index(self):
        assert parse_json_pointer("/21") == [Index(21)]

    def test_zero_is_index(self):
        assert parse_json_pointer("/0") == [Index(0)]

    def test_leading_zeros_stay_names(self):
        assert parse_json_pointer("/007") == [Name("007")]

    def test_zero_followed_by_letters_is_name(self):
        assert parse_json_pointer("/0abc") == [Name("0abc")]

    def test_digits_followed_by_letters_is_name(self):
        assert parse_json_pointer("/12abc") == [Name("12abc")]

    def test_negative_number_is_name(self):
        assert parse_json_pointer("/-1") == [Name("-1")]

    def test_non_ascii_digits_are_names(self):
        assert parse_json_pointer("/²") == [Name("²")]

    def test_index_above_max_index_is_name(self):
        options = ParseOptions(max_index=100)
        assert parse_json_pointer("/100/101", options=options) == [Index(100), Name("101")]

    def test_huge_digit_run_is_name(self):
        digits = "9" * 5000
        assert parse_json_pointer("/" + digits) == [Name(digits)]

    def test_mixed_path(self):
        assert parse_json_pointer("/users/3/tags") == [Name("users"), Index(3), Name("tags")]


# ===================================================================
# Append marker
# ===================================================================


class TestNewElement:
    def test_dash_is_new_element(self):
        assert parse_json_pointer("/items/-") == [Name("items"), NEW_ELEMENT]

    def test_dash_followed_by_more_segments(self):
        steps = parse_json_pointer("/-/x")
        assert steps == [NewElement(), Name("x")]

    def test_dash_prefix_is_name(self):
        assert parse_json_pointer("/-x") == [Name("-x")]

    def test_double_dash_is_name(self):
        assert parse_json_pointer("/--") == [Name("--")]


# ===================================================================
# RFC 6901 escaping (~0 and ~1)
# ===================================================================


class TestEscaping:
    def test_escape_tilde(self):
        assert parse_json_pointer("/a~0/~0b/c~0d") == [Name("a~"), Name("~b"), Name("c~d")]

    def test_escape_slash(self):
        assert parse_json_pointer("/a~1/~1b/c~1d") == [Name("a/"), Name("/b"), Name("c/d")]

    def test_tilde_zero_one_is_tilde_then_one(self):
        """``~01`` decodes to ``~1``, not ``/``."""
        assert parse_json_pointer("/~01") == [Name("~1")]

    def test_escaped_digits_are_names(self):
        assert parse_json_pointer("/1~01") == [Name("1~1")]

    def test_unknown_escape_fails(self):
        with pytest.raises(InvalidEscapeError, match=r"'~2' at position 2"):
            parse_json_pointer("/a~2")

    def test_tilde_at_end_fails(self):
        with pytest.raises(InvalidEscapeError, match="unterminated"):
            parse_json_pointer("/a~")

    def test_tilde_before_separator_fails(self):
        with pytest.raises(InvalidEscapeError) as excinfo:
            parse_json_pointer("/a~/b")
        assert excinfo.value.position == 2

    def test_invalid_escape_is_a_parse_error(self):
        with pytest.raises(ParseError):
            parse_json_pointer("/ok/x~y")

    def test_escape_helper(self):
        assert escape_json_pointer_token("a/b~c") == "a~1b~0c"

    def test_unescape_helper(self):
        assert unescape_json_pointer_token("a~1b~0c") == "a/b~c"

    def test_unescape_helper_is_strict(self):
        with pytest.raises(InvalidEscapeError):
            unescape_json_pointer_token("a~")


# ===================================================================
# Syntax errors and options
# ===================================================================


class TestSyntaxErrors:
    def test_missing_leading_slash(self):
        with pytest.raises(ParseError, match="at position 0") as excinfo:
            parse_json_pointer("abc")
        assert excinfo.value.text == "abc"

    def test_fragment_without_slash(self):
        with pytest.raises(ParseError) as excinfo:
            parse_json_pointer("#abc")
        assert excinfo.value.position == 1

    def test_only_one_hash_is_stripped(self):
        with pytest.raises(ParseError):
            parse_json_pointer("##/a")

    def test_fragment_disabled(self):
        options = ParseOptions(allow_fragment=False)
        with pytest.raises(ParseError, match="found '#'"):
            parse_json_pointer("#/a", options=options)
        assert parse_json_pointer("/a", options=options) == [Name("a")]

    def test_max_depth_exceeded(self):
        options = ParseOptions(max_depth=2)
        with pytest.raises(ParseError, match="max_depth=2") as excinfo:
            parse_json_pointer("/a/b/c", options=options)
        assert excinfo.value.position == 4

    def test_max_depth_within_limit(self):
        options = ParseOptions(max_depth=2)
        assert parse_json_pointer("/a/b", options=options) == [Name("a"), Name("b")]

    def test_parse_error_is_value_error(self):
        with pytest.raises(ValueError):
            parse_json_pointer("x")

    def test_invalid_options(self):
        with pytest.raises(ValueError, match="max_depth"):
            ParseOptions(max_depth=-1)
        with pytest.raises(ValueError, match="max_index"):
            ParseOptions(max_index=-1)


# ===================================================================
# Fragment form equivalence
# ===================================================================


@pytest.mark.parametrize(
    "text",
    ["", "/", "//", "/a", "/a/0/-", "/a~0b/c~1d", "/007/0/12", "/foo/bar baz/%25"],
)
def test_fragment_form_parses_identically(text: str):
    assert parse_json_pointer("#" + text) == parse_json_pointer(text)


# ===================================================================
# Formatting
# ===================================================================


class TestBuildJsonPointer:
    def test_root(self):
        assert build_json_pointer([]) == ""

    def test_escapes_names(self):
        steps = [Name("a/b"), Index(0), NEW_ELEMENT, Name("~")]
        assert build_json_pointer(steps) == "/a~1b/0/-/~0"

    def test_empty_names(self):
        assert build_json_pointer([Name(""), Name("")]) == "//"

    def test_reparses_to_same_steps(self):
        text = "/users/12/a~1b/-"
        assert build_json_pointer(parse_json_pointer(text)) == text

    def test_rejects_non_steps(self):
        with pytest.raises(TypeError, match="pointer step"):
            build_json_pointer(["a"])  # type: ignore[list-item]
