from __future__ import annotations

import pytest

from bean_editor.indent import CharScanner, leading_indent, skip_quoted


def test_scanner_primitives_advance_only_on_match() -> None:
    scanner = CharScanner("ab")

    assert scanner.match("b") is False
    assert scanner.position == 0
    assert scanner.match("a") is True
    assert scanner.match_except("b") is False
    assert scanner.next() == "b"
    assert scanner.has_next() is False


def test_scanner_respects_window_end() -> None:
    scanner = CharScanner("abc\ndef", 0, 3)

    consumed = []
    while scanner.has_next():
        consumed.append(scanner.next())

    assert consumed == ["a", "b", "c"]
    assert scanner.match("\n") is False
    assert scanner.match_except("x") is False


def test_scanner_next_past_end_raises() -> None:
    scanner = CharScanner("")

    with pytest.raises(IndexError):
        scanner.next()


def test_scanner_clamps_window_bounds() -> None:
    scanner = CharScanner("ab", 5, 10)

    assert scanner.has_next() is False
    assert scanner.position == 2


def test_match_any_returns_matched_character() -> None:
    scanner = CharScanner("]x")

    assert scanner.match_any("([{") is None
    assert scanner.match_any(")]}") == "]"
    assert scanner.position == 1


def test_leading_indent_skips_blank_lines() -> None:
    scanner = CharScanner("  \n\n    x")

    assert leading_indent(scanner) == 4
    assert scanner.next() == "x"


def test_leading_indent_counts_trailing_partial_line() -> None:
    assert leading_indent(CharScanner("   ")) == 3


def test_skip_quoted_consumes_through_close() -> None:
    scanner = CharScanner('abc"rest')

    skip_quoted(scanner, '"')

    assert scanner.position == 4


def test_skip_quoted_handles_escaped_close() -> None:
    scanner = CharScanner('a\\"b"x')

    skip_quoted(scanner, '"')

    assert scanner.next() == "x"


def test_skip_quoted_stops_before_newline() -> None:
    scanner = CharScanner("ab\ncd")

    skip_quoted(scanner, "'")

    assert scanner.position == 2
    assert scanner.match("\n") is True


def test_skip_quoted_does_not_consume_escaped_newline() -> None:
    scanner = CharScanner("a\\\nb")

    skip_quoted(scanner, '"')

    assert scanner.position == 2
