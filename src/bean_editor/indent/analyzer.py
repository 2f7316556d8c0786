"""Line-by-line indentation analysis over a buffer prefix.

The analyzer replays every line from the start of the prefix, tracking only
per-line bracket balance and whether the line ended inside an expression.
It is a heuristic, not a parser: malformed or half-typed code degrades to a
plausible indent instead of an error.
"""

from __future__ import annotations

from .scanner import CharScanner

NESTING_UNIT = 4
CONTINUATION_UNIT = 8

OPENERS = "([{"
CODE_CLOSERS = ")]"
BLOCK_CLOSER = "}"
CLOSERS = CODE_CLOSERS + BLOCK_CLOSER
TERMINATORS = ";,"
QUOTES = "\"'"


def round_indent(value: int) -> int:
    """Clamp at zero and round to the nearest nesting unit, halves up."""

    value = max(0, value)
    half = NESTING_UNIT // 2
    return (value + half) // NESTING_UNIT * NESTING_UNIT


def leading_indent(scanner: CharScanner) -> int:
    """Count leading spaces of the next non-blank line.

    Blank lines are consumed whole. The final line of the window is returned
    even when it holds nothing but spaces.
    """

    while True:
        count = 0
        while scanner.match(" "):
            count += 1
        if not scanner.match("\n"):
            return count


def skip_quoted(scanner: CharScanner, close: str) -> None:
    """Consume a literal body up to and including ``close``.

    Stops early, without consuming, at a newline or end of input; an escaped
    newline is not consumed either.
    """

    while True:
        if scanner.match("\\"):
            scanner.match_except("\n")
        elif scanner.match(close):
            return
        elif not scanner.match_except("\n"):
            return


def skip_line_comment(scanner: CharScanner) -> None:
    while scanner.match_except("\n"):
        pass


def required_indent(scanner: CharScanner) -> int:
    """Indent, in spaces, for a line following everything left in ``scanner``."""

    indent = 0
    was_in_code = False

    while scanner.has_next():
        this_indent = leading_indent(scanner)

        depth = 0
        in_code = False
        starts_closed = False
        first = scanner.match_any(CLOSERS)
        if first is not None:
            starts_closed = True
            depth -= 1
            in_code = first != BLOCK_CLOSER

        while scanner.has_next() and not scanner.match("\n"):
            if scanner.match_any(OPENERS):
                depth += 1
                in_code = True
            elif scanner.match_any(CODE_CLOSERS):
                depth -= 1
                in_code = True
            elif scanner.match(BLOCK_CLOSER):
                depth -= 1
                in_code = False
            elif scanner.match("/"):
                if scanner.match("*"):
                    # Block comments are not tracked.
                    pass
                elif scanner.match("/"):
                    skip_line_comment(scanner)
                else:
                    in_code = True
            elif scanner.match_any(TERMINATORS):
                # Still an expression inside for (;;), argument lists and lambdas.
                in_code = depth != 0
            else:
                char = scanner.next()
                if char in QUOTES:
                    skip_quoted(scanner, char)
                in_code = True

        if depth > 0 or (depth == 0 and starts_closed):
            indent = this_indent + NESTING_UNIT
            was_in_code = False
        elif in_code == was_in_code:
            indent = this_indent
        else:
            if in_code:
                indent = this_indent + CONTINUATION_UNIT
            else:
                indent = this_indent - CONTINUATION_UNIT
            was_in_code = in_code

    return round_indent(indent)


__all__ = [
    "CLOSERS",
    "CONTINUATION_UNIT",
    "NESTING_UNIT",
    "leading_indent",
    "required_indent",
    "round_indent",
    "skip_line_comment",
    "skip_quoted",
]
