"""Enum detection from CHECK constraints in CREATE TABLE text.

The parsing is shallow: CHECK clauses are located by keyword
search and parenthesis depth counting, and only the single-predicate form
`column IN (literal, ...)` is recognized. Everything else is "not an enum".
"""

import logging
import re
from collections.abc import Iterator

from introspect.types import EnumConstraint

logger = logging.getLogger(__name__)

QUOTES = frozenset("'\"")

# Reusable regex components for better readability
CHECK = r"\bcheck\b"
IDENTIFIER = r"([A-Za-z_][A-Za-z0-9_]*)"  # Bare ASCII identifier
WHITESPACE = r"\s*"
REQUIRED_WHITESPACE = r"\s+"
IN = r"IN"
OPEN_PAREN = r"\("
CLOSE_PAREN = r"\)"
BODY = r"(.*)"  # Greedy, so the body runs to the final closing parenthesis

CHECK_PATTERN = re.compile(CHECK, re.IGNORECASE)
MEMBERSHIP_PATTERN = re.compile(
    "".join(
        (
            "^",
            WHITESPACE,
            IDENTIFIER,
            REQUIRED_WHITESPACE,
            IN,
            WHITESPACE,
            OPEN_PAREN,
            BODY,
            CLOSE_PAREN,
            WHITESPACE,
            "$",
        ),
    ),
    re.IGNORECASE | re.DOTALL,
)


def extract_parenthesized(text: str, open_index: int) -> str | None:
    """Return the text inside the parenthesis pair opened at `open_index`.

    Nested pairs are kept in the result, the outermost pair is not. Returns
    None when the pair is never closed.
    """
    depth = 0
    for index in range(open_index, len(text)):
        match text[index]:
            case "(":
                depth += 1
            case ")":
                depth -= 1
                if depth == 0:
                    return text[open_index + 1 : index]
    return None


def scan_check_constraints(ddl: str) -> Iterator[str]:
    """Yield the parenthesized body of every CHECK clause in source order."""
    position = 0
    while match := CHECK_PATTERN.search(ddl, position):
        open_index = ddl.find("(", match.end())
        if open_index == -1:
            break

        span = extract_parenthesized(ddl, open_index)
        if span is None:
            logger.debug("Unmatched parenthesis after CHECK at offset %d", open_index)
            position = open_index + 1
            continue

        yield span
        # Resume after the closing parenthesis of this clause
        position = open_index + len(span) + 2


def closes_early(body: str) -> bool:
    """Check if the IN list's parenthesis closes before the end of `body`.

    Parentheses inside quoted literals are ignored.
    """
    depth = 0
    quote: str | None = None
    for char in body:
        if quote is not None:
            if char == quote:
                quote = None
        elif char in QUOTES:
            quote = char
        elif char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
            if depth < 0:
                return True
    return False


def _finish_value(chars: list[str], quoted_start: int | None, quoted_stop: int) -> str:
    """Join a value, stripping whitespace only where it lies outside quotes."""
    text = "".join(chars)
    if quoted_start is None:
        return text.strip()
    return (
        text[:quoted_start].lstrip()
        + text[quoted_start:quoted_stop]
        + text[quoted_stop:].rstrip()
    )


def tokenize_values(body: str) -> list[str]:
    """Split a comma-separated literal list into values.

    Both quote characters delimit literals, a doubled quote inside a literal
    stands for one quote character, and commas inside quotes are literal.
    Values that are empty after trimming are dropped.

    Examples:
        'a', 'b'        -> ['a', 'b']
        'it''s', "ok"   -> ["it's", 'ok']
        1, 2, 3,        -> ['1', '2', '3']

    """
    values: list[str] = []
    chars: list[str] = []
    quote: str | None = None
    # Bounds of the quoted region within `chars`, protected from trimming
    quoted_start: int | None = None
    quoted_stop = 0

    index = 0
    while index < len(body):
        char = body[index]
        if quote is None:
            if char in QUOTES:
                quote = char
                if quoted_start is None:
                    quoted_start = quoted_stop = len(chars)
            elif char == ",":
                if value := _finish_value(chars, quoted_start, quoted_stop):
                    values.append(value)
                chars, quoted_start, quoted_stop = [], None, 0
            else:
                chars.append(char)
        elif char == quote:
            if body.startswith(quote, index + 1):
                # Doubled quote is an escaped quote character
                chars.append(char)
                quoted_stop = len(chars)
                index += 1
            else:
                quote = None
        else:
            chars.append(char)
            quoted_stop = len(chars)
        index += 1

    if value := _finish_value(chars, quoted_start, quoted_stop):
        values.append(value)

    return values


def recognize_membership(span: str) -> EnumConstraint | None:
    """Parse a CHECK body of the form `column IN (values)`.

    Handles constraints like:
    - status IN ('active', 'inactive')
    - role in("admin","user")

    Anything else (ranges, comparisons, OR-joined predicates, functions) is
    not an enum and yields None, as does an IN list without values.
    """
    match = MEMBERSHIP_PATTERN.match(span)
    if match is None:
        logger.debug("CHECK clause is not a membership test: %s", span.strip())
        return None

    column, body = match[1], match[2]
    if closes_early(body):
        logger.debug("CHECK clause joins more than one predicate: %s", span.strip())
        return None

    if values := tokenize_values(body):
        return EnumConstraint(column=column, values=values)

    logger.debug("Ignoring CHECK on %s with an empty IN list", column)
    return None


def parse_enum_constraints(ddl: str) -> list[EnumConstraint]:
    """Parse all enum-like CHECK constraints from CREATE TABLE text."""
    return [
        constraint
        for span in scan_check_constraints(ddl)
        if (constraint := recognize_membership(span)) is not None
    ]
