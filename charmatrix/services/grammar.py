from __future__ import annotations

import re

from ..models.matrix import GAP, MISSING

"""Small text grammars shared by the mode detector and the builders.

Each function implements one documented rule so it can be tested on its own:

    numbering_prefix := "(" DIGITS ")" [WS* ":"]  |  DIGITS WS* ":"
    state_tokens     := ";"-separated labels, or whitespace-separated labels when no ";"
    numeric_range    := WS* [number] (WS* SEP WS* [number])* WS*
    number           := ["-"|"+"] (DIGITS ["." DIGITS*] | "." DIGITS) [("e"|"E") ["+"|"-"] DIGITS]
    SEP              := "," | ";" | "-" | "–"

All inputs are expected to be already trimmed cell text.
"""

__all__ = [
    "RANGE_SEPARATORS",
    "strip_numbering_prefix",
    "split_state_tokens",
    "looks_like_state_definition",
    "parse_numeric_range",
    "looks_numeric_or_range",
    "continuous_bounds",
    "is_na",
]

_ASCII_DIGITS = "0123456789"
RANGE_SEPARATORS = frozenset(",;-–")
_NUMBER_RE = re.compile(r"[-+]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][-+]?[0-9]+)?")


def _skip_digits(text: str, pos: int) -> int:
    while pos < len(text) and text[pos] in _ASCII_DIGITS:
        pos += 1
    return pos


def _skip_spaces(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def strip_numbering_prefix(text: str) -> str:
    """Remove one leading ``(N)``, ``(N):`` or ``N:`` prefix and trim the rest.

    >>> strip_numbering_prefix("(1) absent; present")
    'absent; present'
    >>> strip_numbering_prefix("12: red;blue")
    'red;blue'
    >>> strip_numbering_prefix("12 legs")
    '12 legs'
    """
    s = text.strip()
    if s.startswith("("):
        end = _skip_digits(s, 1)
        if end == 1 or end >= len(s) or s[end] != ")":
            return s
        rest = end + 1
        colon = _skip_spaces(s, rest)
        if colon < len(s) and s[colon] == ":":
            rest = colon + 1
        return s[rest:].strip()

    end = _skip_digits(s, 0)
    if end == 0:
        return s
    colon = _skip_spaces(s, end)
    if colon < len(s) and s[colon] == ":":
        return s[colon + 1:].strip()
    return s


def split_state_tokens(text: str) -> list[str]:
    """Split on ``;`` when present, otherwise on whitespace runs; drop empties."""
    parts = text.split(";") if ";" in text else text.split()
    return [p.strip() for p in parts if p.strip()]


def looks_like_state_definition(text: str) -> bool:
    """True if the cell reads like a list of state labels rather than a score."""
    if not text:
        return False
    cleaned = strip_numbering_prefix(text)
    if ";" in cleaned:
        return True
    return len(cleaned.split()) > 1


def parse_numeric_range(text: str) -> tuple[float, ...] | None:
    """Parse a numeric value or delimited list/range of values.

    Returns the numbers in order, or None when the text is not numeric.
    Empty pieces between separators are ignored, so ``"1.2-"`` parses as ``(1.2,)``.

    >>> parse_numeric_range("1.2-1.5")
    (1.2, 1.5)
    >>> parse_numeric_range("-0.5")
    (-0.5,)
    >>> parse_numeric_range("abc") is None
    True
    """
    values: list[float] = []
    pos = 0
    expect_number = True
    while pos < len(text):
        ch = text[pos]
        if ch.isspace():
            pos += 1
            continue
        if expect_number:
            m = _NUMBER_RE.match(text, pos)
            if m:
                values.append(float(m.group()))
                pos = m.end()
                expect_number = False
                continue
            if ch in RANGE_SEPARATORS:
                pos += 1
                continue
            return None
        if ch in RANGE_SEPARATORS:
            expect_number = True
            pos += 1
            continue
        return None
    return tuple(values) if values else None


def looks_numeric_or_range(text: str) -> bool:
    return parse_numeric_range(text) is not None


def continuous_bounds(cell: str) -> tuple[float, float | None] | None:
    """Decode a continuous cell into ``(start, end)`` as the import pipeline stores it.

    ``end`` is None for a single value; the whole result is None for
    missing / inapplicable / unparseable cells.
    """
    if cell in (MISSING, GAP):
        return None
    values = parse_numeric_range(cell)
    if values is None:
        return None
    return values[0], (values[1] if len(values) > 1 else None)


def is_na(text: str) -> bool:
    """Case-insensitive ``NA`` (explicitly not applicable)."""
    return text.upper() == "NA"
