from __future__ import annotations

import logging

from ..errors import SymbolAlphabetExhaustedError
from .grammar import split_state_tokens, strip_numbering_prefix

"""State-definition parsing and symbol-alphabet allocation (discrete mode)."""

__all__ = [
    "SYMBOL_POOL",
    "parse_states",
    "allocate_symbols",
]

logger = logging.getLogger(__name__)

# 優先順: 数字 -> 英大文字 -> 英小文字 (62 記号)
SYMBOL_POOL = (
    "0123456789"
    "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
    "abcdefghijklmnopqrstuvwxyz"
)


def parse_states(cell: str | None) -> list[str]:
    """Parse one state-definition cell into its ordered, distinct state labels.

    ``"(1) absent;present"`` -> ``["absent", "present"]``
    ``"red blue green"`` -> ``["red", "blue", "green"]``

    A numbering prefix is removed from the start of the cell and from each
    token (``"0:absent;1:present"``). Labels repeating case-insensitively keep
    their first occurrence only, since cell lookup is case-insensitive.
    """
    text = (cell or "").strip()
    if not text:
        return []
    labels: list[str] = []
    seen: set[str] = set()
    for token in split_state_tokens(strip_numbering_prefix(text)):
        label = strip_numbering_prefix(token)
        if not label:
            continue
        key = label.upper()
        if key in seen:
            logger.debug(f"duplicate state label {label!r} ignored")
            continue
        seen.add(key)
        labels.append(label)
    return labels


def allocate_symbols(max_states: int, *, allow_truncation: bool = False) -> str:
    """Return the shared symbol alphabet for a matrix needing ``max_states`` states.

    Raises:
        SymbolAlphabetExhaustedError: if more than 62 symbols are needed and
            truncation was not explicitly allowed
    """
    if max_states <= len(SYMBOL_POOL):
        return SYMBOL_POOL[:max(max_states, 0)]
    if not allow_truncation:
        raise SymbolAlphabetExhaustedError(max_states, len(SYMBOL_POOL))
    logger.warning(
        f"symbol alphabet truncated: {max_states} states requested, {len(SYMBOL_POOL)} available"
    )
    return SYMBOL_POOL
