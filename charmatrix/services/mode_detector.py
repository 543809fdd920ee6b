from __future__ import annotations

import logging
from collections.abc import Sequence
from enum import Enum

from ..errors import AmbiguousModeError, UnresolvedFormatError
from ..models.config_models import MatrixMode
from ..models.matrix import GAP, MISSING
from .grammar import is_na, looks_like_state_definition, looks_numeric_or_range

"""Discrete / continuous mode detection.

Two-stage classifier over row index 1 (the row right after the header):

1. any column that reads like a state definition -> DISCRETE
2. every column empty / "?" / "-" / NA / numeric-or-range -> CONTINUOUS
3. otherwise AMBIGUOUS; the caller has to supply a mode.

Columns are those of the header (1..N); cells missing from a short row read as "".
"""

__all__ = [
    "DetectedMode",
    "detect_mode",
    "resolve_mode",
]

logger = logging.getLogger(__name__)


class DetectedMode(Enum):
    DISCRETE = "discrete"
    CONTINUOUS = "continuous"
    AMBIGUOUS = "ambiguous"


def _probe_cells(rows: Sequence[Sequence[str]]) -> list[str]:
    if len(rows) < 2:
        return []
    width = len(rows[0])
    probe = rows[1]
    return [(probe[c] if c < len(probe) else "").strip() for c in range(1, width)]


def _is_missing_or_numeric(text: str) -> bool:
    if text in ("", MISSING, GAP) or is_na(text):
        return True
    return looks_numeric_or_range(text)


def detect_mode(rows: Sequence[Sequence[str]]) -> DetectedMode:
    """Classify a normalized row table. Discrete is always tested first."""
    cells = _probe_cells(rows)
    if not cells:
        return DetectedMode.AMBIGUOUS
    if any(looks_like_state_definition(v) for v in cells):
        return DetectedMode.DISCRETE
    if all(_is_missing_or_numeric(v) for v in cells):
        return DetectedMode.CONTINUOUS
    return DetectedMode.AMBIGUOUS


def _coerce_mode(mode: MatrixMode | str) -> MatrixMode:
    if isinstance(mode, MatrixMode):
        return mode
    try:
        return MatrixMode(str(mode).strip().lower())
    except ValueError as e:
        raise UnresolvedFormatError(
            f"unknown matrix mode '{mode}' (expected 'discrete' or 'continuous')"
        ) from e


def resolve_mode(
    rows: Sequence[Sequence[str]], override: MatrixMode | str | None = None
) -> MatrixMode:
    """Return the explicit override if given, otherwise the detected mode.

    Raises:
        UnresolvedFormatError: override is not a known mode
        AmbiguousModeError: detection was inconclusive and no override was given
    """
    if override is not None:
        mode = _coerce_mode(override)
        logger.debug(f"mode forced: {mode.value}")
        return mode

    detected = detect_mode(rows)
    logger.debug(f"mode detected: {detected.value}")
    if detected is DetectedMode.DISCRETE:
        return MatrixMode.DISCRETE
    if detected is DetectedMode.CONTINUOUS:
        return MatrixMode.CONTINUOUS
    raise AmbiguousModeError(
        "Unable to detect matrix type (discrete or continuous). Provide a mode override."
    )
