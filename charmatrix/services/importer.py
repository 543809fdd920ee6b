from __future__ import annotations

import logging
from collections.abc import Sequence
from pathlib import Path

from ..errors import HeaderTooNarrowError, NoDataRowsError
from ..models.config_models import ImportOptions, MatrixMode
from ..models.import_result import ImportResult
from ..readers.reader import SourceFormat, read_rows
from .continuous_builder import build_continuous_matrix
from .discrete_builder import build_discrete_matrix
from .mode_detector import resolve_mode

"""Import orchestration: rows -> mode decision -> builder -> ImportResult.

Each call is a pure function of its rows and options. Nothing is cached
between calls, so imports may run in parallel threads or processes freely.
"""

__all__ = [
    "import_rows",
    "import_matrix",
]

logger = logging.getLogger(__name__)


def _validate_table(rows: Sequence[Sequence[str]]) -> None:
    header = rows[0] if rows else []
    if len(header) < 2:
        raise HeaderTooNarrowError("At least one character column is required")
    if len(rows) < 2:
        raise NoDataRowsError("No data rows found")


def import_rows(
    rows: Sequence[Sequence[str]],
    mode: MatrixMode | str | None = None,
    options: ImportOptions | None = None,
) -> ImportResult:
    """Convert a normalized row table into the canonical matrix.

    Args:
        rows: header row followed by (state row and) data rows, cells as trimmed text
        mode: force "discrete" / "continuous"; None runs auto-detection
        options: builder options (policy for unknown states, alphabet truncation)

    Returns:
        ImportResult holding the finished MatrixObject and non-fatal warnings

    Raises:
        HeaderTooNarrowError, NoDataRowsError, UnresolvedFormatError,
        AmbiguousModeError, SymbolAlphabetExhaustedError, UnknownStateError
    """
    _validate_table(rows)
    resolved = resolve_mode(rows, mode)
    options = options or ImportOptions()
    if resolved is MatrixMode.DISCRETE:
        outcome = build_discrete_matrix(rows, options)
    else:
        outcome = build_continuous_matrix(rows, options)
    logger.debug(f"import finished: mode={resolved.value} warnings={len(outcome.issues)}")
    return ImportResult(matrix_obj=outcome.matrix_obj, issues=outcome.issues)


def import_matrix(
    path: Path | str,
    mode: MatrixMode | str | None = None,
    *,
    source_format: SourceFormat | None = None,
    options: ImportOptions | None = None,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> ImportResult:
    """Read ``path`` (CSV/TSV or Excel) and import it; see ``import_rows``.

    Raises:
        UnreadableSourceError, EmptyInputError and everything ``import_rows`` raises
    """
    rows = read_rows(Path(path), source_format, delimiter=delimiter, encoding=encoding)
    return import_rows(rows, mode, options)
