from __future__ import annotations

"""Exception hierarchy for the tabular character-matrix importer.

Every fatal condition raised by the reader, the mode detector or the builders
derives from ``MatrixImportError`` so callers (and the batch orchestrator) can
catch a single type per file. Non-fatal conditions never raise; they become
``CellWarning`` entries on the ``ImportResult``.
"""

__all__ = [
    "MatrixImportError",
    "UnreadableSourceError",
    "EmptyInputError",
    "HeaderTooNarrowError",
    "NoDataRowsError",
    "UnresolvedFormatError",
    "AmbiguousModeError",
    "SymbolAlphabetExhaustedError",
    "UnknownStateError",
]


class MatrixImportError(Exception):
    """Base class for fatal import errors."""


class UnreadableSourceError(MatrixImportError):
    """Raised when the source file cannot be opened or parsed at all."""


class EmptyInputError(MatrixImportError):
    """Raised when the source yields zero rows after normalization."""


class HeaderTooNarrowError(MatrixImportError):
    """Raised when the header row has fewer than 2 columns."""


class NoDataRowsError(MatrixImportError):
    """Raised when no data row follows the header (and state row)."""


class UnresolvedFormatError(MatrixImportError):
    """Raised when no matrix mode could be determined or the override is invalid."""


class AmbiguousModeError(UnresolvedFormatError):
    """Raised when auto-detection is inconclusive and no override was supplied."""


class SymbolAlphabetExhaustedError(MatrixImportError):
    """Raised when a character needs more states than the 62-symbol alphabet."""

    def __init__(self, requested: int, available: int) -> None:
        super().__init__(
            f"{requested} states requested but only {available} symbols are available"
        )
        self.requested = requested
        self.available = available


class UnknownStateError(MatrixImportError):
    """Raised under the strict policy when a cell names no declared state."""

    def __init__(self, value: str, character: str, row: int, column: int) -> None:
        super().__init__(
            f'Unknown state "{value}" for character "{character}" at row {row}, col {column}'
        )
        self.value = value
        self.character = character
        self.row = row
        self.column = column
