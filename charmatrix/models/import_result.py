from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .matrix import MatrixObject

"""ImportResult / CellWarning models.

ImportResult is what the importer hands back: the finished matrix plus the
non-fatal issues collected while building it. ``to_dict()`` mirrors the
``{ matrixObj, warnings }`` pair the upload pipeline expects.
"""

__all__ = [
    "CellWarning",
    "ImportResult",
    "BuildOutcome",
]


@dataclass(frozen=True)
class CellWarning:
    """A recovered, non-fatal problem.

    Attributes:
        row: 1-based data row position (rows counted after the header); -1 if not row-specific
        column: 1-based column position; -1 if not column-specific
        value: offending source text
        kind: classification in UPPER_SNAKE_CASE (e.g. NON_NUMERIC_VALUE)
        message: human-readable text reported to the uploader
    """
    row: int
    column: int
    value: str
    kind: str
    message: str

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class BuildOutcome:
    """Output of one builder run (internal hand-off to the importer)."""
    matrix_obj: MatrixObject
    issues: tuple[CellWarning, ...] = ()


@dataclass(frozen=True)
class ImportResult:
    matrix_obj: MatrixObject
    issues: tuple[CellWarning, ...] = ()

    @property
    def warnings(self) -> list[str]:
        return [w.message for w in self.issues]

    def to_dict(self) -> dict[str, Any]:
        return {"matrixObj": self.matrix_obj.to_dict(), "warnings": self.warnings}
