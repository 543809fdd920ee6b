from __future__ import annotations

import logging
from collections.abc import Sequence

from ..models.config_models import ImportOptions
from ..models.import_result import BuildOutcome, CellWarning
from ..models.matrix import (
    GAP,
    MISSING,
    Cell,
    Character,
    CharacterType,
    MatrixFormat,
    MatrixObject,
    Taxon,
)
from .discrete_builder import character_name
from .grammar import is_na, looks_numeric_or_range

"""Continuous matrix builder.

No state-definition row in this mode: data starts right after the header.
Numeric and range values are passed through untouched (the import pipeline
splits them into start/end values); anything else degrades to "?" with a
warning and never aborts the import.
"""

__all__ = [
    "build_continuous_matrix",
]

logger = logging.getLogger(__name__)

DATA_START_ROW = 1


def _encode(raw: str, row: int, column: int, issues: list[CellWarning]) -> Cell:
    if raw in ("", MISSING):
        return MISSING
    if raw == GAP or is_na(raw):
        return GAP
    if looks_numeric_or_range(raw):
        return raw
    issues.append(
        CellWarning(
            row=row,
            column=column,
            value=raw,
            kind="NON_NUMERIC_VALUE",
            message=f'Non-numeric value "{raw}" treated as missing at row {row}, col {column}',
        )
    )
    return MISSING


def build_continuous_matrix(
    rows: Sequence[Sequence[str]], options: ImportOptions | None = None
) -> BuildOutcome:
    """Build the TNT-flavoured continuous matrix from a normalized row table.

    ``options`` is accepted for symmetry with the discrete builder; none of
    its settings apply to continuous data.
    """
    header = rows[0]
    columns = range(1, len(header))
    characters = tuple(
        Character(name=character_name(header, c), type=CharacterType.CONTINUOUS) for c in columns
    )

    issues: list[CellWarning] = []
    taxa: list[Taxon] = []
    cells: list[tuple[Cell, ...]] = []
    seen_taxa: set[str] = set()
    for r in range(DATA_START_ROW, len(rows)):
        row = rows[r]
        taxon_name = row[0].strip() if row else ""
        if not taxon_name:
            continue
        if taxon_name in seen_taxa:
            issues.append(
                CellWarning(
                    row=r,
                    column=1,
                    value=taxon_name,
                    kind="DUPLICATE_TAXON",
                    message=f'Duplicate taxon "{taxon_name}" at row {r} skipped',
                )
            )
            continue
        seen_taxa.add(taxon_name)
        taxa.append(Taxon(name=taxon_name))
        cells.append(
            tuple(
                _encode(row[c].strip() if c < len(row) else "", r, c + 1, issues) for c in columns
            )
        )

    logger.debug(f"continuous matrix built: taxa={len(taxa)} characters={len(characters)}")
    matrix_obj = MatrixObject(
        format=MatrixFormat.TNT,
        data_type=CharacterType.CONTINUOUS,
        taxa=tuple(taxa),
        characters=characters,
        cells=tuple(cells),
        parameters={},
        blocks=(),
    )
    return BuildOutcome(matrix_obj=matrix_obj, issues=tuple(issues))
