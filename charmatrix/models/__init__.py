"""Domain models for the tabular character-matrix importer.

This package contains the canonical matrix object handed to serializers and
the persistence pipeline, the per-call import options, the import result with
its warnings, and the records used for warning logs and batch statistics.
"""

from .config_models import ImportOptions, MatrixMode, UnmatchedStatePolicy
from .import_result import BuildOutcome, CellWarning, ImportResult
from .matrix import (
    GAP,
    MISSING,
    Cell,
    Character,
    CharacterState,
    CharacterType,
    MatrixFormat,
    MatrixObject,
    PolymorphicCell,
    Taxon,
)

__all__ = [
    # Options
    "ImportOptions",
    "MatrixMode",
    "UnmatchedStatePolicy",
    # Results
    "BuildOutcome",
    "CellWarning",
    "ImportResult",
    # Canonical matrix
    "GAP",
    "MISSING",
    "Cell",
    "Character",
    "CharacterState",
    "CharacterType",
    "MatrixFormat",
    "MatrixObject",
    "PolymorphicCell",
    "Taxon",
]
