"""Tabular phylogenetic character data -> canonical character matrix.

Typical use::

    from charmatrix import import_matrix

    result = import_matrix("characters.xlsx")
    result.matrix_obj.parameters["SYMBOLS"]
    result.warnings
"""

from .errors import (
    AmbiguousModeError,
    EmptyInputError,
    HeaderTooNarrowError,
    MatrixImportError,
    NoDataRowsError,
    SymbolAlphabetExhaustedError,
    UnknownStateError,
    UnreadableSourceError,
    UnresolvedFormatError,
)
from .models import (
    Character,
    CharacterState,
    CharacterType,
    ImportOptions,
    ImportResult,
    MatrixMode,
    MatrixObject,
    PolymorphicCell,
    Taxon,
    UnmatchedStatePolicy,
)
from .readers.reader import SourceFormat, read_rows
from .services.grammar import continuous_bounds
from .services.importer import import_matrix, import_rows
from .services.mode_detector import DetectedMode, detect_mode
from .services.states import allocate_symbols, parse_states

__all__ = [
    "import_matrix",
    "import_rows",
    "read_rows",
    "detect_mode",
    "parse_states",
    "allocate_symbols",
    "continuous_bounds",
    "DetectedMode",
    "SourceFormat",
    "Character",
    "CharacterState",
    "CharacterType",
    "ImportOptions",
    "ImportResult",
    "MatrixMode",
    "MatrixObject",
    "PolymorphicCell",
    "Taxon",
    "UnmatchedStatePolicy",
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
