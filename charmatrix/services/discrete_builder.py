from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from ..errors import NoDataRowsError, UnknownStateError
from ..models.config_models import ImportOptions, UnmatchedStatePolicy
from ..models.import_result import BuildOutcome, CellWarning
from ..models.matrix import (
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
from .grammar import is_na
from .states import allocate_symbols, parse_states

"""Discrete matrix builder.

Layout: row 0 header, row 1 state definitions, rows 2.. data. Every character
shares one symbol alphabet; a character's i-th state is addressed by SYMBOLS[i].
"""

__all__ = [
    "POLYMORPHIC_SEPARATOR",
    "character_name",
    "build_discrete_matrix",
]

logger = logging.getLogger(__name__)

POLYMORPHIC_SEPARATOR = "&"
DATA_START_ROW = 2


def character_name(header: Sequence[str], column: int) -> str:
    """Header text of ``column`` or ``Character <column>`` when blank."""
    name = header[column].strip() if column < len(header) else ""
    return name or f"Character {column}"


def _cell_at(row: Sequence[str], column: int) -> str:
    return row[column].strip() if column < len(row) else ""


@dataclass(frozen=True)
class _StateCodec:
    """Label/index -> symbol lookup for one character."""
    name: str
    column: int
    symbols: tuple[str, ...]  # symbols[i] addresses state i
    by_label: dict[str, str]  # upper-cased label -> symbol
    policy: UnmatchedStatePolicy

    @classmethod
    def create(
        cls, name: str, column: int, labels: list[str], alphabet: str, policy: UnmatchedStatePolicy
    ) -> _StateCodec:
        symbols = tuple(alphabet[: len(labels)])
        by_label = {label.upper(): sym for label, sym in zip(labels, symbols)}
        return cls(name=name, column=column, symbols=symbols, by_label=by_label, policy=policy)

    def lookup(self, token: str) -> str | None:
        if token.isascii() and token.isdigit():
            index = int(token)
            if index < len(self.symbols):
                return self.symbols[index]
        return self.by_label.get(token.upper())

    def symbol_for(self, token: str, row: int, issues: list[CellWarning]) -> str:
        symbol = self.lookup(token)
        if symbol is not None:
            return symbol
        if self.policy is UnmatchedStatePolicy.STRICT:
            raise UnknownStateError(token, self.name, row, self.column + 1)
        fallback = self.symbols[0]
        issues.append(
            CellWarning(
                row=row,
                column=self.column + 1,
                value=token,
                kind="UNKNOWN_STATE",
                message=(
                    f'Unknown state "{token}" for character "{self.name}" at row {row}, '
                    f'col {self.column + 1}; first state used'
                ),
            )
        )
        return fallback

    def encode(self, raw: str, row: int, issues: list[CellWarning]) -> Cell:
        if not self.symbols or raw in ("", MISSING):
            # 状態定義なし -> "-" / NA も含めて常に欠測
            return MISSING
        if raw == GAP or is_na(raw):
            return GAP
        if POLYMORPHIC_SEPARATOR in raw:
            tokens = [t.strip() for t in raw.split(POLYMORPHIC_SEPARATOR) if t.strip()]
            if not tokens:
                return MISSING
            scores = "".join(self.symbol_for(t, row, issues) for t in tokens)
            return PolymorphicCell(scores=scores, uncertain=True)
        return self.symbol_for(raw, row, issues)


def build_discrete_matrix(
    rows: Sequence[Sequence[str]], options: ImportOptions | None = None
) -> BuildOutcome:
    """Build the NEXUS-flavoured discrete matrix from a normalized row table.

    Steps:
    1. Character names from header columns 1..N (blank -> "Character <n>")
    2. Parse each column's state definition from row 1
    3. Allocate one alphabet sized to the largest state list
    4. Encode every data row (empty / duplicate taxon names skipped)
    """
    options = options or ImportOptions()
    if len(rows) <= DATA_START_ROW:
        raise NoDataRowsError(
            "Discrete matrix requires a state definitions row followed by at least one data row"
        )
    header = rows[0]
    state_row = rows[1]
    columns = range(1, len(header))

    names = [character_name(header, c) for c in columns]
    labels_per_char = [parse_states(_cell_at(state_row, c)) for c in columns]
    max_states = max((len(labels) for labels in labels_per_char), default=0)
    alphabet = allocate_symbols(max_states, allow_truncation=options.allow_symbol_truncation)

    issues: list[CellWarning] = []
    characters: list[Character] = []
    codecs: list[_StateCodec] = []
    for column, name, labels in zip(columns, names, labels_per_char):
        if len(labels) > len(alphabet):
            issues.append(
                CellWarning(
                    row=1,
                    column=column + 1,
                    value=str(len(labels)),
                    kind="STATES_TRUNCATED",
                    message=(
                        f'Character "{name}" declares {len(labels)} states; only the first '
                        f"{len(alphabet)} can be addressed"
                    ),
                )
            )
            labels = labels[: len(alphabet)]
        characters.append(
            Character(
                name=name,
                type=CharacterType.DISCRETE,
                states=tuple(CharacterState(name=label) for label in labels),
            )
        )
        codecs.append(_StateCodec.create(name, column, labels, alphabet, options.unmatched_state_policy))

    taxa: list[Taxon] = []
    cells: list[tuple[Cell, ...]] = []
    seen_taxa: set[str] = set()
    for r in range(DATA_START_ROW, len(rows)):
        row = rows[r]
        taxon_name = _cell_at(row, 0)
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
        cells.append(tuple(codec.encode(_cell_at(row, codec.column), r, issues) for codec in codecs))

    logger.debug(
        f"discrete matrix built: taxa={len(taxa)} characters={len(characters)} symbols={alphabet}"
    )
    matrix_obj = MatrixObject(
        format=MatrixFormat.NEXUS,
        data_type=CharacterType.DISCRETE,
        taxa=tuple(taxa),
        characters=tuple(characters),
        cells=tuple(cells),
        parameters={"MISSING": MISSING, "GAP": GAP, "SYMBOLS": alphabet},
        blocks=(),
    )
    return BuildOutcome(matrix_obj=matrix_obj, issues=tuple(issues))
