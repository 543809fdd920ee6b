from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Any, Union

"""Canonical character-matrix model.

The MatrixObject is the only artifact handed to the serializers (NEXUS / TNT /
NeXML) and to the persistence pipeline. Python callers use the frozen
dataclasses directly; ``to_dict()`` produces the key layout those consumers
read (``taxa`` / ``characters`` / ``cells`` / ``parameters``).
"""

__all__ = [
    "MISSING",
    "GAP",
    "CharacterType",
    "MatrixFormat",
    "CharacterState",
    "Character",
    "Taxon",
    "PolymorphicCell",
    "Cell",
    "MatrixObject",
]

MISSING = "?"
GAP = "-"


class CharacterType(IntEnum):
    """Character data type; the integer value is what serializers expect."""
    DISCRETE = 0
    CONTINUOUS = 1


class MatrixFormat(Enum):
    NEXUS = "NEXUS"
    TNT = "TNT"


@dataclass(frozen=True)
class CharacterState:
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name}


@dataclass(frozen=True)
class Character:
    """A column of the matrix.

    ``states`` is ordered; position ``i`` is addressed by ``SYMBOLS[i]``.
    Continuous characters carry no states.
    """
    name: str
    type: CharacterType
    states: tuple[CharacterState, ...] | None = None

    def to_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {"name": self.name, "type": int(self.type)}
        if self.states is not None:
            out["states"] = [s.to_dict() for s in self.states]
        return out


@dataclass(frozen=True)
class Taxon:
    name: str

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name}


@dataclass(frozen=True)
class PolymorphicCell:
    """Membership in several states at once (``0&1`` in the source)."""
    scores: str
    uncertain: bool = True

    def to_dict(self) -> dict[str, Any]:
        return {"scores": self.scores, "uncertain": self.uncertain}


# 単一シンボル / "?" / "-" / 連続値テキスト または多型セル
Cell = Union[str, PolymorphicCell]


@dataclass(frozen=True)
class MatrixObject:
    """Immutable canonical matrix; ``cells[i][j]`` is ``taxa[i]`` x ``characters[j]``.

    ``parameters`` is stored as a read-only mapping; ``to_dict()`` hands out a copy.
    """
    format: MatrixFormat
    data_type: CharacterType
    taxa: tuple[Taxon, ...]
    characters: tuple[Character, ...]
    cells: tuple[tuple[Cell, ...], ...]
    parameters: Mapping[str, str] = field(default_factory=dict)
    blocks: tuple[Any, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "parameters", MappingProxyType(dict(self.parameters)))

    @property
    def symbols(self) -> str | None:
        return self.parameters.get("SYMBOLS")

    def cell(self, taxon: str, character: str) -> Cell:
        """Look up a cell by taxon name and character name."""
        row = next(i for i, t in enumerate(self.taxa) if t.name == taxon)
        col = next(j for j, c in enumerate(self.characters) if c.name == character)
        return self.cells[row][col]

    def to_dict(self) -> dict[str, Any]:
        return {
            "format": self.format.value,
            "dataType": int(self.data_type),
            "taxa": [t.to_dict() for t in self.taxa],
            "characters": [c.to_dict() for c in self.characters],
            "cells": [
                [c.to_dict() if isinstance(c, PolymorphicCell) else c for c in row]
                for row in self.cells
            ],
            "parameters": dict(self.parameters),
            "blocks": list(self.blocks),
        }
