from __future__ import annotations

import math
import warnings
from collections.abc import Iterable, Sequence
from enum import Enum
from pathlib import Path
from typing import Any

import pandas as pd

from ..errors import EmptyInputError, UnreadableSourceError

"""Row reader: spreadsheet / delimited text -> list of trimmed text rows.

No interpretation happens here. Both formats are read raw (no header row, no
pandas NA conversion so the literal "NA" survives) and every cell becomes
trimmed text. Columns past the last non-empty cell of the whole table are
cut; a blank cell inside that width (e.g. a blank header) is kept.
"""

__all__ = [
    "SourceFormat",
    "SPREADSHEET_SUFFIXES",
    "DELIMITED_SUFFIXES",
    "infer_source_format",
    "read_rows",
    "normalize_rows",
]


class SourceFormat(Enum):
    DELIMITED = "delimited"
    SPREADSHEET = "spreadsheet"


SPREADSHEET_SUFFIXES = frozenset({".xlsx", ".xlsm", ".xls"})
DELIMITED_SUFFIXES = frozenset({".csv", ".tsv", ".tab", ".txt"})
_TAB_SUFFIXES = frozenset({".tsv", ".tab"})


def infer_source_format(path: Path) -> SourceFormat:
    """Spreadsheet for Excel suffixes, delimited text for everything else."""
    if path.suffix.lower() in SPREADSHEET_SUFFIXES:
        return SourceFormat.SPREADSHEET
    return SourceFormat.DELIMITED


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        if math.isnan(value):
            return ""
        # Excel は整数も float で返すことがある: 2.0 -> "2"
        if value.is_integer():
            return str(int(value))
    return str(value).strip()


def normalize_rows(raw_rows: Iterable[Sequence[Any]], drop_blank: bool = False) -> list[list[str]]:
    """Coerce every cell to trimmed text and cut empty trailing columns.

    The table width is one past the last column holding a non-empty cell in
    any row; every row is cut to that width. Rows are not padded.

    Parameters
    ----------
    raw_rows: rows of arbitrary cell values (None / NaN allowed)
    drop_blank: drop rows whose cells are all empty
    """
    text_rows = [[_cell_text(v) for v in raw] for raw in raw_rows]
    width = 0
    for row in text_rows:
        for c in range(len(row) - 1, width - 1, -1):
            if row[c]:
                width = c + 1
                break

    rows: list[list[str]] = []
    for row in text_rows:
        row = row[:width]
        if drop_blank and not any(row):
            continue
        rows.append(row)
    return rows


def _read_spreadsheet(path: Path) -> list[list[Any]]:
    with pd.ExcelFile(path) as xls:
        if not xls.sheet_names:
            return []
        # 先頭シートのみ対象
        df = xls.parse(xls.sheet_names[0], header=None, keep_default_na=False, na_values=[])
    return df.values.tolist()


def _read_delimited(path: Path, delimiter: str, encoding: str) -> list[list[Any]]:
    with warnings.catch_warnings():
        # Rows longer than the first row: pandas drops the extra fields and warns.
        warnings.simplefilter("ignore", pd.errors.ParserWarning)
        try:
            df = pd.read_csv(
                path,
                sep=delimiter,
                header=None,
                dtype=str,
                keep_default_na=False,
                na_filter=False,
                skip_blank_lines=True,
                engine="python",
                encoding=encoding,
                on_bad_lines=lambda line: line,
            )
        except pd.errors.EmptyDataError:
            return []
    return df.values.tolist()


def read_rows(
    path: Path,
    source_format: SourceFormat | None = None,
    *,
    delimiter: str | None = None,
    encoding: str = "utf-8",
) -> list[list[str]]:
    """Read a matrix source file into normalized text rows.

    Parameters
    ----------
    path: source file
    source_format: SPREADSHEET or DELIMITED (None -> inferred from the suffix)
    delimiter: field separator for delimited text (None -> tab for .tsv/.tab, else comma)
    encoding: text encoding for delimited files

    Raises
    ------
    UnreadableSourceError: file missing, unreadable or not parseable in the given format
    EmptyInputError: file parsed but holds no rows
    """
    path = Path(path)
    if not path.is_file():
        raise UnreadableSourceError(f"source file not found: {path}")
    fmt = source_format or infer_source_format(path)
    if delimiter is None:
        delimiter = "\t" if path.suffix.lower() in _TAB_SUFFIXES else ","

    try:
        if fmt is SourceFormat.SPREADSHEET:
            raw = _read_spreadsheet(path)
        else:
            raw = _read_delimited(path, delimiter, encoding)
    except Exception as e:
        # openpyxl / xlrd / csv parser each raise their own types (zip, xml, decode errors)
        raise UnreadableSourceError(f"cannot read {path.name} as {fmt.value}: {e}") from e

    # Blank spreadsheet rows are dropped; delimited blank lines were already skipped
    # by the parser, and rows of empty fields are kept so row positions hold.
    rows = normalize_rows(raw, drop_blank=fmt is SourceFormat.SPREADSHEET)
    if not any(any(row) for row in rows):
        raise EmptyInputError(f"no data found in {path.name}")
    return rows
