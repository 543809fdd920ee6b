from __future__ import annotations

import pytest

from charmatrix.models.matrix import CharacterType, MatrixFormat
from charmatrix.services.continuous_builder import build_continuous_matrix


def test_length_matrix(length_rows):
    outcome = build_continuous_matrix(length_rows)
    m = outcome.matrix_obj

    assert m.format is MatrixFormat.TNT
    assert m.data_type is CharacterType.CONTINUOUS
    assert m.parameters == {}
    assert m.symbols is None
    assert [c.name for c in m.characters] == ["Length"]
    assert m.characters[0].states is None
    assert m.cells == (("1.2-1.5",), ("-",), ("?",))

    assert len(outcome.issues) == 1
    issue = outcome.issues[0]
    assert issue.kind == "NON_NUMERIC_VALUE"
    assert (issue.row, issue.column, issue.value) == (3, 2, "abc")
    assert "row 3" in issue.message and "col 2" in issue.message


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("", "?"),
        ("?", "?"),
        ("-", "-"),
        ("na", "-"),
        ("12", "12"),
        ("-0.5", "-0.5"),
        ("+1.5", "+1.5"),
        ("1.2 - 1.5", "1.2 - 1.5"),
        ("3,4", "3,4"),
    ],
)
def test_cell_encoding(raw: str, expected: str):
    m = build_continuous_matrix([["Taxon", "Mass"], ["T", raw]]).matrix_obj
    assert m.cell("T", "Mass") == expected


def test_non_numeric_never_aborts():
    rows = [["Taxon", "A", "B"], ["T1", "big", "2"], ["T2", "1", "n/a"]]
    outcome = build_continuous_matrix(rows)
    assert outcome.matrix_obj.cells == (("?", "2"), ("1", "?"))
    assert [(i.row, i.column) for i in outcome.issues] == [(1, 2), (2, 3)]


def test_ragged_rows_padded_with_missing():
    rows = [["Taxon", "A", "B", "C"], ["T1", "1"], ["T2", "1", "2", "3", "4"]]
    m = build_continuous_matrix(rows).matrix_obj
    assert m.cells == (("1", "?", "?"), ("1", "2", "3"))


def test_duplicate_and_blank_taxa():
    rows = [["Taxon", "A"], ["T1", "1"], ["", "2"], ["T1", "3"]]
    outcome = build_continuous_matrix(rows)
    assert [t.name for t in outcome.matrix_obj.taxa] == ["T1"]
    assert outcome.matrix_obj.cells == (("1",),)
    assert [i.kind for i in outcome.issues] == ["DUPLICATE_TAXON"]
