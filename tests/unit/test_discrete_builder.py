from __future__ import annotations

import pytest

from charmatrix.errors import NoDataRowsError, SymbolAlphabetExhaustedError, UnknownStateError
from charmatrix.models.config_models import ImportOptions, UnmatchedStatePolicy
from charmatrix.models.matrix import CharacterType, MatrixFormat, PolymorphicCell
from charmatrix.services.discrete_builder import build_discrete_matrix, character_name


def _rows(*data: list[str]) -> list[list[str]]:
    return [
        ["Taxon", "Wings"],
        ["", "Absent;Present"],
        *data,
    ]


def test_eyes_legs_matrix(eyes_legs_rows):
    outcome = build_discrete_matrix(eyes_legs_rows)
    m = outcome.matrix_obj

    assert m.format is MatrixFormat.NEXUS
    assert m.data_type is CharacterType.DISCRETE
    assert m.symbols == "0123"
    assert m.parameters == {"MISSING": "?", "GAP": "-", "SYMBOLS": "0123"}
    assert [s.name for s in m.characters[0].states] == ["present", "absent"]
    assert [s.name for s in m.characters[1].states] == ["2", "4", "6", "8"]
    assert [t.name for t in m.taxa] == ["Homo", "Canis"]
    assert m.cell("Homo", "Eyes") == "0"
    assert m.cell("Canis", "Eyes") == "1"
    assert m.cell("Canis", "Legs") == "1"
    assert outcome.issues == ()


def test_index_and_label_encode_to_same_symbol():
    m = build_discrete_matrix(_rows(["A", "0"], ["B", "absent"], ["C", "1"], ["D", "PRESENT"])).matrix_obj
    assert m.cells == (("0",), ("0",), ("1",), ("1",))


def test_numeric_index_is_tried_before_label(eyes_legs_rows):
    rows = [*eyes_legs_rows, ["Felis", "present", "3"], ["Mus", "present", "8"]]
    m = build_discrete_matrix(rows).matrix_obj
    # "3" is an index, "8" only matches a label
    assert m.cell("Felis", "Legs") == "3"
    assert m.cell("Mus", "Legs") == "3"


def test_polymorphic_cell():
    m = build_discrete_matrix(_rows(["X", "Absent & Present"], ["Y", "1&0"])).matrix_obj
    assert m.cell("X", "Wings") == PolymorphicCell(scores="01", uncertain=True)
    assert m.cell("Y", "Wings") == PolymorphicCell(scores="10")


def test_polymorphic_without_tokens_is_missing():
    m = build_discrete_matrix(_rows(["X", "&"])).matrix_obj
    assert m.cell("X", "Wings") == "?"


@pytest.mark.parametrize(
    "raw, expected",
    [("", "?"), ("?", "?"), ("-", "-"), ("NA", "-"), ("na", "-")],
)
def test_missing_and_inapplicable(raw: str, expected: str):
    m = build_discrete_matrix(_rows(["X", raw])).matrix_obj
    assert m.cell("X", "Wings") == expected


def test_short_data_row_reads_as_missing():
    rows = [["Taxon", "A", "B"], ["", "x;y", "p;q"], ["T1", "y"]]
    m = build_discrete_matrix(rows).matrix_obj
    assert m.cells == (("1", "?"),)


def test_unknown_state_lenient_uses_first_symbol():
    outcome = build_discrete_matrix(_rows(["X", "Vestigial"]))
    assert outcome.matrix_obj.cell("X", "Wings") == "0"
    assert len(outcome.issues) == 1
    issue = outcome.issues[0]
    assert issue.kind == "UNKNOWN_STATE"
    assert (issue.row, issue.column, issue.value) == (2, 2, "Vestigial")
    assert "Vestigial" in issue.message


def test_out_of_range_index_falls_back():
    outcome = build_discrete_matrix(_rows(["X", "7"]))
    assert outcome.matrix_obj.cell("X", "Wings") == "0"
    assert outcome.issues[0].kind == "UNKNOWN_STATE"


def test_unknown_state_strict_raises():
    options = ImportOptions(unmatched_state_policy=UnmatchedStatePolicy.STRICT)
    with pytest.raises(UnknownStateError) as e:
        build_discrete_matrix(_rows(["X", "Absent"], ["Y", "Vestigial"]), options)
    assert (e.value.row, e.value.column, e.value.character) == (3, 2, "Wings")


def test_character_without_states_is_missing():
    rows = [["Taxon", "A", "B"], ["", "x;y", ""], ["T1", "x", "anything"], ["T2", "y", "-"], ["T3", "x", "NA"]]
    outcome = build_discrete_matrix(rows)
    m = outcome.matrix_obj
    assert m.characters[1].states == ()
    assert m.cells == (("0", "?"), ("1", "?"), ("0", "?"))
    assert outcome.issues == ()


def test_blank_header_gets_positional_name():
    rows = [["Taxon", "", "Tail"], ["", "a;b", "c;d"], ["T1", "a", "d"]]
    m = build_discrete_matrix(rows).matrix_obj
    assert [c.name for c in m.characters] == ["Character 1", "Tail"]
    assert character_name(["Taxon"], 5) == "Character 5"


def test_rows_without_taxon_name_are_skipped():
    m = build_discrete_matrix(_rows(["", "Absent"], ["X", "Present"], [])).matrix_obj
    assert [t.name for t in m.taxa] == ["X"]
    assert len(m.cells) == 1


def test_duplicate_taxon_kept_once_with_warning():
    outcome = build_discrete_matrix(_rows(["X", "Absent"], ["X", "Present"]))
    assert [t.name for t in outcome.matrix_obj.taxa] == ["X"]
    assert outcome.matrix_obj.cell("X", "Wings") == "0"
    assert [i.kind for i in outcome.issues] == ["DUPLICATE_TAXON"]


def test_taxa_and_cells_stay_aligned():
    rows = _rows(["A", "0"], ["", "1"], ["B", "1"], ["A", "0"], ["C", "?"])
    m = build_discrete_matrix(rows).matrix_obj
    assert len(m.taxa) == len(m.cells) == 3
    assert all(len(row) == len(m.characters) for row in m.cells)


def test_requires_data_row():
    with pytest.raises(NoDataRowsError):
        build_discrete_matrix([["Taxon", "A"], ["", "x;y"]])


def _wide_rows(state_count: int) -> list[list[str]]:
    labels = [f"s{i}" for i in range(state_count)]
    return [["Taxon", "Big", "Small"], ["", ";".join(labels), "x;y"], ["T1", f"s{state_count - 1}", "y"]]


def test_alphabet_exhausted():
    with pytest.raises(SymbolAlphabetExhaustedError):
        build_discrete_matrix(_wide_rows(63))


def test_alphabet_truncation_opt_in():
    outcome = build_discrete_matrix(_wide_rows(63), ImportOptions(allow_symbol_truncation=True))
    m = outcome.matrix_obj
    assert len(m.symbols) == 62
    assert len(m.characters[0].states) == 62
    kinds = [i.kind for i in outcome.issues]
    assert kinds.count("STATES_TRUNCATED") == 1
    # s62 は切り捨て済み -> 先頭シンボル
    assert "UNKNOWN_STATE" in kinds
    assert m.cell("T1", "Big") == "0"
    assert m.cell("T1", "Small") == "1"


def test_full_alphabet_fits():
    m = build_discrete_matrix(_wide_rows(62)).matrix_obj
    assert m.cell("T1", "Big") == "z"
