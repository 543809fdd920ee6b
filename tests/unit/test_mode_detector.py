from __future__ import annotations

import pytest

from charmatrix.errors import AmbiguousModeError, UnresolvedFormatError
from charmatrix.models.config_models import MatrixMode
from charmatrix.services.mode_detector import DetectedMode, detect_mode, resolve_mode


def test_detect_discrete_from_state_row(eyes_legs_rows):
    assert detect_mode(eyes_legs_rows) is DetectedMode.DISCRETE


def test_detect_continuous_from_numeric_row(length_rows):
    assert detect_mode(length_rows) is DetectedMode.CONTINUOUS


def test_state_definition_wins_over_numeric_columns():
    rows = [
        ["Taxon", "A", "B", "C"],
        ["", "1.5", "red;blue", "2"],
        ["t1", "1", "red", "3"],
    ]
    assert detect_mode(rows) is DetectedMode.DISCRETE


def test_spaced_tokens_count_as_state_definition():
    rows = [["Taxon", "A"], ["", "(0) Absent Present"], ["t1", "Absent"]]
    assert detect_mode(rows) is DetectedMode.DISCRETE


def test_missing_markers_count_as_continuous():
    rows = [["Taxon", "A", "B", "C", "D", "E"], ["t1", "", "?", "-", "na", "3,4"], ["t2", "1", "2", "3", "4", "5"]]
    assert detect_mode(rows) is DetectedMode.CONTINUOUS


def test_short_state_row_reads_missing_cells_as_empty():
    rows = [["Taxon", "A", "B"], ["t1", "1.5"], ["t2", "2", "3"]]
    assert detect_mode(rows) is DetectedMode.CONTINUOUS


def test_ambiguous_when_single_words():
    rows = [["Taxon", "A", "B"], ["t1", "present", "2"], ["t2", "absent", "4"]]
    assert detect_mode(rows) is DetectedMode.AMBIGUOUS


def test_ambiguous_without_state_row():
    assert detect_mode([["Taxon", "A"]]) is DetectedMode.AMBIGUOUS


def test_resolve_mode_override_bypasses_detection():
    rows = [["Taxon", "A"], ["t1", "present"], ["t2", "absent"]]
    assert resolve_mode(rows, "discrete") is MatrixMode.DISCRETE
    assert resolve_mode(rows, "Continuous") is MatrixMode.CONTINUOUS
    assert resolve_mode(rows, MatrixMode.CONTINUOUS) is MatrixMode.CONTINUOUS


def test_resolve_mode_detected(eyes_legs_rows, length_rows):
    assert resolve_mode(eyes_legs_rows) is MatrixMode.DISCRETE
    assert resolve_mode(length_rows) is MatrixMode.CONTINUOUS


def test_resolve_mode_ambiguous_raises():
    rows = [["Taxon", "A"], ["t1", "present"], ["t2", "absent"]]
    with pytest.raises(AmbiguousModeError):
        resolve_mode(rows)


def test_resolve_mode_unknown_override():
    with pytest.raises(UnresolvedFormatError):
        resolve_mode([["Taxon", "A"], ["t1", "1"]], "molecular")
