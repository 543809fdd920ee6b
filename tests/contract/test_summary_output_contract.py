from __future__ import annotations

import re
from datetime import UTC, datetime

from charmatrix.models.processing_result import ProcessingResult
from charmatrix.services.summary import render_summary_line

"""SUMMARY 行フォーマット契約テスト"""

SUMMARY_PATTERN = re.compile(
    r"^SUMMARY\s+files=([0-9]+)/(\1)\s+success=([0-9]+)\s+failed=([0-9]+)\s+"
    r"taxa=([0-9]+)\s+characters=([0-9]+)\s+warnings=([0-9]+)\s+"
    r"elapsed_sec=([0-9]+\.?[0-9]*)$"
)


def test_summary_pattern_example_line():
    line = "SUMMARY files=2/2 success=1 failed=1 taxa=40 characters=12 warnings=3 elapsed_sec=0.84"
    assert SUMMARY_PATTERN.match(line)


def test_rendered_line_matches_contract():
    now = datetime.now(UTC)
    result = ProcessingResult(
        success_files=3, failed_files=0, total_taxa=120, total_characters=33, total_warnings=0,
        start_time=now, end_time=now, elapsed_seconds=0.004321,
    )
    m = SUMMARY_PATTERN.match(render_summary_line(3, result))
    assert m, "SUMMARY line should match contract regex"
    assert m.group(8) == "0.004321"


def test_success_plus_failed_equals_files():
    now = datetime.now(UTC)
    result = ProcessingResult(
        success_files=4, failed_files=2, total_taxa=1, total_characters=1, total_warnings=9,
        start_time=now, end_time=now, elapsed_seconds=3.5,
    )
    m = SUMMARY_PATTERN.match(render_summary_line(6, result))
    assert int(m.group(3)) + int(m.group(4)) == int(m.group(1))
