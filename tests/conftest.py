# Shared pytest fixtures
from __future__ import annotations
import tempfile
from pathlib import Path

import pandas as pd
import pytest


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        (p / "data").mkdir()
        (p / "logs").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_config_yaml() -> str:
    return """source_directory: ./data
output_directory: ./out
mode: auto
unmatched_state_policy: lenient
allow_symbol_truncation: false
encoding: utf-8
"""


@pytest.fixture()
def write_config(temp_workdir: Path, sample_config_yaml: str) -> Path:
    cfg = temp_workdir / "config" / "import.yml"
    cfg.write_text(sample_config_yaml, encoding="utf-8")
    return cfg


@pytest.fixture()
def eyes_legs_rows() -> list[list[str]]:
    return [
        ["Taxon", "Eyes", "Legs"],
        ["", "present;absent", "2;4;6;8"],
        ["Homo", "present", "2"],
        ["Canis", "absent", "4"],
    ]


@pytest.fixture()
def length_rows() -> list[list[str]]:
    return [
        ["Taxon", "Length"],
        ["A", "1.2-1.5"],
        ["B", "NA"],
        ["C", "abc"],
    ]


def write_excel(path: Path, rows: list[list[object]], sheet_name: str = "Matrix") -> Path:
    """Write rows to a single-sheet workbook without header/index."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        pd.DataFrame(rows).to_excel(writer, sheet_name=sheet_name, header=False, index=False)
    return path


def write_csv(path: Path, lines: list[str]) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def make_excel():
    return write_excel


@pytest.fixture()
def make_csv():
    return write_csv
