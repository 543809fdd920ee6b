from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path

"""Batch processing result models.

FileStat records what happened to one source file; ProcessingResult
aggregates a whole directory run and feeds the SUMMARY line.
"""


class FileStatus(Enum):
    """Outcome of one file: success (matrix written) or failed (fatal import error)."""
    SUCCESS = "success"
    FAILED = "failed"


@dataclass(frozen=True)
class FileStat:
    """Per-file statistics."""
    file_name: str
    status: FileStatus
    mode: str | None  # discrete / continuous (None when failed before detection)
    taxa: int
    characters: int
    warnings: int
    elapsed_seconds: float
    output_path: Path | None = None
    error: str | None = None  # 失敗理由 (例外メッセージ)


@dataclass(frozen=True)
class ProcessingResult:
    """Aggregated results of a batch run."""
    success_files: int
    failed_files: int
    total_taxa: int
    total_characters: int
    total_warnings: int
    start_time: datetime
    end_time: datetime
    elapsed_seconds: float
    file_stats: list[FileStat] | None = None
