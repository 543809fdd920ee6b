from __future__ import annotations

from datetime import UTC, datetime
from pathlib import Path

from ..models.warning_record import WarningRecord

"""Warning log buffering.

Records are buffered in memory during a batch run and appended as JSON Lines
to ``logs/warnings-YYYYMMDD-HHMMSS.log`` (UTC) on flush. The file path is
fixed on first access so repeated flushes append to the same file.
"""

__all__ = [
    "WarningRecord",
    "WarningLogBuffer",
]

LOGS_DIR = Path("./logs")
TIMESTAMP_FMT = "%Y%m%d-%H%M%S"


class WarningLogBuffer:
    """In-memory buffer for warning records. Flush writes JSON Lines.

    Not thread-safe; the batch orchestrator runs files serially.
    """
    def __init__(self, logs_dir: Path = LOGS_DIR) -> None:
        self._records: list[WarningRecord] = []
        self._logs_dir = logs_dir
        self._file_path: Path | None = None

    @property
    def file_path(self) -> Path:
        if self._file_path is None:
            self._logs_dir.mkdir(parents=True, exist_ok=True)
            stamp = datetime.now(UTC).strftime(TIMESTAMP_FMT)
            self._file_path = self._logs_dir / f"warnings-{stamp}.log"
        return self._file_path

    def append(self, record: WarningRecord) -> None:
        self._records.append(record)

    def __len__(self) -> int:  # pragma: no cover (trivial)
        return len(self._records)

    def flush(self) -> Path | None:
        """Append buffered records to the log file; None when nothing was buffered."""
        if not self._records:
            return None
        fp = self.file_path
        with fp.open("a", encoding="utf-8") as f:
            for r in self._records:
                f.write(r.to_json_line() + "\n")
        self._records.clear()
        return fp
