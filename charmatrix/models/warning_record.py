from __future__ import annotations

import json
from dataclasses import asdict, dataclass
from datetime import UTC, datetime

from .import_result import CellWarning

"""WarningRecord model for the JSON Lines warning log.

One record per recovered cell problem or per failed file. ``row`` and
``column`` are -1 for file-level records where no position applies.
"""

__all__ = [
    "WarningRecord",
]


@dataclass(frozen=True)
class WarningRecord:
    """Structured warning record.

    Attributes:
        timestamp: ISO8601 UTC timestamp with 'Z' suffix
        file: source file name
        row: 1-based data row position, -1 if unknown
        column: 1-based column position, -1 if unknown
        warning_type: classification in UPPER_SNAKE_CASE
        message: human-readable description
    """
    timestamp: str
    file: str
    row: int
    column: int
    warning_type: str
    message: str

    @staticmethod
    def create(file: str, row: int, column: int, warning_type: str, message: str) -> WarningRecord:
        ts = datetime.now(UTC).isoformat().replace("+00:00", "Z")
        return WarningRecord(
            timestamp=ts,
            file=file,
            row=row,
            column=column,
            warning_type=warning_type,
            message=message,
        )

    @staticmethod
    def from_cell_warning(file: str, warning: CellWarning) -> WarningRecord:
        return WarningRecord.create(file, warning.row, warning.column, warning.kind, warning.message)

    def to_json_line(self) -> str:
        # dataclass -> dict のみ (追加キーなし)
        return json.dumps(asdict(self), ensure_ascii=False)
