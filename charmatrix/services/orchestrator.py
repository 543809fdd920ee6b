from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

from ..config.loader import ImportConfig
from ..errors import MatrixImportError
from ..logging.warning_log import WarningLogBuffer, WarningRecord
from ..models.config_models import MatrixMode
from ..models.matrix import CharacterType
from ..models.processing_result import FileStat, FileStatus, ProcessingResult
from ..readers.reader import DELIMITED_SUFFIXES, SPREADSHEET_SUFFIXES
from .importer import import_matrix
from .progress import ProgressTracker

"""Batch orchestration: import every matrix file of a directory.

Each file is imported independently; a fatal import error fails that file
only (recorded in the warning log) and the run continues with the next one.
Successful imports are written as ``<file name>.json`` (``m.csv`` -> ``m.csv.json``) into the output directory.
"""

__all__ = [
    "MATRIX_SUFFIXES",
    "ProcessingError",
    "scan_matrix_files",
    "process_all",
]

logger = logging.getLogger(__name__)

MATRIX_SUFFIXES = SPREADSHEET_SUFFIXES | DELIMITED_SUFFIXES


class ProcessingError(Exception):
    """Fatal batch error (directory problems); individual file failures are not raised."""


def scan_matrix_files(directory: Path) -> list[Path]:
    """List matrix source files in ``directory`` (non-recursive, sorted by name).

    Raises:
        ProcessingError: if the directory doesn't exist or can't be read
    """
    if not directory.exists():
        raise ProcessingError(f"Directory not found: {directory}")
    if not directory.is_dir():
        raise ProcessingError(f"Path is not a directory: {directory}")
    try:
        return sorted(
            (p for p in directory.iterdir() if p.is_file() and p.suffix.lower() in MATRIX_SUFFIXES),
            key=lambda p: p.name,
        )
    except OSError as e:
        raise ProcessingError(f"Error reading directory {directory}: {e}") from e


def _write_output(output_dir: Path, source: Path, payload: dict) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    out = output_dir / f"{source.name}.json"
    out.write_text(json.dumps(payload, ensure_ascii=False, indent=2), encoding="utf-8")
    return out


def _process_single_file(
    file_path: Path,
    config: ImportConfig,
    mode: MatrixMode | None,
    warning_log: WarningLogBuffer,
) -> FileStat:
    start = datetime.now(UTC)
    try:
        result = import_matrix(
            file_path,
            mode,
            options=config.to_options(),
            delimiter=config.delimiter,
            encoding=config.encoding,
        )
    except MatrixImportError as e:
        logger.error(f"{file_path.name}: {e}")
        warning_log.append(
            WarningRecord.create(
                file=file_path.name,
                row=-1,
                column=-1,
                warning_type=type(e).__name__,
                message=str(e),
            )
        )
        return FileStat(
            file_name=file_path.name,
            status=FileStatus.FAILED,
            mode=None,
            taxa=0,
            characters=0,
            warnings=0,
            elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
            error=str(e),
        )

    for issue in result.issues:
        logger.warning(f"{file_path.name}: {issue.message}")
        warning_log.append(WarningRecord.from_cell_warning(file_path.name, issue))

    matrix_obj = result.matrix_obj
    out = _write_output(Path(config.output_directory), file_path, result.to_dict())
    mode_name = "discrete" if matrix_obj.data_type is CharacterType.DISCRETE else "continuous"
    logger.info(
        f"{file_path.name}: mode={mode_name} taxa={len(matrix_obj.taxa)} "
        f"characters={len(matrix_obj.characters)} -> {out}"
    )
    return FileStat(
        file_name=file_path.name,
        status=FileStatus.SUCCESS,
        mode=mode_name,
        taxa=len(matrix_obj.taxa),
        characters=len(matrix_obj.characters),
        warnings=len(result.issues),
        elapsed_seconds=(datetime.now(UTC) - start).total_seconds(),
        output_path=out,
    )


def process_all(config: ImportConfig, mode: MatrixMode | None = None) -> ProcessingResult:
    """Import all matrix files in the configured source directory.

    Args:
        config: loaded ImportConfig
        mode: explicit mode for every file; falls back to ``config.mode`` (None = detect)

    Raises:
        ProcessingError: the source directory is missing or unreadable
    """
    start_time = datetime.now(UTC)
    warning_log = WarningLogBuffer()
    effective_mode = mode or config.mode

    file_paths = scan_matrix_files(Path(config.source_directory))

    file_stats: list[FileStat] = []
    with ProgressTracker(len(file_paths)) as progress:
        for file_path in file_paths:
            progress.start_file(file_path)
            stat = _process_single_file(file_path, config, effective_mode, warning_log)
            file_stats.append(stat)
            progress.set_postfix(
                success=sum(1 for s in file_stats if s.status is FileStatus.SUCCESS),
                failed=sum(1 for s in file_stats if s.status is FileStatus.FAILED),
            )
            progress.finish_file()

    log_path = warning_log.flush()
    if log_path is not None:
        logger.info(f"warnings written to {log_path}")

    end_time = datetime.now(UTC)
    succeeded = [s for s in file_stats if s.status is FileStatus.SUCCESS]
    return ProcessingResult(
        success_files=len(succeeded),
        failed_files=len(file_stats) - len(succeeded),
        total_taxa=sum(s.taxa for s in succeeded),
        total_characters=sum(s.characters for s in succeeded),
        total_warnings=sum(s.warnings for s in succeeded),
        start_time=start_time,
        end_time=end_time,
        elapsed_seconds=(end_time - start_time).total_seconds(),
        file_stats=file_stats,
    )
