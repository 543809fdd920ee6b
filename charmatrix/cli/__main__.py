from __future__ import annotations

import argparse
import sys
from pathlib import Path

from charmatrix.config.loader import DEFAULT_CONFIG_PATH, ConfigError, ImportConfig, load_config
from charmatrix.errors import MatrixImportError
from charmatrix.logging.init import log_summary, setup_logging
from charmatrix.models.config_models import MatrixMode
from charmatrix.readers.reader import read_rows
from charmatrix.services.mode_detector import detect_mode
from charmatrix.services.orchestrator import ProcessingError, process_all, scan_matrix_files
from charmatrix.services.summary import render_summary_line

"""CLI entrypoint: batch-import a directory of character matrices.

Flow:
- Load config (config/import.yml unless --config is given)
- Scan source_directory for .csv/.tsv/.txt/.xlsx files (non-recursive)
- Import each file, write JSON into output_directory, log warnings
- Print the SUMMARY line and exit with the contract exit code
"""

EXIT_SUCCESS_ALL = 0
EXIT_PARTIAL_FAILURE = 2
EXIT_FATAL = 1

INSPECT_SAMPLE_ROWS = 3


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Tabular character data -> character matrix importer")
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="YAML config path")
    p.add_argument(
        "--mode",
        choices=[m.value for m in MatrixMode],
        default=None,
        help="Force matrix mode for every file (default: config / auto-detect)",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument(
        "--inspect-data", action="store_true", help="Print header, detected mode & first rows then exit"
    )
    return p.parse_args(argv)


def _inspect_data(cfg: ImportConfig) -> int:
    directory = Path(cfg.source_directory)
    try:
        files = scan_matrix_files(directory)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not files:
        print("inspect: no matrix files")
        return EXIT_SUCCESS_ALL
    for f in files:
        print(f"FILE: {f.name}")
        try:
            rows = read_rows(f, delimiter=cfg.delimiter, encoding=cfg.encoding)
        except MatrixImportError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  header={rows[0]}")
        print(f"  detected_mode={detect_mode(rows).value}")
        for row in rows[1 : 1 + INSPECT_SAMPLE_ROWS]:
            print(f"  row={row}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # None のときのみ sys.argv を読む ([] はテストからの明示的な空引数)
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)

    if args.debug:
        for h in logger.handlers:
            h.setLevel("DEBUG")
        logger.setLevel("DEBUG")
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(cfg)

    logger.info(f"Processing files from: {directory}")
    try:
        result = process_all(cfg, mode=MatrixMode(args.mode) if args.mode else None)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    total_files = result.success_files + result.failed_files
    summary_line = render_summary_line(total_files, result)
    # log_summary が "SUMMARY " を付けるので除去して渡す
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
