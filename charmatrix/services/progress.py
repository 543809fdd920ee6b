from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

A single bar over the files of a batch run. In non-TTY environments (CI,
redirected output) the bar is disabled so no ANSI control sequences end up in
logs.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check whether progress bars should be displayed.

    Returns:
        True if stdout is a TTY, False otherwise (CI, pipes, redirected output)
    """
    return sys.stdout.isatty()


class ProgressTracker:
    """File-level progress bar for batch imports.

    Does nothing when stdout is not a TTY. Usable as a context manager so the
    bar is closed even when a run aborts.
    """

    def __init__(self, total_files: int, *, description: str = "Importing matrices") -> None:
        """Initialize the progress tracker.

        Args:
            total_files: Number of source files in the batch
            description: Label shown in front of the bar
        """
        self.total_files = total_files
        self.description = description
        self.current_file = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_files,
                desc=description,
                unit="file",
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_file(self, file_path: Path) -> None:
        """Mark the start of a file import.

        Args:
            file_path: Source file being imported; its name is shown in the bar
        """
        self.current_file += 1
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self) -> None:
        """Advance the bar by one file, whether the import succeeded or failed."""
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_description(self.description)

    def set_postfix(self, **kwargs: Any) -> None:
        """Set postfix information on the progress bar.

        Args:
            **kwargs: Running stats to display (e.g. success=3, failed=1)
        """
        if self.pbar is not None:
            self.pbar.set_postfix(**kwargs)

    def close(self) -> None:
        """Close the progress bar."""
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Context manager exit."""
        self.close()
