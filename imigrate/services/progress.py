from __future__ import annotations

import sys
from pathlib import Path
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display with tqdm (TTY only).

Decoding large workbooks is the slow part of a run, so input files get a
progress bar. In non-TTY environments (CI, redirected output) no bar is
created at all, to keep ANSI control sequences out of logs.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    return sys.stdout.isatty()


class ProgressTracker:
    """Input file progress bar, usable as a context manager.

    Counts decoded rows as well, so the bar's postfix shows the sheet just
    read and the running row total.
    """

    def __init__(self, total_files: int, *, description: str = "Reading files") -> None:
        self.total_files = total_files
        self.description = description
        self.files_read = 0
        self.rows_read = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None = None
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

    def start_file(self, file_path: Path) -> None:
        if self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({file_path.name})")

    def finish_file(self, sheet_name: str, rows: int = 0) -> None:
        self.files_read += 1
        self.rows_read += rows
        if self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(sheet=sheet_name, rows=self.rows_read)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
