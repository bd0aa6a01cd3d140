# utils/error_log.py
"""
Persistent error log for a batch.

Per-file transfer failures, folder creation failures and cleanup failures
are appended to a timestamped file so they can be reviewed after the log
viewer has been cleared.

Format:
    [YYYY-MM-DD HH:MM:SS] CONTEXT: /path/to/file - Error message

File names that are not valid UTF-8 are written with backslash escapes.

Usage:
    with ErrorLogger(log_dir=tmp) as error_log:
        organizer = FileOrganizer(..., error_log_callback=error_log.log_error)
        organizer.organize_all(source, destination)
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

logger = logging.getLogger(__name__)

# Default error log directory
DEFAULT_ERROR_LOG_DIR = Path.home() / "Desktop"


def _now() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


class ErrorLogger:
    """
    Appends batch errors to foldersort_errors_<timestamp>.log.

    The file is only kept when at least one error was recorded, unless
    keep_empty is set.
    """

    def __init__(
        self,
        log_path: Path | str | None = None,
        log_dir: Path | str | None = None,
        keep_empty: bool = False,
    ):
        """
        Initialize the ErrorLogger.

        Args:
            log_path: Explicit path to log file (overrides log_dir)
            log_dir: Directory for log files (default: ~/Desktop)
            keep_empty: Keep the file on close even if nothing was logged
        """
        if log_path is not None:
            self.log_path = Path(log_path)
        else:
            directory = Path(log_dir) if log_dir is not None else DEFAULT_ERROR_LOG_DIR
            stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            self.log_path = directory / f"foldersort_errors_{stamp}.log"

        self._ready = False
        self._error_count = 0
        self._keep_empty = keep_empty

    @property
    def error_count(self) -> int:
        return self._error_count

    def initialize(self) -> None:
        """Create the log file with its header line."""
        if self._ready:
            return

        try:
            self.log_path.parent.mkdir(parents=True, exist_ok=True)
            self.log_path.write_text(
                f"=== FolderSort Error Log - {_now()} ===\n\n",
                encoding="utf-8",
                errors="backslashreplace",
            )
        except OSError as e:
            logger.warning("Failed to initialize error log: %s", e)
            return

        self._ready = True
        logger.info("Error log initialized: %s", self.log_path)

    def log_error(self, context: str, file: str, error: str) -> None:
        """
        Record one error.

        Args:
            context: Error kind (e.g., "MOVE_FAILED", "DIR_REMOVE_FAILED")
            file: Path the error relates to
            error: Underlying cause
        """
        line = f"[{_now()}] {context}: {file} - {error}\n"
        self._error_count += 1

        if self._ready:
            try:
                with open(self.log_path, "a", encoding="utf-8", errors="backslashreplace") as f:
                    f.write(line)
                return
            except OSError as e:
                logger.warning("Failed to write to error log: %s", e)

        # No usable file: keep the record visible on stderr
        print(line.rstrip(), file=sys.stderr)

    def close(self) -> None:
        """Write the footer, or drop the file if nothing was logged."""
        if not self._ready:
            return

        if self._error_count:
            try:
                with open(self.log_path, "a", encoding="utf-8", errors="backslashreplace") as f:
                    f.write(f"\n=== Total errors: {self._error_count} ===\n")
                logger.info(
                    "Error log finalized: %s (%d errors)",
                    self.log_path,
                    self._error_count,
                )
            except OSError as e:
                logger.warning("Failed to finalize error log: %s", e)
        elif not self._keep_empty:
            try:
                self.log_path.unlink()
            except OSError as e:
                logger.debug("Could not remove empty error log %s: %s", self.log_path, e)

        self._ready = False

    def __enter__(self) -> "ErrorLogger":
        self.initialize()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


__all__ = ["ErrorLogger", "DEFAULT_ERROR_LOG_DIR"]
