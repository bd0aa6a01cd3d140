# core/organizer.py
"""
Batch orchestration.

Ties the scanner to the transfer engine for one run:
- Validates the source/destination pair at the boundary
- Creates the destination folder and category folders on demand
- Feeds candidate files one at a time into transfer_file()
- Tracks statistics and honours cooperative cancellation

Two entry points mirror the two run modes:
- organize_all(): every file type, no filter
- organize_by_category(): requires at least one selected category, with an
  optional per-category extension filter
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Union

from foldersort_app.core.categories import Category
from foldersort_app.core.scanner import ScanDepth, ScanFilter, iter_candidates
from foldersort_app.core.transfer import (
    ConflictResolver,
    SessionState,
    TransferAction,
    TransferOutcome,
    transfer_file,
)
from foldersort_app.utils.log_sink import ErrorLogCallback, LogCallback, emit

logger = logging.getLogger(__name__)

# Type aliases for callbacks
FileCallback = Callable[[str, str, str], None]  # filename, category, status


def validate_folders(
    source: Union[str, Path, None], destination: Union[str, Path, None]
) -> List[str]:
    """
    Check a source/destination pair before a run.

    A destination that does not exist yet is accepted; the run creates it.

    Args:
        source: Folder files are taken from
        destination: Folder the category folders are created in

    Returns:
        List of problems; empty when the pair is usable
    """
    if not source or not destination or not str(source).strip() or not str(destination).strip():
        return ["Please select both source and destination folders."]

    source_dir = Path(source).expanduser()
    destination_dir = Path(destination).expanduser()
    problems = []

    if not source_dir.is_dir():
        problems.append("The selected source folder does not exist or is not a directory.")
    if destination_dir.exists() and not destination_dir.is_dir():
        problems.append("The selected destination is not a directory.")
    if problems:
        return problems

    source_real = source_dir.resolve()
    destination_real = destination_dir.resolve()

    if source_real == destination_real:
        problems.append("The source and destination folders cannot be the same.")
    elif destination_real.is_relative_to(source_real):
        problems.append("The destination folder cannot be inside the source folder.")

    return problems


@dataclass
class OrganizationStats:
    """Statistics for one batch."""

    files_scanned: int = 0
    files_moved: int = 0
    files_copied: int = 0
    files_skipped: int = 0
    folders_created: int = 0
    errors: int = 0
    cancelled: bool = False
    per_category: Dict[str, int] = field(
        default_factory=lambda: {category.value: 0 for category in Category}
    )

    @property
    def files_transferred(self) -> int:
        return self.files_moved + self.files_copied

    def as_dict(self) -> dict:
        """Flatten into the dict shape the UI signals carry."""
        data = {
            "files_scanned": self.files_scanned,
            "files_moved": self.files_moved,
            "files_copied": self.files_copied,
            "files_transferred": self.files_transferred,
            "files_skipped": self.files_skipped,
            "folders_created": self.folders_created,
            "errors": self.errors,
            "cancelled": self.cancelled,
        }
        for name, count in self.per_category.items():
            data[name.lower()] = count
        return data


class FileOrganizer:
    """
    Runs move/copy batches from a source folder into category folders.

    One FileOrganizer can run several batches; each batch gets a fresh
    SessionState and OrganizationStats.
    """

    def __init__(
        self,
        action: TransferAction,
        depth: ScanDepth,
        resolver: ConflictResolver,
        log_callback: Optional[LogCallback] = None,
        file_callback: Optional[FileCallback] = None,
        error_log_callback: Optional[ErrorLogCallback] = None,
    ):
        """
        Initialize the FileOrganizer.

        Args:
            action: MOVE or COPY
            depth: TOP_LEVEL or RECURSIVE scan of the source folder
            resolver: Answers name collisions (dialog, fixed policy, ...)
            log_callback: Receives user-facing log lines
            file_callback: Called with (filename, category, status) per file
            error_log_callback: Called with (context, file, error) for failures
        """
        self.action = action
        self.depth = depth
        self.resolver = resolver
        self.log_callback = log_callback
        self.file_callback = file_callback
        self.error_log_callback = error_log_callback

        self.state: Optional[SessionState] = None
        self.stats = OrganizationStats()
        self._stop_pending = False

    def _log(self, message: str, level: str = "info") -> None:
        emit(logger, self.log_callback, message, level)

    def request_stop(self) -> None:
        """
        Cancel the running batch after the current file.

        A stop requested before a batch starts cancels that batch.
        """
        self._stop_pending = True
        if self.state is not None:
            self.state.cancelled = True

    def organize_all(
        self, source: Union[str, Path], destination: Union[str, Path]
    ) -> OrganizationStats:
        """Transfer every file type from source into destination/<Category>."""
        return self._run(Path(source), Path(destination), ScanFilter())

    def organize_by_category(
        self,
        source: Union[str, Path],
        destination: Union[str, Path],
        categories: Optional[Iterable[Union[str, Category]]],
        extensions: Optional[Mapping[Union[str, Category], Iterable[str]]] = None,
    ) -> OrganizationStats:
        """
        Transfer only files in the selected categories.

        Args:
            source: Folder to take files from
            destination: Folder receiving the category folders
            categories: Selected category names; an empty selection is a no-op
            extensions: Optional allowed extensions per category

        Returns:
            OrganizationStats for the batch
        """
        categories = list(categories or ())
        if not categories:
            self.stats = OrganizationStats()
            self._stop_pending = False
            self._log("No categories selected.", "warning")
            return self.stats

        try:
            scan_filter = ScanFilter.from_selection(categories, extensions)
        except ValueError as e:
            self.stats = OrganizationStats()
            self._stop_pending = False
            self._log(str(e), "warning")
            return self.stats

        return self._run(Path(source), Path(destination), scan_filter)

    def _ensure_directory(self, path: Path, created_msg: str, failed_msg: str, level: str) -> None:
        if path.is_dir():
            return
        try:
            path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            self._log(failed_msg, level)
            if self.error_log_callback:
                self.error_log_callback("MKDIR_FAILED", str(path), str(e))
            return
        self.stats.folders_created += 1
        self._log(created_msg)

    def _run(self, source: Path, destination: Path, scan_filter: ScanFilter) -> OrganizationStats:
        self.state = SessionState()
        self.stats = OrganizationStats()
        state = self.state
        # state is published before the pending flag is consumed
        if self._stop_pending:
            state.cancelled = True
        self._stop_pending = False

        if not state.cancelled:
            self._ensure_directory(
                destination,
                f"Created destination folder: {destination.absolute()}",
                f"Could not create destination folder: {destination.absolute()}",
                "error",
            )

        candidates = iter_candidates(
            source, self.depth, scan_filter, self.log_callback, state
        )

        for entry in candidates:
            if state.cancelled:
                break

            self.stats.files_scanned += 1

            category_dir = destination / entry.category.value
            self._ensure_directory(
                category_dir,
                f"Created category folder: {entry.category.value}",
                f"Could not create category folder: {entry.category.value}",
                "warning",
            )

            target = category_dir / entry.name
            outcome = transfer_file(
                entry.path,
                target,
                self.action,
                self.resolver,
                state,
                log_callback=self.log_callback,
                error_log_callback=self.error_log_callback,
            )
            self._record(entry.category, outcome)

            if self.file_callback:
                self.file_callback(entry.name, entry.category.value, outcome.value)

        self.stats.cancelled = state.cancelled
        self._log(
            f"Finished. Moved: {self.stats.files_moved}, "
            f"Copied: {self.stats.files_copied}, "
            f"Skipped: {self.stats.files_skipped}, "
            f"Errors: {self.stats.errors}"
        )
        self._log_category_summary()
        return self.stats

    def _log_category_summary(self) -> None:
        """Log summary of files by category."""
        summary_lines = [
            f"  {name}: {count}" for name, count in self.stats.per_category.items()
        ]
        self._log("Category summary:\n" + "\n".join(summary_lines))

    def _record(self, category: Category, outcome: TransferOutcome) -> None:
        if outcome is TransferOutcome.MOVED:
            self.stats.files_moved += 1
        elif outcome is TransferOutcome.COPIED:
            self.stats.files_copied += 1
        elif outcome is TransferOutcome.SKIPPED:
            self.stats.files_skipped += 1
        elif outcome is TransferOutcome.FAILED:
            self.stats.errors += 1

        if outcome in (TransferOutcome.MOVED, TransferOutcome.COPIED):
            self.stats.per_category[category.value] += 1


__all__ = [
    "FileOrganizer",
    "OrganizationStats",
    "validate_folders",
]
