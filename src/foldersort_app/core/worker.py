# core/worker.py
"""
Background worker threads for batches and cleanup.

OrganizeWorker runs one move/copy batch off the GUI thread and emits
PySide6 signals for log lines, per-file results and statistics. Name
collisions are answered through a blocking round-trip: the worker emits
conflict_detected and sleeps until the GUI calls submit_decision().

Usage:
    worker = OrganizeWorker(request)
    worker.log_message.connect(on_log)
    worker.conflict_detected.connect(on_conflict)   # -> worker.submit_decision(...)
    worker.run_finished.connect(on_finished)
    worker.start()
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, FrozenSet, Optional, Set, Tuple

from PySide6.QtCore import QMutex, QThread, QWaitCondition, Signal

from foldersort_app.core.cleanup import remove_empty_directories
from foldersort_app.core.organizer import FileOrganizer, OrganizationStats, validate_folders
from foldersort_app.core.scanner import ScanDepth
from foldersort_app.core.transfer import ConflictDecision, ConflictResolver, TransferAction
from foldersort_app.utils.error_log import ErrorLogger
from foldersort_app.utils.log_sink import split_level

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BatchRequest:
    """Parameters of one batch as chosen in the UI."""

    source: Path
    destination: Path
    action: TransferAction = TransferAction.MOVE
    depth: ScanDepth = ScanDepth.TOP_LEVEL
    by_category: bool = False
    categories: FrozenSet[str] = frozenset()
    extensions: Dict[str, Set[str]] = field(default_factory=dict)


class OrganizeWorker(QThread):
    """
    Worker thread running a single batch.

    Acts as the batch's ConflictResolver unless another resolver is given.
    """

    log_message = Signal(str, str)  # message, level ("info"/"warning"/"error"/"success")
    file_processed = Signal(str, str, str)  # filename, category, status
    stats_updated = Signal(dict)
    conflict_detected = Signal(str)  # colliding target path
    run_finished = Signal(dict)  # final stats dict

    def __init__(
        self,
        request: BatchRequest,
        resolver: Optional[ConflictResolver] = None,
        error_log_dir: Path | str | None = None,
    ):
        """
        Initialize the OrganizeWorker.

        Args:
            request: Batch parameters
            resolver: Collision resolver; defaults to the GUI round-trip
            error_log_dir: Where the error log file goes (default: ~/Desktop)
        """
        super().__init__()

        self.request = request
        self.resolver = resolver if resolver is not None else self
        self.error_log_dir = error_log_dir

        self._organizer: Optional[FileOrganizer] = None
        self._stop_requested = False

        self._mutex = QMutex()
        self._decision_ready = QWaitCondition()
        self._pending: Optional[Tuple[ConflictDecision, bool]] = None

        self.stats: dict = OrganizationStats().as_dict()
        self.stats["aborted"] = False

    # --- ConflictResolver -------------------------------------------------

    def resolve_conflict(self, target_path: Path) -> Tuple[ConflictDecision, bool]:
        """Ask the GUI thread and block until it answers."""
        self._mutex.lock()
        self._pending = None
        self._mutex.unlock()

        if self._stop_requested:
            return ConflictDecision.CANCEL, False

        self.conflict_detected.emit(str(target_path))

        self._mutex.lock()
        try:
            while self._pending is None:
                self._decision_ready.wait(self._mutex)
            return self._pending
        finally:
            self._mutex.unlock()

    def submit_decision(self, decision: ConflictDecision, apply_to_all: bool = False) -> None:
        """Answer a pending conflict_detected prompt (called from the GUI thread)."""
        self._mutex.lock()
        try:
            self._pending = (decision, apply_to_all)
            self._decision_ready.wakeAll()
        finally:
            self._mutex.unlock()

    # --- Control ----------------------------------------------------------

    def request_stop(self) -> None:
        """Request graceful stop of the batch."""
        self._stop_requested = True
        if self._organizer is not None:
            self._organizer.request_stop()
        # Release a prompt the GUI may never answer now
        self.submit_decision(ConflictDecision.CANCEL)
        self.log_message.emit("Stop requested by user...", "warning")

    # --- Thread body ------------------------------------------------------

    def run(self) -> None:
        """Validate the request, then run the batch."""
        request = self.request
        error_logger = ErrorLogger(log_dir=self.error_log_dir)
        error_logger.initialize()

        try:
            self._log("===== PROCESS START =====")
            self._log(f"Source Folder: {request.source}")
            self._log(f"Destination Folder: {request.destination}")

            problems = validate_folders(request.source, request.destination)
            if problems:
                for problem in problems:
                    self._log(problem, "warning")
                self.stats["aborted"] = True
                return

            organizer = FileOrganizer(
                action=request.action,
                depth=request.depth,
                resolver=self.resolver,
                log_callback=self._on_organizer_log,
                file_callback=self._on_file_processed,
                error_log_callback=error_logger.log_error,
            )
            self._organizer = organizer

            if self._stop_requested:
                self.stats["cancelled"] = True
                return

            if request.by_category:
                if not request.categories:
                    self._log("No categories selected. Please select your preferred categories.", "warning")
                    self.stats["aborted"] = True
                    return
                result = organizer.organize_by_category(
                    request.source,
                    request.destination,
                    request.categories,
                    request.extensions or None,
                )
            else:
                result = organizer.organize_all(request.source, request.destination)

            self.stats.update(result.as_dict())

            if result.cancelled:
                self.log_message.emit("Operation stopped before all files were processed", "warning")
            elif error_logger.error_count:
                self.log_message.emit(
                    f"Batch complete with {result.errors} failed file(s), "
                    f"{error_logger.error_count} error log entries. See {error_logger.log_path}",
                    "warning",
                )
            else:
                self.log_message.emit(
                    f"Batch complete: {result.files_transferred} file(s) transferred",
                    "success",
                )

        except Exception as e:
            logger.exception("Fatal error in worker")
            self.log_message.emit(f"Fatal error: {e}", "error")
            self.stats["errors"] += 1
        finally:
            error_logger.close()
            self.run_finished.emit(self.stats.copy())

    def _log(self, message: str, level: str = "info") -> None:
        logger.log(logging.WARNING if level == "warning" else logging.INFO, message)
        self.log_message.emit(message, level)

    def _on_organizer_log(self, line: str) -> None:
        level, message = split_level(line)
        self.log_message.emit(message, level)

    def _on_file_processed(self, filename: str, category: str, status: str) -> None:
        self.file_processed.emit(filename, category, status)
        if self._organizer is not None:
            self.stats.update(self._organizer.stats.as_dict())
            self.stats_updated.emit(self.stats.copy())


class CleanupWorker(QThread):
    """Removes empty folders from the source after a batch."""

    log_message = Signal(str, str)
    run_finished = Signal(dict)  # {"removed": int, "failed": int}

    def __init__(self, source: Path | str, depth: ScanDepth):
        super().__init__()
        self.source = Path(source)
        self.depth = depth

    def run(self) -> None:
        removed, failed = 0, 0
        try:
            result = remove_empty_directories(
                self.source, self.depth, log_callback=self._on_log
            )
            removed, failed = len(result.removed), len(result.failed)
        except Exception as e:
            logger.exception("Cleanup failed")
            self.log_message.emit(f"Cleanup error: {e}", "error")
        finally:
            self.log_message.emit("===== PROCESS COMPLETE =====", "success")
            self.run_finished.emit({"removed": removed, "failed": failed})

    def _on_log(self, line: str) -> None:
        level, message = split_level(line)
        self.log_message.emit(message, level)


__all__ = ["BatchRequest", "OrganizeWorker", "CleanupWorker"]
