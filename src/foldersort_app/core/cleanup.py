# core/cleanup.py
"""
Empty folder removal after a batch.

The depth mirrors the scan used for the batch:
- RECURSIVE: post-order walk, so a parent emptied by removing its last
  child folder is removed in the same pass
- TOP_LEVEL: only direct subfolders of the root that are already empty

The root folder itself is never removed. Failures are logged as warnings
and the pass carries on.
"""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

from foldersort_app.core.scanner import ScanDepth
from foldersort_app.utils.log_sink import ErrorLogCallback, LogCallback, emit

logger = logging.getLogger(__name__)


@dataclass
class CleanupResult:
    """Folders removed and folders that could not be removed."""

    removed: List[Path] = field(default_factory=list)
    failed: List[Path] = field(default_factory=list)


def _subdirectories(directory: Path) -> List[Path]:
    try:
        with os.scandir(directory) as it:
            return [Path(e.path) for e in it if e.is_dir(follow_symlinks=False)]
    except OSError as e:
        logger.warning("Could not list %s: %s", directory, e)
        return []


def _is_empty(directory: Path) -> bool:
    try:
        with os.scandir(directory) as it:
            return next(it, None) is None
    except OSError:
        return False


def _try_remove(
    directory: Path,
    result: CleanupResult,
    log_callback: Optional[LogCallback],
    error_log_callback: Optional[ErrorLogCallback],
) -> None:
    try:
        directory.rmdir()
    except OSError as e:
        result.failed.append(directory)
        emit(logger, log_callback, f"Could not delete: {directory.absolute()}", "warning")
        if error_log_callback:
            error_log_callback("DIR_REMOVE_FAILED", str(directory), str(e))
        return

    result.removed.append(directory)
    emit(logger, log_callback, f"Deleted empty folder: {directory.absolute()}")


def _remove_recursive(
    directory: Path,
    result: CleanupResult,
    log_callback: Optional[LogCallback],
    error_log_callback: Optional[ErrorLogCallback],
) -> None:
    for child in _subdirectories(directory):
        _remove_recursive(child, result, log_callback, error_log_callback)
        if _is_empty(child):
            _try_remove(child, result, log_callback, error_log_callback)


def remove_empty_directories(
    root: Union[str, Path],
    depth: ScanDepth,
    log_callback: Optional[LogCallback] = None,
    error_log_callback: Optional[ErrorLogCallback] = None,
) -> CleanupResult:
    """
    Delete empty folders below root.

    Args:
        root: Source folder of the finished batch
        depth: RECURSIVE cascades through the tree, TOP_LEVEL checks direct
            subfolders only
        log_callback: Receives user-facing log lines
        error_log_callback: Called with (context, folder, error) on failure

    Returns:
        CleanupResult listing removed and failed folders
    """
    result = CleanupResult()
    root = Path(root)
    if not root.is_dir():
        return result

    if depth is ScanDepth.RECURSIVE:
        _remove_recursive(root, result, log_callback, error_log_callback)
    else:
        for child in _subdirectories(root):
            if _is_empty(child):
                _try_remove(child, result, log_callback, error_log_callback)

    logger.info(
        "Cleanup of %s: %d removed, %d failed",
        root,
        len(result.removed),
        len(result.failed),
    )
    return result


__all__ = ["CleanupResult", "remove_empty_directories"]
