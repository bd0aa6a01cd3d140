# core/transfer.py
"""
Single-file move/copy with name collision handling.

When the target already exists the decision is taken from, in order:
1. The batch's memoized "apply to all" decision
2. The ConflictResolver collaborator (a blocking round-trip, e.g. a dialog)

A Cancel decision marks the batch session as cancelled; every later transfer
in that batch returns CANCELLED without touching the filesystem.

Usage:
    state = SessionState()
    resolver = FixedDecisionResolver(ConflictDecision.KEEP_BOTH)
    outcome = transfer_file(src, dest_dir / src.name, TransferAction.COPY,
                            resolver, state, log_callback=print)
"""

import errno
import logging
import os
import shutil
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional, Protocol, Tuple

from foldersort_app.utils.log_sink import ErrorLogCallback, LogCallback, emit

logger = logging.getLogger(__name__)


class TransferAction(Enum):
    """What to do with each candidate file."""

    MOVE = "move"
    COPY = "copy"


class ConflictDecision(Enum):
    """Resolution chosen for an existing target file."""

    OVERWRITE = "Overwrite"
    KEEP_BOTH = "Keep Both"
    SKIP = "Skip"
    CANCEL = "Cancel"


class TransferOutcome(Enum):
    """Result of a single transfer_file() call."""

    MOVED = "moved"
    COPIED = "copied"
    SKIPPED = "skipped"
    CANCELLED = "cancelled"
    FAILED = "failed"


@dataclass
class SessionState:
    """
    Per-batch mutable state.

    Created at batch start and dropped when the batch ends. Only the thread
    running the batch writes to it.
    """

    memoized_decision: Optional[ConflictDecision] = None
    cancelled: bool = False


class ConflictResolver(Protocol):
    """Collaborator asked what to do when a target file already exists."""

    def resolve_conflict(self, target_path: Path) -> Tuple[ConflictDecision, bool]:
        """Return (decision, apply_to_all) for the colliding target path."""
        ...


class FixedDecisionResolver:
    """
    ConflictResolver that always answers with the same decision.

    Used for unattended runs and tests. ``calls`` counts how many times the
    resolver was consulted.
    """

    def __init__(self, decision: ConflictDecision, apply_to_all: bool = False):
        self.decision = decision
        self.apply_to_all = apply_to_all
        self.calls = 0

    def resolve_conflict(self, target_path: Path) -> Tuple[ConflictDecision, bool]:
        self.calls += 1
        return self.decision, self.apply_to_all


def next_available_name(target: Path) -> Path:
    """
    Find a free "name (n).ext" variant of target in the same folder.

    The split happens at the last dot; a leading dot (e.g. ".env") is not
    treated as an extension separator.

    Args:
        target: Path that may already exist

    Returns:
        target itself if it does not exist, otherwise the first
        "base (1)ext", "base (2)ext", ... that does not exist
    """
    if not target.exists():
        return target

    name = target.name
    dot = name.rfind(".")
    if dot > 0:
        base, ext = name[:dot], name[dot:]
    else:
        base, ext = name, ""

    counter = 1
    while True:
        candidate = target.parent / f"{base} ({counter}){ext}"
        if not candidate.exists():
            return candidate
        counter += 1


def _move_replacing(source: Path, target: Path) -> None:
    """Move source onto target, replacing existing content."""
    try:
        os.replace(source, target)
    except OSError as e:
        if e.errno != errno.EXDEV:
            raise
        # Different filesystem: copy then drop the original
        shutil.copy2(source, target)
        source.unlink()


def transfer_file(
    source: Path,
    target: Path,
    action: TransferAction,
    resolver: ConflictResolver,
    state: SessionState,
    log_callback: Optional[LogCallback] = None,
    error_log_callback: Optional[ErrorLogCallback] = None,
) -> TransferOutcome:
    """
    Move or copy one file, resolving a name collision if needed.

    Args:
        source: File to transfer
        target: Desired destination path (category folder / original name)
        action: MOVE or COPY
        resolver: Asked for a decision when target exists and nothing is memoized
        state: Batch session state (memoized decision, cancelled flag)
        log_callback: Receives user-facing log lines
        error_log_callback: Called with (context, file, error) on I/O failure

    Returns:
        TransferOutcome describing what happened. OS errors are reported as
        FAILED and never raised.
    """
    if state.cancelled:
        return TransferOutcome.CANCELLED

    if target.exists():
        if state.memoized_decision is not None:
            decision = state.memoized_decision
        else:
            decision, apply_to_all = resolver.resolve_conflict(target)
            if apply_to_all and decision is not ConflictDecision.CANCEL:
                state.memoized_decision = decision
                emit(
                    logger,
                    log_callback,
                    f"Applied decision to all remaining files: {decision.value}",
                )

        if decision is ConflictDecision.CANCEL:
            state.cancelled = True
            emit(
                logger,
                log_callback,
                "Operation cancelled by the user. Stopping further processing",
            )
            return TransferOutcome.CANCELLED

        if decision is ConflictDecision.SKIP:
            emit(logger, log_callback, f"Skipped: {source.name}")
            return TransferOutcome.SKIPPED

        if decision is ConflictDecision.KEEP_BOTH:
            target = next_available_name(target)
        # OVERWRITE: replace content at target below

    try:
        if action is TransferAction.MOVE:
            _move_replacing(source, target)
            emit(logger, log_callback, f"Moved: {source.name} -> {target}")
            return TransferOutcome.MOVED

        shutil.copy2(source, target)
        emit(logger, log_callback, f"Copied: {source.name} -> {target}")
        return TransferOutcome.COPIED

    except (OSError, shutil.Error) as e:
        emit(logger, log_callback, f"{source.name} -> {e}", "error")
        if error_log_callback:
            error_log_callback(f"{action.name}_FAILED", str(source), str(e))
        return TransferOutcome.FAILED


__all__ = [
    "TransferAction",
    "ConflictDecision",
    "TransferOutcome",
    "SessionState",
    "ConflictResolver",
    "FixedDecisionResolver",
    "next_available_name",
    "transfer_file",
]
