import errno
import os
from pathlib import Path

import pytest

from foldersort_app.core.transfer import (
    ConflictDecision,
    FixedDecisionResolver,
    SessionState,
    TransferAction,
    TransferOutcome,
    next_available_name,
    transfer_file,
)


@pytest.fixture
def folders(tmp_path: Path) -> tuple[Path, Path]:
    src = tmp_path / "src"
    dst = tmp_path / "dst"
    src.mkdir()
    dst.mkdir()
    return src, dst


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_next_available_name_returns_target_when_free(tmp_path: Path):
    assert next_available_name(tmp_path / "a.txt") == tmp_path / "a.txt"


def test_next_available_name_counts_up(tmp_path: Path):
    _write(tmp_path / "a.txt", "0")
    assert next_available_name(tmp_path / "a.txt") == tmp_path / "a (1).txt"

    _write(tmp_path / "a (1).txt", "1")
    assert next_available_name(tmp_path / "a.txt") == tmp_path / "a (2).txt"


@pytest.mark.parametrize(
    "name, expected",
    [
        ("README", "README (1)"),
        (".env", ".env (1)"),
        ("archive.tar.gz", "archive.tar (1).gz"),
    ],
)
def test_next_available_name_split_rule(tmp_path: Path, name, expected):
    _write(tmp_path / name, "x")
    assert next_available_name(tmp_path / name).name == expected


def test_move_without_collision(folders):
    src, dst = folders
    source = _write(src / "a.txt", "hello")
    resolver = FixedDecisionResolver(ConflictDecision.SKIP)

    outcome = transfer_file(source, dst / "a.txt", TransferAction.MOVE, resolver, SessionState())

    assert outcome is TransferOutcome.MOVED
    assert not source.exists()
    assert (dst / "a.txt").read_text() == "hello"
    assert resolver.calls == 0


def test_copy_without_collision(folders, log_lines):
    src, dst = folders
    source = _write(src / "a.txt", "hello")

    outcome = transfer_file(
        source,
        dst / "a.txt",
        TransferAction.COPY,
        FixedDecisionResolver(ConflictDecision.SKIP),
        SessionState(),
        log_callback=log_lines.append,
    )

    assert outcome is TransferOutcome.COPIED
    assert source.read_text() == "hello"
    assert (dst / "a.txt").read_text() == "hello"
    assert log_lines[-1].startswith("[INFO] Copied: a.txt")


def test_skip_leaves_both_files(folders):
    src, dst = folders
    source = _write(src / "a.txt", "new")
    existing = _write(dst / "a.txt", "old")

    outcome = transfer_file(
        source, existing, TransferAction.MOVE, FixedDecisionResolver(ConflictDecision.SKIP), SessionState()
    )

    assert outcome is TransferOutcome.SKIPPED
    assert source.read_text() == "new"
    assert existing.read_text() == "old"


def test_keep_both_writes_disambiguated_copy(folders):
    src, dst = folders
    source = _write(src / "photo.JPG", "new")
    existing = _write(dst / "photo.JPG", "old")

    outcome = transfer_file(
        source, existing, TransferAction.MOVE, FixedDecisionResolver(ConflictDecision.KEEP_BOTH), SessionState()
    )

    assert outcome is TransferOutcome.MOVED
    assert existing.read_text() == "old"
    assert (dst / "photo (1).JPG").read_text() == "new"
    assert not source.exists()


def test_overwrite_replaces_content(folders):
    src, dst = folders
    source = _write(src / "a.txt", "new")
    existing = _write(dst / "a.txt", "old")

    outcome = transfer_file(
        source, existing, TransferAction.COPY, FixedDecisionResolver(ConflictDecision.OVERWRITE), SessionState()
    )

    assert outcome is TransferOutcome.COPIED
    assert existing.read_text() == "new"
    assert source.read_text() == "new"


def test_cancel_marks_session_and_touches_nothing(folders, log_lines):
    src, dst = folders
    source = _write(src / "a.txt", "new")
    existing = _write(dst / "a.txt", "old")
    state = SessionState()

    outcome = transfer_file(
        source,
        existing,
        TransferAction.MOVE,
        FixedDecisionResolver(ConflictDecision.CANCEL, apply_to_all=True),
        state,
        log_callback=log_lines.append,
    )

    assert outcome is TransferOutcome.CANCELLED
    assert state.cancelled
    assert state.memoized_decision is None
    assert source.read_text() == "new"
    assert existing.read_text() == "old"
    assert any("cancelled by the user" in line for line in log_lines)


def test_cancelled_session_short_circuits(folders):
    src, dst = folders
    source = _write(src / "b.txt", "b")
    resolver = FixedDecisionResolver(ConflictDecision.OVERWRITE)

    outcome = transfer_file(
        source, dst / "b.txt", TransferAction.MOVE, resolver, SessionState(cancelled=True)
    )

    assert outcome is TransferOutcome.CANCELLED
    assert source.exists()
    assert not (dst / "b.txt").exists()
    assert resolver.calls == 0


def test_apply_to_all_is_memoized(folders, log_lines):
    src, dst = folders
    resolver = FixedDecisionResolver(ConflictDecision.KEEP_BOTH, apply_to_all=True)
    state = SessionState()

    for name in ("a.txt", "b.txt", "c.txt"):
        _write(dst / name, "old")
        source = _write(src / name, "new")
        outcome = transfer_file(
            source, dst / name, TransferAction.MOVE, resolver, state, log_callback=log_lines.append
        )
        assert outcome is TransferOutcome.MOVED
        assert (dst / name.replace(".txt", " (1).txt")).read_text() == "new"

    assert resolver.calls == 1
    assert state.memoized_decision is ConflictDecision.KEEP_BOTH
    assert sum("Applied decision to all" in line for line in log_lines) == 1


def test_without_apply_to_all_every_collision_asks(folders):
    src, dst = folders
    resolver = FixedDecisionResolver(ConflictDecision.SKIP)
    state = SessionState()

    for name in ("a.txt", "b.txt"):
        _write(dst / name, "old")
        transfer_file(_write(src / name, "new"), dst / name, TransferAction.MOVE, resolver, state)

    assert resolver.calls == 2
    assert state.memoized_decision is None


def test_io_failure_is_reported_not_raised(folders, log_lines):
    src, dst = folders
    errors = []

    outcome = transfer_file(
        src / "vanished.txt",
        dst / "vanished.txt",
        TransferAction.MOVE,
        FixedDecisionResolver(ConflictDecision.SKIP),
        SessionState(),
        log_callback=log_lines.append,
        error_log_callback=lambda context, file, error: errors.append((context, file)),
    )

    assert outcome is TransferOutcome.FAILED
    assert log_lines[-1].startswith("[ERROR] vanished.txt")
    assert errors == [("MOVE_FAILED", str(src / "vanished.txt"))]


def test_copy_failure_is_reported(folders):
    src, dst = folders
    outcome = transfer_file(
        src / "missing.txt",
        dst / "missing.txt",
        TransferAction.COPY,
        FixedDecisionResolver(ConflictDecision.SKIP),
        SessionState(),
    )
    assert outcome is TransferOutcome.FAILED


def test_move_across_filesystems_falls_back_to_copy(folders, monkeypatch):
    src, dst = folders
    source = _write(src / "a.txt", "new")
    existing = _write(dst / "a.txt", "old")

    def cross_device(source_path, target_path):
        raise OSError(errno.EXDEV, "Invalid cross-device link")

    monkeypatch.setattr(os, "replace", cross_device)

    outcome = transfer_file(
        source, existing, TransferAction.MOVE, FixedDecisionResolver(ConflictDecision.OVERWRITE), SessionState()
    )

    assert outcome is TransferOutcome.MOVED
    assert existing.read_text() == "new"
    assert not source.exists()
