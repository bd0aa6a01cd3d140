import os
from pathlib import Path

from foldersort_app.utils.error_log import ErrorLogger


def test_errors_are_written_with_footer(tmp_path: Path):
    error_log = ErrorLogger(log_dir=tmp_path)
    error_log.initialize()

    error_log.log_error("MOVE_FAILED", "/src/a.txt", "Permission denied")
    error_log.log_error("DIR_REMOVE_FAILED", "/src/old", "Directory not empty")
    error_log.close()

    assert error_log.error_count == 2
    assert error_log.log_path.name.startswith("foldersort_errors_")

    content = error_log.log_path.read_text(encoding="utf-8")
    assert content.startswith("=== FolderSort Error Log - ")
    assert "MOVE_FAILED: /src/a.txt - Permission denied" in content
    assert "DIR_REMOVE_FAILED: /src/old - Directory not empty" in content
    assert content.rstrip().endswith("=== Total errors: 2 ===")


def test_empty_log_is_removed_on_close(tmp_path: Path):
    with ErrorLogger(log_dir=tmp_path) as error_log:
        assert error_log.log_path.exists()

    assert not error_log.log_path.exists()


def test_keep_empty(tmp_path: Path):
    path = tmp_path / "errors.log"
    with ErrorLogger(log_path=path, keep_empty=True):
        pass

    assert path.exists()
    assert "Total errors" not in path.read_text(encoding="utf-8")


def test_falls_back_to_stderr_when_not_initialized(tmp_path: Path, capsys):
    error_log = ErrorLogger(log_path=tmp_path / "never.log")

    error_log.log_error("COPY_FAILED", "/src/b.txt", "Disk full")

    assert "COPY_FAILED: /src/b.txt - Disk full" in capsys.readouterr().err
    assert not (tmp_path / "never.log").exists()
    assert error_log.error_count == 1


def test_undecodable_file_names_are_escaped(tmp_path: Path):
    bad_name = os.fsdecode(b"/src/bad\xff.txt")

    with ErrorLogger(log_dir=tmp_path) as error_log:
        error_log.log_error("MOVE_FAILED", bad_name, "Is a directory")

    content = error_log.log_path.read_text(encoding="utf-8")
    assert "MOVE_FAILED: /src/bad\\udcff.txt - Is a directory" in content
    assert "=== Total errors: 1 ===" in content
