import logging

from foldersort_app.utils.log_sink import emit, format_line, split_level


def test_format_and_split_level():
    line = format_line("Could not delete: /tmp/x", "warning")
    assert line == "[WARNING] Could not delete: /tmp/x"
    assert split_level(line) == ("warning", "Could not delete: /tmp/x")


def test_split_level_without_tag_defaults_to_info():
    assert split_level("plain text") == ("info", "plain text")
    assert split_level("[DEBUG] not a sink level") == ("info", "[DEBUG] not a sink level")


def test_emit_writes_to_callback_and_logger(caplog):
    lines = []
    log = logging.getLogger("foldersort_app.test")
    with caplog.at_level(logging.INFO, logger="foldersort_app.test"):
        emit(log, lines.append, "Moved: a.txt", "info")
        emit(log, None, "no sink", "error")

    assert lines == ["[INFO] Moved: a.txt"]
    assert "no sink" in caplog.text
