# utils/log_sink.py
"""
Log sink helpers shared by the core modules.

Core operations report user-facing progress through a plain callback that
receives one line per event. Lines carry a level tag so the presentation
layer can colour them:

    [INFO] Moved: photo.jpg -> /dest/Images/photo.jpg
    [WARNING] Could not create category folder: Images
    [ERROR] notes.txt -> Permission denied

Every line is also written to the module's standard library logger.
"""

import logging
from typing import Callable, Optional, Tuple

LogCallback = Callable[[str], None]
ErrorLogCallback = Callable[[str, str, str], None]  # context, file, error

_LEVELS = {
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


def format_line(message: str, level: str = "info") -> str:
    """Prefix a message with its level tag."""
    return f"[{level.upper()}] {message}"


def split_level(line: str) -> Tuple[str, str]:
    """
    Split a tagged log line back into (level, message).

    Lines without a recognised tag are reported as "info".
    """
    if line.startswith("["):
        tag, sep, rest = line[1:].partition("] ")
        if sep and tag.lower() in _LEVELS:
            return tag.lower(), rest
    return "info", line


def emit(
    log: logging.Logger,
    callback: Optional[LogCallback],
    message: str,
    level: str = "info",
) -> None:
    """Send a message to the module logger and, if given, the log sink."""
    log.log(_LEVELS.get(level, logging.INFO), message)
    if callback:
        callback(format_line(message, level))


__all__ = ["LogCallback", "ErrorLogCallback", "format_line", "split_level", "emit"]
