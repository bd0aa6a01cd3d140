# ui/log_viewer.py
"""
Log viewer widget with colored output and timestamps.

Shows the batch log lines emitted by the workers, colouring the level
badge (info, success, warning, error).
"""

from datetime import datetime

from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QTextEdit


class LogViewer(QTextEdit):
    """Read-only, timestamped, colour-coded log output."""

    COLORS = {
        "info": QColor("#4a9eff"),
        "success": QColor("#22c55e"),
        "warning": QColor("#f59e0b"),
        "error": QColor("#ef4444"),
    }

    def __init__(self):
        super().__init__()
        self.setReadOnly(True)

        font = QFont("Menlo", 11)
        font.setStyleHint(QFont.StyleHint.Monospace)
        self.setFont(font)

        self.setStyleSheet(
            """
            QTextEdit {
                background-color: #1a1a1a;
                color: #e0e0e0;
                border-radius: 8px;
                padding: 12px;
                border: none;
            }
        """
        )

    def log(self, message: str, level: str = "info") -> None:
        """
        Append one line.

        Args:
            message: Text to show; multi-line messages are kept as they are
            level: info, success, warning or error
        """
        cursor = self.textCursor()
        cursor.movePosition(QTextCursor.MoveOperation.End)

        stamp_format = QTextCharFormat()
        stamp_format.setForeground(QColor("#666666"))
        cursor.insertText(f"[{datetime.now():%H:%M:%S}] ", stamp_format)

        badge_format = QTextCharFormat()
        badge_format.setForeground(self.COLORS.get(level, self.COLORS["info"]))
        badge_format.setFontWeight(QFont.Weight.Bold)
        cursor.insertText(f"{level.upper():<8}", badge_format)

        text_format = QTextCharFormat()
        text_format.setForeground(QColor("#cccccc"))
        cursor.insertText(f" {message}\n", text_format)

        self.setTextCursor(cursor)
        self.ensureCursorVisible()


__all__ = ["LogViewer"]
