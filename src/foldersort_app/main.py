"""
FolderSort - Category File Organizer
Entry point for the PySide6 GUI application.
"""

import logging
import os
import sys
from pathlib import Path

# Ensure src/ is on sys.path for absolute imports when launched as a script
SRC_DIR = Path(__file__).resolve().parent.parent  # src/ directory
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from PySide6.QtGui import QColor, QPalette
from PySide6.QtWidgets import QApplication

LOG_LEVEL_ENV = "FOLDERSORT_LOG_LEVEL"


def setup_dark_theme(app: QApplication) -> None:
    """Configure dark theme palette for the application."""
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(30, 30, 30))
    palette.setColor(QPalette.ColorRole.WindowText, QColor(220, 220, 220))
    palette.setColor(QPalette.ColorRole.Base, QColor(25, 25, 25))
    palette.setColor(QPalette.ColorRole.Text, QColor(220, 220, 220))
    palette.setColor(QPalette.ColorRole.Button, QColor(45, 45, 45))
    palette.setColor(QPalette.ColorRole.ButtonText, QColor(220, 220, 220))
    palette.setColor(QPalette.ColorRole.Highlight, QColor(74, 158, 255))
    app.setPalette(palette)


def main() -> int:
    """Initialize and run the application."""
    level_name = os.environ.get(LOG_LEVEL_ENV, "INFO").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    QApplication.setApplicationName("FolderSort")
    QApplication.setOrganizationName("FolderSort")
    QApplication.setApplicationDisplayName("FolderSort - Category File Organizer")
    app = QApplication(sys.argv)
    app.setStyle("Fusion")
    setup_dark_theme(app)

    from foldersort_app.ui.main_window import MainWindow

    window = MainWindow()
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
