"""
UI components for FolderSort.

- main_window: MainWindow with folder pickers, filters and batch controls
- conflict_dialog: ConflictDialog asking how to handle an existing file
- log_viewer: LogViewer widget with colored log output
- stats_widget: StatsWidget with per-category counters
"""

from .conflict_dialog import ConflictDialog
from .log_viewer import LogViewer
from .main_window import MainWindow
from .stats_widget import StatsWidget

__all__ = ["MainWindow", "ConflictDialog", "LogViewer", "StatsWidget"]
