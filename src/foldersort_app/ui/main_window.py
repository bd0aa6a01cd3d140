# ui/main_window.py
"""
Main application window for FolderSort.

Collects the batch parameters (folders, move/copy, scan depth, category and
extension filters), runs the batch on an OrganizeWorker, answers collision
prompts with ConflictDialog and offers the empty-folder cleanup afterwards.
"""

import os
from pathlib import Path
from typing import Dict, Optional, Set

from PySide6.QtCore import Slot
from PySide6.QtWidgets import (
    QButtonGroup,
    QCheckBox,
    QFileDialog,
    QFrame,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QRadioButton,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from foldersort_app.core.categories import Category
from foldersort_app.core.organizer import validate_folders
from foldersort_app.core.scanner import ScanDepth, survey_extensions
from foldersort_app.core.transfer import TransferAction
from foldersort_app.core.worker import BatchRequest, CleanupWorker, OrganizeWorker
from .conflict_dialog import ConflictDialog
from .log_viewer import LogViewer
from .stats_widget import StatsWidget

FRAME_STYLE = """
    QFrame {
        background-color: #2d2d2d;
        border-radius: 12px;
    }
"""

CONTROL_STYLE = """
    QLabel, QRadioButton, QCheckBox {
        font-size: 13px;
        color: #ffffff;
    }
    QLineEdit {
        background-color: #1f1f1f;
        color: #ffffff;
        border: 1px solid #3d3d3d;
        border-radius: 6px;
        padding: 6px;
        font-family: 'Menlo', monospace;
    }
"""

BUTTON_STYLE = """
    QPushButton {
        background-color: #3d3d3d;
        color: #ffffff;
        border: none;
        border-radius: 8px;
        padding: 8px 16px;
        font-size: 13px;
    }
    QPushButton:hover {
        background-color: #4d4d4d;
    }
    QPushButton:disabled {
        color: #777777;
    }
"""

NO_EXTENSION_LABEL = "(none)"


def _section(title: str) -> tuple[QFrame, QVBoxLayout]:
    """Create a rounded section frame with a title label."""
    frame = QFrame()
    frame.setStyleSheet(FRAME_STYLE + CONTROL_STYLE)
    layout = QVBoxLayout(frame)
    layout.setContentsMargins(16, 12, 16, 12)

    label = QLabel(title)
    label.setStyleSheet("font-size: 13px; color: #888888; font-weight: bold;")
    layout.addWidget(label)
    return frame, layout


class ExtensionPanel(QWidget):
    """Per-category row of extension checkboxes with an "All" toggle."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(24, 0, 0, 0)
        self.all_cb: Optional[QCheckBox] = None
        self.ext_boxes: Dict[str, QCheckBox] = {}

    def populate(self, extensions: Set[str], selected: Set[str]) -> None:
        """Rebuild the checkboxes, keeping previously ticked extensions ticked."""
        self.clear()

        self.all_cb = QCheckBox("All")
        self._layout.addWidget(self.all_cb)

        for ext in sorted(extensions):
            box = QCheckBox(f".{ext}" if ext else NO_EXTENSION_LABEL)
            box.setChecked(ext in selected)
            self._layout.addWidget(box)
            self.ext_boxes[ext] = box

        self._layout.addStretch()
        self.all_cb.setChecked(bool(self.ext_boxes) and selected >= set(self.ext_boxes))
        self.all_cb.toggled.connect(self._toggle_all)

    def _toggle_all(self, checked: bool) -> None:
        for box in self.ext_boxes.values():
            box.setChecked(checked)

    def clear(self) -> None:
        while self._layout.count():
            item = self._layout.takeAt(0)
            if item.widget() is not None:
                item.widget().deleteLater()
        self.all_cb = None
        self.ext_boxes = {}

    def selected(self) -> Set[str]:
        return {ext for ext, box in self.ext_boxes.items() if box.isChecked()}


class MainWindow(QMainWindow):
    """Main application window for FolderSort."""

    def __init__(self):
        super().__init__()

        self.setWindowTitle("FolderSort - Category File Organizer")
        self.setMinimumSize(980, 760)

        self.worker: Optional[OrganizeWorker] = None
        self.cleanup_worker: Optional[CleanupWorker] = None

        # Last folders picked this session, used to seed the file dialogs
        self._last_source: Optional[str] = None
        self._last_destination: Optional[str] = None

        self._setup_ui()
        self._connect_signals()
        self._on_file_types_changed()

    # --- Layout -------------------------------------------------------------

    def _setup_ui(self) -> None:
        central = QWidget()
        central.setStyleSheet("background-color: #1a1a1a;")
        self.setCentralWidget(central)

        main_layout = QVBoxLayout(central)
        main_layout.setSpacing(16)
        main_layout.setContentsMargins(24, 24, 24, 24)

        title = QLabel("FolderSort")
        title.setStyleSheet("font-size: 28px; font-weight: bold; color: #ffffff;")
        subtitle = QLabel("Move or copy files into Images, Documents, Audios, Videos and Others")
        subtitle.setStyleSheet("font-size: 14px; color: #888888;")
        main_layout.addWidget(title)
        main_layout.addWidget(subtitle)

        # === Folders ===
        folders_frame, folders_layout = _section("Folders")
        grid = QGridLayout()
        self.source_edit = QLineEdit()
        self.source_edit.setPlaceholderText("Folder containing the files to organize")
        self.destination_edit = QLineEdit()
        self.destination_edit.setPlaceholderText("Folder receiving the category folders")
        self.browse_source_btn = QPushButton("Browse...")
        self.browse_destination_btn = QPushButton("Browse...")
        for button in (self.browse_source_btn, self.browse_destination_btn):
            button.setStyleSheet(BUTTON_STYLE)

        grid.addWidget(QLabel("Source:"), 0, 0)
        grid.addWidget(self.source_edit, 0, 1)
        grid.addWidget(self.browse_source_btn, 0, 2)
        grid.addWidget(QLabel("Destination:"), 1, 0)
        grid.addWidget(self.destination_edit, 1, 1)
        grid.addWidget(self.browse_destination_btn, 1, 2)
        folders_layout.addLayout(grid)
        main_layout.addWidget(folders_frame)

        # === Options ===
        options_frame, options_layout = _section("Options")
        options_row = QHBoxLayout()
        options_row.setSpacing(32)

        self.move_rb = QRadioButton("Move")
        self.move_rb.setToolTip("Move files from source to destination folder.")
        self.copy_rb = QRadioButton("Copy")
        self.copy_rb.setToolTip("Copy files from source to destination folder.")
        self.move_rb.setChecked(True)
        self.action_group = QButtonGroup(self)
        self.action_group.addButton(self.move_rb)
        self.action_group.addButton(self.copy_rb)

        self.top_level_rb = QRadioButton("Top level")
        self.top_level_rb.setToolTip("Only scan the top level of the source folder.")
        self.deep_scan_rb = QRadioButton("Deep scan")
        self.deep_scan_rb.setToolTip("Include subfolders when scanning the source folder.")
        self.top_level_rb.setChecked(True)
        self.depth_group = QButtonGroup(self)
        self.depth_group.addButton(self.top_level_rb)
        self.depth_group.addButton(self.deep_scan_rb)

        self.all_types_rb = QRadioButton("All file types")
        self.all_types_rb.setToolTip("Organize all files regardless of type.")
        self.by_category_rb = QRadioButton("By category")
        self.by_category_rb.setToolTip("Choose specific file types to organize.")
        self.all_types_rb.setChecked(True)
        self.types_group = QButtonGroup(self)
        self.types_group.addButton(self.all_types_rb)
        self.types_group.addButton(self.by_category_rb)

        for group in ((self.move_rb, self.copy_rb), (self.top_level_rb, self.deep_scan_rb),
                      (self.all_types_rb, self.by_category_rb)):
            column = QVBoxLayout()
            for button in group:
                column.addWidget(button)
            options_row.addLayout(column)
        options_row.addStretch()
        options_layout.addLayout(options_row)
        main_layout.addWidget(options_frame)

        # === Categories ===
        self.category_frame, category_layout = _section("Categories")
        category_row = QHBoxLayout()
        self.category_boxes: Dict[Category, QCheckBox] = {}
        for category in Category:
            box = QCheckBox(category.value)
            self.category_boxes[category] = box
            category_row.addWidget(box)
        category_row.addStretch()
        self.by_extension_cb = QCheckBox("By extension")
        self.by_extension_cb.setToolTip("Organize selected file types by their extensions.")
        category_row.addWidget(self.by_extension_cb)
        category_layout.addLayout(category_row)

        self.extension_panels: Dict[Category, ExtensionPanel] = {}
        for category in Category:
            panel = ExtensionPanel()
            panel.setVisible(False)
            self.extension_panels[category] = panel
            category_layout.addWidget(panel)
        main_layout.addWidget(self.category_frame)

        # === Log / Statistics ===
        self.tab_widget = QTabWidget()
        self.log_viewer = LogViewer()
        self.stats_widget = StatsWidget()
        self.tab_widget.addTab(self.log_viewer, "Log")
        self.tab_widget.addTab(self.stats_widget, "Statistics")
        main_layout.addWidget(self.tab_widget, 1)

        # === Buttons ===
        button_row = QHBoxLayout()
        self.clear_logs_btn = QPushButton("Clear Logs")
        self.start_btn = QPushButton("Start Organizing")
        self.stop_btn = QPushButton("Stop")
        self.stop_btn.setEnabled(False)
        for button in (self.clear_logs_btn, self.start_btn, self.stop_btn):
            button.setStyleSheet(BUTTON_STYLE)
        self.status_label = QLabel("Ready")
        self.status_label.setStyleSheet("font-size: 13px; color: #888888;")
        button_row.addWidget(self.clear_logs_btn)
        button_row.addWidget(self.status_label)
        button_row.addStretch()
        button_row.addWidget(self.start_btn)
        button_row.addWidget(self.stop_btn)
        main_layout.addLayout(button_row)

    def _connect_signals(self) -> None:
        self.browse_source_btn.clicked.connect(self._browse_source)
        self.browse_destination_btn.clicked.connect(self._browse_destination)
        self.source_edit.editingFinished.connect(self._refresh_extension_panels)

        self.top_level_rb.toggled.connect(self._refresh_extension_panels)
        self.all_types_rb.toggled.connect(self._on_file_types_changed)
        for box in self.category_boxes.values():
            box.toggled.connect(self._on_category_toggled)
        self.by_extension_cb.toggled.connect(self._refresh_extension_panels)

        self.clear_logs_btn.clicked.connect(self._clear_logs)
        self.start_btn.clicked.connect(self._start_processing)
        self.stop_btn.clicked.connect(self._stop_processing)

    # --- Folder selection ---------------------------------------------------

    def _pick_folder(self, title: str, start: Optional[str]) -> Optional[str]:
        folder = QFileDialog.getExistingDirectory(self, title, start or os.path.expanduser("~"))
        return folder or None

    @Slot()
    def _browse_source(self) -> None:
        start = self._last_source
        if start is None and self._last_destination:
            start = str(Path(self._last_destination).parent)
        folder = self._pick_folder("Select Source Folder Path", start)
        if folder:
            self._last_source = folder
            self.source_edit.setText(folder)
            self.log_viewer.log(f"Selected source folder: {folder}", "info")
            self._refresh_extension_panels()

    @Slot()
    def _browse_destination(self) -> None:
        start = self._last_destination
        if start is None and self._last_source:
            start = str(Path(self._last_source).parent)
        folder = self._pick_folder("Select Destination Folder Path", start)
        if folder:
            self._last_destination = folder
            self.destination_edit.setText(folder)
            self.log_viewer.log(f"Selected destination folder: {folder}", "info")

    # --- Filter controls ----------------------------------------------------

    def _depth(self) -> ScanDepth:
        return ScanDepth.RECURSIVE if self.deep_scan_rb.isChecked() else ScanDepth.TOP_LEVEL

    @Slot()
    def _on_file_types_changed(self) -> None:
        by_category = self.by_category_rb.isChecked()
        self.category_frame.setVisible(by_category)
        if not by_category:
            for box in self.category_boxes.values():
                box.setChecked(False)
            self.by_extension_cb.setChecked(False)
        self._on_category_toggled()

    @Slot()
    def _on_category_toggled(self) -> None:
        any_selected = any(box.isChecked() for box in self.category_boxes.values())
        if not any_selected:
            self.by_extension_cb.setChecked(False)
        self.by_extension_cb.setEnabled(any_selected)
        self._refresh_extension_panels()

    @Slot()
    def _refresh_extension_panels(self) -> None:
        """Re-survey the source folder and rebuild the visible extension panels."""
        source = self.source_edit.text().strip()
        show = self.by_extension_cb.isChecked()

        if not source or not show:
            for panel in self.extension_panels.values():
                panel.clear()
                panel.setVisible(False)
            return

        survey = survey_extensions(source, self._depth())
        for category, panel in self.extension_panels.items():
            visible = self.category_boxes[category].isChecked() and bool(survey[category])
            previous = panel.selected()
            if visible:
                panel.populate(survey[category], previous)
            else:
                panel.clear()
            panel.setVisible(visible)

    def _selected_categories(self) -> Set[str]:
        return {
            category.value
            for category, box in self.category_boxes.items()
            if box.isChecked()
        }

    def _selected_extensions(self) -> Dict[str, Set[str]]:
        selected: Dict[str, Set[str]] = {}
        for category, panel in self.extension_panels.items():
            if not self.category_boxes[category].isChecked():
                continue
            exts = panel.selected()
            if exts:
                selected[category.value] = exts
        return selected

    # --- Batch ----------------------------------------------------------------

    def _toggle_controls(self, processing: bool) -> None:
        for widget in (
            self.start_btn,
            self.browse_source_btn,
            self.browse_destination_btn,
            self.source_edit,
            self.destination_edit,
            self.move_rb,
            self.copy_rb,
            self.top_level_rb,
            self.deep_scan_rb,
            self.all_types_rb,
            self.by_category_rb,
            self.category_frame,
        ):
            widget.setEnabled(not processing)
        self.stop_btn.setEnabled(processing)
        self.status_label.setText("Processing..." if processing else "Ready")

    def _show_warning(self, title: str, message: str) -> None:
        QMessageBox.warning(self, title, message)
        self.log_viewer.log(message, "warning")

    @Slot()
    def _start_processing(self) -> None:
        source = self.source_edit.text().strip()
        destination = self.destination_edit.text().strip()

        problems = validate_folders(source, destination)
        if problems:
            QMessageBox.critical(self, "Validation error", "\n".join(problems))
            for problem in problems:
                self.log_viewer.log(problem, "error")
            return

        by_category = self.by_category_rb.isChecked()
        categories = self._selected_categories() if by_category else set()
        extensions: Dict[str, Set[str]] = {}

        if by_category:
            if not categories:
                self._show_warning(
                    "No Categories Selected",
                    "No categories selected. Please select your preferred categories.",
                )
                return
            if self.by_extension_cb.isChecked():
                extensions = self._selected_extensions()
                if not extensions:
                    self._show_warning(
                        "No Extensions Selected",
                        "By Extension is enabled, but no extensions are selected. "
                        "Please select at least one.",
                    )
                    return

        request = BatchRequest(
            source=Path(source),
            destination=Path(destination),
            action=TransferAction.MOVE if self.move_rb.isChecked() else TransferAction.COPY,
            depth=self._depth(),
            by_category=by_category,
            categories=frozenset(categories),
            extensions=extensions,
        )

        self._toggle_controls(processing=True)
        self.stats_widget.reset()
        self.tab_widget.setCurrentWidget(self.log_viewer)

        self.worker = OrganizeWorker(request)
        self.worker.log_message.connect(self.log_viewer.log)
        self.worker.file_processed.connect(self._on_file_processed)
        self.worker.stats_updated.connect(self.stats_widget.update_stats)
        self.worker.conflict_detected.connect(self._on_conflict)
        self.worker.run_finished.connect(self._on_finished)
        self.worker.start()

    @Slot()
    def _stop_processing(self) -> None:
        if self.worker is not None:
            self.worker.request_stop()

    @Slot(str, str, str)
    def _on_file_processed(self, filename: str, category: str, status: str) -> None:
        self.status_label.setText(f"{status.capitalize()}: {filename} ({category})")

    @Slot(str)
    def _on_conflict(self, target_path: str) -> None:
        """Answer the worker's blocking collision prompt."""
        decision, apply_to_all = ConflictDialog.ask(target_path, self)
        suffix = " (applied to all)" if apply_to_all else ""
        self.log_viewer.log(f"Action for duplicate file: {decision.value}{suffix}", "info")
        if self.worker is not None:
            self.worker.submit_decision(decision, apply_to_all)

    @Slot(dict)
    def _on_finished(self, stats: dict) -> None:
        self.stats_widget.update_stats(stats)
        request = self.worker.request if self.worker is not None else None

        if stats.get("aborted") or request is None:
            self._toggle_controls(processing=False)
            return

        if request.depth is ScanDepth.RECURSIVE:
            question = (
                "Do you want to delete empty folders (including subfolders) "
                "in the source directory?"
            )
        else:
            question = "Do you want to delete empty folders directly under the source directory?"

        self.stop_btn.setEnabled(False)
        reply = QMessageBox.question(
            self,
            "Delete Empty Folders",
            question,
            QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
            QMessageBox.StandardButton.No,
        )

        if reply != QMessageBox.StandardButton.Yes:
            self.log_viewer.log("===== PROCESS COMPLETE =====", "success")
            self._toggle_controls(processing=False)
            self._refresh_extension_panels()
            return

        self.cleanup_worker = CleanupWorker(request.source, request.depth)
        self.cleanup_worker.log_message.connect(self.log_viewer.log)
        self.cleanup_worker.run_finished.connect(self._on_cleanup_finished)
        self.cleanup_worker.start()

    @Slot(dict)
    def _on_cleanup_finished(self, result: dict) -> None:
        self._toggle_controls(processing=False)
        self._refresh_extension_panels()

    @Slot()
    def _clear_logs(self) -> None:
        self.log_viewer.clear()
        self.log_viewer.log("Logs cleared", "info")


__all__ = ["MainWindow"]
