from pathlib import Path

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QPushButton

from foldersort_app.core.categories import Category
from foldersort_app.core.scanner import ScanDepth
from foldersort_app.core.transfer import ConflictDecision
from foldersort_app.ui.conflict_dialog import ConflictDialog
from foldersort_app.ui.log_viewer import LogViewer
from foldersort_app.ui.main_window import MainWindow
from foldersort_app.ui.stats_widget import StatsWidget


def _button(dialog, text):
    return next(b for b in dialog.findChildren(QPushButton) if b.text() == text)


def test_conflict_dialog_offers_every_decision(qtbot):
    dialog = ConflictDialog("/dest/Images/photo.jpg")
    qtbot.addWidget(dialog)

    texts = {b.text() for b in dialog.findChildren(QPushButton)}
    assert texts == {"Overwrite", "Keep Both", "Skip", "Cancel"}


def test_conflict_dialog_returns_choice_and_apply_to_all(qtbot):
    dialog = ConflictDialog("/dest/Images/photo.jpg")
    qtbot.addWidget(dialog)

    dialog.apply_to_all_cb.setChecked(True)
    qtbot.mouseClick(_button(dialog, "Keep Both"), Qt.MouseButton.LeftButton)

    assert dialog.result_decision() == (ConflictDecision.KEEP_BOTH, True)


def test_conflict_dialog_closed_counts_as_cancel(qtbot):
    dialog = ConflictDialog("/dest/a.txt")
    qtbot.addWidget(dialog)

    dialog.apply_to_all_cb.setChecked(True)
    dialog.reject()

    assert dialog.result_decision() == (ConflictDecision.CANCEL, False)


def test_stats_widget_update_and_reset(qtbot):
    widget = StatsWidget()
    qtbot.addWidget(widget)

    widget.update_stats({"files_transferred": 1234, "images": 3, "unrelated": 9})
    assert widget.stat_labels["files_transferred"].text() == "1,234"
    assert widget.stat_labels["images"].text() == "3"
    assert widget.stat_labels["errors"].text() == "0"

    widget.reset()
    assert widget.stat_labels["images"].text() == "0"


def test_log_viewer_appends_lines(qtbot):
    viewer = LogViewer()
    qtbot.addWidget(viewer)

    viewer.log("Moved: a.txt -> /dest/Documents/a.txt", "info")
    viewer.log("Could not delete: /src/old", "warning")

    text = viewer.toPlainText()
    assert "Moved: a.txt" in text
    assert "Could not delete" in text


def test_main_window_extension_panels_follow_survey(qtbot, source: Path, make_tree):
    make_tree(source, {"a.jpg": "1", "b.png": "2", "c.txt": "3", "sub": {"d.gif": "4"}})

    window = MainWindow()
    qtbot.addWidget(window)

    window.source_edit.setText(str(source))
    window.by_category_rb.setChecked(True)
    window.category_boxes[Category.IMAGES].setChecked(True)
    assert window.by_extension_cb.isEnabled()
    window.by_extension_cb.setChecked(True)

    panel = window.extension_panels[Category.IMAGES]
    assert set(panel.ext_boxes) == {"jpg", "png"}
    assert window.extension_panels[Category.DOCUMENTS].ext_boxes == {}

    window.deep_scan_rb.setChecked(True)
    assert window._depth() is ScanDepth.RECURSIVE
    assert set(panel.ext_boxes) == {"jpg", "png", "gif"}

    panel.ext_boxes["png"].setChecked(True)
    assert window._selected_categories() == {"Images"}
    assert window._selected_extensions() == {"Images": {"png"}}


def test_main_window_switching_back_to_all_types_clears_selection(qtbot):
    window = MainWindow()
    qtbot.addWidget(window)

    window.by_category_rb.setChecked(True)
    window.category_boxes[Category.VIDEOS].setChecked(True)
    window.all_types_rb.setChecked(True)

    assert window._selected_categories() == set()
    assert not window.by_extension_cb.isEnabled()


def test_main_window_status_follows_processed_files(qtbot):
    window = MainWindow()
    qtbot.addWidget(window)

    window._toggle_controls(processing=True)
    assert window.status_label.text() == "Processing..."

    window._on_file_processed("photo.JPG", "Images", "moved")
    assert window.status_label.text() == "Moved: photo.JPG (Images)"

    window._toggle_controls(processing=False)
    assert window.status_label.text() == "Ready"
