# ui/stats_widget.py
"""
Statistics widget with color-coded stat cards.

One card per category plus transferred, skipped and error totals.
"""

from PySide6.QtCore import Slot
from PySide6.QtWidgets import QGridLayout, QGroupBox, QLabel, QVBoxLayout, QWidget

# (stats key, label, accent colour)
STAT_CARDS = [
    ("files_transferred", "Transferred", "#4a9eff"),
    ("images", "Images", "#22c55e"),
    ("documents", "Documents", "#8b5cf6"),
    ("audios", "Audios", "#f59e0b"),
    ("videos", "Videos", "#ec4899"),
    ("others", "Others", "#94a3b8"),
    ("files_skipped", "Skipped", "#eab308"),
    ("errors", "Errors", "#ef4444"),
]


class StatsWidget(QWidget):
    """Grid of stat cards, four per row."""

    def __init__(self):
        super().__init__()

        layout = QGridLayout(self)
        layout.setSpacing(12)

        self.stat_labels: dict[str, QLabel] = {}

        for i, (key, label, color) in enumerate(STAT_CARDS):
            card, value_label = self._create_stat_card(label, color)
            self.stat_labels[key] = value_label
            row, col = divmod(i, 4)
            layout.addWidget(card, row, col)

    def _create_stat_card(self, label: str, color: str) -> tuple[QGroupBox, QLabel]:
        card = QGroupBox()
        card.setStyleSheet(
            f"""
            QGroupBox {{
                background-color: #2d2d2d;
                border-radius: 12px;
                padding: 12px;
                border-left: 4px solid {color};
                border-top: none;
                border-right: none;
                border-bottom: none;
            }}
        """
        )

        card_layout = QVBoxLayout(card)
        card_layout.setSpacing(4)

        value_label = QLabel("0")
        value_label.setStyleSheet(
            f"QLabel {{ font-size: 24px; font-weight: bold; color: {color}; }}"
        )
        name_label = QLabel(label)
        name_label.setStyleSheet("QLabel { font-size: 12px; color: #888888; }")

        card_layout.addWidget(value_label)
        card_layout.addWidget(name_label)
        return card, value_label

    @Slot(dict)
    def update_stats(self, stats: dict) -> None:
        """Refresh the cards from a stats dict (missing keys are left alone)."""
        for key, label in self.stat_labels.items():
            if key in stats:
                label.setText(f"{stats[key]:,}")

    def reset(self) -> None:
        for label in self.stat_labels.values():
            label.setText("0")


__all__ = ["StatsWidget"]
