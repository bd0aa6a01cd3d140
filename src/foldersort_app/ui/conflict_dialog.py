# ui/conflict_dialog.py
"""
"File already exists" prompt shown when a transfer collides.
"""

from pathlib import Path
from typing import Tuple

from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
)

from foldersort_app.core.transfer import ConflictDecision


class ConflictDialog(QDialog):
    """
    Modal choice between Overwrite, Keep Both, Skip and Cancel.

    Closing the window counts as Cancel.
    """

    def __init__(self, target_path: str, parent=None):
        super().__init__(parent)
        self.setWindowTitle("Duplicate File")
        self.setModal(True)

        self._decision = ConflictDecision.CANCEL

        layout = QVBoxLayout(self)

        message = QLabel(
            f"File already exists:<br><b>{Path(target_path)}</b><br><br>"
            "What do you want to do?"
        )
        message.setWordWrap(True)
        layout.addWidget(message)

        self.apply_to_all_cb = QCheckBox("Apply to all files")
        layout.addWidget(self.apply_to_all_cb)

        buttons = QHBoxLayout()
        for decision in ConflictDecision:
            button = QPushButton(decision.value)
            button.clicked.connect(lambda _=False, d=decision: self._choose(d))
            buttons.addWidget(button)
            if decision is ConflictDecision.OVERWRITE:
                button.setDefault(True)
        layout.addLayout(buttons)

    def _choose(self, decision: ConflictDecision) -> None:
        self._decision = decision
        self.accept()

    def result_decision(self) -> Tuple[ConflictDecision, bool]:
        """Return (decision, apply_to_all); apply_to_all is never set for Cancel."""
        apply_to_all = (
            self._decision is not ConflictDecision.CANCEL
            and self.apply_to_all_cb.isChecked()
        )
        return self._decision, apply_to_all

    @classmethod
    def ask(cls, target_path: str, parent=None) -> Tuple[ConflictDecision, bool]:
        """Show the dialog and block until the user picks an option."""
        dialog = cls(target_path, parent)
        dialog.exec()
        return dialog.result_decision()


__all__ = ["ConflictDialog"]
