"""
Prompt provider rendering every question as a Qt dialog.

Output passed to show() is echoed to the stream. A confirmation that
comes with a preview opens a ConfirmDialog holding exactly that preview,
so the operator decides with the dry run on screen.
"""

import sys
from typing import Optional, Sequence

from PySide6.QtWidgets import QApplication, QDialog, QInputDialog, QMessageBox

from ..errors import OperationCancelled
from ..prompts import Prompter
from .dialogs import ConfirmDialog


class QtPrompter(Prompter):
    """Prompter backed by modal Qt dialogs."""

    TITLE = "pocketrocket"

    def __init__(self, parent=None, stream=None):
        self.app = QApplication.instance() or QApplication(sys.argv)
        self.parent = parent
        self.stream = stream if stream is not None else sys.stdout
        self._warning: Optional[str] = None

    def ask(self, message: str, default: Optional[str] = None) -> str:
        self._warning = None
        text, ok = QInputDialog.getText(self.parent, self.TITLE, message, text=default or "")
        if not ok:
            raise OperationCancelled()
        text = text.strip()
        if not text and default:
            return default
        return text

    def choose(self, message: str, options: Sequence[str]) -> str:
        self._warning = None
        item, ok = QInputDialog.getItem(
            self.parent, self.TITLE, message, list(options), 0, False
        )
        if not ok:
            raise OperationCancelled()
        return item

    def confirm(
        self, message: str, destructive: bool = False, preview: Optional[str] = None
    ) -> bool:
        warning, self._warning = self._warning, None

        if preview is None:
            answer = QMessageBox.question(
                self.parent,
                self.TITLE,
                message,
                QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No,
                QMessageBox.StandardButton.No,
            )
            return answer == QMessageBox.StandardButton.Yes

        dialog = ConfirmDialog(
            message,
            preview=preview,
            warning=warning,
            destructive=destructive,
            parent=self.parent,
        )
        return dialog.exec() == QDialog.DialogCode.Accepted.value

    def show(self, text: str):
        print(text, file=self.stream, flush=True)

    def warn(self, text: str):
        print(f"⚠️ {text}", file=self.stream, flush=True)
        # shown in the next confirm dialog
        self._warning = text
