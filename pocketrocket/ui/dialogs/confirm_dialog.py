"""
Confirmation dialog gating stack deploy and destroy.

Shows the preview output and keeps the action button disabled until
the operator ticks the acknowledgment checkbox.
"""

from typing import Optional

from PySide6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel,
    QCheckBox, QPushButton, QFrame, QPlainTextEdit,
)
from PySide6.QtGui import QFont
from PySide6.QtCore import Qt


class ConfirmDialog(QDialog):
    """
    Confirmation dialog for deploy/destroy operations.

    Styling differs by operation:
    - deploy: green "Deploy" button
    - destroy: bold red "Destroy" button
    """

    def __init__(
        self,
        question: str,
        preview: str = "",
        warning: Optional[str] = None,
        destructive: bool = False,
        parent=None,
    ):
        """
        Args:
            question: The question being confirmed
            preview: Preview output shown verbatim
            warning: Optional warning shown above the checkbox
            destructive: True for destroy confirmations
            parent: Parent widget
        """
        super().__init__(parent)
        self.question = question
        self.preview = preview
        self.warning = warning
        self.destructive = destructive
        self._init_ui()

    def _init_ui(self):
        operation = "Destroy" if self.destructive else "Deploy"
        self.setWindowTitle(f"Confirm Stack {operation}")
        self.setMinimumWidth(640)
        self.setModal(True)

        layout = QVBoxLayout(self)

        header = QLabel(self.question)
        header.setStyleSheet("font-size: 14px; font-weight: bold; padding: 4px;")
        header.setWordWrap(True)
        layout.addWidget(header)

        divider = QFrame()
        divider.setFrameShape(QFrame.Shape.HLine)
        divider.setFrameShadow(QFrame.Shadow.Sunken)
        layout.addWidget(divider)

        self._preview_view = QPlainTextEdit()
        self._preview_view.setReadOnly(True)
        self._preview_view.setFont(QFont("monospace", 10))
        self._preview_view.setPlainText(self.preview)
        self._preview_view.setMinimumHeight(280)
        layout.addWidget(self._preview_view)

        if self.warning:
            self._warning_label = QLabel(f"⚠️ {self.warning}")
            self._warning_label.setStyleSheet("color: #b36b00; padding: 4px;")
            layout.addWidget(self._warning_label)

        layout.addSpacing(8)

        if self.destructive:
            ack_text = (
                "I understand this action will destroy infrastructure "
                "and cannot be undone"
            )
        else:
            ack_text = (
                "I understand this action will modify infrastructure "
                "and may incur costs"
            )
        self._ack_checkbox = QCheckBox(ack_text)
        self._ack_checkbox.stateChanged.connect(self._on_ack_changed)
        layout.addWidget(self._ack_checkbox)

        layout.addSpacing(12)

        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self._cancel_button = QPushButton("Cancel")
        self._cancel_button.clicked.connect(self.reject)
        button_layout.addWidget(self._cancel_button)

        self._action_button = QPushButton(operation)
        if self.destructive:
            self._action_button_enabled_style = (
                "QPushButton { color: white; background-color: #cc0000; "
                "font-weight: bold; padding: 6px 16px; }"
            )
        else:
            self._action_button_enabled_style = (
                "QPushButton { color: white; background-color: #22882a; "
                "padding: 6px 16px; }"
            )

        self._action_button.setEnabled(False)
        self._action_button.clicked.connect(self.accept)
        button_layout.addWidget(self._action_button)

        layout.addLayout(button_layout)

    def _on_ack_changed(self, state: int):
        """Enable/disable action button based on checkbox."""
        checked = state == Qt.CheckState.Checked.value
        self._action_button.setEnabled(checked)
        if checked:
            self._action_button.setStyleSheet(self._action_button_enabled_style)
        else:
            self._action_button.setStyleSheet("")
