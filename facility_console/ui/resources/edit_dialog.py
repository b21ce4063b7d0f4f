from __future__ import annotations

from typing import Any

from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QMessageBox, QPushButton, QVBoxLayout, QWidget

from facility_console.ui.controllers.edit_controller import EditController
from facility_console.ui.resources.draft_form import DraftFormWidget, OptionsLookup


class EditDialog(QDialog):
    """Modal editor bound to an ``EditController``; closes itself when the target is cleared."""

    def __init__(self, edit: EditController, options_for: OptionsLookup, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.edit = edit
        singular = edit.form.config.singular
        self._singular = singular
        self.setWindowTitle(f"Edit {singular.capitalize()}")
        self.setModal(True)
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        self.form_widget = DraftFormWidget(edit.form, options_for)
        layout.addWidget(self.form_widget)
        self.loading_label = QLabel("Loading…")
        self.loading_label.setObjectName("muted")
        layout.addWidget(self.loading_label)

        buttons = QHBoxLayout()
        self.delete_btn = QPushButton("Delete")
        self.delete_btn.setObjectName("secondaryButton")
        self.delete_btn.clicked.connect(self._confirm_delete)
        buttons.addWidget(self.delete_btn)
        buttons.addStretch()
        self.cancel_btn = QPushButton("Cancel")
        self.cancel_btn.setObjectName("secondaryButton")
        self.cancel_btn.clicked.connect(self.reject)
        self.save_btn = QPushButton("Save")
        self.save_btn.setObjectName("primaryButton")
        self.save_btn.clicked.connect(edit.submit)
        buttons.addWidget(self.cancel_btn)
        buttons.addWidget(self.save_btn)
        layout.addLayout(buttons)

        edit.target_changed.connect(self._on_target_changed)
        edit.form_changed.connect(self._render)
        self._render()

    def refresh_options(self, field: str) -> None:
        self.form_widget.refresh_options(field)

    def reject(self) -> None:
        self.edit.close()
        super().reject()

    def _on_target_changed(self, target: Any) -> None:
        if target is None:
            if self.isVisible():
                super().reject()
            return
        self._render()

    def _render(self) -> None:
        busy = self.edit.is_loading or self.edit.mutation.is_submitting
        self.loading_label.setVisible(self.edit.is_loading)
        self.save_btn.setEnabled(self.edit.submit_enabled)
        self.delete_btn.setEnabled(self.edit.is_open and not busy)

    def _confirm_delete(self) -> None:
        answer = QMessageBox.question(
            self,
            "Delete",
            f"Delete this {self._singular}? This cannot be undone.",
        )
        if answer == QMessageBox.StandardButton.Yes:
            self.edit.delete()
