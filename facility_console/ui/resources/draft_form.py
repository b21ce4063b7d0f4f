from __future__ import annotations

from collections.abc import Callable
from datetime import time

from PySide6.QtCore import QSignalBlocker, Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QWidget,
)

from facility_console.application.dto.query_dto import Option
from facility_console.ui.controllers.create_form import CreateFormModel

OptionsLookup = Callable[[str], list[Option]]

_FIELD_LABELS = {
    "name": "Name",
    "region_id": "Region",
    "room_ids": "Rooms",
    "time_zone_iana": "Time Zone",
    "health_center_id": "Health Center",
    "begin_time": "Open Time",
    "end_time": "Close Time",
}
_TIME_FIELDS = ("begin_time", "end_time")
_SLOT_MINUTES = 30


def half_hour_slots() -> list[time]:
    return [time(minutes // 60, minutes % 60) for minutes in range(0, 24 * 60, _SLOT_MINUTES)]


def field_label(name: str, required: bool) -> str:
    label = _FIELD_LABELS.get(name, name.replace("_", " ").capitalize())
    return f"{label} *" if required else label


class DraftFormWidget(QWidget):
    """Input widgets for a draft; reads from and writes to a ``CreateFormModel``."""

    retry_requested = Signal(str)

    def __init__(
        self,
        form: CreateFormModel,
        options_for: OptionsLookup,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._form = form
        self._options_for = options_for
        self._combos: dict[str, QComboBox] = {}
        self._lists: dict[str, QListWidget] = {}
        self._retry_buttons: dict[str, QPushButton] = {}
        self._options: dict[str, dict[object, Option]] = {}
        self.name_input: QLineEdit | None = None

        config = form.config
        fields = type(form.draft).model_fields
        layout = QFormLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        if "name" in fields:
            self.name_input = QLineEdit()
            self.name_input.setPlaceholderText(f"{config.singular.capitalize()} name")
            self.name_input.textChanged.connect(form.set_name)
            layout.addRow(field_label("name", "name" in config.required_fields), self.name_input)

        for name, source in config.references.items():
            required = name in config.required_fields
            if source.multi:
                widget: QWidget = self._build_list(name)
            else:
                widget = self._build_combo(name)
            layout.addRow(field_label(name, required), self._with_retry(name, widget))

        for name in _TIME_FIELDS:
            if name in fields:
                layout.addRow(field_label(name, False), self._build_time_combo(name))

        form.changed.connect(self.sync_from_model)
        self.sync_from_model()

    def _build_combo(self, name: str) -> QComboBox:
        combo = QComboBox()
        combo.currentIndexChanged.connect(lambda _index, n=name: self._on_combo_changed(n))
        self._combos[name] = combo
        self.refresh_options(name)
        return combo

    def _build_list(self, name: str) -> QListWidget:
        widget = QListWidget()
        widget.setSelectionMode(QAbstractItemView.SelectionMode.MultiSelection)
        widget.setMaximumHeight(120)
        widget.itemSelectionChanged.connect(lambda n=name: self._on_list_changed(n))
        self._lists[name] = widget
        self.refresh_options(name)
        return widget

    def _build_time_combo(self, name: str) -> QComboBox:
        combo = QComboBox()
        combo.addItem("—", None)
        for slot in half_hour_slots():
            combo.addItem(slot.strftime("%H:%M"), slot.hour * 60 + slot.minute)
        combo.currentIndexChanged.connect(lambda _index, n=name: self._on_time_changed(n))
        self._combos[name] = combo
        return combo

    def _with_retry(self, name: str, widget: QWidget) -> QWidget:
        row = QWidget()
        row_layout = QHBoxLayout(row)
        row_layout.setContentsMargins(0, 0, 0, 0)
        row_layout.addWidget(widget, 1)
        retry = QPushButton("Retry")
        retry.setObjectName("secondaryButton")
        retry.setToolTip("Options could not be loaded")
        retry.setVisible(False)
        retry.clicked.connect(lambda _checked=False, n=name: self.retry_requested.emit(n))
        row_layout.addWidget(retry)
        self._retry_buttons[name] = retry
        return row

    def set_unavailable(self, name: str, unavailable: bool) -> None:
        button = self._retry_buttons.get(name)
        if button is not None:
            button.setVisible(unavailable)

    def refresh_options(self, name: str) -> None:
        options = self._options_for(name)
        self._options[name] = {option.id: option for option in options}
        combo = self._combos.get(name)
        if combo is not None:
            with QSignalBlocker(combo):
                combo.clear()
                combo.addItem(f"Select {_FIELD_LABELS.get(name, name)}", None)
                for option in options:
                    combo.addItem(option.text, option.id)
        widget = self._lists.get(name)
        if widget is not None:
            with QSignalBlocker(widget):
                widget.clear()
                for option in options:
                    item = QListWidgetItem(option.text)
                    item.setData(Qt.ItemDataRole.UserRole, option.id)
                    widget.addItem(item)
        self.sync_from_model()

    def sync_from_model(self) -> None:
        draft = self._form.draft
        if self.name_input is not None and self.name_input.text() != draft.name:
            with QSignalBlocker(self.name_input):
                self.name_input.setText(draft.name)
        for name, combo in self._combos.items():
            value = getattr(draft, name)
            if name in _TIME_FIELDS:
                data = value.hour * 60 + value.minute if value is not None else None
            else:
                data = value
            index = combo.findData(data) if data is not None else 0
            with QSignalBlocker(combo):
                combo.setCurrentIndex(max(index, 0))
        for name, widget in self._lists.items():
            selected = set(getattr(draft, name))
            with QSignalBlocker(widget):
                for row in range(widget.count()):
                    item = widget.item(row)
                    item.setSelected(item.data(Qt.ItemDataRole.UserRole) in selected)

    def _on_combo_changed(self, name: str) -> None:
        option = self._options.get(name, {}).get(self._combos[name].currentData())
        self._form.select(name, [option] if option is not None else [])

    def _on_list_changed(self, name: str) -> None:
        by_id = self._options.get(name, {})
        selected = [by_id.get(item.data(Qt.ItemDataRole.UserRole)) for item in self._lists[name].selectedItems()]
        self._form.select(name, [option for option in selected if option is not None])

    def _on_time_changed(self, name: str) -> None:
        minutes = self._combos[name].currentData()
        self._form.set_time(name, time(minutes // 60, minutes % 60) if minutes is not None else None)
