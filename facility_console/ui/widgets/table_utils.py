from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime
from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QTableWidget, QTableWidgetItem

from facility_console.application.resources import Column

ROW_DATA_ROLE = Qt.ItemDataRole.UserRole


def format_cell(value: Any) -> str:
    if value is None or value == "":
        return "—"
    if isinstance(value, datetime):
        return value.strftime("%Y-%m-%d %H:%M")
    if isinstance(value, (list, tuple)):
        return ", ".join(str(part) for part in value) or "—"
    return str(value)


def fill_table(table: QTableWidget, columns: Sequence[Column], items: Sequence[Any]) -> None:
    """Replace the table rows; the first cell of each row carries the row index."""
    table.setRowCount(0)
    for row, entity in enumerate(items):
        table.insertRow(row)
        for col, column in enumerate(columns):
            item = QTableWidgetItem(format_cell(getattr(entity, column.attr, None)))
            item.setFlags(item.flags() & ~Qt.ItemFlag.ItemIsEditable)
            if col == 0:
                item.setData(ROW_DATA_ROLE, row)
            table.setItem(row, col, item)


def resize_columns_by_first_row(table: QTableWidget, *, min_width: int = 80, padding: int = 24) -> None:
    if table.columnCount() == 0:
        return
    metrics = table.fontMetrics()
    for col in range(table.columnCount()):
        header_item = table.horizontalHeaderItem(col)
        width = metrics.horizontalAdvance(header_item.text() if header_item else "")
        item = table.item(0, col) if table.rowCount() else None
        if item is not None:
            width = max(width, metrics.horizontalAdvance(item.text()))
        table.setColumnWidth(col, max(width, min_width) + padding)
