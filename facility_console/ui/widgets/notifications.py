from __future__ import annotations

import logging

from PySide6.QtWidgets import QLabel, QMessageBox, QWidget

from facility_console.application.dto.query_dto import Notification
from facility_console.ui.widgets.toast import Toast, show_toast

STATUS_LEVELS = {"success", "warning", "error", "info"}
# failures stay on screen longer than confirmations
_TIMEOUTS_MS = {"success": 2400, "danger": 6000}


def _refresh_status_style(label: QLabel) -> None:
    style = label.style()
    style.unpolish(label)
    style.polish(label)
    label.update()


def set_status(label: QLabel, message: str, level: str = "info") -> None:
    if not message:
        clear_status(label)
        return
    label.setText(message)
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", level if level in STATUS_LEVELS else "info")
    label.setWordWrap(True)
    label.setVisible(True)
    _refresh_status_style(label)


def clear_status(label: QLabel) -> None:
    label.clear()
    label.setObjectName("statusLabel")
    label.setProperty("statusLevel", "")
    label.setVisible(False)
    _refresh_status_style(label)


def show_notification(parent: QWidget | None, notification: Notification) -> Toast | None:
    return show_toast(
        parent,
        notification.message,
        level=notification.type,
        details=notification.details,
        timeout_ms=_TIMEOUTS_MS.get(notification.type, 2400),
    )


def show_error(parent: QWidget | None, message: str, title: str = "Error") -> None:
    logging.getLogger(__name__).error("%s: %s", title, message)
    box = QMessageBox(parent)
    box.setWindowTitle(title)
    box.setText(message)
    box.setIcon(QMessageBox.Icon.Critical)
    box.exec()
