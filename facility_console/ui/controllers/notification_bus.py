from __future__ import annotations

import logging
from collections import deque

from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import Notification
from facility_console.domain.constants import SUCCESS_MESSAGE


class NotificationBus(QObject):
    """Side channel between controllers and whichever widget renders toasts."""

    published = Signal(object)

    def __init__(self, history_size: int = 50, parent: QObject | None = None) -> None:
        super().__init__(parent)
        self._history: deque[Notification] = deque(maxlen=history_size)
        self._logger = logging.getLogger(__name__)

    @property
    def history(self) -> list[Notification]:
        return list(self._history)

    def publish(self, notification: Notification) -> None:
        if notification.type == "danger":
            self._logger.warning("%s (%s)", notification.message, notification.details or "-")
        else:
            self._logger.info("%s", notification.message)
        self._history.append(notification)
        self.published.emit(notification)

    def success(self, message: str = SUCCESS_MESSAGE) -> None:
        self.publish(Notification(type="success", message=message))

    def danger(self, message: str, details: str | None = None) -> None:
        self.publish(Notification(type="danger", message=message, details=details))
