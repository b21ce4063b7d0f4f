from __future__ import annotations

import logging

from PySide6.QtWidgets import QHBoxLayout, QLabel, QMainWindow, QTabWidget, QVBoxLayout, QWidget

from facility_console.application.dto.query_dto import Notification
from facility_console.application.resources import AUDIT_LOG, OFFICE, REGION, ROOM
from facility_console.application.security import can_view_audit_log, can_view_facilities
from facility_console.container import Container
from facility_console.ui.controllers.resource_list_controller import ResourceListController
from facility_console.ui.resources.resource_list_view import ResourceListView
from facility_console.ui.widgets.notifications import show_notification

_FACILITY_TABS = (OFFICE, REGION, ROOM)


class MainWindow(QMainWindow):
    """Tabbed admin console; each tab owns one list controller, mounted on first show."""

    def __init__(self, container: Container, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.container = container
        self._logger = logging.getLogger(__name__)
        self.controllers: dict[str, ResourceListController] = {}
        self.views: dict[str, ResourceListView] = {}
        self.setWindowTitle("Facility Console")

        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        header = QHBoxLayout()
        header.setContentsMargins(12, 8, 12, 0)
        header.addStretch()
        session = container.session
        self.user_label = QLabel(f"{session.login} ({session.role})")
        self.user_label.setObjectName("muted")
        header.addWidget(self.user_label)
        layout.addLayout(header)

        self.tabs = QTabWidget()
        layout.addWidget(self.tabs, 1)
        self.setCentralWidget(central)

        kinds: list[str] = []
        if can_view_facilities(session.role):
            kinds.extend(_FACILITY_TABS)
        if can_view_audit_log(session.role):
            kinds.append(AUDIT_LOG)
        for kind in kinds:
            controller = container.list_controller(kind, parent=self)
            view = ResourceListView(controller)
            self.controllers[kind] = controller
            self.views[kind] = view
            self.tabs.addTab(view, controller.config.title)

        container.notifications.published.connect(self._on_notification)
        self.tabs.currentChanged.connect(self._mount_tab)
        if self.tabs.count():
            self._mount_tab(self.tabs.currentIndex())

    def _mount_tab(self, index: int) -> None:
        view = self.tabs.widget(index)
        if isinstance(view, ResourceListView):
            view.controller.mount()

    def _on_notification(self, notification: Notification) -> None:
        show_notification(self, notification)
