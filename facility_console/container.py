from __future__ import annotations

from dataclasses import dataclass

from PySide6.QtCore import QObject

from facility_console.application.dto.auth_dto import SessionContext
from facility_console.application.resources import RESOURCES
from facility_console.application.security import can_manage_facilities
from facility_console.application.services.resource_service import ResourceService
from facility_console.config import Settings
from facility_console.infrastructure.api.client import ApiClient
from facility_console.ui.controllers.notification_bus import NotificationBus
from facility_console.ui.controllers.resource_list_controller import ResourceListController
from facility_console.ui.widgets.async_task import TaskRunner


@dataclass
class Container:
    settings: Settings
    session: SessionContext
    api_client: ApiClient
    services: dict[str, ResourceService]
    notifications: NotificationBus

    def list_controller(
        self,
        kind: str,
        runner: TaskRunner | None = None,
        parent: QObject | None = None,
    ) -> ResourceListController:
        config = RESOURCES[kind]
        reference_services = {
            source.kind: self.services[source.kind]
            for source in config.references.values()
            if source.kind is not None
        }
        return ResourceListController(
            config,
            self.services[kind],
            self.notifications,
            reference_services=reference_services,
            runner=runner,
            page_size=self.settings.page_size,
            search_delay_ms=self.settings.search_delay_ms,
            can_edit=can_manage_facilities(self.session.role),
            parent=parent,
        )


def build_container(settings: Settings, session: SessionContext) -> Container:
    api_client = ApiClient(
        settings.api_base_url,
        token=session.access_token,
        timeout_seconds=settings.request_timeout_seconds,
        verify=settings.verify_tls,
    )
    services = {
        kind: ResourceService(api_client, config.endpoint, config.entity_model)
        for kind, config in RESOURCES.items()
    }
    return Container(
        settings=settings,
        session=session,
        api_client=api_client,
        services=services,
        notifications=NotificationBus(),
    )
