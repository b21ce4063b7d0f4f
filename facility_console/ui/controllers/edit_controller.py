from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel
from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import Option
from facility_console.application.errors import RequestFailure
from facility_console.application.resources import ResourceConfig
from facility_console.application.services.resource_service import ResourceService
from facility_console.ui.controllers.create_form import CreateFormModel
from facility_console.ui.controllers.mutation import MutationLifecycleHandler
from facility_console.ui.controllers.notification_bus import NotificationBus
from facility_console.ui.widgets.async_task import TaskRunner

OptionsLookup = Callable[[str], list[Option]]


class EditController(QObject):
    """Edit modal state for one existing entity.

    Mirrors the create flow, but scoped to the target's id. Saving or
    deleting calls ``refresh`` so the owning list reloads with its own
    query params.
    """

    target_changed = Signal(object)
    form_changed = Signal()

    def __init__(
        self,
        config: ResourceConfig,
        service: ResourceService,
        notifications: NotificationBus,
        runner: TaskRunner,
        refresh: Callable[[], None],
        options_for: OptionsLookup | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        if config.draft_from_entity is None:
            raise TypeError(f"{config.kind} entities cannot be edited")
        self._config = config
        self._draft_from_entity = config.draft_from_entity
        self._service = service
        self._notifications = notifications
        self._runner = runner
        self._refresh = refresh
        self._options_for = options_for
        self._target: Any = None
        self._loading = False
        self._load_token = 0
        self._submit_token = 0
        self._logger = logging.getLogger(__name__)

        self.form = CreateFormModel(config, parent=self)
        self.form.changed.connect(self.form_changed)
        self.mutation = MutationLifecycleHandler(notifications, runner, parent=self)
        self.mutation.succeeded.connect(self._on_saved)
        self.mutation.phase_changed.connect(lambda _phase: self.form_changed.emit())

    @property
    def target(self) -> Any:
        return self._target

    @property
    def is_open(self) -> bool:
        return self._target is not None

    @property
    def is_loading(self) -> bool:
        return self._loading

    @property
    def submit_enabled(self) -> bool:
        return (
            self.is_open
            and not self._loading
            and not self.mutation.is_submitting
            and self.form.validate_create()
        )

    def open(self, entity: Any) -> None:
        self._target = entity
        self._load_token += 1
        token = self._load_token
        self._seed(entity)
        self._loading = True
        self.target_changed.emit(entity)
        entity_id = entity.id
        self._runner(
            lambda: self._service.get(entity_id),
            lambda fresh: self._on_loaded(token, fresh),
            lambda exc: self._on_load_failed(token, exc),
        )

    def close(self) -> None:
        was_open = self.is_open
        self._target = None
        self._loading = False
        self._load_token += 1
        self.form.clear()
        if was_open:
            self.target_changed.emit(None)

    def submit(self) -> bool:
        if not self.submit_enabled:
            return False
        payload = self.form.build_payload()
        entity_id = self._target.id
        self._submit_token = self._load_token
        return self.mutation.submit(lambda: self._service.update(entity_id, payload))

    def delete(self) -> bool:
        if not self.is_open or self.mutation.is_submitting:
            return False
        entity_id = self._target.id
        self._submit_token = self._load_token
        return self.mutation.submit(lambda: self._service.delete(entity_id))

    def _seed(self, entity: Any) -> None:
        draft = self._draft_from_entity(entity)
        self.form.load(draft, self._selections_for(draft))

    def _selections_for(self, draft: BaseModel) -> dict[str, list[Option]]:
        if self._options_for is None:
            return {}
        selections: dict[str, list[Option]] = {}
        for name, source in self._config.references.items():
            value = getattr(draft, name)
            wanted = set(value) if source.multi else {value}
            selections[name] = [option for option in self._options_for(name) if option.id in wanted]
        return selections

    def _on_loaded(self, token: int, fresh: Any) -> None:
        if token != self._load_token:
            return
        self._loading = False
        self._target = fresh
        self._seed(fresh)
        self.target_changed.emit(fresh)

    def _on_load_failed(self, token: int, exc: Exception) -> None:
        if token != self._load_token:
            return
        failure = RequestFailure.from_exception(exc)
        self._logger.warning("Could not load %s for editing: %s", self._config.singular, failure.message)
        self._notifications.danger(failure.message, failure.details)
        self.close()

    def _on_saved(self, _result: Any) -> None:
        # the modal may have moved on to another entity while the save was in flight
        if self._submit_token == self._load_token:
            self.close()
        self._refresh()
