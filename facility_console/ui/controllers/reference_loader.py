from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Literal

from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import Option
from facility_console.application.errors import ReferenceDataUnavailable, RequestFailure
from facility_console.application.resources import name_option
from facility_console.application.services.resource_service import ResourceService
from facility_console.config import REFERENCE_PAGE_SIZE
from facility_console.ui.widgets.async_task import TaskRunner

ReferenceStatus = Literal["loading", "ready", "unavailable"]


@dataclass(frozen=True)
class ReferenceState:
    status: ReferenceStatus
    options: tuple[Option, ...] = ()
    error: str | None = None


def sort_options(options: Iterable[Option]) -> list[Option]:
    return sorted(options, key=lambda option: option.text.casefold())


class ReferenceDataLoader(QObject):
    """Loads dropdown option lists once per screen, outside the list refetch cycle."""

    options_loaded = Signal(str, object)
    load_failed = Signal(str, str)

    def __init__(
        self,
        runner: TaskRunner,
        max_result_count: int = REFERENCE_PAGE_SIZE,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._runner = runner
        self._max_result_count = max_result_count
        self._states: dict[str, ReferenceState] = {}
        self._sources: dict[str, tuple[ResourceService, Callable[[Any], Option]]] = {}
        self._logger = logging.getLogger(__name__)

    def state(self, key: str) -> ReferenceState | None:
        return self._states.get(key)

    def options(self, key: str) -> list[Option]:
        state = self._states.get(key)
        return list(state.options) if state else []

    def is_unavailable(self, key: str) -> bool:
        state = self._states.get(key)
        return state is not None and state.status == "unavailable"

    def set_static(self, key: str, options: Iterable[Option]) -> None:
        state = ReferenceState(status="ready", options=tuple(sort_options(options)))
        self._states[key] = state
        self.options_loaded.emit(key, list(state.options))

    def load(
        self,
        key: str,
        service: ResourceService,
        map_to_option: Callable[[Any], Option] = name_option,
    ) -> None:
        state = self._states.get(key)
        if state is not None and state.status != "unavailable":
            return
        self._sources[key] = (service, map_to_option)
        self._dispatch(key)

    def retry(self, key: str) -> None:
        if key not in self._sources:
            raise KeyError(f"No reference source registered for {key!r}")
        if self.is_unavailable(key):
            self._dispatch(key)

    def _dispatch(self, key: str) -> None:
        service, map_to_option = self._sources[key]
        self._states[key] = ReferenceState(status="loading")
        limit = self._max_result_count

        def _fetch() -> list[Option]:
            return [map_to_option(item) for item in service.list_reference(limit)]

        self._runner(
            _fetch,
            lambda options: self._on_loaded(key, options),
            lambda exc: self._on_failed(key, exc),
        )

    def _on_loaded(self, key: str, options: list[Option]) -> None:
        state = ReferenceState(status="ready", options=tuple(sort_options(options)))
        self._states[key] = state
        self._logger.debug("Reference %s loaded: %s options", key, len(state.options))
        self.options_loaded.emit(key, list(state.options))

    def _on_failed(self, key: str, exc: Exception) -> None:
        error = ReferenceDataUnavailable(key, RequestFailure.from_exception(exc).message)
        self._states[key] = ReferenceState(status="unavailable", error=error.message)
        self._logger.warning("Reference data unavailable: %s", error, exc_info=exc)
        self.load_failed.emit(key, error.message)
