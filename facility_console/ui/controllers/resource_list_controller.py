from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from PySide6.QtCore import QObject, Signal

from facility_console.application.dto.query_dto import (
    ListLoadState,
    Option,
    PageResult,
    QueryParams,
    page_count,
)
from facility_console.application.errors import RequestFailure
from facility_console.application.resources import ResourceConfig, get_resource
from facility_console.application.services.resource_service import ResourceService
from facility_console.config import PAGE_SIZE, SEARCH_DELAY_MS
from facility_console.ui.controllers.create_form import CreateFormModel
from facility_console.ui.controllers.edit_controller import EditController
from facility_console.ui.controllers.mutation import MutationLifecycleHandler
from facility_console.ui.controllers.notification_bus import NotificationBus
from facility_console.ui.controllers.query_state import QueryStateStore
from facility_console.ui.controllers.reference_loader import ReferenceDataLoader
from facility_console.ui.widgets.async_task import TaskRunner, thread_pool_runner
from facility_console.ui.widgets.debounce import Debouncer, debounced


class ResourceListController(QObject):
    """Paged/sorted/searchable list of one resource with its create and edit flows.

    List requests are never cancelled. Each dispatch gets a token and only
    the response to the most recently issued request is applied, so a slow
    earlier response cannot overwrite a newer one.
    """

    list_changed = Signal()
    form_changed = Signal()
    references_changed = Signal(str)

    def __init__(
        self,
        config: ResourceConfig,
        service: ResourceService,
        notifications: NotificationBus,
        reference_services: Mapping[str, ResourceService] | None = None,
        runner: TaskRunner | None = None,
        page_size: int = PAGE_SIZE,
        search_delay_ms: int = SEARCH_DELAY_MS,
        can_edit: bool = True,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self.config = config
        self._service = service
        self._notifications = notifications
        self._reference_services = dict(reference_services or {})
        self._runner = runner or thread_pool_runner(self)
        self._logger = logging.getLogger(__name__)
        self._mounted = False

        self._page = PageResult()
        self._load_state: ListLoadState = "idle"
        self._load_error: str | None = None
        self._latest_request = 0

        self.query_state = QueryStateStore(config.default_sort, page_size, parent=self)
        self.query_state.changed.connect(self._fetch)

        self.references = ReferenceDataLoader(self._runner, parent=self)
        self.references.options_loaded.connect(lambda key, _options: self.references_changed.emit(key))
        self.references.load_failed.connect(lambda key, _message: self.references_changed.emit(key))

        self.form: CreateFormModel | None = None
        self.create_mutation: MutationLifecycleHandler | None = None
        self.edit: EditController | None = None
        if config.is_mutable and can_edit:
            self.form = CreateFormModel(config, parent=self)
            self.form.changed.connect(self.form_changed)
            self.create_mutation = MutationLifecycleHandler(notifications, self._runner, parent=self)
            self.create_mutation.succeeded.connect(self._on_created)
            self.create_mutation.phase_changed.connect(lambda _phase: self.form_changed.emit())
            if config.draft_from_entity is not None:
                self.edit = EditController(
                    config,
                    service,
                    notifications,
                    self._runner,
                    refresh=self.refresh,
                    options_for=self.references.options,
                    parent=self,
                )

        self._search: Debouncer = debounced(self, "search", self.query_state.set_filter, search_delay_ms)

    # -- list state ---------------------------------------------------------

    @property
    def query(self) -> QueryParams:
        return self.query_state.params

    @property
    def items(self) -> list[Any]:
        return list(self._page.items)

    @property
    def total_count(self) -> int:
        return self._page.total_count

    @property
    def total_pages(self) -> int:
        return page_count(self._page.total_count, self.query.max_result_count)

    @property
    def current_page(self) -> int:
        return self.query_state.page

    @property
    def show_pagination(self) -> bool:
        return self.total_pages > 1

    @property
    def is_fetching(self) -> bool:
        return self._load_state == "loading"

    @property
    def load_state(self) -> ListLoadState:
        return self._load_state

    @property
    def load_error(self) -> str | None:
        return self._load_error

    @property
    def can_edit(self) -> bool:
        return self.form is not None

    @property
    def search_debouncer(self) -> Debouncer:
        return self._search

    def mount(self) -> None:
        if self._mounted:
            return
        self._mounted = True
        if self.form is not None:
            self._load_references()
        self.refresh()

    def refresh(self) -> None:
        self._fetch(self.query_state.params)

    # -- presentation callbacks --------------------------------------------

    def on_sort(self, value: str) -> None:
        self.query_state.set_sorting(value)

    def on_page_change(self, page: int) -> None:
        self.query_state.set_page(page)

    def on_search_change(self, text: str) -> None:
        self._search(text)

    def search_now(self) -> None:
        self._search.flush()

    def reset_query(self) -> None:
        self._search.cancel()
        self.query_state.reset()

    # -- create form --------------------------------------------------------

    @property
    def submit_enabled(self) -> bool:
        if self.form is None or self.create_mutation is None:
            return False
        return not self.create_mutation.is_submitting and self.form.validate_create()

    @property
    def clear_enabled(self) -> bool:
        return self.form is not None and self.form.validate_clear_all()

    def submit(self) -> bool:
        form, mutation = self.form, self.create_mutation
        if form is None or mutation is None or not self.submit_enabled:
            return False
        payload = form.build_payload()
        return mutation.submit(lambda: self._service.create(payload))

    def clear_form(self) -> None:
        if self.form is not None:
            self.form.clear()

    def options(self, field: str) -> list[Option]:
        return self.references.options(field)

    def retry_reference(self, field: str) -> None:
        self.references.retry(field)

    # -- edit modal ---------------------------------------------------------

    @property
    def edit_target(self) -> Any:
        return self.edit.target if self.edit is not None else None

    def open_edit(self, entity: Any) -> bool:
        if self.edit is None:
            return False
        self.edit.open(entity)
        return True

    def close_edit(self) -> None:
        if self.edit is not None:
            self.edit.close()

    # -- internals ----------------------------------------------------------

    def _load_references(self) -> None:
        for field, source in self.config.references.items():
            if source.kind is None:
                self.references.set_static(
                    field, [Option(id=value, text=label) for value, label in source.static_options]
                )
                continue
            service = self._reference_services.get(source.kind)
            if service is None:
                raise KeyError(f"No service registered for reference kind {source.kind!r}")
            self.references.load(field, service, get_resource(source.kind).map_to_option)

    def _fetch(self, params: QueryParams) -> None:
        self._latest_request += 1
        token = self._latest_request
        self._load_state = "loading"
        self.list_changed.emit()
        self._runner(
            lambda: self._service.list(params),
            lambda page: self._on_page(token, page),
            lambda exc: self._on_page_failed(token, exc),
        )

    def _is_stale(self, token: int) -> bool:
        if token == self._latest_request:
            return False
        self._logger.debug(
            "%s: dropping stale list response %s (latest %s)",
            self.config.kind,
            token,
            self._latest_request,
        )
        return True

    def _on_page(self, token: int, page: PageResult) -> None:
        if self._is_stale(token):
            return
        self._page = page
        self._load_state = "loaded"
        self._load_error = None
        self.list_changed.emit()

    def _on_page_failed(self, token: int, exc: Exception) -> None:
        if self._is_stale(token):
            return
        failure = RequestFailure.from_exception(exc)
        # previous items stay visible; load_state tells failure apart from an empty page
        self._load_state = "failed"
        self._load_error = failure.message
        self._notifications.danger(failure.message, failure.details)
        self.list_changed.emit()

    def _on_created(self, _entity: Any) -> None:
        self.refresh()
        self.clear_form()
