from __future__ import annotations

from datetime import time

from PySide6.QtTest import QTest

from facility_console.application.dto.facility_dto import AuditLogDto, RegionDto, RoomDto
from facility_console.application.dto.query_dto import Option, PageResult, QueryParams
from facility_console.application.errors import RequestFailure
from facility_console.application.resources import AUDIT_LOG, HEALTH_CENTER, OFFICE, REGION, ROOM, get_resource
from facility_console.ui.controllers.notification_bus import NotificationBus
from facility_console.ui.controllers.resource_list_controller import ResourceListController
from facility_console.ui.widgets.debounce import debounced


class _ServiceStub:
    def __init__(self, pages=None, references=None) -> None:
        self.pages = list(pages or [])
        self.references = list(references or [])
        self.list_calls: list[QueryParams] = []
        self.created: list[dict] = []
        self.fail_list: RequestFailure | None = None
        self.fail_create: RequestFailure | None = None
        self.fail_update: RequestFailure | None = None
        self.updated: list[tuple[object, dict]] = []

    def list(self, query: QueryParams) -> PageResult:
        self.list_calls.append(query)
        if self.fail_list is not None:
            raise self.fail_list
        if self.pages:
            return self.pages.pop(0)
        return PageResult()

    def list_reference(self, max_result_count: int = 1000):
        return list(self.references)

    def create(self, payload: dict):
        if self.fail_create is not None:
            raise self.fail_create
        self.created.append(payload)
        return payload

    def get(self, entity_id):
        return RoomDto(id=entity_id, name=f"Room {entity_id}")

    def update(self, entity_id, payload: dict):
        if self.fail_update is not None:
            raise self.fail_update
        self.updated.append((entity_id, payload))
        return payload


def _rooms(count: int, total: int | None = None) -> PageResult:
    return PageResult(
        items=[RoomDto(id=i, name=f"Room {i}") for i in range(count)],
        total_count=total if total is not None else count,
    )


def _room_controller(runner, service=None, **kwargs) -> tuple[ResourceListController, _ServiceStub, NotificationBus]:
    service = service or _ServiceStub()
    bus = NotificationBus()
    controller = ResourceListController(get_resource(ROOM), service, bus, runner=runner, search_delay_ms=20, **kwargs)
    return controller, service, bus


def test_mount_fetches_first_page_once(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner, _ServiceStub([_rooms(10, total=25)]))

    controller.mount()
    controller.mount()

    assert service.list_calls == [QueryParams(sorting="Name ASC", max_result_count=10)]
    assert controller.load_state == "loaded"
    assert controller.total_count == 25
    assert controller.total_pages == 3
    assert controller.show_pagination is True
    assert len(controller.items) == 10


def test_single_page_hides_pagination(qapp, sync_runner) -> None:
    controller, _service, _bus = _room_controller(sync_runner, _ServiceStub([_rooms(4)]))

    controller.mount()

    assert controller.total_pages == 1
    assert controller.show_pagination is False


def test_page_change_and_sort_refetch_with_new_params(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner)
    controller.mount()

    controller.on_page_change(2)
    controller.on_sort("Name DESC")

    assert [(q.skip_count, q.sorting) for q in service.list_calls] == [
        (0, "Name ASC"),
        (10, "Name ASC"),
        (10, "Name DESC"),
    ]
    assert controller.current_page == 2


def test_search_is_debounced_and_resets_page(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner)
    controller.mount()
    controller.on_page_change(3)

    controller.on_search_change("n")
    controller.on_search_change("no")
    controller.on_search_change("north")
    assert len(service.list_calls) == 2

    QTest.qWait(100)

    assert len(service.list_calls) == 3
    assert service.list_calls[-1].filter == "north"
    assert service.list_calls[-1].skip_count == 0
    assert debounced(controller, "search", lambda _text: None, 5) is controller.search_debouncer


def test_stale_response_is_discarded(qapp, deferred_runner) -> None:
    controller, _service, _bus = _room_controller(deferred_runner)
    controller.mount()
    controller.on_page_change(2)
    assert len(deferred_runner.calls) == 2

    newer = PageResult(items=[RoomDto(id=20, name="Page two")], total_count=11)
    older = PageResult(items=[RoomDto(id=1, name="Page one")], total_count=11)
    deferred_runner.resolve(1, newer)
    deferred_runner.resolve(0, older)

    assert [room.name for room in controller.items] == ["Page two"]
    assert controller.load_state == "loaded"


def test_stale_failure_is_ignored(qapp, deferred_runner) -> None:
    controller, _service, bus = _room_controller(deferred_runner)
    controller.mount()
    controller.on_page_change(2)

    deferred_runner.resolve(1, _rooms(1, total=11))
    deferred_runner.reject(0, RequestFailure("Could not reach the server"))

    assert controller.load_state == "loaded"
    assert bus.history == []


def test_failed_load_is_distinct_from_empty_result(qapp, sync_runner) -> None:
    service = _ServiceStub([_rooms(3)])
    controller, _service, bus = _room_controller(sync_runner, service)
    controller.mount()

    service.fail_list = RequestFailure("Could not reach the server")
    controller.refresh()

    assert controller.load_state == "failed"
    assert controller.load_error == "Could not reach the server"
    assert len(controller.items) == 3
    assert bus.history[-1].type == "danger"

    service.fail_list = None
    controller.refresh()
    assert controller.load_state == "loaded"
    assert controller.items == []
    assert controller.load_error is None


def test_is_fetching_while_request_pending(qapp, deferred_runner) -> None:
    controller, _service, _bus = _room_controller(deferred_runner)

    controller.mount()
    assert controller.is_fetching is True

    deferred_runner.resolve(0, _rooms(1))
    assert controller.is_fetching is False


def test_create_success_refreshes_and_clears_draft(qapp, sync_runner) -> None:
    controller, service, bus = _room_controller(sync_runner)
    controller.mount()
    controller.on_page_change(2)
    controller.form.set_name("Lab 1")
    assert controller.submit_enabled is True

    assert controller.submit() is True

    assert service.created == [{"name": "Lab 1"}]
    assert service.list_calls[-1] == service.list_calls[-2]
    assert controller.form.draft.name == ""
    assert controller.clear_enabled is False
    assert bus.history[-1].message == "Your changes were saved"


def test_create_failure_keeps_draft(qapp, sync_runner) -> None:
    service = _ServiceStub()
    service.fail_create = RequestFailure("Name already exists")
    controller, _service, bus = _room_controller(sync_runner, service)
    controller.mount()
    controller.form.set_name("Lab 1")

    controller.submit()

    assert controller.form.draft.name == "Lab 1"
    assert len(service.list_calls) == 1
    assert bus.history[-1].type == "danger"
    assert controller.submit_enabled is True


def test_submit_is_blocked_while_create_pending(qapp, deferred_runner) -> None:
    controller, _service, _bus = _room_controller(deferred_runner)
    controller.form.set_name("Lab 1")

    assert controller.submit() is True
    assert controller.submit_enabled is False
    assert controller.submit() is False
    assert len(deferred_runner.calls) == 1


def test_incomplete_draft_is_not_submitted(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner)

    assert controller.submit() is False
    assert service.created == []


def test_support_role_gets_no_create_or_edit(qapp, sync_runner) -> None:
    controller, _service, _bus = _room_controller(sync_runner, can_edit=False)

    assert controller.can_edit is False
    assert controller.form is None
    assert controller.edit is None
    assert controller.submit() is False
    assert controller.open_edit(RoomDto(id=1, name="x")) is False
    assert controller.submit_enabled is False
    assert controller.clear_enabled is False


def test_audit_log_is_read_only_and_sorted_by_date(qapp, sync_runner) -> None:
    service = _ServiceStub([PageResult(items=[AuditLogDto(id=1, user_name="admin")], total_count=1)])
    controller = ResourceListController(get_resource(AUDIT_LOG), service, NotificationBus(), runner=sync_runner)

    controller.mount()

    assert controller.can_edit is False
    assert service.list_calls[0].sorting == "ChangeDate DESC"


def test_office_loads_reference_options_on_mount(qapp, sync_runner) -> None:
    regions = _ServiceStub(references=[RegionDto(id=2, name="South"), RegionDto(id=1, name="North")])
    rooms = _ServiceStub(references=[RoomDto(id=5, name="Lab")])
    controller = ResourceListController(
        get_resource(OFFICE),
        _ServiceStub(),
        NotificationBus(),
        reference_services={REGION: regions, ROOM: rooms},
        runner=sync_runner,
    )

    controller.mount()

    assert [o.text for o in controller.options("region_id")] == ["North", "South"]
    assert controller.options("room_ids") == [Option(id=5, text="Lab")]
    assert len(controller.options("time_zone_iana")) == 19


def test_unavailable_reference_can_be_retried(qapp, sync_runner) -> None:
    class _FailingOnce(_ServiceStub):
        def __init__(self) -> None:
            super().__init__(references=[RegionDto(id=9, name="HC")])
            self.failed = False

        def list_reference(self, max_result_count: int = 1000):
            if not self.failed:
                self.failed = True
                raise RequestFailure("Could not reach the server")
            return super().list_reference(max_result_count)

    centers = _FailingOnce()
    controller = ResourceListController(
        get_resource(REGION),
        _ServiceStub(),
        NotificationBus(),
        reference_services={HEALTH_CENTER: centers},
        runner=sync_runner,
    )
    changed: list[str] = []
    controller.references_changed.connect(changed.append)

    controller.mount()
    assert controller.references.is_unavailable("health_center_id") is True
    assert controller.options("health_center_id") == []

    controller.retry_reference("health_center_id")

    assert controller.options("health_center_id") == [Option(id=9, text="HC")]
    assert changed == ["health_center_id", "health_center_id"]


def test_office_draft_hours_reach_create_payload(qapp, sync_runner) -> None:
    service = _ServiceStub()
    controller = ResourceListController(
        get_resource(OFFICE),
        service,
        NotificationBus(),
        reference_services={REGION: _ServiceStub(), ROOM: _ServiceStub()},
        runner=sync_runner,
    )
    form = controller.form
    form.set_name("Main Street")
    form.select("region_id", [Option(id=1, text="North")])
    form.select("time_zone_iana", [Option(id="America/Denver", text="Mountain")])
    form.set_time("begin_time", time(9, 0))

    controller.submit()

    assert service.created[0]["beginTime"] == 0
    assert service.created[0]["endTime"] == 0


def test_mutable_resources_get_an_edit_controller(qapp, sync_runner) -> None:
    controller, _service, _bus = _room_controller(sync_runner)

    assert controller.edit is not None
    assert controller.edit_target is None
    controller.close_edit()
    assert controller.edit_target is None


def test_search_text_is_sent_as_typed(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner)
    controller.mount()

    controller.on_search_change("Main ")
    controller.search_now()

    assert service.list_calls[-1].filter == "Main "
    assert controller.search_debouncer.pending is False


def test_reset_query_drops_pending_search_and_restores_defaults(qapp, sync_runner) -> None:
    controller, service, _bus = _room_controller(sync_runner)
    controller.mount()
    controller.on_page_change(2)
    controller.on_sort("Name DESC")
    controller.on_search_change("lab")

    controller.reset_query()
    QTest.qWait(60)

    assert controller.query == QueryParams(sorting="Name ASC", max_result_count=10)
    assert service.list_calls[-1] == controller.query
    assert all(call.filter == "" for call in service.list_calls)


def test_edit_save_refetches_with_current_list_params(qapp, sync_runner) -> None:
    controller, service, bus = _room_controller(sync_runner)
    controller.mount()
    controller.on_page_change(3)
    controller.on_sort("Name DESC")

    assert controller.open_edit(RoomDto(id=4, name="Room 4")) is True
    controller.edit.form.set_name("Room 4b")
    assert controller.edit.submit() is True

    assert service.updated == [(4, {"name": "Room 4b"})]
    assert controller.edit_target is None
    assert service.list_calls[-1] == controller.query
    assert (controller.query.skip_count, controller.query.sorting) == (20, "Name DESC")
    assert bus.history[-1].type == "success"


def test_edit_failure_keeps_modal_open_with_draft(qapp, sync_runner) -> None:
    service = _ServiceStub()
    service.fail_update = RequestFailure("Name already exists")
    controller, _service, bus = _room_controller(sync_runner, service)
    controller.mount()
    calls_before = len(service.list_calls)

    controller.open_edit(RoomDto(id=4, name="Room 4"))
    controller.edit.form.set_name("Room 5")
    controller.edit.submit()

    assert controller.edit.is_open is True
    assert controller.edit.form.draft.name == "Room 5"
    assert len(service.list_calls) == calls_before
    assert bus.history[-1].message == "Name already exists"
