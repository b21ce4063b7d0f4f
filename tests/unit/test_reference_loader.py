from __future__ import annotations

import pytest

from facility_console.application.dto.facility_dto import RegionDto
from facility_console.application.dto.query_dto import Option
from facility_console.application.errors import RequestFailure
from facility_console.ui.controllers.reference_loader import ReferenceDataLoader, sort_options


class _ReferenceServiceStub:
    def __init__(self, items=None, fail: bool = False) -> None:
        self.items = items or []
        self.fail = fail
        self.calls: list[int] = []

    def list_reference(self, max_result_count: int = 1000):
        self.calls.append(max_result_count)
        if self.fail:
            raise RequestFailure("Could not reach the server")
        return list(self.items)


def test_sort_options_ignores_case() -> None:
    options = [Option(id=1, text="beta"), Option(id=2, text="Alpha"), Option(id=3, text="gamma")]

    assert [option.text for option in sort_options(options)] == ["Alpha", "beta", "gamma"]


def test_load_maps_and_sorts_options(qapp, sync_runner) -> None:
    service = _ReferenceServiceStub([RegionDto(id=2, name="South"), RegionDto(id=1, name="North")])
    loader = ReferenceDataLoader(sync_runner)
    loaded: list[str] = []
    loader.options_loaded.connect(lambda key, _options: loaded.append(key))

    loader.load("region_id", service)

    assert loader.options("region_id") == [Option(id=1, text="North"), Option(id=2, text="South")]
    assert loader.state("region_id").status == "ready"
    assert service.calls == [1000]
    assert loaded == ["region_id"]


def test_load_is_skipped_once_options_are_ready(qapp, sync_runner) -> None:
    service = _ReferenceServiceStub([RegionDto(id=1, name="North")])
    loader = ReferenceDataLoader(sync_runner)

    loader.load("region_id", service)
    loader.load("region_id", service)

    assert len(service.calls) == 1


def test_failure_marks_source_unavailable_with_empty_options(qapp, sync_runner) -> None:
    loader = ReferenceDataLoader(sync_runner)
    failures: list[tuple[str, str]] = []
    loader.load_failed.connect(lambda key, message: failures.append((key, message)))

    loader.load("region_id", _ReferenceServiceStub(fail=True))

    assert loader.is_unavailable("region_id") is True
    assert loader.options("region_id") == []
    assert failures == [("region_id", "Could not reach the server")]


def test_retry_reloads_unavailable_source(qapp, sync_runner) -> None:
    service = _ReferenceServiceStub([RegionDto(id=1, name="North")], fail=True)
    loader = ReferenceDataLoader(sync_runner)
    loader.load("region_id", service)

    service.fail = False
    loader.retry("region_id")

    assert loader.is_unavailable("region_id") is False
    assert loader.options("region_id") == [Option(id=1, text="North")]


def test_retry_of_unknown_source_raises(qapp, sync_runner) -> None:
    loader = ReferenceDataLoader(sync_runner)

    with pytest.raises(KeyError):
        loader.retry("region_id")


def test_static_options_are_ready_immediately(qapp, sync_runner) -> None:
    loader = ReferenceDataLoader(sync_runner)

    loader.set_static("time_zone_iana", [Option(id="b", text="B"), Option(id="a", text="a")])

    assert [option.id for option in loader.options("time_zone_iana")] == ["a", "b"]


def test_pending_load_reports_loading_state(qapp, deferred_runner) -> None:
    loader = ReferenceDataLoader(deferred_runner)

    loader.load("region_id", _ReferenceServiceStub())

    assert loader.state("region_id").status == "loading"
    assert loader.options("region_id") == []
