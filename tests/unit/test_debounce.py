from __future__ import annotations

from PySide6.QtCore import QObject
from PySide6.QtTest import QTest

from facility_console.ui.widgets.debounce import Debouncer, debounced


def test_debouncer_fires_once_with_last_arguments(qapp) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 30)

    debouncer("m")
    debouncer("ma")
    debouncer("main")
    assert calls == []
    assert debouncer.pending is True

    QTest.qWait(120)

    assert calls == ["main"]
    assert debouncer.pending is False


def test_each_call_restarts_the_quiet_period(qapp) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 80)

    debouncer("a")
    QTest.qWait(40)
    debouncer("ab")
    QTest.qWait(50)
    assert calls == []

    QTest.qWait(120)
    assert calls == ["ab"]


def test_cancel_drops_pending_call(qapp) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 20)

    debouncer("x")
    debouncer.cancel()
    QTest.qWait(60)

    assert calls == []


def test_flush_runs_pending_call_immediately(qapp) -> None:
    calls: list[str] = []
    debouncer = Debouncer(calls.append, 10_000)

    debouncer("now")
    debouncer.flush()
    debouncer.flush()

    assert calls == ["now"]


def test_debounced_returns_same_instance_per_owner_and_key(qapp) -> None:
    owner = QObject()
    first = debounced(owner, "search", lambda _text: None, 100)
    second = debounced(owner, "search", lambda _text: None, 500)
    other = debounced(owner, "other", lambda _text: None, 100)

    assert first is second
    assert first.delay_ms == 100
    assert other is not first
    assert debounced(QObject(), "search", lambda _text: None, 100) is not first


def test_memoized_debouncer_keeps_pending_call_across_lookups(qapp) -> None:
    owner = QObject()
    calls: list[str] = []

    debounced(owner, "search", calls.append, 30)("north")
    debounced(owner, "search", calls.append, 30)("north east")
    QTest.qWait(100)

    assert calls == ["north east"]
