from __future__ import annotations

import os
import shutil
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any
from uuid import uuid4

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


@pytest.fixture
def tmp_path() -> Generator[Path, None, None]:
    base = Path("pytest_artifacts")
    base.mkdir(parents=True, exist_ok=True)
    path = base / uuid4().hex
    path.mkdir(parents=True, exist_ok=True)
    try:
        yield path
    finally:
        shutil.rmtree(path, ignore_errors=True)


def _run_now(fn: Callable[[], Any], on_success: Callable[[Any], None], on_error: Callable[[Exception], None]) -> None:
    try:
        result = fn()
    except Exception as exc:  # noqa: BLE001
        on_error(exc)
    else:
        on_success(result)


class DeferredRunner:
    """Queues calls until the test resolves them, in any order."""

    def __init__(self) -> None:
        self.calls: list[tuple[Callable[[], Any], Callable[[Any], None], Callable[[Exception], None]]] = []

    def __call__(self, fn, on_success, on_error) -> None:
        self.calls.append((fn, on_success, on_error))

    def resolve(self, index: int, result: Any = None) -> None:
        _fn, on_success, _on_error = self.calls[index]
        on_success(result)

    def reject(self, index: int, exc: Exception) -> None:
        _fn, _on_success, on_error = self.calls[index]
        on_error(exc)

    def run(self, index: int) -> None:
        fn, on_success, on_error = self.calls[index]
        _run_now(fn, on_success, on_error)


@pytest.fixture
def sync_runner():
    return _run_now


@pytest.fixture
def deferred_runner() -> DeferredRunner:
    return DeferredRunner()
