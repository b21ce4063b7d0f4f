from __future__ import annotations

from collections.abc import Callable
from typing import Any

from PySide6.QtCore import QObject, QTimer


class Debouncer(QObject):
    """Runs ``callback`` once input has been quiet for ``delay_ms``.

    Every call restarts the timer and replaces the pending arguments, so only
    the last call of a burst reaches the callback. Nothing is returned to the
    caller.
    """

    def __init__(
        self,
        callback: Callable[..., Any],
        delay_ms: int,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._callback = callback
        self._pending: tuple[tuple[Any, ...], dict[str, Any]] | None = None
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(max(0, delay_ms))
        self._timer.timeout.connect(self._fire)

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def __call__(self, *args: Any, **kwargs: Any) -> None:
        self._pending = (args, kwargs)
        self._timer.start()

    def cancel(self) -> None:
        self._timer.stop()
        self._pending = None

    def flush(self) -> None:
        if self._pending is None:
            return
        self._timer.stop()
        self._fire()

    def _fire(self) -> None:
        pending = self._pending
        self._pending = None
        if pending is None:
            return
        args, kwargs = pending
        self._callback(*args, **kwargs)


_REGISTRY_ATTR = "_debouncers"


def debounced(
    owner: QObject,
    key: str,
    callback: Callable[..., Any],
    delay_ms: int,
) -> Debouncer:
    """Return the one ``Debouncer`` bound to ``(owner, key)``, creating it on first use.

    Rebuilding the wrapper on every refresh would drop its pending timer, so
    callers always go through this lookup instead of constructing their own.
    The registry lives on the owner and dies with it.
    """
    registry: dict[str, Debouncer] | None = getattr(owner, _REGISTRY_ATTR, None)
    if registry is None:
        registry = {}
        setattr(owner, _REGISTRY_ATTR, registry)
    debouncer = registry.get(key)
    if debouncer is None:
        debouncer = Debouncer(callback, delay_ms, parent=owner)
        registry[key] = debouncer
    return debouncer
