from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from PySide6.QtCore import QObject, Signal

from facility_console.application.errors import RequestFailure
from facility_console.ui.controllers.notification_bus import NotificationBus
from facility_console.ui.widgets.async_task import TaskRunner


class MutationPhase(str, Enum):
    IDLE = "idle"
    SUBMITTING = "submitting"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class MutationOutcome:
    seq: int
    phase: MutationPhase
    result: Any = None
    error: RequestFailure | None = None


class MutationLifecycleHandler(QObject):
    """Runs one create/update/delete call at a time and reacts to its outcome once.

    Idle -> Submitting -> Success | Failure -> Idle. The last outcome stays
    readable in ``last_outcome``; ``react`` only acts on an outcome whose
    sequence number has not been acknowledged yet.
    """

    phase_changed = Signal(str)
    succeeded = Signal(object)
    failed = Signal(object)

    def __init__(
        self,
        notifications: NotificationBus,
        runner: TaskRunner,
        success_message: str | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._notifications = notifications
        self._runner = runner
        self._success_message = success_message
        self._phase = MutationPhase.IDLE
        self._seq = 0
        self._acknowledged = 0
        self._last_outcome: MutationOutcome | None = None
        self._logger = logging.getLogger(__name__)

    @property
    def phase(self) -> MutationPhase:
        return self._phase

    @property
    def is_submitting(self) -> bool:
        return self._phase is MutationPhase.SUBMITTING

    @property
    def last_outcome(self) -> MutationOutcome | None:
        return self._last_outcome

    def submit(self, fn: Callable[[], Any]) -> bool:
        if self.is_submitting:
            return False
        self._seq += 1
        seq = self._seq
        self._set_phase(MutationPhase.SUBMITTING)
        self._runner(
            fn,
            lambda result: self._settle(MutationOutcome(seq, MutationPhase.SUCCESS, result=result)),
            lambda exc: self._settle(self._failure(seq, exc)),
        )
        return True

    def react(self) -> bool:
        outcome = self._last_outcome
        if outcome is None or outcome.seq <= self._acknowledged:
            return False
        self._acknowledged = outcome.seq
        self._set_phase(outcome.phase)
        if outcome.phase is MutationPhase.SUCCESS:
            if self._success_message is None:
                self._notifications.success()
            else:
                self._notifications.success(self._success_message)
            self.succeeded.emit(outcome.result)
        else:
            error = outcome.error or RequestFailure("Request failed")
            self._notifications.danger(error.message, error.details)
            self.failed.emit(error)
        self._set_phase(MutationPhase.IDLE)
        return True

    def _failure(self, seq: int, exc: Exception) -> MutationOutcome:
        if not isinstance(exc, RequestFailure):
            self._logger.error("Unexpected mutation error", exc_info=exc)
        return MutationOutcome(seq, MutationPhase.FAILURE, error=RequestFailure.from_exception(exc))

    def _settle(self, outcome: MutationOutcome) -> None:
        self._last_outcome = outcome
        self.react()

    def _set_phase(self, phase: MutationPhase) -> None:
        if phase is self._phase:
            return
        self._phase = phase
        self.phase_changed.emit(phase.value)
