"""Qt-backed deferred actions for the main UI thread."""

from __future__ import annotations

from collections.abc import Callable
from functools import partial

from PyQt6.QtCore import QObject, QTimer

from puzzler.session.interfaces import DeferredAction, IScheduler


class QtScheduler(IScheduler):
    """One single-shot :class:`QTimer` per :class:`DeferredAction`.

    Scheduling an action that is already pending restarts its timer with
    the new callback, so a kind never has two pending callbacks.
    """

    __slots__ = ("_timers", "_callbacks")

    def __init__(self, parent: QObject | None = None) -> None:
        self._timers: dict[DeferredAction, QTimer] = {}
        self._callbacks: dict[DeferredAction, Callable[[], None]] = {}
        for action in DeferredAction:
            timer = QTimer(parent)
            timer.setSingleShot(True)
            timer.timeout.connect(partial(self._fire, action))
            self._timers[action] = timer

    def schedule(
        self, action: DeferredAction, delay_ms: int, callback: Callable[[], None]
    ) -> None:
        self._callbacks[action] = callback
        self._timers[action].start(max(0, delay_ms))

    def cancel(self, action: DeferredAction) -> None:
        self._timers[action].stop()
        self._callbacks.pop(action, None)

    def cancel_all(self) -> None:
        for action in DeferredAction:
            self.cancel(action)

    def is_pending(self, action: DeferredAction) -> bool:
        return self._timers[action].isActive()

    def _fire(self, action: DeferredAction) -> None:
        callback = self._callbacks.pop(action, None)
        if callback is not None:
            callback()
