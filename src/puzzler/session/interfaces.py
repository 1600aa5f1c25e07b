"""Abstract interfaces for the session layer.

Follows Dependency Inversion: the high-level PuzzleSession depends on
these ABCs, not on Qt timers or a wall clock.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from enum import IntEnum, auto


class DeferredAction(IntEnum):
    """Kinds of timed follow-ups an attempt may have pending.

    At most one action of each kind is pending at any time.
    """

    INIT_GRACE = auto()  # marks initialization complete
    ENABLE_INPUT = auto()  # opens the move-acceptance window
    AUTO_PLAY = auto()  # scripted opponent reply
    ERROR_CLEAR = auto()  # clears incorrect-move feedback and highlights
    HINT_CLEAR = auto()  # clears hint highlight and message


class IScheduler(ABC):
    """Single-threaded, cancellable delayed callbacks keyed by kind."""

    @abstractmethod
    def schedule(
        self, action: DeferredAction, delay_ms: int, callback: Callable[[], None]
    ) -> None:
        """Run *callback* after *delay_ms*, replacing any pending *action*."""

    @abstractmethod
    def cancel(self, action: DeferredAction) -> None:
        """Drop the pending *action*, if any."""

    @abstractmethod
    def cancel_all(self) -> None:
        """Drop every pending action."""

    @abstractmethod
    def is_pending(self, action: DeferredAction) -> bool:
        """Is *action* waiting to fire?"""


class ITimer(ABC):
    """Interface for the attempt stopwatch."""

    @abstractmethod
    def start(self) -> None:
        """Resume counting (no-op if already running)."""

    @abstractmethod
    def stop(self) -> None:
        """Pause counting, keeping the elapsed time."""

    @abstractmethod
    def reset(self) -> None:
        """Stop and set elapsed time to zero."""

    @abstractmethod
    def restart(self) -> None:
        """Reset, then start."""

    @property
    @abstractmethod
    def elapsed_seconds(self) -> int:
        """Whole seconds counted so far."""

    @property
    @abstractmethod
    def is_running(self) -> bool: ...
