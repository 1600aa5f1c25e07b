"""Core enumerations for the puzzle domain."""

from __future__ import annotations

from enum import IntEnum, StrEnum, auto


class Side(StrEnum):
    """Side color, spelled the way puzzle records spell it."""

    WHITE = "white"
    BLACK = "black"

    @property
    def opposite(self) -> Side:
        return Side.BLACK if self is Side.WHITE else Side.WHITE


class SessionStatus(IntEnum):
    """Finite-state-machine states for one puzzle attempt."""

    INITIALIZING = auto()
    AWAITING_INPUT = auto()
    VALIDATING = auto()
    AUTO_PLAYING = auto()
    COMPLETED = auto()
    FAILED = auto()

    @property
    def is_terminal(self) -> bool:
        return self in (SessionStatus.COMPLETED, SessionStatus.FAILED)


class FeedbackKind(StrEnum):
    """Tone of a feedback message shown to the user."""

    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class HighlightKind(StrEnum):
    """Reason a board square is highlighted."""

    CORRECT = "correct"
    INCORRECT = "incorrect"
    HINT = "hint"
