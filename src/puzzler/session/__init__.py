"""Session layer: the puzzle-attempt state machine, timer and scheduling.

Quick start::

    from puzzler.rules import BoardRules
    from puzzler.session import PuzzleSession, QtScheduler

    session = PuzzleSession(BoardRules(), QtScheduler())
    session.load_puzzle(puzzle)
    # ~1s later, once input opens:
    session.submit_move("e2e4")
"""

from puzzler.session.config import SessionTimings
from puzzler.session.controller import PuzzleSession, SessionEvents
from puzzler.session.interfaces import DeferredAction, IScheduler, ITimer
from puzzler.session.scheduler import QtScheduler
from puzzler.session.state import AttemptSummary, SessionState
from puzzler.session.timer import ElapsedTimer, format_elapsed

__all__ = [
    # Interfaces
    "DeferredAction",
    "IScheduler",
    "ITimer",
    # Concrete
    "AttemptSummary",
    "ElapsedTimer",
    "PuzzleSession",
    "QtScheduler",
    "SessionEvents",
    "SessionState",
    "SessionTimings",
    "format_elapsed",
]
