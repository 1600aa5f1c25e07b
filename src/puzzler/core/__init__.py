"""Core domain layer: puzzle records, move notation, matching and hints.

Pure Python; knows nothing about Qt or the concrete rules engine.

Quick start::

    from puzzler.core import AppliedMove, matches, resolve_hint

    matches(AppliedMove("g1", "f3", None, "Nf3"), "Nf3+")   # True
"""

from puzzler.core.enums import FeedbackKind, HighlightKind, SessionStatus, Side
from puzzler.core.errors import (
    PositionError,
    PuzzleFormatError,
    PuzzlerError,
    StatsStoreError,
)
from puzzler.core.hints import resolve_hint
from puzzler.core.matcher import matches
from puzzler.core.messages import MESSAGES, Messages
from puzzler.core.models import (
    AppliedMove,
    CoordinateMove,
    Feedback,
    Hint,
    MoveSpec,
    Puzzle,
)
from puzzler.core.notation import (
    canonical_keys,
    normalize,
    parse_coordinate,
    strip_annotations,
)

__all__ = [
    # Enums
    "FeedbackKind",
    "HighlightKind",
    "SessionStatus",
    "Side",
    # Errors
    "PositionError",
    "PuzzleFormatError",
    "PuzzlerError",
    "StatsStoreError",
    # Records
    "AppliedMove",
    "CoordinateMove",
    "Feedback",
    "Hint",
    "MoveSpec",
    "Puzzle",
    # Notation / matching
    "canonical_keys",
    "matches",
    "normalize",
    "parse_coordinate",
    "resolve_hint",
    "strip_annotations",
    # Strings
    "MESSAGES",
    "Messages",
]
