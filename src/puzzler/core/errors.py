"""Exception hierarchy shared by all puzzler layers."""

from __future__ import annotations


class PuzzlerError(Exception):
    """Base class for every error raised by puzzler."""


class PuzzleFormatError(PuzzlerError):
    """Raised when a puzzle record is missing fields or violates its invariants."""


class PositionError(PuzzlerError):
    """Raised when the rules engine cannot load a position."""


class StatsStoreError(PuzzlerError):
    """Raised when user statistics cannot be read or written."""
