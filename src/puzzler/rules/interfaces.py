"""Abstract rules-engine capability consumed by the puzzle session.

The session never looks at chess rules itself: legality, turn tracking,
undo and FEN handling are all delegated through :class:`IRulesEngine`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from puzzler.core.enums import Side
    from puzzler.core.models import AppliedMove, MoveSpec


class IRulesEngine(ABC):
    """Interface for the position owner used during an attempt."""

    @abstractmethod
    def load_position(self, fen: str) -> None:
        """Replace the position with *fen*.

        Raises:
            PositionError: if *fen* cannot be loaded.
        """

    @abstractmethod
    def current_position(self) -> str:
        """FEN of the current position."""

    @abstractmethod
    def current_turn(self) -> Side:
        """Side to move."""

    @abstractmethod
    def apply_move(self, move: MoveSpec) -> AppliedMove | None:
        """Play *move* if legal. Returns ``None`` (and changes nothing) otherwise."""

    @abstractmethod
    def undo_last_move(self) -> bool:
        """Take back the last applied move. Returns False if there is none."""

    @abstractmethod
    def legal_moves(self) -> Iterator[AppliedMove]:
        """Lazily yield every legal move of the current position."""
