"""python-chess backed rules engine."""

from __future__ import annotations

from collections.abc import Iterator

import chess

from puzzler.core.enums import Side
from puzzler.core.errors import PositionError
from puzzler.core.models import AppliedMove, CoordinateMove, MoveSpec
from puzzler.core.notation import parse_coordinate, strip_annotations
from puzzler.rules.interfaces import IRulesEngine

STARTING_FEN = chess.STARTING_FEN


class BoardRules(IRulesEngine):
    """Owns a :class:`chess.Board` and applies moves in any accepted notation.

    Coordinate moves that reach the last rank without a promotion piece are
    promoted to a queen, the way a drag-and-drop board submits them.
    """

    __slots__ = ("_board",)

    def __init__(self, fen: str | None = None) -> None:
        self._board = chess.Board()
        if fen is not None:
            self.load_position(fen)

    @property
    def board(self) -> chess.Board:
        """Read-only access for renderers; do not mutate."""
        return self._board

    # ── IRulesEngine implementation ──────────────────────────────────────

    def load_position(self, fen: str) -> None:
        if fen == "start":
            fen = STARTING_FEN
        try:
            board = chess.Board(fen)
        except ValueError as exc:
            raise PositionError(f"Cannot load FEN {fen!r}: {exc}") from exc
        self._board = board

    def current_position(self) -> str:
        return self._board.fen()

    def current_turn(self) -> Side:
        return Side.WHITE if self._board.turn == chess.WHITE else Side.BLACK

    def apply_move(self, move: MoveSpec) -> AppliedMove | None:
        resolved = self._resolve(move)
        if resolved is None:
            return None
        applied = self._describe(resolved)
        self._board.push(resolved)
        return applied

    def undo_last_move(self) -> bool:
        if not self._board.move_stack:
            return False
        self._board.pop()
        return True

    def legal_moves(self) -> Iterator[AppliedMove]:
        for move in list(self._board.legal_moves):
            yield self._describe(move)

    # ── Internal ─────────────────────────────────────────────────────────

    def _resolve(self, move: MoveSpec) -> chess.Move | None:
        coordinate = parse_coordinate(move)
        if coordinate is not None:
            return self._resolve_coordinate(coordinate)
        if not isinstance(move, str):
            return None

        text = strip_annotations(move)
        if not text:
            return None
        try:
            parsed = self._board.parse_san(text)
        except ValueError:
            return None
        # parse_san accepts "--" as a null move
        return parsed if parsed else None

    def _resolve_coordinate(self, coordinate: CoordinateMove) -> chess.Move | None:
        try:
            move = chess.Move.from_uci(coordinate.uci)
        except ValueError:
            return None
        if move in self._board.legal_moves:
            return move
        if move.promotion is None:
            promoted = chess.Move(move.from_square, move.to_square, chess.QUEEN)
            if promoted in self._board.legal_moves:
                return promoted
        return None

    def _describe(self, move: chess.Move) -> AppliedMove:
        return AppliedMove(
            from_square=chess.square_name(move.from_square),
            to_square=chess.square_name(move.to_square),
            promotion=chess.piece_symbol(move.promotion) if move.promotion else None,
            san=self._board.san(move),
        )
