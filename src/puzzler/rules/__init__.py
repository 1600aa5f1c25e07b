"""Rules-engine capability and its python-chess implementation."""

from puzzler.rules.board_rules import STARTING_FEN, BoardRules
from puzzler.rules.interfaces import IRulesEngine

__all__ = [
    "BoardRules",
    "IRulesEngine",
    "STARTING_FEN",
]
