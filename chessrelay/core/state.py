"""
Game State - What the relay remembers about the game itself.

The relay is not a chess engine, so this is deliberately thin:
- The last applied move (normalized)
- An opaque board token, "startpos" until something replaces it
"""

from __future__ import annotations
from dataclasses import dataclass

from .move import Move


INITIAL_BOARD = "startpos"


@dataclass
class GameState:
    """Per-room game record."""
    last_move: Move | None = None
    board_fen: str = INITIAL_BOARD

    @classmethod
    def initial(cls) -> GameState:
        return cls()

    def with_move(self, move: Move) -> GameState:
        return GameState(last_move=move, board_fen=self.board_fen)
