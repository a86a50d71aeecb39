"""
Rules - Pluggable move legality.

The relay ships without chess rules. Any callable matching LegalityCheck
can be handed to the RoomController to referee moves:

    def no_pawn_promotions(state: GameState, move: Move) -> bool:
        return move.promo is None

    controller = RoomController(store, tracker, legality=no_pawn_promotions)

The check only runs after the move passed structural validation and the
mover holds the turn.
"""

from __future__ import annotations
from typing import Callable

from .move import Move
from .state import GameState


LegalityCheck = Callable[[GameState, Move], bool]


def accept_all(state: GameState, move: Move) -> bool:
    """Default check: every structurally valid move is legal."""
    return True
