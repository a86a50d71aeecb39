"""
Core - Value types shared by the session layer and the API.

Nothing in here holds process state:
- Side and board constants
- Move validation and normalization
- GameState (last move + opaque board token)
- Pluggable legality check
- Operation results and error codes
"""

from .types import Side, SEAT_ORDER, BOARD_SQUARES, PROMOTION_PIECES
from .move import Move, validate_move_payload
from .state import GameState, INITIAL_BOARD
from .rules import LegalityCheck, accept_all
from .result import OpResult, ErrorCode, ErrorKind

__all__ = [
    "Side",
    "SEAT_ORDER",
    "BOARD_SQUARES",
    "PROMOTION_PIECES",
    "Move",
    "validate_move_payload",
    "GameState",
    "INITIAL_BOARD",
    "LegalityCheck",
    "accept_all",
    "OpResult",
    "ErrorCode",
    "ErrorKind",
]
