"""
Move - The transient move record relayed between players.

A move arrives as a loose JSON object from the client:

    {"from": 12, "to": 28, "promo": "Q", "isCastle": false, ...}

validate_move_payload() checks the structure only (squares, promotion
symbol, flag types). Whether the move is legal chess is a separate
question answered by the legality hook in rules.py.

Once valid, Move.from_payload() normalizes the optional fields so the
stored last move always carries every key.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any

from .types import BOARD_SQUARES, PROMOTION_PIECES


# Wire name -> attribute name for the boolean move-kind flags
MOVE_FLAGS = {
    "isCastle": "is_castle",
    "isEnPassant": "is_en_passant",
    "isDoublePawnPush": "is_double_pawn_push",
}


def _as_square(value: Any) -> int | None:
    """Coerce a JSON number to an int square, or None if it is not integral."""
    # bool is an int subclass but never a square
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def validate_move_payload(payload: Any) -> str | None:
    """
    Check that a move payload is structurally sound.

    Returns error message if invalid, None if valid. A JSON array has no
    squares and fails the coordinate check.
    """
    if not isinstance(payload, dict):
        return "Move coordinates must be integers"

    from_square = _as_square(payload.get("from"))
    to_square = _as_square(payload.get("to"))
    if from_square is None or to_square is None:
        return "Move coordinates must be integers"

    if not (0 <= from_square < BOARD_SQUARES and 0 <= to_square < BOARD_SQUARES):
        return f"Squares must be between 0 and {BOARD_SQUARES - 1}"

    if from_square == to_square:
        return "From and to squares must differ"

    promo = payload.get("promo")
    if promo is not None and promo not in PROMOTION_PIECES:
        return "Promotion piece must be Q, R, B, or N"

    # Only a missing flag is skipped; null is not a boolean
    for wire_name in MOVE_FLAGS:
        if wire_name in payload and not isinstance(payload[wire_name], bool):
            return f"{wire_name} must be boolean"

    return None


@dataclass(frozen=True)
class Move:
    """A normalized move. Optional fields are always filled in."""
    from_square: int
    to_square: int
    promo: str | None = None
    is_castle: bool = False
    is_en_passant: bool = False
    is_double_pawn_push: bool = False

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> Move:
        """Build a Move from a payload that already passed validation."""
        return cls(
            from_square=_as_square(payload["from"]),
            to_square=_as_square(payload["to"]),
            promo=payload.get("promo") or None,
            **{attr: bool(payload.get(wire_name) or False) for wire_name, attr in MOVE_FLAGS.items()},
        )
