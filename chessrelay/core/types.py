"""
Shared chess vocabulary used by the relay.
"""

from __future__ import annotations
from enum import Enum


BOARD_SQUARES = 64
PROMOTION_PIECES = ("Q", "R", "B", "N")


class Side(Enum):
    """The two canonical seats. WHITE always moves first."""
    WHITE = "WHITE"
    BLACK = "BLACK"

    @property
    def other(self) -> Side:
        return Side.BLACK if self is Side.WHITE else Side.WHITE

    @property
    def color(self) -> str:
        """Lowercase name sent in room_joined."""
        return self.value.lower()


# Seat order: the first free entry is handed to a new participant
SEAT_ORDER = (Side.WHITE, Side.BLACK)
