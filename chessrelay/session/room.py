"""
Room - One two-seat game session and its state machine.

STATES (derived from the seat count):
    EMPTY (0 players) -> WAITING (1) -> ACTIVE (2)
    join moves right, leave moves left.

SEATS:
- The first joiner takes WHITE, the second BLACK
- A seat is bound to the player's uid, never to a connection
- Joining again with a seated uid is a reconnection: the connection handle
  is swapped, the seat and turn rights stay exactly as they were
- A third uid is refused while both seats are held

TURNS:
- side_to_move starts at WHITE and flips on every accepted move
- Only the player holding side_to_move may move

VACANCY:
- When the last player leaves, the game state and side_to_move are reset;
  move history is not kept for an empty room
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from ..core.types import Side, SEAT_ORDER
from ..core.move import Move, validate_move_payload
from ..core.state import GameState
from ..core.rules import LegalityCheck, accept_all
from ..core.result import OpResult, ErrorCode


MAX_PLAYERS = len(SEAT_ORDER)


class RoomStatus(Enum):
    """Seat occupancy of a room."""
    EMPTY = "empty"
    WAITING = "waiting"
    ACTIVE = "active"


@dataclass
class Participant:
    """A seated player. connection_id is only used to route messages."""
    uid: str
    side: Side
    connection_id: str


@dataclass
class JoinResult(OpResult):
    room: Room | None = None
    participant: Participant | None = None
    reconnected: bool = False

    # Set when this join filled the second seat
    opponent: Participant | None = None

    # Implicit leave of the room the connection was in before
    previous: LeaveResult | None = None


@dataclass
class MoveResult(OpResult):
    room: Room | None = None
    move: Move | None = None
    side_to_move: Side | None = None
    state: GameState | None = None


@dataclass
class LeaveResult(OpResult):
    room: Room | None = None
    participant: Participant | None = None
    removed: bool = False


@dataclass
class Room:
    """
    A game room, keyed by its code in the SessionStore.

    All mutations go through join(), apply_move() and leave(); each returns
    a result instead of raising.
    """
    code: str
    last_active: float
    players: list[Participant] = field(default_factory=list)
    state: GameState = field(default_factory=GameState.initial)
    side_to_move: Side = Side.WHITE

    @property
    def status(self) -> RoomStatus:
        if not self.players:
            return RoomStatus.EMPTY
        if len(self.players) < MAX_PLAYERS:
            return RoomStatus.WAITING
        return RoomStatus.ACTIVE

    def is_full(self) -> bool:
        return len(self.players) >= MAX_PLAYERS

    def is_empty(self) -> bool:
        return not self.players

    def find_player(self, uid: str) -> Participant | None:
        return next((p for p in self.players if p.uid == uid), None)

    def touch(self, now: float):
        self.last_active = now

    # =========================================================================
    # Transitions
    # =========================================================================

    def join(self, uid: str, connection_id: str, now: float) -> JoinResult:
        """
        Seat a player, or reattach a returning one to a new connection.
        """
        existing = self.find_player(uid)
        if existing:
            existing.connection_id = connection_id
            self.touch(now)
            return JoinResult(success=True, room=self, participant=existing, reconnected=True)

        if self.is_full():
            return JoinResult.failure("Room is full", ErrorCode.ROOM_FULL)

        opponent = self.players[0] if self.players else None
        taken = {p.side for p in self.players}
        side = next(s for s in SEAT_ORDER if s not in taken)

        participant = Participant(uid=uid, side=side, connection_id=connection_id)
        self.players.append(participant)
        self.touch(now)

        return JoinResult(
            success=True,
            room=self,
            participant=participant,
            opponent=opponent if self.is_full() else None,
        )

    def apply_move(
        self,
        uid: str,
        payload: Any,
        now: float,
        legality: LegalityCheck = accept_all,
    ) -> MoveResult:
        """
        Validate and apply a move from the player with this uid.

        Checks run in order: seated, holds the turn, well-formed, legal.
        """
        player = self.find_player(uid)
        if not player:
            return MoveResult.failure("Player not found in room", ErrorCode.PLAYER_NOT_FOUND)

        if player.side is not self.side_to_move:
            return MoveResult.failure("Not your turn", ErrorCode.NOT_YOUR_TURN)

        validation_error = validate_move_payload(payload)
        if validation_error:
            return MoveResult.failure(validation_error, ErrorCode.INVALID_MOVE)

        move = Move.from_payload(payload)
        if not legality(self.state, move):
            return MoveResult.failure("Illegal move", ErrorCode.ILLEGAL_MOVE)

        self.state = self.state.with_move(move)
        self.side_to_move = self.side_to_move.other
        self.touch(now)

        return MoveResult(
            success=True,
            room=self,
            move=move,
            side_to_move=self.side_to_move,
            state=self.state,
        )

    def leave(self, uid: str, now: float) -> LeaveResult:
        """
        Free the seat held by uid, if any.

        An absent uid is not an error; removed is False and nothing changed.
        """
        participant = self.find_player(uid)
        if participant:
            self.players.remove(participant)
            self.touch(now)

        if self.is_empty():
            self._reset()

        return LeaveResult(
            success=True,
            room=self,
            participant=participant,
            removed=participant is not None,
        )

    def _reset(self):
        self.state = GameState.initial()
        self.side_to_move = Side.WHITE
