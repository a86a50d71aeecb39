"""
Room Controller - Join, move and leave as seen from a connection.

The controller ties the SessionStore, the MembershipTracker and the Room
state machine together:
1. Validates the raw client payload
2. Resolves the room and the connection's membership
3. Runs the Room transition
4. Keeps the membership table in step

Every method returns a result object. Nothing here sends messages; the
gateway reads the result and decides who hears about it.

All work for one event happens without awaiting, so under the single
event loop a room is never seen half-updated.
"""

from __future__ import annotations
from typing import Any
import logging

from ..core.result import ErrorCode
from ..core.rules import LegalityCheck, accept_all
from .membership import MembershipTracker
from .room import JoinResult, LeaveResult, MoveResult
from .store import SessionStore

logger = logging.getLogger(__name__)


def _is_present_string(value: Any) -> bool:
    return isinstance(value, str) and value != ""


class RoomController:
    """
    Usage:
        controller = RoomController(store, tracker)

        result = controller.join("conn-1", {"code": code, "uid": "u1"})
        if not result.success:
            print(result.error)
    """

    def __init__(
        self,
        store: SessionStore,
        tracker: MembershipTracker,
        legality: LegalityCheck = accept_all,
    ):
        self.store = store
        self.tracker = tracker
        self.legality = legality

    def create_room(self) -> str:
        return self.store.create_session()

    def join(self, connection_id: str, payload: Any) -> JoinResult:
        """
        Join (or rejoin) a room.

        If the connection was in a different room, it leaves that room
        first; the outcome of that leave is attached as result.previous.
        """
        if not isinstance(payload, dict):
            payload = {}
        code = payload.get("code")
        uid = payload.get("uid")

        if not _is_present_string(code):
            return JoinResult.failure("Room code is required", ErrorCode.INVALID_PAYLOAD)
        if not _is_present_string(uid):
            return JoinResult.failure("User id is required", ErrorCode.INVALID_PAYLOAD)

        room = self.store.lookup(code)
        if not room:
            return JoinResult.failure("Room not found", ErrorCode.ROOM_NOT_FOUND)

        # Refuse before touching the old membership, so a failed join
        # never costs the client its current seat
        if not room.find_player(uid) and room.is_full():
            return JoinResult.failure("Room is full", ErrorCode.ROOM_FULL)

        previous = None
        current = self.tracker.get(connection_id)
        if current and current.code != code:
            self.tracker.release(connection_id)
            previous = self.leave(current.code, current.uid)

        result = room.join(uid, connection_id, now=self.store.clock())
        if not result.success:
            return result

        self.tracker.bind(connection_id, code, uid)
        result.previous = previous

        participant = result.participant
        if result.reconnected:
            logger.info("Player %s reconnected to room %s as %s", uid, code, participant.side.value)
        else:
            logger.info("Player %s joined room %s as %s", uid, code, participant.side.value)
        logger.debug("Room %s now has %d players", code, len(room.players))
        return result

    def move(self, connection_id: str, payload: Any) -> MoveResult:
        """Apply a move on behalf of the connection's seated player."""
        membership = self.tracker.get(connection_id)
        if not membership:
            return MoveResult.failure("You are not joined to a room", ErrorCode.NOT_JOINED)

        if not isinstance(payload, dict):
            payload = {}
        code = payload.get("code")
        move = payload.get("move")

        if not _is_present_string(code):
            return MoveResult.failure("Room code is required", ErrorCode.INVALID_PAYLOAD)
        if membership.code != code:
            return MoveResult.failure("You are not part of this room", ErrorCode.ROOM_MISMATCH)
        # Arrays pass here and fail move validation after the turn check
        if not isinstance(move, (dict, list)):
            return MoveResult.failure("Move payload is required", ErrorCode.INVALID_PAYLOAD)

        room = self.store.lookup(code)
        if not room:
            return MoveResult.failure("Room not found", ErrorCode.ROOM_NOT_FOUND)

        result = room.apply_move(membership.uid, move, now=self.store.clock(), legality=self.legality)
        if result.success:
            logger.info(
                "Room %s: %s moved %d->%d, %s to move",
                code, membership.uid, result.move.from_square, result.move.to_square,
                result.side_to_move.value,
            )
        return result

    def leave(self, code: str, uid: str) -> LeaveResult:
        """Free uid's seat in the room with this code, if both exist."""
        room = self.store.lookup(code)
        if not room:
            return LeaveResult(success=True, removed=False)

        result = room.leave(uid, now=self.store.clock())
        if result.removed:
            logger.info("Player %s left room %s (%d remaining)", uid, code, len(room.players))
        return result

    def disconnect(self, connection_id: str) -> LeaveResult | None:
        """
        Drop the connection's membership and leave its room.

        Returns None when the connection had never joined anything.
        """
        membership = self.tracker.release(connection_id)
        if not membership:
            return None
        return self.leave(membership.code, membership.uid)
