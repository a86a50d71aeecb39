"""
Session Module - Rooms, their registry, and who is connected to them.

Rooms are EPHEMERAL:
- Created on request, in memory only
- Hold at most two seated players
- Reclaimed by a periodic sweep once empty and idle
"""

from .codes import generate_room_code, ROOM_CODE_LENGTH
from .room import Room, RoomStatus, Participant, JoinResult, MoveResult, LeaveResult, MAX_PLAYERS
from .store import SessionStore, run_reclamation, ROOM_RETENTION_SECONDS, RECLAIM_INTERVAL_SECONDS
from .membership import Membership, MembershipTracker
from .controller import RoomController

__all__ = [
    "generate_room_code",
    "ROOM_CODE_LENGTH",
    "Room",
    "RoomStatus",
    "Participant",
    "JoinResult",
    "MoveResult",
    "LeaveResult",
    "MAX_PLAYERS",
    "SessionStore",
    "run_reclamation",
    "ROOM_RETENTION_SECONDS",
    "RECLAIM_INTERVAL_SECONDS",
    "Membership",
    "MembershipTracker",
    "RoomController",
]
