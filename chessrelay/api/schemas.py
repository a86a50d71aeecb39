"""
Pydantic Schemas for API - The wire contract with the browser client.

HTTP:
    POST /room                 -> CreateRoomResponse
    GET  /health               -> HealthResponse

WebSocket frames are JSON envelopes in both directions:

    {"type": "<event>", "payload": {...}}

Client events: join_room, move, ping
Server events: room_joined, opponent_joined, room_state, move_applied,
               error_msg, pong

Field names on the wire are camelCase (sideToMove, lastMove, isCastle...);
models use snake_case with aliases, so always dump with by_alias=True.
"""

from __future__ import annotations
from enum import Enum
from typing import Any, Optional
from pydantic import BaseModel, Field

from ..core.move import Move
from ..core.state import GameState
from ..session.room import Room, Participant, MoveResult


# =============================================================================
# Enums
# =============================================================================

class ClientEvent(str, Enum):
    """Events a client may send."""
    JOIN_ROOM = "join_room"
    MOVE = "move"
    PING = "ping"


class ServerEvent(str, Enum):
    """Events the server sends."""
    ROOM_JOINED = "room_joined"
    OPPONENT_JOINED = "opponent_joined"
    ROOM_STATE = "room_state"
    MOVE_APPLIED = "move_applied"
    ERROR_MSG = "error_msg"
    PONG = "pong"


class SideName(str, Enum):
    """Side as used in room_state and move_applied."""
    WHITE = "WHITE"
    BLACK = "BLACK"


class ColorName(str, Enum):
    """Side as used in room_joined."""
    WHITE = "white"
    BLACK = "black"


# =============================================================================
# Shared Models
# =============================================================================

class WireModel(BaseModel):
    """Base for models with camelCase wire aliases."""
    model_config = {"populate_by_name": True}

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class MoveInfo(WireModel):
    """A normalized move."""
    from_square: int = Field(alias="from", ge=0, le=63)
    to_square: int = Field(alias="to", ge=0, le=63)
    promo: Optional[str] = Field(default=None, description="Q, R, B or N")
    is_castle: bool = Field(default=False, alias="isCastle")
    is_en_passant: bool = Field(default=False, alias="isEnPassant")
    is_double_pawn_push: bool = Field(default=False, alias="isDoublePawnPush")

    @classmethod
    def from_move(cls, move: Move) -> MoveInfo:
        return cls(
            from_square=move.from_square,
            to_square=move.to_square,
            promo=move.promo,
            is_castle=move.is_castle,
            is_en_passant=move.is_en_passant,
            is_double_pawn_push=move.is_double_pawn_push,
        )


class GameStateInfo(WireModel):
    """Last move plus the opaque board token."""
    last_move: Optional[MoveInfo] = Field(default=None, alias="lastMove")
    board_fen: str = Field(alias="boardFEN")

    @classmethod
    def from_state(cls, state: GameState) -> GameStateInfo:
        return cls(
            last_move=MoveInfo.from_move(state.last_move) if state.last_move else None,
            board_fen=state.board_fen,
        )


class PlayerInfo(WireModel):
    """A seated player as shown to everyone in the room."""
    uid: str
    color: SideName

    @classmethod
    def from_participant(cls, participant: Participant) -> PlayerInfo:
        return cls(uid=participant.uid, color=SideName(participant.side.value))


# =============================================================================
# Server -> Client payloads
# =============================================================================

class RoomJoinedMessage(WireModel):
    """Sent to the joining connection only."""
    code: str
    color: ColorName


class OpponentJoinedMessage(WireModel):
    """Sent to the first player when the second seat fills. Empty."""


class RoomStateMessage(WireModel):
    """Full room snapshot, broadcast to the room."""
    code: str
    players: list[PlayerInfo] = Field(default_factory=list)
    side_to_move: SideName = Field(alias="sideToMove")
    state: GameStateInfo

    @classmethod
    def from_room(cls, room: Room) -> RoomStateMessage:
        return cls(
            code=room.code,
            players=[PlayerInfo.from_participant(p) for p in room.players],
            side_to_move=SideName(room.side_to_move.value),
            state=GameStateInfo.from_state(room.state),
        )


class MoveAppliedMessage(WireModel):
    """Broadcast to the room after an accepted move."""
    move: MoveInfo
    side_to_move: SideName = Field(alias="sideToMove")
    state: GameStateInfo

    @classmethod
    def from_result(cls, result: MoveResult) -> MoveAppliedMessage:
        return cls(
            move=MoveInfo.from_move(result.move),
            side_to_move=SideName(result.side_to_move.value),
            state=GameStateInfo.from_state(result.state),
        )


class ErrorMessage(WireModel):
    """Sent to the connection whose event failed."""
    message: str


# =============================================================================
# Envelopes
# =============================================================================

class ClientMessage(BaseModel):
    """Inbound frame. Payload contents are validated by the controller."""
    type: str
    payload: Any = None


class ServerMessage(BaseModel):
    """Outbound frame."""
    type: ServerEvent
    payload: dict[str, Any] = Field(default_factory=dict)


# =============================================================================
# HTTP
# =============================================================================

class CreateRoomResponse(BaseModel):
    """Response to POST /room."""
    code: str = Field(pattern=r"^[A-Z]{6}$", description="Six uppercase letters")


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "healthy"
    service: str = "chessrelay"
    version: str
    active_rooms: int = 0
