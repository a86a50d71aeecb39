"""
API Module - Network surface of the relay.

- schemas: the JSON wire contract
- gateway: event routing, framework-agnostic
- app: FastAPI wiring (HTTP + WebSocket)
"""

from .schemas import (
    ClientEvent,
    ServerEvent,
    MoveInfo,
    GameStateInfo,
    PlayerInfo,
    RoomJoinedMessage,
    OpponentJoinedMessage,
    RoomStateMessage,
    MoveAppliedMessage,
    ErrorMessage,
    CreateRoomResponse,
    HealthResponse,
)
from .gateway import Delivery, EventGateway
from .app import create_app

__all__ = [
    "ClientEvent",
    "ServerEvent",
    "MoveInfo",
    "GameStateInfo",
    "PlayerInfo",
    "RoomJoinedMessage",
    "OpponentJoinedMessage",
    "RoomStateMessage",
    "MoveAppliedMessage",
    "ErrorMessage",
    "CreateRoomResponse",
    "HealthResponse",
    "Delivery",
    "EventGateway",
    "create_app",
]
