"""
Event Gateway - Turns inbound events into outbound deliveries.

The gateway is transport-agnostic. Each handler takes a connection id and
a decoded payload and returns a list of Delivery records saying who gets
which event. The FastAPI layer (app.py) does the actual sending.

Routing:
- room_joined     -> the joining connection
- opponent_joined -> the first player, when the second seat fills
- room_state      -> every connection joined to the room
- move_applied    -> every connection joined to the room
- error_msg       -> the failing connection only

A failing event never closes the connection: expected failures come back
as results and become error_msg; anything unexpected is logged and
reported with a generic message.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any
import logging

from pydantic import BaseModel, ValidationError

from ..session import RoomController, Room, JoinResult, LeaveResult
from .schemas import (
    ClientEvent,
    ClientMessage,
    ColorName,
    ErrorMessage,
    MoveAppliedMessage,
    OpponentJoinedMessage,
    RoomJoinedMessage,
    RoomStateMessage,
    ServerEvent,
    ServerMessage,
)

logger = logging.getLogger(__name__)


@dataclass
class Delivery:
    """One outbound message addressed to one connection."""
    connection_id: str
    event: ServerEvent
    payload: dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> dict[str, Any]:
        return ServerMessage(type=self.event, payload=self.payload).model_dump(mode="json")


class EventGateway:
    """
    Usage:
        gateway = EventGateway(RoomController(store, tracker))

        for delivery in gateway.handle(connection_id, {"type": "join_room", "payload": {...}}):
            send(delivery.connection_id, delivery.to_message())
    """

    def __init__(self, controller: RoomController):
        self.controller = controller

    @property
    def store(self):
        return self.controller.store

    @property
    def tracker(self):
        return self.controller.tracker

    def create_room(self) -> str:
        return self.controller.create_room()

    def handle(self, connection_id: str, message: Any) -> list[Delivery]:
        """Route one decoded client frame."""
        try:
            frame = ClientMessage.model_validate(message)
        except ValidationError:
            return [self.error(connection_id, "Invalid message")]

        if frame.type == ClientEvent.JOIN_ROOM.value:
            return self.join(connection_id, frame.payload)
        if frame.type == ClientEvent.MOVE.value:
            return self.move(connection_id, frame.payload)
        if frame.type == ClientEvent.PING.value:
            return [Delivery(connection_id, ServerEvent.PONG)]
        return [self.error(connection_id, f"Unknown event: {frame.type}")]

    # =========================================================================
    # Inbound events
    # =========================================================================

    def join(self, connection_id: str, payload: Any) -> list[Delivery]:
        logger.debug("Join room request from %s: %r", connection_id, payload)
        try:
            result = self.controller.join(connection_id, payload)
        except Exception:
            logger.exception("Join room failed for %s", connection_id)
            return [self.error(connection_id, "Failed to join room")]

        if not result.success:
            logger.info("Join room error for %s: %s", connection_id, result.error)
            return [self.error(connection_id, result.error)]

        return self._join_deliveries(connection_id, result)

    def move(self, connection_id: str, payload: Any) -> list[Delivery]:
        logger.debug("Move request from %s: %r", connection_id, payload)
        try:
            result = self.controller.move(connection_id, payload)
        except Exception:
            logger.exception("Move failed for %s", connection_id)
            return [self.error(connection_id, "Failed to apply move")]

        if not result.success:
            logger.info("Move error for %s: %s", connection_id, result.error)
            return [self.error(connection_id, result.error)]

        return self._broadcast(result.room, ServerEvent.MOVE_APPLIED, MoveAppliedMessage.from_result(result))

    def disconnect(self, connection_id: str) -> list[Delivery]:
        """Connection closed. Nothing is sent back to it."""
        logger.debug("Client disconnected: %s", connection_id)
        try:
            result = self.controller.disconnect(connection_id)
        except Exception:
            logger.exception("Disconnect cleanup failed for %s", connection_id)
            return []
        return self._leave_deliveries(result)

    # =========================================================================
    # Delivery builders
    # =========================================================================

    def _join_deliveries(self, connection_id: str, result: JoinResult) -> list[Delivery]:
        room = result.room
        deliveries = self._leave_deliveries(result.previous)

        deliveries.append(Delivery(
            connection_id,
            ServerEvent.ROOM_JOINED,
            RoomJoinedMessage(code=room.code, color=ColorName(result.participant.side.color)).to_wire(),
        ))

        if result.opponent:
            deliveries.append(Delivery(
                result.opponent.connection_id,
                ServerEvent.OPPONENT_JOINED,
                OpponentJoinedMessage().to_wire(),
            ))

        deliveries.extend(self._room_state(room))
        return deliveries

    def _leave_deliveries(self, result: LeaveResult | None) -> list[Delivery]:
        if not result or not result.removed:
            return []
        return self._room_state(result.room)

    def _room_state(self, room: Room) -> list[Delivery]:
        return self._broadcast(room, ServerEvent.ROOM_STATE, RoomStateMessage.from_room(room))

    def _broadcast(self, room: Room, event: ServerEvent, message: BaseModel) -> list[Delivery]:
        payload = message.model_dump(by_alias=True, mode="json")
        return [
            Delivery(cid, event, payload)
            for cid in self.tracker.connections_in(room.code)
        ]

    def error(self, connection_id: str, message: str) -> Delivery:
        return Delivery(connection_id, ServerEvent.ERROR_MSG, ErrorMessage(message=message).to_wire())
