"""
Tests for the wire schemas.
"""

import pytest
from pydantic import ValidationError

from ..api.schemas import (
    ClientEvent,
    CreateRoomResponse,
    MoveInfo,
    RoomStateMessage,
    ServerEvent,
)
from ..core.move import Move
from ..session.room import Room


class TestMoveInfo:

    def test_dumps_with_wire_names(self):
        info = MoveInfo.from_move(Move(52, 60, promo="Q"))

        assert info.to_wire() == {
            "from": 52, "to": 60, "promo": "Q",
            "isCastle": False, "isEnPassant": False, "isDoublePawnPush": False,
        }

    def test_parses_wire_names(self):
        info = MoveInfo.model_validate({"from": 4, "to": 6, "isCastle": True})
        assert info.from_square == 4
        assert info.is_castle

    def test_range_enforced(self):
        with pytest.raises(ValidationError):
            MoveInfo(from_square=64, to_square=0)


class TestRoomStateMessage:

    def test_from_room(self):
        room = Room(code="ABCDEF", last_active=0.0)
        room.join("u1", "c1", now=1.0)
        room.apply_move("u1", {"from": 12, "to": 28}, now=2.0)

        data = RoomStateMessage.from_room(room).to_wire()

        assert data["code"] == "ABCDEF"
        assert data["players"] == [{"uid": "u1", "color": "WHITE"}]
        assert data["sideToMove"] == "BLACK"
        assert data["state"]["lastMove"]["to"] == 28
        assert data["state"]["boardFEN"] == "startpos"


class TestEnumsAndHTTP:

    def test_event_names(self):
        assert [e.value for e in ClientEvent] == ["join_room", "move", "ping"]
        assert ServerEvent.ERROR_MSG.value == "error_msg"

    def test_room_code_pattern(self):
        assert CreateRoomResponse(code="QWERTY").code == "QWERTY"
        with pytest.raises(ValidationError):
            CreateRoomResponse(code="qwerty")
