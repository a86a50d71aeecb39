"""
Tests for EventGateway routing - who receives what.

Walks through the two-player game flow using connection ids only; no
sockets involved.
"""

import pytest

from ..api.gateway import Delivery
from ..api.schemas import ServerEvent


def by_connection(deliveries: list[Delivery]) -> dict[str, list[Delivery]]:
    grouped: dict[str, list[Delivery]] = {}
    for d in deliveries:
        grouped.setdefault(d.connection_id, []).append(d)
    return grouped


def events(deliveries: list[Delivery]) -> list[str]:
    return [d.event.value for d in deliveries]


def join(gateway, connection_id, code, uid):
    return gateway.handle(connection_id, {"type": "join_room", "payload": {"code": code, "uid": uid}})


def move(gateway, connection_id, code, **squares):
    payload = {"code": code, "move": {"from": squares["src"], "to": squares["dst"]}}
    return gateway.handle(connection_id, {"type": "move", "payload": payload})


@pytest.fixture
def seated(gateway, code):
    join(gateway, "c1", code, "u1")
    join(gateway, "c2", code, "u2")
    return code


class TestJoinFlow:

    def test_first_join(self, gateway, code):
        deliveries = join(gateway, "c1", code, "u1")

        assert events(deliveries) == ["room_joined", "room_state"]
        assert deliveries[0].payload == {"code": code, "color": "white"}
        assert deliveries[1].payload["players"] == [{"uid": "u1", "color": "WHITE"}]
        assert deliveries[1].payload["sideToMove"] == "WHITE"
        assert deliveries[1].payload["state"] == {"lastMove": None, "boardFEN": "startpos"}

    def test_second_join(self, gateway, code):
        join(gateway, "c1", code, "u1")
        grouped = by_connection(join(gateway, "c2", code, "u2"))

        assert events(grouped["c2"]) == ["room_joined", "room_state"]
        assert grouped["c2"][0].payload == {"code": code, "color": "black"}

        assert events(grouped["c1"]) == ["opponent_joined", "room_state"]
        assert grouped["c1"][0].payload == {}

        state = grouped["c1"][1].payload
        assert state["players"] == [
            {"uid": "u1", "color": "WHITE"},
            {"uid": "u2", "color": "BLACK"},
        ]
        assert state["sideToMove"] == "WHITE"

    def test_rejoin_does_not_notify_opponent(self, gateway, seated):
        deliveries = join(gateway, "c1", seated, "u1")
        assert "opponent_joined" not in events(deliveries)

    def test_third_player_gets_error_only(self, gateway, seated):
        deliveries = join(gateway, "c3", seated, "u3")

        assert deliveries == [Delivery("c3", ServerEvent.ERROR_MSG, {"message": "Room is full"})]

    def test_unknown_room(self, gateway):
        deliveries = join(gateway, "c1", "ZZZZZZ", "u1")
        assert deliveries[0].payload == {"message": "Room not found"}

    def test_switch_rooms_notifies_old_room(self, gateway, seated, store):
        other = store.create_session()
        grouped = by_connection(join(gateway, "c2", other, "u2"))

        old_state = [d for d in grouped["c1"] if d.event is ServerEvent.ROOM_STATE]
        assert old_state[0].payload["players"] == [{"uid": "u1", "color": "WHITE"}]
        assert events(grouped["c2"]) == ["room_joined", "room_state"]
        assert grouped["c2"][0].payload == {"code": other, "color": "white"}


class TestMoveFlow:

    def test_move_broadcast(self, gateway, seated):
        deliveries = move(gateway, "c1", seated, src=12, dst=28)

        assert sorted(d.connection_id for d in deliveries) == ["c1", "c2"]
        for d in deliveries:
            assert d.event is ServerEvent.MOVE_APPLIED
            assert d.payload["sideToMove"] == "BLACK"
            assert d.payload["state"]["lastMove"] == {
                "from": 12, "to": 28, "promo": None,
                "isCastle": False, "isEnPassant": False, "isDoublePawnPush": False,
            }
            assert d.payload["move"]["from"] == 12

    def test_out_of_turn(self, gateway, seated, store):
        deliveries = move(gateway, "c2", seated, src=52, dst=36)

        assert deliveries == [Delivery("c2", ServerEvent.ERROR_MSG, {"message": "Not your turn"})]
        assert store.lookup(seated).state.last_move is None

    @pytest.mark.parametrize("src, dst, message", [
        (5, 5, "From and to squares must differ"),
        (70, 5, "Squares must be between 0 and 63"),
    ])
    def test_invalid_squares(self, gateway, seated, src, dst, message):
        deliveries = move(gateway, "c1", seated, src=src, dst=dst)
        assert deliveries == [Delivery("c1", ServerEvent.ERROR_MSG, {"message": message})]

    def test_move_before_join(self, gateway, code):
        deliveries = move(gateway, "c1", code, src=12, dst=28)
        assert deliveries[0].payload == {"message": "You are not joined to a room"}


class TestDisconnectFlow:

    def test_disconnect_broadcasts_to_remaining(self, gateway, seated):
        deliveries = gateway.disconnect("c1")

        assert [d.connection_id for d in deliveries] == ["c2"]
        assert deliveries[0].payload["players"] == [{"uid": "u2", "color": "BLACK"}]

    def test_rejoin_keeps_white(self, gateway, seated):
        gateway.disconnect("c1")
        deliveries = join(gateway, "c9", seated, "u1")

        assert deliveries[0].payload == {"code": seated, "color": "white"}

    def test_unknown_connection(self, gateway):
        assert gateway.disconnect("never-seen") == []

    def test_last_player_leaving(self, gateway, seated, store):
        move(gateway, "c1", seated, src=12, dst=28)
        gateway.disconnect("c1")
        assert gateway.disconnect("c2") == []

        room = store.lookup(seated)
        assert room.is_empty()
        assert room.state.last_move is None
        assert room.side_to_move.value == "WHITE"


class TestFraming:

    def test_ping(self, gateway):
        assert gateway.handle("c1", {"type": "ping"}) == [Delivery("c1", ServerEvent.PONG)]

    @pytest.mark.parametrize("frame", [[], "join_room", {"payload": {}}])
    def test_invalid_frame(self, gateway, frame):
        deliveries = gateway.handle("c1", frame)
        assert deliveries[0].payload == {"message": "Invalid message"}

    def test_unknown_event(self, gateway):
        deliveries = gateway.handle("c1", {"type": "resign"})
        assert deliveries[0].payload == {"message": "Unknown event: resign"}

    def test_unexpected_error_is_contained(self, gateway, code, monkeypatch):
        def explode(*args, **kwargs):
            raise RuntimeError("boom")

        monkeypatch.setattr(gateway.controller, "join", explode)
        deliveries = join(gateway, "c1", code, "u1")

        assert deliveries == [Delivery("c1", ServerEvent.ERROR_MSG, {"message": "Failed to join room"})]

    def test_delivery_envelope(self):
        delivery = Delivery("c1", ServerEvent.ERROR_MSG, {"message": "x"})
        assert delivery.to_message() == {"type": "error_msg", "payload": {"message": "x"}}
