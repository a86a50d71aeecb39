"""
Pytest fixtures for Chessrelay tests.
"""

import pytest

from ..session import SessionStore, MembershipTracker, RoomController
from ..api.gateway import EventGateway


class ManualClock:
    """Clock the tests can move by hand."""

    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def store(clock) -> SessionStore:
    """Empty store driven by the manual clock."""
    return SessionStore(clock=clock)


@pytest.fixture
def tracker() -> MembershipTracker:
    return MembershipTracker()


@pytest.fixture
def controller(store, tracker) -> RoomController:
    return RoomController(store, tracker)


@pytest.fixture
def gateway(controller) -> EventGateway:
    return EventGateway(controller)


@pytest.fixture
def code(store) -> str:
    """Code of a freshly created room."""
    return store.create_session()


@pytest.fixture
def active_room(controller, code):
    """Room with u1 (white, on conn-1) and u2 (black, on conn-2)."""
    controller.join("conn-1", {"code": code, "uid": "u1"})
    controller.join("conn-2", {"code": code, "uid": "u2"})
    return controller.store.lookup(code)
