"""
Operation results - Success/failure values returned by room operations.

Room operations never raise for expected failures (bad payloads, wrong
turn, full room). They return a result whose error_code says what went
wrong; the gateway turns that into an error_msg for the client.

Error kinds:
- VALIDATION: malformed join/move payload
- AUTHORIZATION: not joined, wrong room, not your turn, unknown player
- CAPACITY: room full
- NOT_FOUND: unknown room code
- RULE_VIOLATION: the legality hook rejected the move
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ErrorKind(Enum):
    """Coarse error taxonomy."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    CAPACITY = "capacity"
    NOT_FOUND = "not_found"
    RULE_VIOLATION = "rule_violation"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_PAYLOAD = "INVALID_PAYLOAD"
    INVALID_MOVE = "INVALID_MOVE"
    NOT_JOINED = "NOT_JOINED"
    ROOM_MISMATCH = "ROOM_MISMATCH"
    PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
    NOT_YOUR_TURN = "NOT_YOUR_TURN"
    ROOM_FULL = "ROOM_FULL"
    ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
    ILLEGAL_MOVE = "ILLEGAL_MOVE"

    @property
    def kind(self) -> ErrorKind:
        return _ERROR_KINDS[self]


_ERROR_KINDS = {
    ErrorCode.INVALID_PAYLOAD: ErrorKind.VALIDATION,
    ErrorCode.INVALID_MOVE: ErrorKind.VALIDATION,
    ErrorCode.NOT_JOINED: ErrorKind.AUTHORIZATION,
    ErrorCode.ROOM_MISMATCH: ErrorKind.AUTHORIZATION,
    ErrorCode.PLAYER_NOT_FOUND: ErrorKind.AUTHORIZATION,
    ErrorCode.NOT_YOUR_TURN: ErrorKind.AUTHORIZATION,
    ErrorCode.ROOM_FULL: ErrorKind.CAPACITY,
    ErrorCode.ROOM_NOT_FOUND: ErrorKind.NOT_FOUND,
    ErrorCode.ILLEGAL_MOVE: ErrorKind.RULE_VIOLATION,
}


@dataclass
class OpResult:
    """
    Base result of a room operation.

    Subclasses add the outcome fields for their operation; those are only
    meaningful when success is True.
    """
    success: bool
    error: str | None = None
    error_code: ErrorCode | None = None

    @property
    def error_kind(self) -> ErrorKind | None:
        return self.error_code.kind if self.error_code else None

    @classmethod
    def failure(cls, error: str, error_code: ErrorCode):
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)
