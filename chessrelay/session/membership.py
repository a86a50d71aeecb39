"""
Connection membership - Which room/uid each live connection speaks for.

A side table keyed by connection id, so nothing is stored on the socket
object itself. A connection holds at most one membership at a time.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Membership:
    code: str
    uid: str


class MembershipTracker:
    """Maps connection id -> Membership."""

    def __init__(self):
        self._memberships: dict[str, Membership] = {}

    def get(self, connection_id: str) -> Membership | None:
        return self._memberships.get(connection_id)

    def bind(self, connection_id: str, code: str, uid: str) -> Membership:
        """Record (or overwrite) the connection's membership."""
        membership = Membership(code=code, uid=uid)
        self._memberships[connection_id] = membership
        return membership

    def release(self, connection_id: str) -> Membership | None:
        """Forget the connection's membership, returning what it was."""
        return self._memberships.pop(connection_id, None)

    def connections_in(self, code: str) -> list[str]:
        """Connection ids currently joined to a room, in join order."""
        return [cid for cid, m in self._memberships.items() if m.code == code]

    def __len__(self) -> int:
        return len(self._memberships)
