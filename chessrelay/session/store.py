"""
Session Store - Process-wide registry of live rooms.

PERSISTENCE RULES:
- In-memory only, empty at startup
- Nothing survives a restart; rooms are simply abandoned on shutdown
- No explicit delete: the reclamation sweep is the only way a room goes away

RECLAMATION:
- Every RECLAIM_INTERVAL_SECONDS the sweep scans all rooms
- A room is dropped once it has no players AND has been idle longer than
  the retention window (ROOM_RETENTION_SECONDS)
- A room with a seated player is never dropped, however long it idles

The store is created once by the app and handed to the controller and the
reclamation task; it is not a module-level global.
"""

from __future__ import annotations
from typing import Callable, Iterator
import asyncio
import logging
import time

from .codes import generate_room_code
from .room import Room

logger = logging.getLogger(__name__)


ROOM_RETENTION_SECONDS = 10 * 60
RECLAIM_INTERVAL_SECONDS = 60.0


class SessionStore:
    """
    Registry of rooms keyed by room code.

    Usage:
        store = SessionStore()
        code = store.create_session()
        room = store.lookup(code)
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.time,
        retention_seconds: float = ROOM_RETENTION_SECONDS,
        code_factory: Callable[[], str] = generate_room_code,
    ):
        self.clock = clock
        self.retention_seconds = retention_seconds
        self._code_factory = code_factory
        self._rooms: dict[str, Room] = {}

    def create_session(self) -> str:
        """
        Register a new empty room under a fresh code and return the code.
        """
        code = self._code_factory()
        while code in self._rooms:
            logger.warning("Room code collision detected, regenerating: %s", code)
            code = self._code_factory()

        self._rooms[code] = Room(code=code, last_active=self.clock())
        logger.info("Room created: %s (%d active)", code, len(self._rooms))
        return code

    def lookup(self, code: str) -> Room | None:
        """Get a room by code."""
        return self._rooms.get(code)

    def codes(self) -> list[str]:
        """Codes of all registered rooms."""
        return list(self._rooms)

    def sweep(self, now: float | None = None) -> list[str]:
        """
        Drop empty rooms idle past the retention window.

        Returns the codes that were removed.
        """
        if now is None:
            now = self.clock()

        to_remove = [
            code for code, room in self._rooms.items()
            if room.is_empty() and now - room.last_active > self.retention_seconds
        ]

        for code in to_remove:
            del self._rooms[code]

        if to_remove:
            logger.info("Reclaimed %d stale room(s): %s", len(to_remove), ", ".join(to_remove))
        return to_remove

    def __len__(self) -> int:
        return len(self._rooms)

    def __contains__(self, code: object) -> bool:
        return code in self._rooms

    def __iter__(self) -> Iterator[Room]:
        return iter(list(self._rooms.values()))


async def run_reclamation(store: SessionStore, interval: float = RECLAIM_INTERVAL_SECONDS):
    """
    Sweep the store once per interval until cancelled.

    Runs on the server's event loop; each sweep completes without awaiting,
    so it never observes a room halfway through a join or move.
    """
    logger.debug("Reclamation task started (every %.1fs)", interval)
    while True:
        await asyncio.sleep(interval)
        store.sweep()
