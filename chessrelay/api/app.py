"""
FastAPI Application - HTTP and WebSocket surface of the relay.

Endpoints:
    POST   /room      Create a room, returns {"code": "ABCDEF"}
    GET    /health    Health check
    GET    /          Service info
    WS     /ws        Game events (join_room, move, ping)

Game Flow:
    1. POST /room to get a room code
    2. Open /ws and send {"type": "join_room", "payload": {"code": ..., "uid": ...}}
       - First uid in gets white, second gets black
       - Reconnecting with the same uid keeps the original color
    3. Send {"type": "move", "payload": {"code": ..., "move": {"from": 12, "to": 28}}}
       on your turn; everyone in the room receives move_applied
    4. Closing the socket frees the seat

Empty rooms idle for more than ten minutes are reclaimed by a background
task started with the app.
"""

from __future__ import annotations
from contextlib import asynccontextmanager
from typing import Optional
import asyncio
import json
import logging
import os
import uuid

from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..core.rules import LegalityCheck, accept_all
from ..session import (
    MembershipTracker,
    RoomController,
    SessionStore,
    run_reclamation,
    RECLAIM_INTERVAL_SECONDS,
)
from .gateway import Delivery, EventGateway
from .schemas import CreateRoomResponse, HealthResponse

logger = logging.getLogger(__name__)

# Environment configuration
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "4000"))
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")
LOG_LEVEL = os.getenv("CHESSRELAY_LOG_LEVEL", "INFO")


def create_app(
    store: Optional[SessionStore] = None,
    legality: LegalityCheck = accept_all,
    reclaim_interval: Optional[float] = RECLAIM_INTERVAL_SECONDS,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        store: Optional SessionStore (creates an empty one if not provided)
        legality: Move legality check handed to the RoomController
        reclaim_interval: Seconds between stale-room sweeps; None disables

    Returns:
        FastAPI application instance
    """
    if store is None:
        store = SessionStore()
    gateway = EventGateway(RoomController(store, MembershipTracker(), legality=legality))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        task = None
        if reclaim_interval:
            task = asyncio.create_task(run_reclamation(store, reclaim_interval))
        yield
        if task:
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass

    app = FastAPI(
        title="Chessrelay API",
        description="Real-time matchmaking and turn relay for two-player chess.",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    app.state.store = store
    app.state.gateway = gateway

    # Live sockets by connection id
    ws_connections: dict[str, WebSocket] = {}

    async def deliver(deliveries: list[Delivery]):
        """Send each delivery; a dead socket is dropped, never raised."""
        for delivery in deliveries:
            ws = ws_connections.get(delivery.connection_id)
            if ws is None:
                continue
            try:
                await ws.send_json(delivery.to_message())
            except (WebSocketDisconnect, RuntimeError, OSError) as e:
                logger.debug("Dropping %s to %s: %s", delivery.event.value, delivery.connection_id, e)
            except Exception:
                logger.exception("Failed to deliver %s to %s", delivery.event.value, delivery.connection_id)

    # =========================================================================
    # Room Endpoint
    # =========================================================================

    @app.post(
        "/room",
        response_model=CreateRoomResponse,
        tags=["Rooms"],
        summary="Create a new room",
    )
    async def create_room() -> CreateRoomResponse:
        """Create an empty room. Share the returned code with the opponent."""
        return CreateRoomResponse(code=gateway.create_room())

    # =========================================================================
    # WebSocket Endpoint
    # =========================================================================

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """
        WebSocket for game events.

        Messages from client:
        - join_room: {code, uid}
        - move: {code, move}
        - ping: Keep-alive

        Messages from server:
        - room_joined, opponent_joined, room_state, move_applied
        - error_msg: The last event failed
        - pong
        """
        await websocket.accept()
        connection_id = str(uuid.uuid4())
        ws_connections[connection_id] = websocket
        logger.debug("Client connected: %s", connection_id)

        try:
            while True:
                frame = await websocket.receive()
                if frame["type"] == "websocket.disconnect":
                    break
                data = frame.get("text")
                if data is None:
                    # Binary frames carry no JSON text
                    await deliver([gateway.error(connection_id, "Invalid message")])
                    continue
                try:
                    message = json.loads(data)
                except json.JSONDecodeError:
                    await deliver([gateway.error(connection_id, "Invalid JSON")])
                    continue
                await deliver(gateway.handle(connection_id, message))

        except WebSocketDisconnect:
            pass
        finally:
            ws_connections.pop(connection_id, None)
            await deliver(gateway.disconnect(connection_id))

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return HealthResponse(version=__version__, active_rooms=len(store))

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Chessrelay API",
            "version": __version__,
            "docs": "/docs",
            "health": "/health",
        }

    return app


# For running directly: uvicorn chessrelay.api.app:app
app = create_app()
