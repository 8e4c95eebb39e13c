"""WebSocket handler for real-time play."""

from __future__ import annotations

import json
import logging

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from grid_snake.server.models import SessionStatus
from grid_snake.server.session_manager import SessionManager
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)

ws_router = APIRouter()

_DIRECTION_MAP: dict[str, Direction] = {
    "up": Direction.UP,
    "down": Direction.DOWN,
    "left": Direction.LEFT,
    "right": Direction.RIGHT,
}


def _get_manager(ws: WebSocket) -> SessionManager:
    return ws.app.state.session_manager


def _parse_direction(raw: str, session) -> Direction | None:
    """Decode a client message; anything malformed yields ``None``."""
    try:
        msg = json.loads(raw)
    except json.JSONDecodeError:
        return None
    if not isinstance(msg, dict):
        return None

    if "key" in msg:
        return session.scheduler.keys.translate(msg["key"])

    direction_str = msg.get("direction")
    if not isinstance(direction_str, str):
        return None
    return _DIRECTION_MAP.get(direction_str.lower())


@ws_router.websocket("/sessions/{session_id}/play")
async def play(websocket: WebSocket, session_id: str) -> None:
    """Player WebSocket: send key events, receive drawing plans each tick."""
    manager = _get_manager(websocket)
    session = manager.get_session(session_id)
    if session is None:
        await websocket.close(code=4004, reason="Session not found.")
        return

    await websocket.accept()

    # Walls plus the current frame so the client can draw immediately.
    await websocket.send_text(session.message(session.scheduler.opening()))

    if session.status == SessionStatus.FINISHED:
        await websocket.close(code=1000, reason="Game finished.")
        return

    session.viewers.append(websocket)
    logger.info("Player connected to session %s.", session_id)

    try:
        while True:
            raw = await websocket.receive_text()
            direction = _parse_direction(raw, session)
            if direction is None:
                continue
            if session.status != SessionStatus.FINISHED:
                session.scheduler.request_direction(direction)
    except WebSocketDisconnect:
        logger.info("Player disconnected from session %s.", session_id)
    finally:
        if websocket in session.viewers:
            session.viewers.remove(websocket)
