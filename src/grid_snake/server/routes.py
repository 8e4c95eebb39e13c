"""REST API route handlers for session lifecycle management."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, Request

from grid_snake.server.models import CreateSessionRequest, SessionSummary

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _get_manager(request: Request):
    return request.app.state.session_manager


@router.post("", status_code=201)
async def create_session(
    body: CreateSessionRequest, request: Request,
) -> SessionSummary:
    """Create a new play session."""
    manager = _get_manager(request)
    try:
        session = manager.create_session(
            tick_period_ms=body.tick_period_ms, seed=body.seed,
        )
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return session.summary()


@router.get("")
async def list_sessions(request: Request) -> list[SessionSummary]:
    """List waiting and active sessions."""
    return _get_manager(request).list_sessions()


@router.get("/{session_id}")
async def get_session(session_id: str, request: Request) -> dict:
    """Get session metadata and the full game state."""
    session = _get_manager(request).get_session(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail="Session not found.")
    result = session.summary().model_dump(mode="json")
    result["arena"] = session.scheduler.arena.to_dict()
    result["state"] = session.scheduler.state.to_dict()
    return result


@router.post("/{session_id}/start", status_code=200)
async def start_session(session_id: str, request: Request) -> dict:
    """Start the session's tick loop."""
    manager = _get_manager(request)
    try:
        manager.start_session(session_id)
    except KeyError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc)) from exc
    return {"status": "started", "session_id": session_id}
