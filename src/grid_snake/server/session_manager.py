"""In-memory session registry, lifecycle management, and async tick loops."""

from __future__ import annotations

import asyncio
import json
import logging
import time
import uuid
from dataclasses import dataclass, field, replace

from starlette.websockets import WebSocket, WebSocketState

from grid_snake.config import GameConfig
from grid_snake.render import DrawCommand, plan_to_dicts
from grid_snake.scheduler import GameLoopScheduler, IntervalClock
from grid_snake.server.models import SessionStatus, SessionSummary

logger = logging.getLogger(__name__)

_MAX_FINISHED_SESSIONS = 100


@dataclass
class SessionInstance:
    """All state for a single play session."""

    session_id: str
    scheduler: GameLoopScheduler
    status: SessionStatus = SessionStatus.WAITING
    viewers: list[WebSocket] = field(default_factory=list)
    created_at: float = field(default_factory=time.monotonic)
    finished_at: float | None = None
    clock: IntervalClock | None = field(default=None, repr=False)
    _task: asyncio.Task | None = field(default=None, repr=False)

    @property
    def tick_period_ms(self) -> int:
        return self.scheduler.config.tick_period_ms

    def summary(self) -> SessionSummary:
        state = self.scheduler.state
        return SessionSummary(
            session_id=self.session_id,
            status=self.status,
            tick_period_ms=self.tick_period_ms,
            tick=state.tick,
            length=len(state.snake.body),
            outcome=state.message,
        )

    def message(self, commands: list[DrawCommand]) -> str:
        """Encode a drawing plan together with the current status."""
        state = self.scheduler.state
        payload = {
            "type": "outcome" if state.terminal else "frame",
            "tick": state.tick,
            "status": state.status.value,
            "message": state.message,
            "commands": plan_to_dicts(commands),
        }
        return json.dumps(payload, separators=(",", ":"))


class _ViewerSink:
    """Render sink broadcasting each plan to every connected viewer."""

    def __init__(self, session: SessionInstance) -> None:
        self.session = session

    async def render(self, commands: list[DrawCommand]) -> None:
        payload = self.session.message(commands)
        dead: list[WebSocket] = []
        # Iterate over a snapshot so disconnect handlers can mutate the list.
        for ws in list(self.session.viewers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.send_text(payload)
            except Exception:
                dead.append(ws)
        for ws in dead:
            if ws in self.session.viewers:
                self.session.viewers.remove(ws)


class SessionManager:
    """Central registry managing all play sessions."""

    def __init__(
        self,
        base_config: GameConfig | None = None,
        max_finished_sessions: int = _MAX_FINISHED_SESSIONS,
    ) -> None:
        if max_finished_sessions < 0:
            raise ValueError("max_finished_sessions must be >= 0.")
        self.base_config = base_config if base_config is not None else GameConfig()
        self._sessions: dict[str, SessionInstance] = {}
        self._max_finished_sessions = max_finished_sessions

    def create_session(
        self, tick_period_ms: int | None = None, seed: int | None = None,
    ) -> SessionInstance:
        """Create a new waiting session and return the instance."""
        overrides: dict = {}
        if seed is not None:
            overrides["seed"] = seed
        if tick_period_ms is not None:
            overrides["tick_period_ms"] = tick_period_ms
        config = replace(self.base_config, **overrides)

        session_id = uuid.uuid4().hex[:12]
        session = SessionInstance(
            session_id=session_id, scheduler=GameLoopScheduler(config),
        )
        self._sessions[session_id] = session
        logger.info(
            "Session %s created (tick=%dms).",
            session_id, config.tick_period_ms,
        )
        return session

    def get_session(self, session_id: str) -> SessionInstance | None:
        return self._sessions.get(session_id)

    def list_sessions(self) -> list[SessionSummary]:
        """Return summaries of non-finished sessions."""
        return [
            s.summary() for s in self._sessions.values()
            if s.status != SessionStatus.FINISHED
        ]

    def start_session(self, session_id: str) -> None:
        """Start the session tick loop."""
        session = self._sessions.get(session_id)
        if session is None:
            raise KeyError(f"Session {session_id} not found.")
        if session.status != SessionStatus.WAITING:
            raise ValueError("Session is not in waiting state.")

        session.status = SessionStatus.ACTIVE
        session.clock = IntervalClock(session.tick_period_ms)
        session._task = asyncio.create_task(self._tick_loop(session))
        logger.info("Session %s started.", session_id)

    async def _tick_loop(self, session: SessionInstance) -> None:
        """Drive the session's game until it reaches a terminal state."""
        assert session.clock is not None  # noqa: S101
        try:
            state = await session.scheduler.run(
                session.clock, _ViewerSink(session),
            )
            if state.terminal:
                self._mark_finished(session)
                logger.info(
                    "Session %s ended at tick %d: %s.",
                    session.session_id, state.tick, state.message,
                )
        except asyncio.CancelledError:
            logger.info("Tick loop cancelled for session %s.", session.session_id)
        except Exception:
            logger.exception("Tick loop error in session %s.", session.session_id)
            self._mark_finished(session)
        finally:
            if session.status == SessionStatus.FINISHED:
                await self._close_connections(session)
                self._prune_finished_sessions()

    def _mark_finished(self, session: SessionInstance) -> None:
        """Transition a session to finished exactly once."""
        if session.status != SessionStatus.FINISHED:
            session.status = SessionStatus.FINISHED
            session.finished_at = time.monotonic()

    async def _close_connections(self, session: SessionInstance) -> None:
        """Close any live viewer sockets for a finished session."""
        for ws in list(session.viewers):
            try:
                if ws.client_state == WebSocketState.CONNECTED:
                    await ws.close(code=1000, reason="Game finished.")
            except Exception:
                logger.warning(
                    "Failed closing viewer socket in session %s.",
                    session.session_id,
                )
        session.viewers.clear()

    def _prune_finished_sessions(self) -> None:
        """Bound retained finished sessions to avoid unbounded growth."""
        finished = [
            s for s in self._sessions.values()
            if s.status == SessionStatus.FINISHED
        ]
        overflow = len(finished) - self._max_finished_sessions
        if overflow <= 0:
            return

        finished.sort(
            key=lambda s: s.finished_at if s.finished_at is not None else s.created_at,
        )
        for stale in finished[:overflow]:
            self._sessions.pop(stale.session_id, None)
        logger.info(
            "Pruned %d finished sessions (retaining up to %d).",
            overflow,
            self._max_finished_sessions,
        )

    async def cleanup(self) -> None:
        """Stop all clocks and cancel running tick loops."""
        tasks = []
        for session in self._sessions.values():
            if session.clock is not None:
                session.clock.stop()
            if session._task and not session._task.done():
                session._task.cancel()
                tasks.append(session._task)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
        logger.info("SessionManager cleanup complete.")
