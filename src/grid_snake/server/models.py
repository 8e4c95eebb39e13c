"""Pydantic models for API request/response schemas."""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field


class SessionStatus(str, enum.Enum):
    """Lifecycle states for a play session."""

    WAITING = "waiting"
    ACTIVE = "active"
    FINISHED = "finished"


class CreateSessionRequest(BaseModel):
    """Request body for POST /sessions."""

    tick_period_ms: int = Field(default=200, ge=50, le=2000)
    seed: int | None = Field(default=None, ge=0)


class SessionSummary(BaseModel):
    """Compact session info for list endpoints."""

    session_id: str
    status: SessionStatus
    tick_period_ms: int
    tick: int
    length: int
    outcome: str | None = None
