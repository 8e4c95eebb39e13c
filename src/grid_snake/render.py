"""Drawing plans derived from game state, and the sinks that consume them."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Protocol

from grid_snake.arena import Arena
from grid_snake.config import Palette
from grid_snake.engine import GameState


@dataclass(frozen=True)
class FillRect:
    x: int
    y: int
    width: int
    height: int
    color: str

    def to_dict(self) -> dict:
        return {"op": "fill_rect", **asdict(self)}


@dataclass(frozen=True)
class ClearRect:
    x: int
    y: int
    width: int
    height: int

    def to_dict(self) -> dict:
        return {"op": "clear_rect", **asdict(self)}


@dataclass(frozen=True)
class FillCell:
    """A single snake or food cell, ``size`` units square."""

    x: int
    y: int
    size: int
    color: str

    def to_dict(self) -> dict:
        return {"op": "fill_cell", **asdict(self)}


@dataclass(frozen=True)
class DrawText:
    """Text centered on (x, y)."""

    text: str
    x: float
    y: float
    color: str
    font: str

    def to_dict(self) -> dict:
        return {"op": "draw_text", **asdict(self)}


DrawCommand = FillRect | ClearRect | FillCell | DrawText


class RenderSink(Protocol):
    """Anything that can consume an ordered drawing plan."""

    async def render(self, commands: list[DrawCommand]) -> None: ...


class RecordingSink:
    """Keeps every received plan in memory, in arrival order."""

    def __init__(self) -> None:
        self.frames: list[list[DrawCommand]] = []

    async def render(self, commands: list[DrawCommand]) -> None:
        self.frames.append(list(commands))


def _clear_interior(arena: Arena) -> ClearRect:
    w, h = arena.interior_size
    return ClearRect(arena.wall_thickness, arena.wall_thickness, w, h)


def arena_plan(arena: Arena, palette: Palette) -> list[DrawCommand]:
    """Paint the walls: fill the whole stage, then clear the interior."""
    return [
        FillRect(0, 0, arena.width, arena.height, palette.wall),
        _clear_interior(arena),
    ]


def frame_plan(
    state: GameState, arena: Arena, palette: Palette,
) -> list[DrawCommand]:
    """Redraw the interior for a running state."""
    size = arena.cell_size
    head, *body = state.snake.body
    commands: list[DrawCommand] = [
        _clear_interior(arena),
        FillCell(head.x, head.y, size, palette.head),
    ]
    commands.extend(FillCell(p.x, p.y, size, palette.body) for p in body)
    if state.food is not None:
        commands.append(
            FillCell(state.food.x, state.food.y, size, palette.food),
        )
    return commands


def outcome_plan(
    state: GameState, arena: Arena, palette: Palette,
) -> list[DrawCommand]:
    """Draw the outcome message at the centre of the stage."""
    if state.message is None:
        return []
    return [
        DrawText(
            state.message,
            arena.width / 2,
            arena.height / 2,
            palette.text,
            palette.font,
        ),
    ]


def plan_to_dicts(commands: list[DrawCommand]) -> list[dict]:
    """Serialize a plan for JSON transport."""
    return [c.to_dict() for c in commands]
