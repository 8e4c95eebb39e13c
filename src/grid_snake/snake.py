"""Snake representation, direction resolution, and movement logic."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import NamedTuple


class Position(NamedTuple):
    """A cell-aligned (x, y) coordinate on the stage."""

    x: int
    y: int


class Direction(enum.Enum):
    """Cardinal movement directions with (dx, dy) unit values.

    The stage origin is top-left, so ``UP`` decreases ``y``.
    """

    UP = (0, -1)
    DOWN = (0, 1)
    LEFT = (-1, 0)
    RIGHT = (1, 0)

    @classmethod
    def from_name(cls, name: str) -> Direction:
        """Look up a direction by its lowercase name (``"up"``, ...)."""
        return cls[name.upper()]


@dataclass(frozen=True)
class Snake:
    """An immutable snake; ``body[0]`` is the head and ``body[-1]`` the tail."""

    body: tuple[Position, ...]

    def __post_init__(self) -> None:
        if len(self.body) < 2:
            raise ValueError("Snake length must be at least 2.")
        object.__setattr__(
            self, "body", tuple(Position(*seg) for seg in self.body),
        )

    @property
    def head(self) -> Position:
        """Return the head coordinate."""
        return self.body[0]

    @property
    def neck(self) -> Position:
        return self.body[1]

    def occupies(self, pos: Position) -> bool:
        """Check whether any segment sits on *pos*."""
        return pos in self.body

    def to_dict(self) -> dict:
        """Serialize snake state to a dictionary."""
        return {"body": [list(seg) for seg in self.body]}


def _trailing(snake: Snake) -> Position:
    """First segment behind the head that sits on a different cell.

    Right after growing the head and neck share a cell, so the direction of
    travel is read from the segment behind them.
    """
    head = snake.head
    for seg in snake.body[1:]:
        if seg != head:
            return seg
    return snake.neck


def is_vertical(snake: Snake) -> bool:
    return snake.head.x == _trailing(snake).x


def is_horizontal(snake: Snake) -> bool:
    return snake.head.y == _trailing(snake).y


def heading(snake: Snake) -> Direction:
    """Infer the current heading from the head and the segment behind it."""
    head, neck = snake.head, _trailing(snake)
    if is_vertical(snake):
        return Direction.DOWN if head.y > neck.y else Direction.UP
    return Direction.RIGHT if head.x > neck.x else Direction.LEFT


def resolve_direction(
    snake: Snake, requested: Direction | None,
) -> Direction:
    """Apply a turn request, ignoring anything not orthogonal to the heading.

    Left/right turns need a vertical snake and up/down turns a horizontal
    one, so both continuations and 180° reversals fall back to the heading.
    """
    if requested in (Direction.LEFT, Direction.RIGHT) and is_vertical(snake):
        return requested
    if requested in (Direction.UP, Direction.DOWN) and is_horizontal(snake):
        return requested
    return heading(snake)


def move(snake: Snake, direction: Direction, cell_size: int) -> Snake:
    """Shift the snake one cell along *direction*, keeping its length."""
    dx, dy = direction.value
    head = snake.head
    new_head = Position(head.x + dx * cell_size, head.y + dy * cell_size)
    return Snake((new_head, *snake.body[:-1]))


def grow(snake: Snake, food: Position) -> Snake:
    """Re-insert the eaten *food* cell in front of an already-moved snake."""
    return Snake((Position(*food), *snake.body))
