"""Walled arena geometry and collision detection."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from grid_snake.snake import Position, Snake


@dataclass(frozen=True)
class Arena:
    """A fixed rectangular stage surrounded by a wall.

    All values are in stage units. The playable interior spans from
    ``wall_thickness`` to ``dimension - wall_thickness - cell_size`` on each
    axis, both ends inclusive.
    """

    width: int = 480
    height: int = 320
    wall_thickness: int = 10
    cell_size: int = 10

    def __post_init__(self) -> None:
        if self.cell_size < 1:
            raise ValueError("cell_size must be at least 1.")
        if self.wall_thickness < 0:
            raise ValueError("wall_thickness must be >= 0.")
        if self.max_x < self.wall_thickness or self.max_y < self.wall_thickness:
            raise ValueError("Arena must leave at least one interior cell.")

    @property
    def max_x(self) -> int:
        """Largest legal head x coordinate."""
        return self.width - self.wall_thickness - self.cell_size

    @property
    def max_y(self) -> int:
        """Largest legal head y coordinate."""
        return self.height - self.wall_thickness - self.cell_size

    @property
    def columns(self) -> np.ndarray:
        return np.arange(self.wall_thickness, self.max_x + 1, self.cell_size)

    @property
    def rows(self) -> np.ndarray:
        return np.arange(self.wall_thickness, self.max_y + 1, self.cell_size)

    @property
    def interior_size(self) -> tuple[int, int]:
        """Return the interior extent (width, height) in stage units."""
        return (
            self.width - 2 * self.wall_thickness,
            self.height - 2 * self.wall_thickness,
        )

    def in_bounds(self, pos: Position) -> bool:
        """Check whether a coordinate lies inside the walls."""
        return (
            self.wall_thickness <= pos.x <= self.max_x
            and self.wall_thickness <= pos.y <= self.max_y
        )

    def to_cell(self, pos: Position) -> tuple[int, int] | None:
        """Map a grid-aligned interior position to (row, col) indices."""
        if not self.in_bounds(pos):
            return None
        dx = pos.x - self.wall_thickness
        dy = pos.y - self.wall_thickness
        if dx % self.cell_size or dy % self.cell_size:
            return None
        return dy // self.cell_size, dx // self.cell_size

    def occupancy(self, snake: Snake) -> np.ndarray:
        """Boolean (rows, cols) mask of interior cells covered by *snake*."""
        mask = np.zeros((len(self.rows), len(self.columns)), dtype=bool)
        for seg in snake.body:
            cell = self.to_cell(seg)
            if cell is not None:
                mask[cell] = True
        return mask

    def free_cells(self, snake: Snake) -> list[Position]:
        """Return every interior cell not covered by *snake*, row-major."""
        rows, cols = np.nonzero(~self.occupancy(snake))
        xs = self.columns[cols].tolist()
        ys = self.rows[rows].tolist()
        return [Position(x, y) for x, y in zip(xs, ys, strict=True)]

    def to_dict(self) -> dict:
        """Serialize arena geometry to a dictionary."""
        return {
            "width": self.width,
            "height": self.height,
            "wall_thickness": self.wall_thickness,
            "cell_size": self.cell_size,
        }


def hits_wall(snake: Snake, arena: Arena) -> bool:
    """Check whether the head has left the playable interior."""
    head = snake.head
    return (
        head.x < arena.wall_thickness
        or head.x > arena.max_x
        or head.y < arena.wall_thickness
        or head.y > arena.max_y
    )


def hits_self(snake: Snake) -> bool:
    """Check whether the head overlaps a segment past the neck."""
    head = snake.head
    return any(seg == head for seg in snake.body[2:])


def is_dead(snake: Snake, arena: Arena) -> bool:
    """Return True when the snake collided with itself or the wall."""
    return hits_self(snake) or hits_wall(snake, arena)
