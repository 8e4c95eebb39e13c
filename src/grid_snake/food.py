"""Food spawning logic."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from grid_snake.arena import Arena
    from grid_snake.snake import Position, Snake

logger = logging.getLogger(__name__)


class FoodSpawner:
    """Places food on a uniformly random free interior cell.

    Uses an injectable NumPy RNG for deterministic, reproducible placement.
    """

    def __init__(
        self,
        arena: Arena,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.arena = arena
        self.rng = rng if rng is not None else np.random.default_rng()

    def spawn(self, snake: Snake) -> Position | None:
        """Pick a free cell for the next food.

        Returns ``None`` when the snake covers the whole interior.
        """
        free = self.arena.free_cells(snake)
        if not free:
            logger.info("No free cells left for food; board is full.")
            return None
        index = int(self.rng.integers(len(free)))
        return free[index]
