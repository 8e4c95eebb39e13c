"""Pure tick step composing direction, movement, food, and collision logic."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, replace

from grid_snake.arena import Arena, is_dead
from grid_snake.food import FoodSpawner
from grid_snake.snake import (
    Direction,
    Position,
    Snake,
    grow,
    move,
    resolve_direction,
)

logger = logging.getLogger(__name__)


class GameStatus(str, enum.Enum):
    """Lifecycle states of a single game."""

    RUNNING = "running"
    WON = "won"
    LOST = "lost"


_MESSAGES: dict[GameStatus, str] = {
    GameStatus.WON: "win the game",
    GameStatus.LOST: "lose the game",
}


@dataclass(frozen=True)
class GameState:
    """Immutable snapshot of a game; every tick produces a new one."""

    snake: Snake
    food: Position | None
    status: GameStatus = GameStatus.RUNNING
    tick: int = 0

    @property
    def terminal(self) -> bool:
        return self.status != GameStatus.RUNNING

    @property
    def message(self) -> str | None:
        """Human-readable outcome, or ``None`` while running."""
        return _MESSAGES.get(self.status)

    def to_dict(self) -> dict:
        """Return the full, serializable game state."""
        return {
            "tick": self.tick,
            "status": self.status.value,
            "message": self.message,
            "snake": self.snake.to_dict(),
            "food": list(self.food) if self.food is not None else None,
        }


def initial_state(snake: Snake, spawner: FoodSpawner) -> GameState:
    """Build the opening state with freshly spawned food."""
    food = spawner.spawn(snake)
    if food is None:
        return GameState(snake=snake, food=None, status=GameStatus.WON)
    return GameState(snake=snake, food=food)


def step(
    state: GameState,
    requested: Direction | None,
    arena: Arena,
    spawner: FoodSpawner,
) -> GameState:
    """Advance *state* by one tick.

    Terminal states are returned unchanged. Eating the last food that can
    be placed ends the game as won before the growth step is applied.
    """
    if state.terminal:
        return state

    direction = resolve_direction(state.snake, requested)
    snake = move(state.snake, direction, arena.cell_size)
    food = state.food
    tick = state.tick + 1

    if food is not None and snake.head == food:
        new_food = spawner.spawn(snake)
        if new_food is None:
            logger.info("Board full at tick %d; game won.", tick)
            return GameState(
                snake=snake, food=None, status=GameStatus.WON, tick=tick,
            )
        snake = grow(snake, food)
        logger.debug(
            "Food eaten at %s; length %d, next food at %s.",
            food, len(snake.body), new_food,
        )
        food = new_food

    if is_dead(snake, arena):
        logger.info(
            "Snake died at tick %d with length %d.", tick, len(snake.body),
        )
        return GameState(
            snake=snake, food=food, status=GameStatus.LOST, tick=tick,
        )

    return replace(state, snake=snake, food=food, tick=tick)
