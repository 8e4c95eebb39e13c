"""Grid Snake — core game engine."""

from grid_snake.arena import Arena, is_dead
from grid_snake.config import GameConfig, Palette
from grid_snake.engine import GameState, GameStatus, step
from grid_snake.food import FoodSpawner
from grid_snake.scheduler import GameLoopScheduler, IntervalClock, ManualClock
from grid_snake.snake import Direction, Position, Snake, move, resolve_direction

__all__ = [
    "Arena",
    "Direction",
    "FoodSpawner",
    "GameConfig",
    "GameLoopScheduler",
    "GameState",
    "GameStatus",
    "IntervalClock",
    "ManualClock",
    "Palette",
    "Position",
    "Snake",
    "is_dead",
    "move",
    "resolve_direction",
    "step",
]
