"""Pulse-driven game loop and the clocks that drive it."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterable, AsyncIterator

import numpy as np

from grid_snake.config import GameConfig
from grid_snake.controls import KeyInput
from grid_snake.engine import GameState, initial_state, step
from grid_snake.food import FoodSpawner
from grid_snake.render import (
    DrawCommand,
    RenderSink,
    arena_plan,
    frame_plan,
    outcome_plan,
)
from grid_snake.snake import Direction

logger = logging.getLogger(__name__)


class IntervalClock:
    """Emits a pulse every *period_ms* milliseconds until stopped."""

    def __init__(self, period_ms: int) -> None:
        if period_ms <= 0:
            raise ValueError("period_ms must be positive.")
        self.period_ms = period_ms
        self._stopped = False

    def stop(self) -> None:
        self._stopped = True

    async def __aiter__(self) -> AsyncIterator[int]:
        interval = self.period_ms / 1000.0
        count = 0
        while not self._stopped:
            await asyncio.sleep(interval)
            if self._stopped:
                return
            count += 1
            yield count


class ManualClock:
    """Emits a fixed number of pulses, yielding to the event loop between them."""

    def __init__(self, pulses: int) -> None:
        if pulses < 0:
            raise ValueError("pulses must be >= 0.")
        self.pulses = pulses

    async def __aiter__(self) -> AsyncIterator[int]:
        for count in range(1, self.pulses + 1):
            await asyncio.sleep(0)
            yield count


class GameLoopScheduler:
    """Owns the current game state and advances it once per clock pulse.

    Direction requests land in a single slot that each pulse reads; a newer
    request overwrites any older one that has not been consumed yet, and the
    slot keeps its value until it is overwritten.
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        rng: np.random.Generator | None = None,
    ) -> None:
        self.config = config if config is not None else GameConfig()
        self.arena = self.config.arena()
        self.rng = rng if rng is not None else np.random.default_rng(
            self.config.seed,
        )
        self.spawner = FoodSpawner(self.arena, rng=self.rng)
        self.keys = KeyInput(self.config.directions())
        self._requested: Direction | None = None
        self._state = initial_state(self.config.initial_snake(), self.spawner)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def requested_direction(self) -> Direction | None:
        return self._requested

    def request_direction(self, direction: Direction) -> None:
        """Record the latest direction request."""
        self._requested = direction

    def handle_key(self, key: object) -> Direction | None:
        """Map a raw key event and record it; unmapped keys are ignored."""
        direction = self.keys.translate(key)
        if direction is not None:
            self.request_direction(direction)
        return direction

    def pulse(self) -> GameState | None:
        """Run one tick. Returns ``None`` once the game has ended."""
        if self._state.terminal:
            return None
        self._state = step(
            self._state, self._requested, self.arena, self.spawner,
        )
        if self._state.terminal:
            logger.info(
                "Game finished at tick %d: %s.",
                self._state.tick, self._state.message,
            )
        return self._state

    def frame(self) -> list[DrawCommand]:
        """Drawing plan for the current state."""
        if self._state.terminal:
            return outcome_plan(self._state, self.arena, self.config.palette)
        return frame_plan(self._state, self.arena, self.config.palette)

    def opening(self) -> list[DrawCommand]:
        """Walls followed by the first frame."""
        return arena_plan(self.arena, self.config.palette) + self.frame()

    async def run(
        self, clock: AsyncIterable[int], sink: RenderSink,
    ) -> GameState:
        """Drive the game from *clock* pulses until it ends or the clock stops.

        The terminal outcome is rendered once, after which no further
        pulses are consumed.
        """
        await sink.render(self.opening())
        if self._state.terminal:
            return self._state
        async for _ in clock:
            state = self.pulse()
            if state is None:
                break
            await sink.render(self.frame())
            if state.terminal:
                break
        return self._state
