"""Game configuration dataclasses."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path

from grid_snake.arena import Arena
from grid_snake.snake import Direction, Position, Snake

logger = logging.getLogger(__name__)

DEFAULT_KEY_MAP: dict[str, str] = {
    "ArrowRight": "right",
    "ArrowLeft": "left",
    "ArrowDown": "down",
    "ArrowUp": "up",
}


@dataclass(frozen=True)
class Palette:
    """Colours and font used by the drawing plan."""

    wall: str = "red"
    head: str = "#f48126"
    body: str = "skyblue"
    food: str = "#40da4c"
    text: str = "green"
    font: str = "24px Courier New"


@dataclass(frozen=True)
class GameConfig:
    """Full game configuration.

    Supports JSON serialization for reproducibility.
    """

    # Arena
    width: int = 480
    height: int = 320
    wall_thickness: int = 10
    cell_size: int = 10

    # Timing
    tick_period_ms: int = 200

    # Snake
    initial_body: tuple[tuple[int, int], ...] = ((230, 130), (230, 140))

    # Input
    key_map: dict[str, str] = field(
        default_factory=lambda: dict(DEFAULT_KEY_MAP),
    )

    # Food placement; None draws fresh OS entropy.
    seed: int | None = None

    palette: Palette = field(default_factory=Palette)

    def __post_init__(self) -> None:
        if self.tick_period_ms <= 0:
            raise ValueError("tick_period_ms must be positive.")
        unknown = [
            v for v in self.key_map.values()
            if not isinstance(v, str) or v.upper() not in Direction.__members__
        ]
        if unknown:
            raise ValueError(f"Unknown directions in key_map: {unknown!r}")

    def arena(self) -> Arena:
        """Build the arena described by this config."""
        return Arena(
            width=self.width,
            height=self.height,
            wall_thickness=self.wall_thickness,
            cell_size=self.cell_size,
        )

    def initial_snake(self) -> Snake:
        return Snake(tuple(Position(x, y) for x, y in self.initial_body))

    def directions(self) -> dict[str, Direction]:
        """Resolve the key map into Direction values."""
        return {k: Direction.from_name(v) for k, v in self.key_map.items()}

    def to_dict(self) -> dict:
        """Serialize to a plain dict (tuples become lists)."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def from_dict(cls, raw: dict) -> GameConfig:
        raw = dict(raw)
        unknown = set(raw) - {f.name for f in fields(cls)}
        if unknown:
            raise ValueError(f"Unknown config keys: {sorted(unknown)}")
        palette_data = raw.pop("palette", {})
        try:
            raw["palette"] = Palette(**palette_data)
        except TypeError as exc:
            raise ValueError(f"Invalid palette: {exc}") from exc
        if "initial_body" in raw:
            raw["initial_body"] = tuple(tuple(p) for p in raw["initial_body"])
        return cls(**raw)

    @classmethod
    def load(cls, path: str | Path) -> GameConfig:
        """Load config from a JSON file."""
        return cls.from_dict(json.loads(Path(path).read_text()))
