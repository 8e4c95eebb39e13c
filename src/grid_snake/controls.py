"""Key-to-direction input adapter."""

from __future__ import annotations

from collections.abc import Mapping

from grid_snake.config import DEFAULT_KEY_MAP
from grid_snake.snake import Direction


class KeyInput:
    """Translates raw key names into directions through a fixed table."""

    def __init__(self, key_map: Mapping[str, Direction] | None = None) -> None:
        if key_map is None:
            key_map = {
                k: Direction.from_name(v) for k, v in DEFAULT_KEY_MAP.items()
            }
        self.key_map = dict(key_map)

    def translate(self, key: object) -> Direction | None:
        """Return the mapped direction, or ``None`` for anything unmapped."""
        if not isinstance(key, str):
            return None
        return self.key_map.get(key)
