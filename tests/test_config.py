"""Tests for the game configuration dataclasses."""

import json

import pytest

from grid_snake.config import DEFAULT_KEY_MAP, GameConfig, Palette
from grid_snake.snake import Direction, Position


class TestPalette:
    def test_defaults(self):
        p = Palette()
        assert p.wall == "red"
        assert p.head == "#f48126"
        assert p.body == "skyblue"
        assert p.food == "#40da4c"


class TestGameConfig:
    def test_defaults(self):
        cfg = GameConfig()
        assert (cfg.width, cfg.height) == (480, 320)
        assert cfg.cell_size == 10
        assert cfg.wall_thickness == 10
        assert cfg.tick_period_ms == 200
        assert cfg.initial_body == ((230, 130), (230, 140))
        assert cfg.key_map == DEFAULT_KEY_MAP
        assert cfg.seed is None

    def test_arena_and_snake(self):
        cfg = GameConfig()
        assert cfg.arena().max_x == 460
        assert cfg.initial_snake().head == Position(230, 130)

    def test_directions(self):
        assert GameConfig().directions()["ArrowUp"] is Direction.UP

    def test_unknown_direction_rejected(self):
        with pytest.raises(ValueError, match="Unknown directions"):
            GameConfig(key_map={"w": "forward"})

    def test_non_string_direction_rejected(self):
        with pytest.raises(ValueError, match="Unknown directions"):
            GameConfig(key_map={"w": 3})

    def test_from_dict_unknown_key_rejected(self):
        with pytest.raises(ValueError, match="Unknown config keys"):
            GameConfig.from_dict({"bogus": 1})

    def test_from_dict_bad_palette_rejected(self):
        with pytest.raises(ValueError, match="Invalid palette"):
            GameConfig.from_dict({"palette": {"glow": "pink"}})

    def test_invalid_tick_period(self):
        with pytest.raises(ValueError, match="tick_period_ms"):
            GameConfig(tick_period_ms=0)

    def test_key_map_not_shared(self):
        a, b = GameConfig(), GameConfig()
        a.key_map["x"] = "up"
        assert "x" not in b.key_map

    def test_save_and_load(self, tmp_path):
        cfg = GameConfig(
            width=200, seed=3,
            initial_body=((50, 50), (50, 60), (50, 70)),
            palette=Palette(food="yellow"),
        )
        path = tmp_path / "game.json"
        cfg.save(path)
        assert path.exists()

        loaded = GameConfig.load(path)
        assert loaded == cfg
        assert loaded.initial_body == ((50, 50), (50, 60), (50, 70))
        assert loaded.palette.food == "yellow"

    def test_to_dict_serializable(self):
        serialized = json.dumps(GameConfig().to_dict())
        assert isinstance(serialized, str)
