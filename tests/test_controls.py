"""Tests for the key input adapter."""

from grid_snake.controls import KeyInput
from grid_snake.snake import Direction


class TestKeyInput:
    def test_default_arrow_keys(self):
        keys = KeyInput()
        assert keys.translate("ArrowRight") is Direction.RIGHT
        assert keys.translate("ArrowLeft") is Direction.LEFT
        assert keys.translate("ArrowDown") is Direction.DOWN
        assert keys.translate("ArrowUp") is Direction.UP

    def test_unmapped_ignored(self):
        keys = KeyInput()
        assert keys.translate("Enter") is None
        assert keys.translate("arrowup") is None

    def test_malformed_ignored(self):
        keys = KeyInput()
        assert keys.translate(None) is None
        assert keys.translate(38) is None
        assert keys.translate(["ArrowUp"]) is None

    def test_custom_map(self):
        keys = KeyInput({"w": Direction.UP})
        assert keys.translate("w") is Direction.UP
        assert keys.translate("ArrowUp") is None
