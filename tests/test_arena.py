"""Tests for arena geometry and collision detection."""

import numpy as np
import pytest

from grid_snake.arena import Arena, hits_self, hits_wall, is_dead
from grid_snake.snake import Position, Snake


class TestArenaInit:
    def test_default_dimensions(self):
        arena = Arena()
        assert (arena.width, arena.height) == (480, 320)
        assert arena.wall_thickness == 10
        assert arena.cell_size == 10
        assert arena.max_x == 460
        assert arena.max_y == 300

    def test_interior_grid_shape(self):
        arena = Arena()
        assert len(arena.columns) == 46
        assert len(arena.rows) == 30
        assert arena.columns[0] == 10
        assert arena.columns[-1] == 460
        assert arena.interior_size == (460, 300)

    def test_no_interior_rejected(self):
        with pytest.raises(ValueError, match="interior cell"):
            Arena(width=20, height=20)

    def test_invalid_cell_size(self):
        with pytest.raises(ValueError, match="cell_size"):
            Arena(cell_size=0)

    def test_to_dict(self):
        assert Arena().to_dict() == {
            "width": 480, "height": 320, "wall_thickness": 10, "cell_size": 10,
        }


class TestArenaCells:
    def test_to_cell(self):
        arena = Arena()
        assert arena.to_cell(Position(10, 10)) == (0, 0)
        assert arena.to_cell(Position(230, 130)) == (12, 22)
        assert arena.to_cell(Position(5, 10)) is None
        assert arena.to_cell(Position(15, 10)) is None

    def test_occupancy_mask(self):
        arena = Arena()
        mask = arena.occupancy(Snake(((230, 130), (230, 140))))
        assert mask.shape == (30, 46)
        assert mask.sum() == 2
        assert mask[12, 22] and mask[13, 22]

    def test_free_cells_excludes_snake(self):
        arena = Arena(width=50, height=30)
        snake = Snake(((20, 10), (30, 10)))
        assert arena.free_cells(snake) == [Position(10, 10)]

    def test_free_cells_count(self):
        arena = Arena()
        free = arena.free_cells(Snake(((230, 130), (230, 140))))
        assert len(free) == 46 * 30 - 2
        assert Position(230, 130) not in free
        assert all(isinstance(p.x, int) for p in free[:5])

    def test_full_arena_has_no_free_cells(self):
        arena = Arena(width=50, height=30)
        snake = Snake(((10, 10), (20, 10), (30, 10)))
        assert arena.free_cells(snake) == []
        assert np.all(arena.occupancy(snake))


class TestWallCollision:
    @pytest.mark.parametrize(
        ("body", "dead"),
        [
            (((9, 100), (19, 100)), True),
            (((10, 100), (20, 100)), False),
            (((100, 9), (100, 19)), True),
            (((100, 10), (100, 20)), False),
            (((460, 100), (450, 100)), False),
            (((461, 100), (451, 100)), True),
            (((100, 300), (100, 290)), False),
            (((100, 301), (100, 291)), True),
        ],
    )
    def test_boundaries(self, body, dead):
        assert hits_wall(Snake(body), Arena()) is dead

    def test_head_above_wall_is_dead(self):
        assert is_dead(Snake(((230, 5), (230, 15))), Arena())


class TestSelfCollision:
    def test_head_on_body(self):
        snake = Snake((
            (20, 20), (20, 30), (30, 30), (30, 20), (20, 20),
        ))
        assert hits_self(snake)
        assert is_dead(snake, Arena())

    def test_neck_is_excluded(self):
        snake = Snake(((20, 20), (20, 20), (30, 20)))
        assert not hits_self(snake)
        assert not is_dead(snake, Arena())

    def test_straight_snake_alive(self):
        assert not is_dead(Snake(((230, 130), (230, 140))), Arena())
