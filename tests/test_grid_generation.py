import random

import pytest

from cascade.components.grid import CellType
from cascade.components.rules import Rules
from cascade.constants import GRID_SIZE, OBSTACLE_COLOR, PALETTE_COLORS
from cascade.systems.grid_generation import (
    GridConfigurationError,
    generate,
    is_valid_obstacle_position,
)
from cascade.systems.grid_ops import find_bonus
from tests.helpers import make_grid

PALETTE = list(PALETTE_COLORS)


def _obstacles(grid):
    return [(r, c) for r, c in grid.positions() if grid.at(r, c).is_obstacle]


def test_generated_grid_uses_palette_colours():
    grid = generate(1, GRID_SIZE, PALETTE, rng=random.Random(3), rules=Rules(bonus_chance=0.0))
    assert grid.size == GRID_SIZE
    assert all(grid.at(r, c).color in PALETTE for r, c in grid.positions())
    assert all(grid.at(r, c).type is CellType.NORMAL for r, c in grid.positions())


def test_generation_is_deterministic_for_a_seed():
    first = generate(9, GRID_SIZE, PALETTE, rng=random.Random(42))
    second = generate(9, GRID_SIZE, PALETTE, rng=random.Random(42))
    assert first == second


@pytest.mark.parametrize("level, expected", [(1, 0), (3, 0), (4, 1), (8, 2), (12, 3), (40, 3)])
def test_obstacle_count_scales_with_level(level, expected):
    grid = generate(level, GRID_SIZE, PALETTE, rng=random.Random(level), rules=Rules(bonus_chance=0.0))
    assert len(_obstacles(grid)) == expected
    assert Rules().obstacle_count(level) == expected


@pytest.mark.parametrize("seed", range(25))
def test_obstacle_placement_rules(seed):
    grid = generate(12, GRID_SIZE, PALETTE, rng=random.Random(seed))
    obstacles = _obstacles(grid)
    for row, col in obstacles:
        assert not (row <= 1 and col <= 1)
        assert grid.at(row, col).color == OBSTACLE_COLOR
        for nr, nc in grid.neighbors(row, col):
            assert not grid.at(nr, nc).is_obstacle
    origin = grid.at(0, 0)
    assert origin.type is CellType.NORMAL


@pytest.mark.parametrize("seed", range(25))
def test_bonus_placement_rules(seed):
    grid = generate(12, GRID_SIZE, PALETTE, rng=random.Random(seed), rules=Rules(bonus_chance=1.0))
    bonuses = [(r, c) for r, c in grid.positions() if grid.at(r, c).is_bonus]
    assert len(bonuses) == 1
    row, col = bonuses[0]
    assert max(row, col) > 5
    far = GRID_SIZE - 1
    assert max(far - row, far - col) > 3
    assert grid.at(row, col).color in PALETTE


def test_no_bonus_when_chance_is_zero():
    for seed in range(10):
        grid = generate(5, GRID_SIZE, PALETTE, rng=random.Random(seed), rules=Rules(bonus_chance=0.0))
        assert find_bonus(grid) is None


def test_impossible_obstacle_placement_raises():
    with pytest.raises(GridConfigurationError):
        generate(4, 2, PALETTE, rng=random.Random(0), rules=Rules(bonus_chance=0.0))


def test_bonus_skipped_when_grid_too_small():
    grid = generate(1, 4, PALETTE, rng=random.Random(0), rules=Rules(bonus_chance=1.0))
    assert find_bonus(grid) is None


def test_invalid_arguments_rejected():
    with pytest.raises(ValueError):
        generate(1, 1, PALETTE)
    with pytest.raises(ValueError):
        generate(1, GRID_SIZE, [])


def test_obstacle_position_validation():
    rows = make_grid(["RRRR", "RRRR", "RR#R", "RRRR"]).cells
    assert not is_valid_obstacle_position(rows, 1, 1)
    assert not is_valid_obstacle_position(rows, 0, 0)
    assert not is_valid_obstacle_position(rows, 2, 3)
    assert not is_valid_obstacle_position(rows, 2, 2)
    assert is_valid_obstacle_position(rows, 3, 3)
    assert is_valid_obstacle_position(rows, 0, 3)
