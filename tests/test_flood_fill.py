import random
from collections import deque

import pytest

from cascade.components.grid import CellType
from cascade.components.rules import Rules
from cascade.constants import PALETTE_COLORS
from cascade.systems.grid_generation import generate
from cascade.systems.grid_ops import flood_fill, is_level_complete
from tests.helpers import grid_letters, make_grid


def _reachable(grid):
    color = grid.origin_color
    seen = {(0, 0)}
    queue = deque([(0, 0)])
    while queue:
        row, col = queue.popleft()
        for nr, nc in ((row + 1, col), (row - 1, col), (row, col + 1), (row, col - 1)):
            if not grid.in_bounds(nr, nc) or (nr, nc) in seen:
                continue
            cell = grid.at(nr, nc)
            if cell.type is CellType.OBSTACLE or cell.color != color:
                continue
            seen.add((nr, nc))
            queue.append((nr, nc))
    return seen


def test_three_by_three_scenario_unifies_grid():
    grid = make_grid(["RRB", "RBB", "BBB"])
    result = flood_fill(grid, "blue")
    assert grid_letters(result.grid) == ["BBB", "BBB", "BBB"]
    assert result.changed_count == 3
    assert is_level_complete(result.grid)


def test_fill_with_origin_color_is_noop():
    grid = make_grid(["RGB", "GRB", "BBR"])
    result = flood_fill(grid, "red")
    assert result.grid is grid
    assert result.changed_count == 0
    assert result.changed_positions == []


def test_fill_leaves_input_grid_untouched():
    grid = make_grid(["RRB", "RBB", "BBB"])
    before = grid_letters(grid)
    flood_fill(grid, "green")
    assert grid_letters(grid) == before


def test_obstacle_blocks_fill():
    grid = make_grid(["R#RR", "GGGG", "GGGG", "GGGG"])
    result = flood_fill(grid, "green")
    assert result.changed_count == 1
    assert grid_letters(result.grid) == ["G#RR", "GGGG", "GGGG", "GGGG"]


def test_cells_beyond_obstacle_matching_target_stay_put():
    grid = make_grid(["R#B", "#BB", "BBB"])
    result = flood_fill(grid, "blue")
    assert result.changed_count == 1
    assert result.changed_positions == [(0, 0)]
    assert grid_letters(result.grid) == ["B#B", "#BB", "BBB"]


def test_bonus_cells_are_recoloured_but_keep_type():
    grid = make_grid(["RrR", "GGG", "GGG"])
    result = flood_fill(grid, "blue")
    assert result.changed_count == 3
    bonus = result.grid.at(0, 1)
    assert bonus.type is CellType.BONUS
    assert bonus.color == "blue"


def test_visit_order_is_depth_first_right_left_down_up():
    grid = make_grid(["RR", "RR"])
    result = flood_fill(grid, "blue")
    assert result.changed_positions == [(0, 0), (1, 0), (1, 1), (0, 1)]


@pytest.mark.parametrize("seed", range(12))
def test_fill_recolours_exactly_the_reachable_region(seed):
    rng = random.Random(seed)
    palette = list(PALETTE_COLORS)
    grid = generate(12, 10, palette, rng=rng, rules=Rules(bonus_chance=1.0))
    region = _reachable(grid)
    target = next(color for color in palette if color != grid.origin_color)
    result = flood_fill(grid, target)

    assert result.changed_count == len(region)
    assert set(result.changed_positions) == region
    for row, col in grid.positions():
        before = grid.at(row, col)
        after = result.grid.at(row, col)
        assert after.type is before.type
        if (row, col) in region:
            assert after.color == target
        else:
            assert after == before
        if before.is_obstacle:
            assert after == before
