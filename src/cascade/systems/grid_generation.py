from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional, Sequence

from cascade.components.grid import Cell, CellType, Grid, Position
from cascade.components.rules import Rules
from cascade.constants import OBSTACLE_COLOR

logger = logging.getLogger(__name__)

MIN_GRID_SIZE = 2


class GridConfigurationError(RuntimeError):
    """Raised when the requested grid cannot hold the required special cells."""


def chebyshev_within(a: Position, b: Position, radius: int) -> bool:
    return abs(a[0] - b[0]) <= radius and abs(a[1] - b[1]) <= radius


def is_valid_obstacle_position(rows: Sequence[Sequence[Cell]], row: int, col: int) -> bool:
    size = len(rows)
    # Keep the 2x2 block at the origin open so the first move always has room.
    if row <= 1 and col <= 1:
        return False
    if rows[row][col].is_obstacle:
        return False
    for nr, nc in ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1)):
        if 0 <= nr < size and 0 <= nc < size and rows[nr][nc].is_obstacle:
            return False
    return True


def is_valid_bonus_position(rows: Sequence[Sequence[Cell]], row: int, col: int, rules: Rules) -> bool:
    size = len(rows)
    if chebyshev_within((row, col), (0, 0), rules.bonus_origin_exclusion):
        return False
    if chebyshev_within((row, col), (size - 1, size - 1), rules.bonus_corner_exclusion):
        return False
    return rows[row][col].type is CellType.NORMAL


def _sample_position(
    rows: Sequence[Sequence[Cell]],
    rng: random.Random,
    valid: Callable[[int, int], bool],
) -> Optional[Position]:
    size = len(rows)
    if not any(valid(r, c) for r in range(size) for c in range(size)):
        return None
    while True:
        row = rng.randrange(size)
        col = rng.randrange(size)
        if valid(row, col):
            return (row, col)


def place_obstacles(rows: List[List[Cell]], count: int, rng: random.Random) -> List[Position]:
    placed: List[Position] = []
    for _ in range(count):
        position = _sample_position(rows, rng, lambda r, c: is_valid_obstacle_position(rows, r, c))
        if position is None:
            raise GridConfigurationError(
                f"No valid obstacle position left on a {len(rows)}x{len(rows)} grid "
                f"after placing {len(placed)} of {count}"
            )
        row, col = position
        rows[row][col] = Cell(type=CellType.OBSTACLE, color=OBSTACLE_COLOR)
        placed.append(position)
    return placed


def place_bonus(rows: List[List[Cell]], rng: random.Random, rules: Rules) -> Optional[Position]:
    position = _sample_position(rows, rng, lambda r, c: is_valid_bonus_position(rows, r, c, rules))
    if position is None:
        logger.debug("no room for a bonus cell on a %dx%d grid", len(rows), len(rows))
        return None
    row, col = position
    rows[row][col] = rows[row][col].as_bonus()
    return position


def generate(
    level: int,
    size: int,
    palette: Sequence[str],
    *,
    rng: random.Random | None = None,
    rules: Rules | None = None,
) -> Grid:
    """Build a fresh random grid for the given level.

    Colours are drawn row-major, then obstacles are placed (one per few levels,
    capped), then a bonus cell is placed with a fixed chance.
    """
    if size < MIN_GRID_SIZE:
        raise ValueError(f"Grid size must be at least {MIN_GRID_SIZE}, got {size}")
    colors = list(palette)
    if not colors:
        raise ValueError("Cannot generate a grid from an empty palette")
    rng = rng or random.Random()
    rules = rules or Rules()

    rows: List[List[Cell]] = [
        [Cell(type=CellType.NORMAL, color=rng.choice(colors)) for _ in range(size)]
        for _ in range(size)
    ]
    obstacles = place_obstacles(rows, rules.obstacle_count(level), rng)
    bonus = None
    if rng.random() < rules.bonus_chance:
        bonus = place_bonus(rows, rng, rules)
    logger.debug("generated level %d grid: %d obstacles, bonus at %s", level, len(obstacles), bonus)
    return Grid.from_rows(rows)
