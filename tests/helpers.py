from __future__ import annotations

import random
from typing import Sequence

from esper import World

from cascade.components.game_state import GameMode
from cascade.components.grid import Cell, CellType, Grid
from cascade.components.rules import Rules
from cascade.constants import OBSTACLE_COLOR
from cascade.events.bus import EventBus
from cascade.world import create_world

# Single-letter shorthand for palette colours in grid diagrams.
LETTER_COLORS = {
    "R": "red",
    "G": "green",
    "B": "blue",
    "Y": "yellow",
    "P": "purple",
}


def make_grid(rows: Sequence[str]) -> Grid:
    """Build a grid from a diagram.

    Upper-case letters are normal cells, lower-case letters are bonus cells of
    that colour and ``#`` is an obstacle.
    """
    cells = []
    for line in rows:
        row = []
        for char in line:
            if char == "#":
                row.append(Cell(type=CellType.OBSTACLE, color=OBSTACLE_COLOR))
            elif char.islower():
                row.append(Cell(type=CellType.BONUS, color=LETTER_COLORS[char.upper()]))
            else:
                row.append(Cell(type=CellType.NORMAL, color=LETTER_COLORS[char]))
        cells.append(row)
    return Grid.from_rows(cells)


def grid_letters(grid: Grid) -> list[str]:
    """Inverse of make_grid, handy for asserting whole boards."""
    names = {v: k for k, v in LETTER_COLORS.items()}
    lines = []
    for row in grid.cells:
        chars = []
        for cell in row:
            if cell.is_obstacle:
                chars.append("#")
            elif cell.is_bonus:
                chars.append(names[cell.color].lower())
            else:
                chars.append(names[cell.color])
        lines.append("".join(chars))
    return lines


def make_world(
    mode: GameMode = GameMode.PLAYING,
    *,
    seed: int = 0,
    rules: Rules | None = None,
) -> tuple[EventBus, World]:
    bus = EventBus()
    world = create_world(bus, initial_mode=mode, rng=random.Random(seed), rules=rules)
    return bus, world
