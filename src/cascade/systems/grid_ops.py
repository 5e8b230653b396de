"""Pure grid operations: flood fill, connectivity, completion and bonus capture.

Nothing here touches the ECS world; callers pass a Grid and get a new one back.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Set

from cascade.components.grid import ORIGIN, Cell, CellType, Grid, Position

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class FillResult:
    grid: Grid
    changed_count: int
    changed_positions: List[Position] = field(default_factory=list)


def _fill_steps(row: int, col: int) -> List[Position]:
    # Pushed right, left, down, up; popped LIFO.
    return [(row, col + 1), (row, col - 1), (row + 1, col), (row - 1, col)]


def flood_fill(grid: Grid, target_color: str) -> FillResult:
    """Recolour the region connected to the origin to target_color.

    The region is every cell reachable from the origin through cells of the
    origin's current colour without crossing an Obstacle. Bonus cells in the
    region are recoloured and keep their type.
    """
    start_color = grid.origin_color
    if start_color == target_color:
        return FillResult(grid=grid, changed_count=0)

    visited: Set[Position] = set()
    order: List[Position] = []
    stack: List[Position] = [ORIGIN]
    while stack:
        row, col = stack.pop()
        if (row, col) in visited or not grid.in_bounds(row, col):
            continue
        cell = grid.at(row, col)
        if cell.is_obstacle or cell.color != start_color:
            continue
        visited.add((row, col))
        order.append((row, col))
        stack.extend(_fill_steps(row, col))

    updates = {pos: grid.at(*pos).recolored(target_color) for pos in order}
    logger.debug("flood fill %s -> %s changed %d cells", start_color, target_color, len(order))
    return FillResult(grid=grid.with_cells(updates), changed_count=len(order), changed_positions=order)


def reachable_from_origin(grid: Grid) -> Set[Position]:
    """Cells connected to the origin through its colour, obstacles excluded."""
    color = grid.origin_color
    seen: Set[Position] = set()
    stack: List[Position] = [ORIGIN]
    while stack:
        pos = stack.pop()
        if pos in seen:
            continue
        seen.add(pos)
        for nr, nc in grid.neighbors(*pos):
            neighbor = grid.at(nr, nc)
            if not neighbor.is_obstacle and neighbor.color == color:
                stack.append((nr, nc))
    return seen


def is_connected_to_origin(grid: Grid, row: int, col: int) -> bool:
    """Return True when (row, col) links back to the origin through the origin's colour.

    The walk starts at the given cell and only steps onto non-obstacle cells
    whose colour matches the origin.
    """
    color = grid.origin_color
    visited: Set[Position] = set()
    stack: List[Position] = [(row, col)]
    while stack:
        pos = stack.pop()
        if pos in visited:
            continue
        visited.add(pos)
        if pos == ORIGIN:
            return True
        for nr, nc in grid.neighbors(*pos):
            neighbor = grid.at(nr, nc)
            if neighbor.color == color and not neighbor.is_obstacle:
                stack.append((nr, nc))
    return False


def is_level_complete(grid: Grid) -> bool:
    # Uncaptured bonus cells never block completion.
    color = grid.origin_color
    return all(
        cell.type is not CellType.NORMAL or cell.color == color
        for row in grid.cells
        for cell in row
    )


def find_bonus(grid: Grid) -> Optional[Position]:
    for row, col in grid.positions():
        if grid.at(row, col).is_bonus:
            return (row, col)
    return None


def check_bonus_capture(grid: Grid) -> Optional[Position]:
    """Return the bonus position if it is fully enclosed by the origin's region."""
    position = find_bonus(grid)
    if position is None:
        return None
    color = grid.origin_color
    for nr, nc in grid.neighbors(*position):
        neighbor: Cell = grid.at(nr, nc)
        if neighbor.is_obstacle:
            continue
        if neighbor.color != color or not is_connected_to_origin(grid, nr, nc):
            return None
    return position


def release_bonus(grid: Grid, position: Position) -> Grid:
    """Convert a captured bonus cell back to a normal one, keeping its colour."""
    return grid.with_cells({position: grid.at(*position).as_normal()})
