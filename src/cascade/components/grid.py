from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterator, List, Sequence, Tuple

Position = Tuple[int, int]

ORIGIN: Position = (0, 0)


class CellType(Enum):
    NORMAL = "normal"
    BONUS = "bonus"
    OBSTACLE = "obstacle"


@dataclass(frozen=True, slots=True)
class Cell:
    """A single grid square. Obstacles carry the neutral colour and never change."""
    type: CellType
    color: str

    @property
    def is_obstacle(self) -> bool:
        return self.type is CellType.OBSTACLE

    @property
    def is_bonus(self) -> bool:
        return self.type is CellType.BONUS

    def recolored(self, color: str) -> "Cell":
        return replace(self, color=color)

    def as_normal(self) -> "Cell":
        return replace(self, type=CellType.NORMAL)

    def as_bonus(self) -> "Cell":
        return replace(self, type=CellType.BONUS)


@dataclass(frozen=True, slots=True)
class Grid:
    """Immutable square matrix of cells indexed by (row, col).

    Every mutation helper returns a new grid; snapshots handed out to the
    renderer stay valid after later moves.
    """
    cells: Tuple[Tuple[Cell, ...], ...]

    def __post_init__(self) -> None:
        size = len(self.cells)
        if size == 0:
            raise ValueError("Grid must have at least one row")
        for row in self.cells:
            if len(row) != size:
                raise ValueError(f"Grid must be square, got row of length {len(row)} for size {size}")

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[Cell]]) -> "Grid":
        return cls(cells=tuple(tuple(row) for row in rows))

    @property
    def size(self) -> int:
        return len(self.cells)

    @property
    def origin_color(self) -> str:
        return self.cells[0][0].color

    def at(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def in_bounds(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def neighbors(self, row: int, col: int) -> List[Position]:
        """In-bounds 4-neighbours in up, down, left, right order."""
        candidates = ((row - 1, col), (row + 1, col), (row, col - 1), (row, col + 1))
        return [(r, c) for r, c in candidates if self.in_bounds(r, c)]

    def positions(self) -> Iterator[Position]:
        for row in range(self.size):
            for col in range(self.size):
                yield (row, col)

    def with_cells(self, updates: Dict[Position, Cell]) -> "Grid":
        if not updates:
            return self
        rows = [list(row) for row in self.cells]
        for (row, col), cell in updates.items():
            rows[row][col] = cell
        return Grid.from_rows(rows)
