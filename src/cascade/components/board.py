from dataclasses import dataclass, field
from typing import Optional

from cascade.components.grid import Grid, Position


@dataclass(slots=True)
class Board:
    size: int
    grid: Optional[Grid] = None
    # Previous snapshot and the cells the last fill touched, kept for animation diffing.
    previous_grid: Optional[Grid] = None
    last_changed: list[Position] = field(default_factory=list)
