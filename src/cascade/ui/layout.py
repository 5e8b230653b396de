from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from cascade.components.game_state import GameMode
from cascade.constants import (
    BOARD_MAX_HEIGHT_PCT,
    BOARD_MAX_WIDTH_PCT,
    BOTTOM_MARGIN,
    INFO_PANEL_HEIGHT,
    MIN_CELL_SIZE,
    SWATCH_RADIUS,
    SWATCH_SPACING,
)
from cascade.events.bus import (
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_RETURN_TO_MENU,
)


@dataclass(slots=True)
class DialogButton:
    label: str
    event: str
    x: float
    y: float
    width: float = 200.0
    height: float = 52.0

    def contains(self, px: float, py: float) -> bool:
        return (
            self.x - self.width / 2 <= px <= self.x + self.width / 2
            and self.y - self.height / 2 <= py <= self.y + self.height / 2
        )


def compute_board_geometry(window_width: int, window_height: int, grid_size: int):
    """Return (cell_size, start_x, start_y) for the grid.

    The board sits above the info panel and is centred horizontally. Shared by
    rendering and input so hit testing matches what is drawn.
    """
    max_board_w = window_width * BOARD_MAX_WIDTH_PCT
    max_board_h = (window_height - INFO_PANEL_HEIGHT - BOTTOM_MARGIN) * BOARD_MAX_HEIGHT_PCT
    cell_size = int(min(max_board_w, max_board_h) / grid_size)
    if cell_size < MIN_CELL_SIZE:
        cell_size = MIN_CELL_SIZE
    total = grid_size * cell_size
    start_x = (window_width - total) / 2
    start_y = INFO_PANEL_HEIGHT + BOTTOM_MARGIN
    return cell_size, start_x, start_y


def cell_rect(row: int, col: int, cell_size: int, start_x: float, start_y: float, grid_size: int):
    """(left, bottom) of a cell; row 0 is drawn at the top."""
    left = start_x + col * cell_size
    bottom = start_y + (grid_size - 1 - row) * cell_size
    return left, bottom


def swatch_centers(window_width: int, count: int) -> List[Tuple[float, float]]:
    total = (count - 1) * SWATCH_SPACING
    first_x = window_width / 2 - total / 2
    y = BOTTOM_MARGIN + SWATCH_RADIUS + 24
    return [(first_x + i * SWATCH_SPACING, y) for i in range(count)]


def swatch_at_point(x: float, y: float, window_width: int, count: int) -> Optional[int]:
    for index, (cx, cy) in enumerate(swatch_centers(window_width, count)):
        if (x - cx) ** 2 + (y - cy) ** 2 <= SWATCH_RADIUS ** 2:
            return index
    return None


def dialog_buttons(mode: GameMode, window_width: int, window_height: int) -> List[DialogButton]:
    center_x = window_width / 2
    button_y = window_height / 2 - 120
    if mode == GameMode.LEVEL_COMPLETE:
        return [DialogButton("Next Level", EVENT_NEXT_LEVEL_REQUEST, center_x, button_y)]
    if mode == GameMode.GAME_OVER:
        return [
            DialogButton("Main Menu", EVENT_RETURN_TO_MENU, center_x - 115, button_y),
            DialogButton("Play Again", EVENT_RESTART_REQUEST, center_x + 115, button_y),
        ]
    return []
