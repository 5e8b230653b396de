from esper import World

from cascade.components.board import Board
from cascade.components.game_state import GameMode, GameState
from cascade.components.grid import CellType, Grid
from cascade.components.session import GameSession
from cascade.constants import BONUS_RGB, CELL_GAP, KEY_BINDINGS, OBSTACLE_RGB, SWATCH_RADIUS
from cascade.events.bus import EVENT_TICK, EventBus
from cascade.systems.grid_ops import reachable_from_origin
from cascade.ui.layout import cell_rect, compute_board_geometry, dialog_buttons, swatch_centers
from cascade.utils.game_state import get_game_state
from cascade.components.palette import Palette
from cascade.utils.registry import get_palette


def completion_accent(state: GameState, palette: Palette):
    """RGB of the colour that finished the level, or None when there is none."""
    if state.completion_color is None or state.completion_color not in palette:
        return None
    return palette.rgb_for(state.completion_color)


class RenderSystem:
    """Draws the grid, counters, palette swatches and end-of-level dialogs."""

    def __init__(self, world: World, event_bus: EventBus, window):
        self.world = world
        self.event_bus = event_bus
        self.window = window
        self._time = 0.0
        self.event_bus.subscribe(EVENT_TICK, self.on_tick)

    def on_tick(self, sender, **kwargs):
        try:
            self._time += float(kwargs.get('dt', 1/60))
        except (TypeError, ValueError):
            self._time += 1/60

    def process(self):
        # Local import keeps tests headless without creating a window.
        import arcade
        state = get_game_state(self.world)
        if state is None or state.mode == GameMode.MENU:
            return
        board, session = self._board_and_session()
        if board is None or board.grid is None:
            return
        self._draw_grid(arcade, board.grid, session)
        self._draw_info(arcade, state, session)
        if state.mode == GameMode.LEVEL_COMPLETE:
            self._draw_level_complete(arcade, state, session)
        elif state.mode == GameMode.GAME_OVER:
            self._draw_game_over(arcade, state, session)

    def _board_and_session(self):
        for _, (board, session) in self.world.get_components(Board, GameSession):
            return board, session
        return None, None

    def _draw_grid(self, arcade, grid: Grid, session: GameSession):
        palette = get_palette(self.world)
        size = grid.size
        cell_size, start_x, start_y = compute_board_geometry(self.window.width, self.window.height, size)
        region = reachable_from_origin(grid)
        pulse = 0.5 + 0.5 * abs(((self._time * 2) % 2) - 1)
        for row, col in grid.positions():
            cell = grid.at(row, col)
            left, bottom = cell_rect(row, col, cell_size, start_x, start_y, size)
            inner = cell_size - CELL_GAP
            if cell.type is CellType.OBSTACLE:
                fill = OBSTACLE_RGB
            elif cell.type is CellType.BONUS:
                fill = BONUS_RGB
            else:
                fill = palette.rgb_for(cell.color)
            arcade.draw_lbwh_rectangle_filled(left, bottom, inner, inner, fill)
            if (row, col) in region and (row, col) != (0, 0):
                arcade.draw_lbwh_rectangle_outline(left, bottom, inner, inner, (255, 255, 255, 60), border_width=1)
            if cell.type is CellType.BONUS:
                arcade.draw_text(
                    "★", left + inner / 2, bottom + inner / 2,
                    (255, 255, 255, int(155 + 100 * pulse)), max(8, int(inner * 0.6)),
                    anchor_x="center", anchor_y="center", bold=True,
                )
        origin_left, origin_bottom = cell_rect(0, 0, cell_size, start_x, start_y, size)
        arcade.draw_lbwh_rectangle_outline(
            origin_left, origin_bottom, cell_size - CELL_GAP, cell_size - CELL_GAP, arcade.color.WHITE, border_width=2,
        )
        if session.multiplier_active:
            board_top = start_y + size * cell_size
            board_right = start_x + size * cell_size
            arcade.draw_circle_filled(board_right - 12, board_top + 14, 12, arcade.color.RED)
            arcade.draw_text(
                f"2x ({session.multiplier_turns_remaining})", board_right - 30, board_top + 14,
                arcade.color.WHITE, 12, anchor_x="right", anchor_y="center", bold=True,
            )

    def _draw_info(self, arcade, state: GameState, session: GameSession):
        palette = get_palette(self.world)
        width = self.window.width
        arcade.draw_text(f"Level: {session.level}", 20, 110, arcade.color.WHITE, 18, bold=True)
        arcade.draw_text(f"Move(s) left: {session.moves_remaining}", 20, 84, arcade.color.WHITE, 14)
        arcade.draw_text(
            f"Score: {session.score}", width - 20, 110, arcade.color.WHITE, 18, anchor_x="right", bold=True,
        )
        arcade.draw_text(
            f"High Score: {state.high_score}", width - 20, 84, arcade.color.WHITE, 14, anchor_x="right",
        )
        for (cx, cy), name in zip(swatch_centers(width, len(palette)), palette.names()):
            arcade.draw_circle_filled(cx, cy, SWATCH_RADIUS, palette.rgb_for(name))
            arcade.draw_circle_outline(cx, cy, SWATCH_RADIUS, arcade.color.WHITE, 2)
        keys = ", ".join(letter.upper() for letter in KEY_BINDINGS[:len(palette)])
        arcade.draw_text(
            f"Press {keys} keys to play", width / 2, 6, arcade.color.LIGHT_GRAY, 11, anchor_x="center",
        )

    def _draw_dialog_frame(self, arcade, title: str):
        width, height = self.window.width, self.window.height
        arcade.draw_lrbt_rectangle_filled(0, width, 0, height, (0, 0, 0, 128))
        arcade.draw_lbwh_rectangle_filled(width / 2 - 220, height / 2 - 170, 440, 340, (55, 48, 163))
        arcade.draw_text(
            title, width / 2, height / 2 + 130, arcade.color.WHITE, 28, anchor_x="center", anchor_y="center", bold=True,
        )

    def _draw_dialog_buttons(self, arcade, mode: GameMode):
        for button in dialog_buttons(mode, self.window.width, self.window.height):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, arcade.color.GREEN)
            arcade.draw_text(
                button.label, button.x, button.y, arcade.color.WHITE, 18,
                anchor_x="center", anchor_y="center", bold=True,
            )

    def _draw_level_complete(self, arcade, state: GameState, session: GameSession):
        self._draw_dialog_frame(arcade, f"Level {session.level} Complete!")
        cx, cy = self.window.width / 2, self.window.height / 2
        accent = completion_accent(state, get_palette(self.world))
        if accent is not None:
            arcade.draw_lbwh_rectangle_filled(cx - 180, cy + 100, 360, 6, accent)
        lines = (
            ("Level Score", session.base_score),
            ("Moves Remaining", session.moves_remaining),
            ("Bonus", session.move_bonus),
            ("Total Score", session.score),
        )
        for offset, (label, value) in enumerate(lines):
            y = cy + 70 - offset * 36
            arcade.draw_text(label, cx - 180, y, arcade.color.WHITE, 18, anchor_y="center")
            arcade.draw_text(str(value), cx + 180, y, arcade.color.WHITE, 18, anchor_x="right", anchor_y="center")
        self._draw_dialog_buttons(arcade, GameMode.LEVEL_COMPLETE)

    def _draw_game_over(self, arcade, state: GameState, session: GameSession):
        self._draw_dialog_frame(arcade, "Game Over")
        cx, cy = self.window.width / 2, self.window.height / 2
        arcade.draw_text(
            f"You've run out of moves. Final score: {session.score}", cx, cy + 40,
            arcade.color.WHITE, 16, anchor_x="center", anchor_y="center",
        )
        if session.score > 0 and session.score == state.high_score:
            arcade.draw_text("New High Score!", cx, cy, arcade.color.GREEN, 18, anchor_x="center", anchor_y="center")
        self._draw_dialog_buttons(arcade, GameMode.GAME_OVER)
