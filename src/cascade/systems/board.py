from __future__ import annotations

import logging

from esper import World

from cascade.components.board import Board
from cascade.components.game_state import GameMode
from cascade.components.grid import Grid
from cascade.components.session import GameSession
from cascade.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_BONUS_CAPTURED,
    EVENT_COLOR_CHOSEN,
    EVENT_GAME_OVER,
    EVENT_GRID_FILLED,
    EVENT_LEVEL_COMPLETE,
    EVENT_MENU_NEW_GAME_SELECTED,
    EVENT_MOVE_RESOLVED,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_RETURN_TO_MENU,
    EventBus,
)
from cascade.systems.grid_generation import generate
from cascade.systems.grid_ops import find_bonus
from cascade.systems.move_resolution import MoveOutcome, advance_level, new_session, resolve_move
from cascade.utils.game_state import get_game_state
from cascade.utils.registry import get_palette, get_rules

logger = logging.getLogger(__name__)


class BoardSystem:
    """Owns the board entity and forwards colour choices into the grid engine.

    The Board component holds the current grid snapshot; the GameSession on the
    same entity is replaced after every resolved move.
    """

    def __init__(self, world: World, event_bus: EventBus, size: int | None = None):
        self.world = world
        self.event_bus = event_bus
        self.rules = get_rules(world)
        self.palette = get_palette(world)
        self._rng = getattr(world, "random", None)
        self.board_entity = self.world.create_entity(
            Board(size=size or self.rules.grid_size),
            new_session(self.rules),
        )
        self.event_bus.subscribe(EVENT_COLOR_CHOSEN, self.on_color_chosen)
        self.event_bus.subscribe(EVENT_MENU_NEW_GAME_SELECTED, self.on_new_game)
        self.event_bus.subscribe(EVENT_RESTART_REQUEST, self.on_new_game)
        self.event_bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, self.on_next_level)
        self.event_bus.subscribe(EVENT_RETURN_TO_MENU, self.on_return_to_menu)

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def board(self) -> Board:
        return self.world.component_for_entity(self.board_entity, Board)

    @property
    def grid(self) -> Grid | None:
        return self.board.grid

    @property
    def session(self) -> GameSession:
        return self.world.component_for_entity(self.board_entity, GameSession)

    def set_grid(self, grid: Grid) -> None:
        board = self.board
        if grid.size != board.size:
            raise ValueError(f"Grid size {grid.size} does not match board size {board.size}")
        board.previous_grid = None
        board.grid = grid
        board.last_changed = []

    def set_session(self, session: GameSession) -> None:
        # esper replaces a component of the same type in place.
        self.world.add_component(self.board_entity, session)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def on_new_game(self, sender, **payload) -> None:
        self.set_session(new_session(self.rules))
        self._reset_board()

    def on_next_level(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is None or state.mode != GameMode.LEVEL_COMPLETE:
            return
        self.set_session(advance_level(self.session, rules=self.rules))
        self._reset_board()

    def on_return_to_menu(self, sender, **payload) -> None:
        board = self.board
        board.grid = None
        board.previous_grid = None
        board.last_changed = []
        self.set_session(new_session(self.rules))

    def on_color_chosen(self, sender, **payload) -> None:
        index = payload.get("index")
        if index is None:
            return
        state = get_game_state(self.world)
        if state is None or state.input_locked:
            return
        if self.grid is None or self.session.moves_remaining <= 0:
            return
        self.choose_color(self.palette.color_at(int(index)))

    # ------------------------------------------------------------------
    # Move flow
    # ------------------------------------------------------------------

    def choose_color(self, color: str) -> MoveOutcome:
        grid = self.grid
        if grid is None:
            raise RuntimeError("No grid generated; start a game first")
        result = resolve_move(grid, self.session, color, rules=self.rules, palette=self.palette)
        if result.outcome is MoveOutcome.NO_OP:
            return result.outcome

        board = self.board
        board.previous_grid = grid
        board.grid = result.grid
        board.last_changed = list(result.changed_positions)
        self.set_session(result.session)
        session = result.session

        self.event_bus.emit(
            EVENT_GRID_FILLED,
            color=color,
            changed_count=result.changed_count,
            positions=list(result.changed_positions),
        )
        if result.bonus_captured is not None:
            self.event_bus.emit(
                EVENT_BONUS_CAPTURED,
                position=result.bonus_captured,
                points=result.bonus_points,
                multiplier_turns=session.multiplier_turns_remaining,
            )
        self.event_bus.emit(
            EVENT_MOVE_RESOLVED,
            outcome=result.outcome,
            changed_count=result.changed_count,
            session=session,
        )
        if result.outcome is MoveOutcome.LEVEL_COMPLETE:
            logger.info("level %d complete, score %d", session.level, session.score)
            self.event_bus.emit(
                EVENT_LEVEL_COMPLETE,
                level=session.level,
                base_score=session.base_score,
                move_bonus=session.move_bonus,
                moves_remaining=session.moves_remaining,
                score=session.score,
                color=color,
            )
        elif result.outcome is MoveOutcome.GAME_OVER:
            logger.info("game over on level %d, score %d", session.level, session.score)
            self.event_bus.emit(EVENT_GAME_OVER, score=session.score, level=session.level)
        return result.outcome

    def _reset_board(self) -> None:
        level = self.session.level
        grid = generate(
            level,
            self.board.size,
            self.palette.names(),
            rng=self._rng,
            rules=self.rules,
        )
        self.set_grid(grid)
        obstacles = sum(1 for row in grid.cells for cell in row if cell.is_obstacle)
        self.event_bus.emit(
            EVENT_BOARD_RESET,
            level=level,
            has_bonus=find_bonus(grid) is not None,
            obstacles=obstacles,
        )
