"""High-level coordinator for game mode transitions."""
from __future__ import annotations

from typing import Callable

from esper import World

from cascade.components.game_state import GameMode
from cascade.constants import TRANSITION_DELAY
from cascade.events.bus import (
    EVENT_BOARD_RESET,
    EVENT_GAME_OVER,
    EVENT_LEVEL_COMPLETE,
    EVENT_MOVE_RESOLVED,
    EVENT_RETURN_TO_MENU,
    EVENT_TICK,
    EventBus,
)
from cascade.menu.factory import clear_main_menu, spawn_main_menu
from cascade.utils.game_state import get_game_state, schedule_game_mode, set_game_mode


class GameFlowSystem:
    """Drives the Menu -> Playing -> LevelComplete / GameOver state machine.

    The grid engine has already resolved the move when its outcome arrives here;
    the delay before showing the dialog is purely cosmetic and only gates input.
    """

    def __init__(
        self,
        world: World,
        event_bus: EventBus,
        *,
        transition_delay: float = TRANSITION_DELAY,
        menu_size_provider: Callable[[], tuple[int, int]] | None = None,
    ) -> None:
        self.world = world
        self.event_bus = event_bus
        self.transition_delay = transition_delay
        self._menu_size_provider = menu_size_provider

        self.event_bus.subscribe(EVENT_BOARD_RESET, self._on_board_reset)
        self.event_bus.subscribe(EVENT_MOVE_RESOLVED, self._on_move_resolved)
        self.event_bus.subscribe(EVENT_LEVEL_COMPLETE, self._on_level_complete)
        self.event_bus.subscribe(EVENT_GAME_OVER, self._on_game_over)
        self.event_bus.subscribe(EVENT_RETURN_TO_MENU, self._on_return_to_menu)
        self.event_bus.subscribe(EVENT_TICK, self._on_tick)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------

    def _on_board_reset(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is not None:
            state.completion_color = None
        clear_main_menu(self.world)
        set_game_mode(self.world, self.event_bus, GameMode.PLAYING)

    def _on_move_resolved(self, sender, **payload) -> None:
        session = payload.get("session")
        state = get_game_state(self.world)
        if session is None or state is None:
            return
        if session.score > state.high_score:
            state.high_score = session.score

    def _on_level_complete(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is not None:
            state.completion_color = payload.get("color")
        schedule_game_mode(self.world, self.event_bus, GameMode.LEVEL_COMPLETE, self.transition_delay)

    def _on_game_over(self, sender, **payload) -> None:
        schedule_game_mode(self.world, self.event_bus, GameMode.GAME_OVER, self.transition_delay)

    def _on_return_to_menu(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is not None:
            state.completion_color = None
        set_game_mode(self.world, self.event_bus, GameMode.MENU)
        if self._menu_size_provider is not None:
            width, height = self._menu_size_provider()
            spawn_main_menu(self.world, width, height)

    def _on_tick(self, sender, **payload) -> None:
        state = get_game_state(self.world)
        if state is None or state.pending_mode is None:
            return
        try:
            dt = float(payload.get("dt", 0.0))
        except (TypeError, ValueError):
            dt = 0.0
        state.pending_delay -= dt
        if state.pending_delay <= 0:
            set_game_mode(self.world, self.event_bus, state.pending_mode)
