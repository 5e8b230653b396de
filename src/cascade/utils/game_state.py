from __future__ import annotations

import logging

from esper import World

from cascade.components.game_state import GameMode, GameState
from cascade.events.bus import EVENT_GAME_MODE_CHANGED, EventBus

logger = logging.getLogger(__name__)


def get_game_state(world: World) -> GameState | None:
    for _, state in world.get_component(GameState):
        return state
    return None


def set_game_mode(world: World, event_bus: EventBus, mode: GameMode) -> None:
    """Update the global game mode and emit a change event when it differs.

    Any queued delayed transition is dropped.
    """
    state = get_game_state(world)
    if state is None:
        state = GameState(mode=mode)
        world.create_entity(state)
        logger.info("game mode -> %s", mode.name)
        event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=None, new_mode=mode)
        return
    state.pending_mode = None
    state.pending_delay = 0.0
    previous_mode = state.mode
    if previous_mode == mode:
        return
    state.mode = mode
    logger.info("game mode %s -> %s", previous_mode.name, mode.name)
    event_bus.emit(EVENT_GAME_MODE_CHANGED, previous_mode=previous_mode, new_mode=mode)


def schedule_game_mode(world: World, event_bus: EventBus, mode: GameMode, delay: float) -> None:
    """Queue a mode change after delay seconds; applied immediately when delay <= 0."""
    if delay <= 0:
        set_game_mode(world, event_bus, mode)
        return
    state = get_game_state(world)
    if state is None:
        set_game_mode(world, event_bus, mode)
        return
    state.pending_mode = mode
    state.pending_delay = float(delay)
