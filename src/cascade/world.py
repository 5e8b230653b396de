import random

from esper import World

from cascade.components.game_state import GameMode, GameState
from cascade.components.palette import Palette, PaletteRegistry
from cascade.components.rules import Rules
from cascade.constants import PALETTE_COLORS
from .events.bus import EventBus


def create_world(
    event_bus: EventBus,
    initial_mode: GameMode = GameMode.MENU,
    *,
    rng: random.Random | None = None,
    rules: Rules | None = None,
    palette: dict[str, tuple[int, int, int]] | None = None,
) -> World:
    world = World()
    setattr(world, "random", rng or random.Random())

    # Global game state resource.
    world.create_entity(GameState(mode=initial_mode))

    # Single registry entity with the palette and rules.
    world.create_entity(
        PaletteRegistry(),
        Palette(colors=dict(palette or PALETTE_COLORS)),
        rules or Rules(),
    )
    return world
