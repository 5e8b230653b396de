from esper import World

from cascade.components.palette import Palette, PaletteRegistry
from cascade.components.rules import Rules


def get_palette(world: World) -> Palette:
    for entity, _ in world.get_component(PaletteRegistry):
        return world.component_for_entity(entity, Palette)
    raise RuntimeError("Palette definitions not found")


def get_rules(world: World) -> Rules:
    for entity, _ in world.get_component(PaletteRegistry):
        try:
            return world.component_for_entity(entity, Rules)
        except KeyError:
            break
    raise RuntimeError("Rules not found")
