"""Factory helpers for creating and removing the main menu entities."""
from esper import World

from cascade.menu.components import MenuAction, MenuBackground, MenuButton, MenuTag, MenuTitle


def spawn_main_menu(world: World, width: int, height: int) -> None:
    """Create the menu background, title and start button."""
    clear_main_menu(world)
    center_x = width / 2
    center_y = height / 2

    world.create_entity(MenuBackground(), MenuTag())
    world.create_entity(
        MenuTitle(
            text="Colour Cascade",
            subtitle="Fill the grid with a single colour in limited moves!",
            x=center_x,
            y=center_y + 110.0,
        ),
        MenuTag(),
    )
    world.create_entity(
        MenuButton(label="Start Game", action=MenuAction.NEW_GAME, x=center_x, y=center_y - 20.0),
        MenuTag(),
    )


def clear_main_menu(world: World) -> None:
    """Remove all entities that are part of the menu UI."""
    to_delete = {ent for ent, _ in world.get_component(MenuTag)}
    for ent in to_delete:
        world.delete_entity(ent, immediate=True)
