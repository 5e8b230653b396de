"""Rendering system responsible for drawing the main menu."""
import arcade
from esper import World

from cascade.components.game_state import GameMode
from cascade.menu.components import MenuBackground, MenuButton, MenuTitle
from cascade.utils.game_state import get_game_state


class MenuRenderSystem:
    """Renders menu entities when the game is in menu mode."""

    def __init__(self, world: World, window) -> None:
        self.world = world
        self.window = window

    def process(self) -> None:
        state = get_game_state(self.world)
        if not state or state.mode != GameMode.MENU:
            return

        for _, background in self.world.get_component(MenuBackground):
            arcade.draw_lrbt_rectangle_filled(0, self.window.width, 0, self.window.height, background.color)

        for _, title in self.world.get_component(MenuTitle):
            arcade.draw_text(
                title.text, title.x, title.y, arcade.color.WHITE, 44,
                anchor_x="center", anchor_y="center", bold=True,
            )
            arcade.draw_text(
                title.subtitle, title.x, title.y - 56, arcade.color.LIGHT_GRAY, 18,
                anchor_x="center", anchor_y="center",
            )

        for _, button in self.world.get_component(MenuButton):
            left = button.x - button.width / 2
            bottom = button.y - button.height / 2
            fill_color = arcade.color.PURPLE_HEART if button.enabled else arcade.color.GRAY_BLUE
            arcade.draw_lbwh_rectangle_filled(left, bottom, button.width, button.height, fill_color)
            arcade.draw_lbwh_rectangle_outline(
                left, bottom, button.width, button.height, arcade.color.WHITE, border_width=2,
            )
            arcade.draw_text(
                button.label, button.x, button.y, arcade.color.WHITE, 24,
                anchor_x="center", anchor_y="center", bold=True,
            )
