"""Entry point for the Colour Cascade flood-fill puzzle.

Sets up ECS world, event bus, systems, and Arcade window.
"""
import logging

from arcade import Window, run, set_background_color, color
from cascade.world import create_world
from cascade.events.bus import EVENT_KEY_PRESS, EVENT_MOUSE_PRESS, EVENT_TICK, EventBus
from cascade.components.game_state import GameMode
from cascade.menu.factory import spawn_main_menu
from cascade.menu.input_system import MenuInputSystem
from cascade.menu.render_system import MenuRenderSystem
from cascade.systems.board import BoardSystem
from cascade.systems.game_flow_system import GameFlowSystem
from cascade.systems.input import InputSystem
from cascade.systems.render import RenderSystem
from cascade.utils.game_state import get_game_state


class ColorCascadeWindow(Window):
    def __init__(self):
        super().__init__(800, 900, "Colour Cascade", resizable=True)
        self.set_update_rate(1/60)
        self.event_bus = EventBus()
        self.world = create_world(self.event_bus, initial_mode=GameMode.MENU)

        # Flow and grid engine
        self.game_flow_system = GameFlowSystem(
            self.world,
            self.event_bus,
            menu_size_provider=lambda: (self.width, self.height),
        )
        self.board_system = BoardSystem(self.world, self.event_bus)

        # Menu systems
        spawn_main_menu(self.world, self.width, self.height)
        self.menu_input_system = MenuInputSystem(self.world, self.event_bus)
        self.menu_render_system = MenuRenderSystem(self.world, self)

        # Gameplay interface
        self.input_system = InputSystem(self.event_bus, self, self.world)
        self.render_system = RenderSystem(self.world, self.event_bus, self)

        set_background_color(color.DARK_GUNMETAL)

    def on_draw(self):
        self.clear()
        state = get_game_state(self.world)
        if state and state.mode == GameMode.MENU:
            self.menu_render_system.process()
            return
        self.render_system.process()

    def on_update(self, delta_time: float):
        self.event_bus.emit(EVENT_TICK, dt=delta_time)

    def on_mouse_press(self, x: float, y: float, button: int, modifiers: int):
        self.event_bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=button)

    def on_key_press(self, symbol: int, modifiers: int):
        self.event_bus.emit(EVENT_KEY_PRESS, symbol=symbol, modifiers=modifiers)


def main():
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    ColorCascadeWindow()
    run()

if __name__ == "__main__":
    main()
