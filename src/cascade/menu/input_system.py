"""Input handling for the ECS-driven main menu."""
from esper import World

from cascade.components.game_state import GameMode
from cascade.events.bus import (
    EVENT_KEY_PRESS,
    EVENT_MENU_NEW_GAME_SELECTED,
    EVENT_MOUSE_PRESS,
    EventBus,
)
from cascade.menu.components import MenuAction, MenuButton
from cascade.utils.game_state import get_game_state

# arcade.key.ENTER / RETURN; compared numerically to keep arcade out of headless tests.
KEY_ENTER = 65293


class MenuInputSystem:
    """Processes input events while the game is in the menu mode."""

    def __init__(self, world: World, event_bus: EventBus) -> None:
        self.world = world
        self._event_bus = event_bus
        event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **payload) -> None:
        x = payload.get("x")
        y = payload.get("y")
        if x is None or y is None:
            return
        self.handle_mouse_press(float(x), float(y))

    def on_key_press(self, sender, **payload) -> None:
        symbol = payload.get("symbol")
        if symbol is None:
            return
        self.handle_key_press(int(symbol), int(payload.get("modifiers", 0)))

    def handle_mouse_press(self, x: float, y: float) -> None:
        """Start the game when the start button is clicked."""
        if not self._in_menu():
            return
        for _, menu_button in self.world.get_component(MenuButton):
            if not menu_button.enabled:
                continue
            if self._point_inside_button(x, y, menu_button):
                self._activate_action(menu_button.action)
                return

    def handle_key_press(self, symbol: int, modifiers: int) -> None:
        """Allow keyboard activation using the Enter key."""
        if not self._in_menu():
            return
        if symbol in (KEY_ENTER, 13):
            self._activate_action(MenuAction.NEW_GAME)

    def _activate_action(self, action: MenuAction) -> None:
        if action == MenuAction.NEW_GAME:
            self._event_bus.emit(EVENT_MENU_NEW_GAME_SELECTED)

    def _in_menu(self) -> bool:
        state = get_game_state(self.world)
        return state is not None and state.mode == GameMode.MENU

    @staticmethod
    def _point_inside_button(x: float, y: float, button: MenuButton) -> bool:
        half_w = button.width / 2
        half_h = button.height / 2
        return (
            button.x - half_w <= x <= button.x + half_w
            and button.y - half_h <= y <= button.y + half_h
        )
