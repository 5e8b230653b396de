from esper import World

from cascade.components.game_state import GameMode
from cascade.constants import KEY_BINDINGS
from cascade.events.bus import (
    EVENT_COLOR_CHOSEN,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_RETURN_TO_MENU,
    EventBus,
)
from cascade.ui.layout import dialog_buttons, swatch_at_point
from cascade.utils.game_state import get_game_state
from cascade.utils.registry import get_palette

# arcade.key values, compared numerically so tests stay headless.
KEY_ENTER = 65293
KEY_ESCAPE = 65307
KEY_SPACE = 32
KEY_N = ord("n")
KEY_M = ord("m")


class InputSystem:
    """Turns raw mouse/keyboard events into colour choices and dialog actions."""

    def __init__(self, event_bus: EventBus, window, world: World):
        self.event_bus = event_bus
        self.window = window
        self.world = world
        self.event_bus.subscribe(EVENT_MOUSE_PRESS, self.on_mouse_press)
        self.event_bus.subscribe(EVENT_KEY_PRESS, self.on_key_press)

    def on_mouse_press(self, sender, **kwargs):
        x = kwargs.get('x')
        y = kwargs.get('y')
        button = kwargs.get('button', 1)
        if x is None or y is None or button != 1:
            return
        state = get_game_state(self.world)
        if state is None:
            return
        if state.mode == GameMode.PLAYING:
            if state.input_locked:
                return
            index = swatch_at_point(x, y, self.window.width, len(get_palette(self.world)))
            if index is not None:
                self.event_bus.emit(EVENT_COLOR_CHOSEN, index=index, source='pointer')
            return
        for dialog_button in dialog_buttons(state.mode, self.window.width, self.window.height):
            if dialog_button.contains(x, y):
                self.event_bus.emit(dialog_button.event)
                return

    def on_key_press(self, sender, **kwargs):
        symbol = kwargs.get('symbol')
        if symbol is None:
            return
        state = get_game_state(self.world)
        if state is None:
            return
        if state.mode == GameMode.PLAYING:
            if state.input_locked:
                return
            index = self.binding_index(symbol)
            if index is not None and index < len(get_palette(self.world)):
                self.event_bus.emit(EVENT_COLOR_CHOSEN, index=index, source='key')
        elif state.mode == GameMode.LEVEL_COMPLETE:
            if symbol in (KEY_ENTER, KEY_N):
                self.event_bus.emit(EVENT_NEXT_LEVEL_REQUEST)
        elif state.mode == GameMode.GAME_OVER:
            if symbol in (KEY_ENTER, KEY_SPACE):
                self.event_bus.emit(EVENT_RESTART_REQUEST)
            elif symbol in (KEY_ESCAPE, KEY_M):
                self.event_bus.emit(EVENT_RETURN_TO_MENU)

    @staticmethod
    def binding_index(symbol: int):
        """Palette index bound to a key symbol, or None. Letters match case-insensitively."""
        if not 0 <= symbol < 0x110000:
            return None
        letter = chr(symbol).lower()
        if letter in KEY_BINDINGS:
            return KEY_BINDINGS.index(letter)
        return None
