import pytest

from cascade.components.game_state import GameMode, GameState
from cascade.events.bus import (
    EVENT_COLOR_CHOSEN,
    EVENT_KEY_PRESS,
    EVENT_MOUSE_PRESS,
    EVENT_NEXT_LEVEL_REQUEST,
    EVENT_RESTART_REQUEST,
    EVENT_RETURN_TO_MENU,
)
from cascade.systems.input import KEY_ENTER, KEY_ESCAPE, InputSystem
from cascade.ui.layout import dialog_buttons, swatch_centers
from tests.helpers import make_world


class DummyWindow:
    def __init__(self, width=800, height=900):
        self.width = width
        self.height = height


def _setup(mode):
    bus, world = make_world(mode)
    window = DummyWindow()
    InputSystem(bus, window, world)
    chosen: list[dict] = []
    bus.subscribe(EVENT_COLOR_CHOSEN, lambda sender, **payload: chosen.append(payload))
    return bus, world, window, chosen


@pytest.mark.parametrize("letter, index", [("r", 0), ("g", 1), ("b", 2), ("y", 3), ("p", 4), ("P", 4), ("R", 0)])
def test_key_bindings_follow_palette_order(letter, index):
    bus, _, _, chosen = _setup(GameMode.PLAYING)
    bus.emit(EVENT_KEY_PRESS, symbol=ord(letter), modifiers=0)
    assert chosen == [{"index": index, "source": "key"}]


def test_unbound_keys_ignored():
    bus, _, _, chosen = _setup(GameMode.PLAYING)
    bus.emit(EVENT_KEY_PRESS, symbol=ord("x"), modifiers=0)
    bus.emit(EVENT_KEY_PRESS, symbol=KEY_ENTER, modifiers=0)
    assert chosen == []


def test_keys_ignored_outside_play():
    bus, _, _, chosen = _setup(GameMode.MENU)
    bus.emit(EVENT_KEY_PRESS, symbol=ord("r"), modifiers=0)
    assert chosen == []


def test_keys_ignored_while_transition_pending():
    bus, world, _, chosen = _setup(GameMode.PLAYING)
    state = next(comp for _, comp in world.get_component(GameState))
    state.pending_mode = GameMode.GAME_OVER
    bus.emit(EVENT_KEY_PRESS, symbol=ord("g"), modifiers=0)
    assert chosen == []


def test_clicking_swatch_chooses_colour():
    bus, _, window, chosen = _setup(GameMode.PLAYING)
    x, y = swatch_centers(window.width, 5)[3]
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=1)
    assert chosen == [{"index": 3, "source": "pointer"}]


def test_click_away_from_swatches_ignored():
    bus, _, window, chosen = _setup(GameMode.PLAYING)
    bus.emit(EVENT_MOUSE_PRESS, x=window.width / 2, y=window.height / 2, button=1)
    x, y = swatch_centers(window.width, 5)[0]
    bus.emit(EVENT_MOUSE_PRESS, x=x, y=y, button=4)
    assert chosen == []


def test_level_complete_dialog_actions():
    bus, _, window, _ = _setup(GameMode.LEVEL_COMPLETE)
    requests = []
    bus.subscribe(EVENT_NEXT_LEVEL_REQUEST, lambda sender, **payload: requests.append("key"))
    bus.emit(EVENT_KEY_PRESS, symbol=KEY_ENTER, modifiers=0)
    button = dialog_buttons(GameMode.LEVEL_COMPLETE, window.width, window.height)[0]
    bus.emit(EVENT_MOUSE_PRESS, x=button.x, y=button.y, button=1)
    assert requests == ["key", "key"]


def test_game_over_dialog_actions():
    bus, _, window, _ = _setup(GameMode.GAME_OVER)
    seen = []
    bus.subscribe(EVENT_RESTART_REQUEST, lambda sender, **payload: seen.append("restart"))
    bus.subscribe(EVENT_RETURN_TO_MENU, lambda sender, **payload: seen.append("menu"))

    bus.emit(EVENT_KEY_PRESS, symbol=KEY_ESCAPE, modifiers=0)
    menu_button, restart_button = dialog_buttons(GameMode.GAME_OVER, window.width, window.height)
    bus.emit(EVENT_MOUSE_PRESS, x=restart_button.x, y=restart_button.y, button=1)
    bus.emit(EVENT_MOUSE_PRESS, x=menu_button.x, y=menu_button.y, button=1)

    assert seen == ["menu", "restart", "menu"]
