from blinker import Signal
from typing import Dict

class EventBus:
    """Simple event bus leveraging blinker Signal objects."""
    def __init__(self):
        self._signals: Dict[str, Signal] = {}

    def subscribe(self, name: str, fn):
        sig = self._signals.setdefault(name, Signal(name))
        # Strong references so systems that are not kept in a variable still receive events.
        sig.connect(fn, weak=False)

    def emit(self, name: str, **payload):
        sig = self._signals.get(name)
        if sig:
            sig.send(self, **payload)


# ============================================================================
# SYSTEM & TIMING
# ============================================================================
EVENT_TICK = "tick"                        # payload: dt=float


# ============================================================================
# INPUT & INTERACTION
# ============================================================================
EVENT_MOUSE_PRESS = "mouse_press"          # payload: x, y, button
EVENT_KEY_PRESS = "key_press"              # payload: symbol=int, modifiers=int
EVENT_COLOR_CHOSEN = "color_chosen"        # payload: index=int, source=str


# ============================================================================
# GRID & SCORING
# ============================================================================
EVENT_BOARD_RESET = "board_reset"          # payload: level=int, has_bonus=bool, obstacles=int
EVENT_GRID_FILLED = "grid_filled"          # payload: color=str, changed_count=int, positions=list[(r,c)]
EVENT_BONUS_CAPTURED = "bonus_captured"    # payload: position=(r,c), points=int, multiplier_turns=int
EVENT_MOVE_RESOLVED = "move_resolved"      # payload: outcome=MoveOutcome, changed_count=int, session=GameSession
EVENT_LEVEL_COMPLETE = "level_complete"    # payload: level=int, base_score=int, move_bonus=int, moves_remaining=int, score=int, color=str
EVENT_GAME_OVER = "game_over"              # payload: score=int, level=int


# ============================================================================
# GAME FLOW & STATE
# ============================================================================
EVENT_GAME_MODE_CHANGED = "game_mode_changed"          # payload: previous_mode=GameMode|None, new_mode=GameMode
EVENT_MENU_NEW_GAME_SELECTED = "menu_new_game_selected"  # payload: None
EVENT_NEXT_LEVEL_REQUEST = "next_level_request"        # payload: None
EVENT_RESTART_REQUEST = "restart_request"              # payload: None
EVENT_RETURN_TO_MENU = "return_to_menu"                # payload: None
