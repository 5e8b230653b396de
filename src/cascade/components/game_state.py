"""Game state resource describing the active high-level mode."""
from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


class GameMode(Enum):
    """High-level game modes that drive which systems run."""
    MENU = auto()
    PLAYING = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()


@dataclass
class GameState:
    """Singleton component storing the currently active game mode.

    pending_mode/pending_delay hold a queued transition that is applied once the
    delay has elapsed; colour input is ignored while one is queued.
    """
    mode: GameMode = GameMode.MENU
    pending_mode: Optional[GameMode] = None
    pending_delay: float = 0.0
    high_score: int = 0
    completion_color: Optional[str] = None

    @property
    def input_locked(self) -> bool:
        return self.mode != GameMode.PLAYING or self.pending_mode is not None
