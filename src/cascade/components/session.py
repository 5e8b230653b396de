from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class GameSession:
    """Per-game counters, replaced wholesale by every move resolution.

    base_score tracks the current level only; move_bonus is non-zero only once
    the current level has been completed.
    """
    moves_remaining: int
    score: int = 0
    level: int = 1
    multiplier_turns_remaining: int = 0
    base_score: int = 0
    move_bonus: int = 0

    @property
    def multiplier_active(self) -> bool:
        return self.multiplier_turns_remaining > 0
