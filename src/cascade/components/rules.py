from dataclasses import dataclass

from cascade.constants import (
    BONUS_CHANCE,
    BONUS_CORNER_EXCLUSION,
    BONUS_ORIGIN_EXCLUSION,
    BONUS_POINTS,
    GRID_SIZE,
    LEVELS_PER_OBSTACLE,
    MAX_MOVES,
    MAX_OBSTACLES,
    MOVE_BONUS_PER_MOVE,
    MULTIPLIER_FACTOR,
    MULTIPLIER_TURNS,
)


@dataclass(frozen=True, slots=True)
class Rules:
    """Tunable game rules stored on the registry entity next to the Palette."""
    grid_size: int = GRID_SIZE
    max_moves: int = MAX_MOVES
    bonus_chance: float = BONUS_CHANCE
    bonus_points: int = BONUS_POINTS
    multiplier_turns: int = MULTIPLIER_TURNS
    multiplier_factor: int = MULTIPLIER_FACTOR
    move_bonus_per_move: int = MOVE_BONUS_PER_MOVE
    levels_per_obstacle: int = LEVELS_PER_OBSTACLE
    max_obstacles: int = MAX_OBSTACLES
    bonus_origin_exclusion: int = BONUS_ORIGIN_EXCLUSION
    bonus_corner_exclusion: int = BONUS_CORNER_EXCLUSION

    def obstacle_count(self, level: int) -> int:
        return min(level // self.levels_per_obstacle, self.max_obstacles)
