"""Turn resolution: one colour choice in, new grid + session + outcome out."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from enum import Enum, auto
from typing import List, Optional

from cascade.components.grid import Grid, Position
from cascade.components.palette import Palette
from cascade.components.rules import Rules
from cascade.components.session import GameSession
from cascade.systems.grid_ops import check_bonus_capture, flood_fill, is_level_complete, release_bonus

logger = logging.getLogger(__name__)


class MoveOutcome(Enum):
    CONTINUE = auto()
    NO_OP = auto()
    LEVEL_COMPLETE = auto()
    GAME_OVER = auto()


@dataclass(slots=True)
class MoveResult:
    grid: Grid
    session: GameSession
    outcome: MoveOutcome
    changed_count: int = 0
    bonus_captured: Optional[Position] = None
    bonus_points: int = 0
    changed_positions: List[Position] = field(default_factory=list)


def new_session(rules: Rules | None = None) -> GameSession:
    rules = rules or Rules()
    return GameSession(moves_remaining=rules.max_moves)


def resolve_move(
    grid: Grid,
    session: GameSession,
    chosen_color: str,
    *,
    rules: Rules | None = None,
    palette: Palette | None = None,
) -> MoveResult:
    """Apply a colour choice and score it.

    Picking the origin's current colour is a no-op that consumes nothing. Any
    other choice costs a move; the multiplier in force when the move starts
    doubles both the fill points and a bonus captured by this move. A capture
    always leaves exactly ``rules.multiplier_turns`` turns on the multiplier.
    """
    rules = rules or Rules()
    if session.moves_remaining <= 0:
        raise ValueError("resolve_move called with no moves remaining")
    if palette is not None and chosen_color not in palette:
        raise ValueError(f"Colour {chosen_color!r} is not in the palette")

    fill = flood_fill(grid, chosen_color)
    if fill.changed_count == 0:
        return MoveResult(grid=grid, session=session, outcome=MoveOutcome.NO_OP)

    factor = rules.multiplier_factor if session.multiplier_active else 1
    points = fill.changed_count * factor
    multiplier_turns = session.multiplier_turns_remaining
    if multiplier_turns > 0:
        multiplier_turns -= 1
    session = replace(
        session,
        moves_remaining=session.moves_remaining - 1,
        score=session.score + points,
        base_score=session.base_score + points,
        multiplier_turns_remaining=multiplier_turns,
    )

    new_grid = fill.grid
    captured = check_bonus_capture(new_grid)
    bonus_points = 0
    if captured is not None:
        bonus_points = rules.bonus_points * factor
        new_grid = release_bonus(new_grid, captured)
        session = replace(
            session,
            score=session.score + bonus_points,
            base_score=session.base_score + bonus_points,
            multiplier_turns_remaining=rules.multiplier_turns,
        )
        logger.debug("bonus captured at %s for %d points", captured, bonus_points)

    if is_level_complete(new_grid):
        move_bonus = session.moves_remaining * rules.move_bonus_per_move
        session = replace(session, score=session.score + move_bonus, move_bonus=move_bonus)
        outcome = MoveOutcome.LEVEL_COMPLETE
    elif session.moves_remaining == 0:
        outcome = MoveOutcome.GAME_OVER
    else:
        outcome = MoveOutcome.CONTINUE

    logger.debug(
        "move %s: changed=%d points=%d score=%d moves_left=%d",
        outcome.name, fill.changed_count, points, session.score, session.moves_remaining,
    )
    return MoveResult(
        grid=new_grid,
        session=session,
        outcome=outcome,
        changed_count=fill.changed_count,
        bonus_captured=captured,
        bonus_points=bonus_points,
        changed_positions=fill.changed_positions,
    )


def advance_level(session: GameSession, *, rules: Rules | None = None) -> GameSession:
    """Start the next level.

    Cumulative score (move bonus included) and any running multiplier carry over.
    """
    rules = rules or Rules()
    return replace(
        session,
        level=session.level + 1,
        moves_remaining=rules.max_moves,
        base_score=0,
        move_bonus=0,
    )
