from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

from .board import Grid, Position
from .config import Settings
from .deal import create_grid, create_grid_from_map
from .mechanics import Hint, check_solvability, get_hint, match_pair, shuffle_grid

logger = logging.getLogger(__name__)

PLAYING = 'playing'
WON = 'won'

MATCH_POINTS = 100
COMBO_BONUS = 10
COMBO_WINDOW = 5.0  # seconds between matches that keep a combo going


@dataclass(frozen=True)
class GameStats:
    match_count: int = 0
    hint_count: int = 0
    shuffle_count: int = 0
    path_lengths: Tuple[int, ...] = ()


@dataclass(frozen=True)
class GameState:
    """Represents one game in progress: the grid plus score, combo and play statistics."""
    grid: Grid
    score: int = 0
    combo: int = 0
    last_match_at: Optional[float] = None
    stats: GameStats = field(default_factory=GameStats)
    status: str = PLAYING

    def is_won(self) -> bool:
        return self.status == WON

    def with_grid(self, grid: Grid) -> 'GameState':
        return replace(self, grid=grid, status=WON if grid.is_cleared() else PLAYING)


def new_game(
    settings: Settings,
    rng: Optional[random.Random] = None,
    occupancy: Optional[Sequence[Sequence[int]]] = None,
) -> GameState:
    """Deals a fresh board, from the occupancy map when one is given."""
    rng = rng if rng is not None else random.Random(settings.seed)
    if occupancy is not None:
        grid = create_grid_from_map(occupancy, settings.tile_types, rng=rng)
    else:
        grid = create_grid(settings.width, settings.height, settings.tile_types, rng=rng)
    return GameState(grid=grid).with_grid(grid)


def combo_after(state: GameState, now: float) -> int:
    if state.last_match_at is not None and now - state.last_match_at < COMBO_WINDOW:
        return state.combo + 1
    return 1


def apply_match(state: GameState, a: Position, b: Position, now: float) -> Optional[GameState]:
    """
    Removes the pair at a and b if they connect, scoring the match.
    `now` is the caller's clock reading in seconds; it only drives the combo counter.
    Returns None when the tiles cannot be connected.
    """
    match = match_pair(state.grid, a, b)
    if match is None:
        return None
    combo = combo_after(state, now)
    points = MATCH_POINTS + (combo * COMBO_BONUS if combo > 1 else 0)
    stats = replace(
        state.stats,
        match_count=state.stats.match_count + 1,
        path_lengths=state.stats.path_lengths + (len(match.path),),
    )
    next_state = replace(
        state.with_grid(match.grid),
        score=state.score + points,
        combo=combo,
        last_match_at=now,
        stats=stats,
    )
    if next_state.is_won():
        logger.info('Board cleared with score %d', next_state.score)
    return next_state


def request_hint(state: GameState) -> Tuple[GameState, Optional[Hint]]:
    """Looks up a hint; only hints actually found are counted."""
    hint = get_hint(state.grid)
    if hint is None:
        return state, None
    stats = replace(state.stats, hint_count=state.stats.hint_count + 1)
    return replace(state, stats=stats), hint


def reshuffle(state: GameState, rng: Optional[random.Random] = None) -> GameState:
    stats = replace(state.stats, shuffle_count=state.stats.shuffle_count + 1)
    return replace(state, grid=shuffle_grid(state.grid, rng=rng), stats=stats)


def resolve_stuck(state: GameState, rng: Optional[random.Random] = None, max_attempts: int = 20) -> GameState:
    """
    Shuffles a stuck board until a move exists, the board is cleared, or the attempts run out.
    Some layouts have no move under any arrangement, so the loop is bounded.
    """
    rng = rng if rng is not None else random.Random()
    attempts = 0
    while not state.grid.is_cleared() and not check_solvability(state.grid) and attempts < max_attempts:
        state = reshuffle(state, rng)
        attempts += 1
    if attempts:
        logger.info('Board was stuck; reshuffled %d time(s)', attempts)
    if not state.grid.is_cleared() and not check_solvability(state.grid):
        logger.warning('Board still has no moves after %d shuffles', attempts)
    return state
