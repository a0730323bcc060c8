from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .board import Grid, Position, Tile, TileType
from .deal import _resolve_rng
from .errors import InvalidInputError
from .pathfinding import find_path

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Hint:
    """A connectable pair and the path joining them."""
    start: Position
    end: Position
    path: Tuple[Position, ...]


@dataclass(frozen=True)
class Match:
    """Result of removing a connected pair: the new grid and the path that joined them."""
    grid: Grid
    path: Tuple[Position, ...]


def group_by_type(grid: Grid) -> Dict[TileType, List[Position]]:
    """Groups occupied positions by tile type; groups and members keep row-major first-seen order."""
    groups: Dict[TileType, List[Position]] = {}
    for pos, tile in grid.occupied():
        groups.setdefault(tile.type, []).append(pos)
    return groups


def get_hint(grid: Grid) -> Optional[Hint]:
    """Returns the first connectable pair in scan order, or None when the board is stuck."""
    for positions in group_by_type(grid).values():
        for i, start in enumerate(positions):
            for end in positions[i + 1:]:
                path = find_path(start, end, grid)
                if path is not None:
                    logger.debug('Hint %s -> %s via %d cells', start, end, len(path))
                    return Hint(start, end, tuple(path))
    return None


def check_solvability(grid: Grid) -> bool:
    """Checks if there is at least one valid move left on the grid."""
    return get_hint(grid) is not None


def shuffle_grid(grid: Grid, rng: Optional[random.Random] = None, seed: Optional[int] = None) -> Grid:
    """
    Permutes the tiles currently on the board among the occupied positions.
    Empty cells stay empty; the result is not guaranteed to be solvable.
    """
    rng = _resolve_rng(rng, seed)
    positions: List[Position] = []
    tiles: List[Tile] = []
    for pos, tile in grid.occupied():
        positions.append(pos)
        tiles.append(tile)
    rng.shuffle(tiles)
    return grid.replace({(x, y): tile.at(x, y) for (x, y), tile in zip(positions, tiles)})


def remove_pair(grid: Grid, a: Position, b: Position) -> Grid:
    """Returns a new grid with both cells emptied."""
    for x, y in (a, b):
        if grid.at(x, y) is None:
            raise InvalidInputError(f'No tile to remove at ({x}, {y})')
    return grid.without((tuple(a), tuple(b)))


def match_pair(grid: Grid, a: Position, b: Position) -> Optional[Match]:
    """Removes the pair if it can be connected; None when it cannot."""
    path = find_path(a, b, grid)
    if path is None:
        return None
    return Match(remove_pair(grid, a, b), tuple(path))
