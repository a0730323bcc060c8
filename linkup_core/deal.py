from __future__ import annotations

import logging
import random
import string
from typing import List, Optional, Sequence

from .board import PADDING, Grid, Tile, TileType
from .errors import InvalidInputError, UnpairableLayoutError

logger = logging.getLogger(__name__)

ODD_CELL_POLICIES = ('drop', 'error')
_ID_ALPHABET = string.digits + string.ascii_lowercase


def _resolve_rng(rng: Optional[random.Random], seed: Optional[int]) -> random.Random:
    return rng if rng is not None else random.Random(seed)


def _check_tile_types(tile_types: Sequence[TileType]) -> None:
    if isinstance(tile_types, str) or not tile_types:
        raise InvalidInputError('tile_types must be a non-empty sequence of type tokens')
    for kind in tile_types:
        if not isinstance(kind, str) or not kind:
            raise InvalidInputError(f'Invalid tile type {kind!r}: expected a non-empty string')


def make_tile_id(x: int, y: int, rng: random.Random) -> str:
    """Position-prefixed id with a random suffix; the prefix alone keeps ids unique within a grid."""
    suffix = ''.join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return f'{x}-{y}-{suffix}'


def deal_pairs(count: int, tile_types: Sequence[TileType], rng: random.Random) -> List[TileType]:
    """Builds `count` pairs by cycling through the alphabet, then shuffles them (Fisher-Yates)."""
    deck: List[TileType] = []
    for i in range(count):
        kind = tile_types[i % len(tile_types)]
        deck.extend((kind, kind))
    rng.shuffle(deck)
    return deck


def create_grid(
    width: int,
    height: int,
    tile_types: Sequence[TileType],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
) -> Grid:
    """Deals a fully occupied width x height board of random pairs inside the empty border ring."""
    if not isinstance(width, int) or not isinstance(height, int) or width <= 0 or height <= 0:
        raise InvalidInputError(f'Grid dimensions must be positive integers, got {width!r}x{height!r}')
    if (width * height) % 2 != 0:
        raise InvalidInputError('Grid size must be even to ensure all tiles can be paired')
    _check_tile_types(tile_types)
    rng = _resolve_rng(rng, seed)

    deck = deal_pairs(width * height // 2, tile_types, rng)
    cols = width + 2 * PADDING
    cells: List[Optional[Tile]] = [None] * (cols * (height + 2 * PADDING))
    it = iter(deck)
    for r in range(height):
        for c in range(width):
            x, y = c + PADDING, r + PADDING
            cells[y * cols + x] = Tile(make_tile_id(x, y, rng), next(it), x, y)
    grid = Grid(width, height, tuple(cells))
    logger.debug('Dealt %dx%d grid with %d tiles', width, height, grid.tile_count)
    return grid


def check_occupancy_map(occupancy: Sequence[Sequence[int]]) -> int:
    """Validates a 0/1 occupancy map and returns its number of active cells."""
    if not isinstance(occupancy, (list, tuple)) or not occupancy:
        raise InvalidInputError('Occupancy map must be a non-empty 2D array')
    if not isinstance(occupancy[0], (list, tuple)) or not occupancy[0]:
        raise InvalidInputError('Occupancy map must be a non-empty 2D array')
    width = len(occupancy[0])
    active = 0
    for r, row in enumerate(occupancy):
        if not isinstance(row, (list, tuple)) or len(row) != width:
            raise InvalidInputError(f'Occupancy map is not rectangular: row {r} does not have {width} cells')
        for c, cell in enumerate(row):
            if cell not in (0, 1):
                raise InvalidInputError(f'Occupancy map cell ({c}, {r}) must be 0 or 1, got {cell!r}')
            active += int(cell)
    return active


def create_grid_from_map(
    occupancy: Sequence[Sequence[int]],
    tile_types: Sequence[TileType],
    rng: Optional[random.Random] = None,
    seed: Optional[int] = None,
    odd_cells: str = 'drop',
) -> Grid:
    """
    Deals random pairs into the cells an occupancy map marks with 1.

    With an odd number of active cells, `odd_cells='drop'` leaves the last active cell
    (row-major) empty; `odd_cells='error'` raises UnpairableLayoutError instead.
    """
    if odd_cells not in ODD_CELL_POLICIES:
        raise InvalidInputError(f'odd_cells must be one of {ODD_CELL_POLICIES}, got {odd_cells!r}')
    active = check_occupancy_map(occupancy)
    _check_tile_types(tile_types)
    if active % 2 != 0:
        if odd_cells == 'error':
            raise UnpairableLayoutError(active)
        logger.warning('Map has an odd number of active cells (%d); one will be left empty', active)
        active -= 1
    rng = _resolve_rng(rng, seed)

    height, width = len(occupancy), len(occupancy[0])
    deck = deal_pairs(active // 2, tile_types, rng)
    cols = width + 2 * PADDING
    cells: List[Optional[Tile]] = [None] * (cols * (height + 2 * PADDING))
    placed = 0
    for r in range(height):
        for c in range(width):
            if occupancy[r][c] != 1 or placed >= len(deck):
                continue
            x, y = c + PADDING, r + PADDING
            cells[y * cols + x] = Tile(make_tile_id(x, y, rng), deck[placed], x, y)
            placed += 1
    grid = Grid(width, height, tuple(cells))
    logger.debug('Dealt %dx%d grid from map with %d tiles', width, height, grid.tile_count)
    return grid
