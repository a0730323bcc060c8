from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from .board import TileType
from .errors import InvalidInputError

DEFAULT_WIDTH = 8
DEFAULT_HEIGHT = 10
DEFAULT_MAX_SHUFFLES = 20
DEFAULT_TILE_TYPES: Tuple[TileType, ...] = (
    '🍎', '🍌', '🍇', '🍊', '🍓', '🍉', '🍒', '🍑', '🍍', '🥝', '🥑', '🍆',
)

_TRUTHY = ('1', 'true', 'yes', 'on')


@dataclass(frozen=True)
class Settings:
    """Caller-owned game configuration handed to the factory and session helpers."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    tile_types: Tuple[TileType, ...] = DEFAULT_TILE_TYPES
    seed: Optional[int] = None
    map_path: Optional[str] = None
    max_shuffles: int = DEFAULT_MAX_SHUFFLES
    debug: bool = False


def _int_var(env: Mapping[str, str], name: str, default: Optional[int]) -> Optional[int]:
    raw = env.get(name)
    if raw is None or raw.strip() == '':
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidInputError(f'{name} must be an integer, got {raw!r}') from e


def parse_tile_types(raw: str) -> Tuple[TileType, ...]:
    """Splits a comma separated alphabet, e.g. 'A,B,C'."""
    types = tuple(t.strip() for t in raw.split(',') if t.strip())
    if not types:
        raise InvalidInputError('Tile type list is empty')
    return types


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Builds Settings from LINKUP_* environment variables, falling back to the defaults."""
    env = os.environ if env is None else env
    width = _int_var(env, 'LINKUP_WIDTH', DEFAULT_WIDTH)
    height = _int_var(env, 'LINKUP_HEIGHT', DEFAULT_HEIGHT)
    max_shuffles = _int_var(env, 'LINKUP_MAX_SHUFFLES', DEFAULT_MAX_SHUFFLES)
    if width <= 0 or height <= 0:
        raise InvalidInputError(f'Board dimensions must be positive, got {width}x{height}')
    if max_shuffles < 0:
        raise InvalidInputError('LINKUP_MAX_SHUFFLES must not be negative')
    raw_types = env.get('LINKUP_TILE_TYPES')
    return Settings(
        width=width,
        height=height,
        tile_types=parse_tile_types(raw_types) if raw_types else DEFAULT_TILE_TYPES,
        seed=_int_var(env, 'LINKUP_SEED', None),
        map_path=env.get('LINKUP_MAP') or None,
        max_shuffles=max_shuffles,
        debug=env.get('LINKUP_DEBUG', '0').lower() in _TRUTHY,
    )


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
