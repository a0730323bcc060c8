"""
Link-up rule engine.

Pure-logic helpers for a tile-matching connection puzzle: two same-typed tiles
match when a path through empty cells joins them with at most two turns.
Modules:
- board.py: Tile, Grid, Position
- deal.py: random and map-driven grid factories
- pathfinding.py: turn-limited path search
- mechanics.py: hints, solvability, shuffling, pair removal
- layout.py: occupancy map JSON documents
- state.py: GameState (score, combo, stats)
- config.py: Settings loaded from LINKUP_* environment variables
"""
from .board import Grid, Position, Tile, TileType
from .deal import create_grid, create_grid_from_map
from .errors import InvalidInputError, LinkupError, UnpairableLayoutError
from .mechanics import Hint, Match, check_solvability, get_hint, match_pair, remove_pair, shuffle_grid
from .pathfinding import count_turns, find_path, is_valid_path

__all__ = [
    'Grid',
    'Position',
    'Tile',
    'TileType',
    'create_grid',
    'create_grid_from_map',
    'InvalidInputError',
    'LinkupError',
    'UnpairableLayoutError',
    'Hint',
    'Match',
    'check_solvability',
    'get_hint',
    'match_pair',
    'remove_pair',
    'shuffle_grid',
    'count_turns',
    'find_path',
    'is_valid_path',
]
