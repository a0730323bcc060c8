from __future__ import annotations

# Facade module that re-exports the link-up engine.
# Used by the Flask app and tests; single-responsibility modules live under linkup_core/*.

from linkup_core.board import Grid, Position, Tile, TileType
from linkup_core.config import DEFAULT_TILE_TYPES, Settings, load_settings
from linkup_core.deal import create_grid, create_grid_from_map, deal_pairs, make_tile_id
from linkup_core.errors import InvalidInputError, LinkupError, UnpairableLayoutError
from linkup_core.layout import full_map, load_map, map_from_document, map_to_document, save_map
from linkup_core.mechanics import (
    Hint,
    Match,
    check_solvability,
    get_hint,
    group_by_type,
    match_pair,
    remove_pair,
    shuffle_grid,
)
from linkup_core.pathfinding import DIRECTIONS, MAX_TURNS, count_turns, find_path, is_valid_path
from linkup_core.state import (
    GameState,
    GameStats,
    apply_match,
    new_game,
    request_hint,
    reshuffle,
    resolve_stuck,
)


def main() -> None:
    # CLI driver delegated to linkup_core.cli
    from linkup_core.cli import main as _main
    _main()


if __name__ == '__main__':
    main()
