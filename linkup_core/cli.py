from __future__ import annotations

import argparse
import logging
import random
import time
from dataclasses import replace
from typing import Optional, Sequence, Tuple

from .board import Position
from .config import configure_logging, load_settings, parse_tile_types
from .errors import InvalidInputError
from .layout import load_map
from .mechanics import check_solvability, get_hint
from .pathfinding import count_turns
from .state import GameState, apply_match, new_game, request_hint, reshuffle, resolve_stuck

logger = logging.getLogger(__name__)


def parse_position(text: str) -> Position:
    """Parses 'x,y' into a position."""
    parts = [t for t in text.replace(' ', '').split(',') if t != '']
    if len(parts) != 2:
        raise InvalidInputError(f'Expected x,y but got {text!r}')
    try:
        return int(parts[0]), int(parts[1])
    except ValueError as e:
        raise InvalidInputError(f'Expected x,y but got {text!r}') from e


def parse_pair(text: str) -> Tuple[Position, Position]:
    """Parses 'x1,y1 x2,y2' into two positions."""
    tokens = text.split()
    if len(tokens) != 2:
        raise InvalidInputError('Enter two positions: x1,y1 x2,y2')
    return parse_position(tokens[0]), parse_position(tokens[1])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Link-up board generator, solver and hint engine')
    parser.add_argument('--width', type=int, default=None, help='Playable board width')
    parser.add_argument('--height', type=int, default=None, help='Playable board height')
    parser.add_argument('--seed', type=int, default=None, help='RNG seed for deal and shuffles')
    parser.add_argument('--map', dest='map_path', default=None, help='Occupancy map JSON saved by the editor')
    parser.add_argument('--types', default=None, help='Comma separated tile types, e.g. A,B,C')
    parser.add_argument('--hint', action='store_true', help='Show the hint path on the board')
    parser.add_argument('--play', action='store_true', help='Play interactively')
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()
    configure_logging(settings.debug)
    overrides = {}
    if args.width is not None:
        overrides['width'] = args.width
    if args.height is not None:
        overrides['height'] = args.height
    if args.seed is not None:
        overrides['seed'] = args.seed
    if args.map_path is not None:
        overrides['map_path'] = args.map_path
    if args.types is not None:
        overrides['tile_types'] = parse_tile_types(args.types)
    settings = replace(settings, **overrides)
    logger.debug('Using %s', settings)

    rng = random.Random(settings.seed)
    try:
        occupancy = load_map(settings.map_path) if settings.map_path else None
        state = new_game(settings, rng=rng, occupancy=occupancy)
    except InvalidInputError as e:
        parser.error(str(e))

    if not args.play:
        print('Initial board:')
        print(state.grid.pretty())
        hint = get_hint(state.grid)
        if hint is None:
            print('\nNo connectable pair: the board needs a shuffle.')
            return
        print(f'\nSolvable. Hint: {hint.start} -> {hint.end} ({count_turns(hint.path)} turns)')
        if args.hint:
            print(state.grid.pretty(selected=(hint.start, hint.end), path=hint.path))
        return

    play(state, rng, settings.max_shuffles)


def play(state: GameState, rng: random.Random, max_shuffles: int) -> GameState:
    """Interactive loop: read pairs, hints and shuffles from stdin until the board is cleared."""
    print("Commands: 'x1,y1 x2,y2' to match, 'h' for a hint, 's' to shuffle, 'q' to quit.")
    while not state.is_won():
        if state.grid.is_cleared():
            state = state.with_grid(state.grid)
            break
        if not check_solvability(state.grid):
            print('No moves left, shuffling...')
            state = resolve_stuck(state, rng, max_shuffles)
            if not check_solvability(state.grid):
                print('Board is stuck after shuffling. Game over.')
                return state
        print(state.grid.pretty())
        print(f'Score: {state.score}  Combo: {state.combo}  Tiles: {state.grid.tile_count}')
        text = input('> ').strip().lower()
        if text in ('q', 'quit'):
            break
        if text in ('h', 'hint'):
            state, hint = request_hint(state)
            if hint is not None:
                print(state.grid.pretty(selected=(hint.start, hint.end), path=hint.path))
            continue
        if text in ('s', 'shuffle'):
            state = reshuffle(state, rng)
            continue
        try:
            a, b = parse_pair(text)
            matched = apply_match(state, a, b, time.monotonic())
        except InvalidInputError as e:
            print(f'error: {e}')
            continue
        if matched is None:
            print('Those tiles cannot be connected. Try again.')
            continue
        print(f'Matched! +{matched.score - state.score}')
        state = matched
    if state.is_won():
        print(f'Board cleared! Final score: {state.score}')
    return state
