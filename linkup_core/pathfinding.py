from __future__ import annotations

from collections import deque
from typing import Deque, List, NamedTuple, Optional, Sequence, Set, Tuple

from .board import Grid, Position
from .errors import InvalidInputError

MAX_TURNS = 2

# Fixed exploration order: up, down, left, right.
DIRECTIONS: Tuple[Position, ...] = ((0, -1), (0, 1), (-1, 0), (1, 0))

NO_DIRECTION = -1


class _Step(NamedTuple):
    x: int
    y: int
    direction: int  # index into DIRECTIONS, NO_DIRECTION for the start
    turns: int
    parent: int  # index of the predecessor in the arena, -1 for the start


def _check_position(grid: Grid, pos: Position) -> None:
    x, y = pos
    if not grid.in_bounds(x, y):
        raise InvalidInputError(f'Position ({x}, {y}) is outside the {grid.cols}x{grid.rows} grid')


def find_path(start: Position, end: Position, grid: Grid) -> Optional[List[Position]]:
    """
    Finds a path joining two same-typed tiles through empty cells with at most two turns.

    Breadth-first over (x, y, direction, turns) states, so the first path found has the
    fewest steps; among equally short paths the direction order decides. The search
    covers the whole padded grid, so paths may run around the outside of the board.
    Returns the list of positions from start to end, or None.
    """
    start, end = tuple(start), tuple(end)
    _check_position(grid, start)
    _check_position(grid, end)
    if start == end:
        return None
    kind = grid.type_at(start)
    if kind is None or kind != grid.type_at(end):
        return None

    arena: List[_Step] = [_Step(start[0], start[1], NO_DIRECTION, 0, -1)]
    queue: Deque[int] = deque([0])
    visited: Set[Tuple[int, int, int, int]] = set()

    while queue:
        current_idx = queue.popleft()
        current = arena[current_idx]
        if (current.x, current.y) == end:
            return _walk_back(arena, current_idx)

        for direction, (dx, dy) in enumerate(DIRECTIONS):
            nx, ny = current.x + dx, current.y + dy
            if not grid.in_bounds(nx, ny):
                continue
            if (nx, ny) != end and grid.at(nx, ny) is not None:
                continue
            turns = current.turns
            if current.direction != NO_DIRECTION and current.direction != direction:
                turns += 1
            if turns > MAX_TURNS:
                continue
            key = (nx, ny, direction, turns)
            if key in visited:
                continue
            visited.add(key)
            arena.append(_Step(nx, ny, direction, turns, current_idx))
            queue.append(len(arena) - 1)
    return None


def _walk_back(arena: List[_Step], idx: int) -> List[Position]:
    path: List[Position] = []
    while idx != -1:
        step = arena[idx]
        path.append((step.x, step.y))
        idx = step.parent
    path.reverse()
    return path


def count_turns(path: Sequence[Position]) -> int:
    """Counts direction changes along a path of cardinally adjacent positions."""
    turns = 0
    prev: Optional[Position] = None
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        step = (bx - ax, by - ay)
        if prev is not None and step != prev:
            turns += 1
        prev = step
    return turns


def is_valid_path(path: Sequence[Position], grid: Grid) -> bool:
    """Checks that a path legally connects two same-typed tiles on this grid."""
    if len(path) < 2:
        return False
    for x, y in path:
        if not grid.in_bounds(x, y):
            return False
    start, end = tuple(path[0]), tuple(path[-1])
    if start == end:
        return False
    kind = grid.type_at(start)
    if kind is None or kind != grid.type_at(end):
        return False
    for (ax, ay), (bx, by) in zip(path, path[1:]):
        if abs(ax - bx) + abs(ay - by) != 1:
            return False
    if any(grid.at(x, y) is not None for x, y in path[1:-1]):
        return False
    return count_turns(path) <= MAX_TURNS
