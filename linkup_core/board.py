from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, List, Mapping, Optional, Sequence, Set, Tuple

from .errors import InvalidInputError

TileType = str  # opaque token, e.g. an emoji; equal types are matchable
Position = Tuple[int, int]  # (x, y) in padded grid coordinates

PADDING = 1
EMPTY_MARKS = (None, '', '.')


@dataclass(frozen=True)
class Tile:
    """A tile placed on the grid. Moving a tile yields a new Tile with the same id and type."""
    id: str
    type: TileType
    x: int
    y: int

    @property
    def pos(self) -> Position:
        return (self.x, self.y)

    def at(self, x: int, y: int) -> 'Tile':
        return Tile(self.id, self.type, x, y)


@dataclass(frozen=True)
class Grid:
    """
    The game board, including a permanent ring of empty cells around the playable area.

    `width` and `height` are the playable (interior) dimensions; `cells` holds the padded
    board row-major, so the stored board is (width + 2) x (height + 2).
    """
    width: int
    height: int
    cells: Tuple[Optional[Tile], ...]  # row-major, length == cols * rows

    def __post_init__(self) -> None:
        if not isinstance(self.width, int) or not isinstance(self.height, int):
            raise InvalidInputError('Grid dimensions must be integers')
        if self.width <= 0 or self.height <= 0:
            raise InvalidInputError(f'Grid dimensions must be positive, got {self.width}x{self.height}')
        if len(self.cells) != self.cols * self.rows:
            raise InvalidInputError(
                f'Expected {self.cols * self.rows} cells for a padded {self.width}x{self.height} grid, '
                f'got {len(self.cells)}'
            )
        seen: Set[str] = set()
        for i, tile in enumerate(self.cells):
            if tile is None:
                continue
            x, y = i % self.cols, i // self.cols
            if not isinstance(tile, Tile):
                raise InvalidInputError(f'Cell ({x}, {y}) holds {tile!r}, expected a Tile or None')
            if self.is_border(x, y):
                raise InvalidInputError(f'Border cell ({x}, {y}) must stay empty')
            if tile.pos != (x, y):
                raise InvalidInputError(f'Tile {tile.id} claims ({tile.x}, {tile.y}) but sits at ({x}, {y})')
            if tile.id in seen:
                raise InvalidInputError(f'Duplicate tile id {tile.id}')
            seen.add(tile.id)

    @property
    def cols(self) -> int:
        return self.width + 2 * PADDING

    @property
    def rows(self) -> int:
        return self.height + 2 * PADDING

    def index(self, x: int, y: int) -> int:
        """Calculates the 1D index for a given column and row."""
        return y * self.cols + x

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.cols and 0 <= y < self.rows

    def is_border(self, x: int, y: int) -> bool:
        return x == 0 or y == 0 or x == self.cols - 1 or y == self.rows - 1

    def at(self, x: int, y: int) -> Optional[Tile]:
        """Gets the tile at a padded position, or None for an empty cell."""
        if not self.in_bounds(x, y):
            raise InvalidInputError(f'Position ({x}, {y}) is outside the {self.cols}x{self.rows} grid')
        return self.cells[self.index(x, y)]

    def type_at(self, pos: Position) -> Optional[TileType]:
        tile = self.at(*pos)
        return tile.type if tile is not None else None

    def coords(self) -> Iterator[Position]:
        """Iterates over every padded position, row-major."""
        for y in range(self.rows):
            for x in range(self.cols):
                yield (x, y)

    def interior(self) -> Iterator[Position]:
        for y in range(PADDING, self.height + PADDING):
            for x in range(PADDING, self.width + PADDING):
                yield (x, y)

    def occupied(self) -> Iterator[Tuple[Position, Tile]]:
        """Yields (position, tile) for every occupied cell in row-major scan order."""
        for i, tile in enumerate(self.cells):
            if tile is not None:
                yield (i % self.cols, i // self.cols), tile

    @property
    def tile_count(self) -> int:
        return sum(1 for tile in self.cells if tile is not None)

    def is_cleared(self) -> bool:
        return all(tile is None for tile in self.cells)

    def replace(self, changes: Mapping[Position, Optional[Tile]]) -> 'Grid':
        """Returns a new grid with the given cells replaced."""
        cells = list(self.cells)
        for (x, y), tile in changes.items():
            if not self.in_bounds(x, y):
                raise InvalidInputError(f'Position ({x}, {y}) is outside the {self.cols}x{self.rows} grid')
            cells[self.index(x, y)] = tile
        return Grid(self.width, self.height, tuple(cells))

    def without(self, positions: Iterable[Position]) -> 'Grid':
        return self.replace({pos: None for pos in positions})

    def to_rows(self) -> List[List[Optional[Tile]]]:
        return [list(self.cells[y * self.cols:(y + 1) * self.cols]) for y in range(self.rows)]

    def pretty(
        self,
        selected: Optional[Iterable[Position]] = None,
        path: Optional[Sequence[Position]] = None,
    ) -> str:
        """Generates a human-readable board, marking selected tiles with brackets and path cells with '*'."""
        sel = set(selected or ())
        route = set(path or ())
        labels: List[List[str]] = []
        for row in self.to_rows():
            line: List[str] = []
            for tile in row:
                if tile is None:
                    line.append('*' if (len(line), len(labels)) in route else '·')
                elif tile.pos in sel:
                    line.append(f'[{tile.type}]')
                else:
                    line.append(tile.type)
            labels.append(line)
        span = max(len(label) for line in labels for label in line)
        return '\n'.join(' '.join(label.center(span) for label in line).rstrip() for line in labels)

    @classmethod
    def empty(cls, width: int, height: int) -> 'Grid':
        return cls(width, height, tuple([None] * ((width + 2 * PADDING) * (height + 2 * PADDING))))

    @classmethod
    def from_types(cls, rows: Sequence[Sequence[Optional[TileType]]]) -> 'Grid':
        """
        Builds a grid from interior rows of type tokens; None, '' or '.' leave a cell empty.
        Tile ids are derived from the padded position, e.g. '3-1'.
        """
        if not rows or not rows[0]:
            raise InvalidInputError('Rows must be a non-empty 2D sequence')
        height, width = len(rows), len(rows[0])
        cells: List[Optional[Tile]] = [None] * ((width + 2 * PADDING) * (height + 2 * PADDING))
        for r, row in enumerate(rows):
            if len(row) != width:
                raise InvalidInputError(f'Row {r} has {len(row)} cells, expected {width}')
            for c, kind in enumerate(row):
                if kind in EMPTY_MARKS:
                    continue
                x, y = c + PADDING, r + PADDING
                cells[y * (width + 2 * PADDING) + x] = Tile(f'{x}-{y}', str(kind), x, y)
        return cls(width, height, tuple(cells))
