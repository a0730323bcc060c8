from __future__ import annotations

import json
import os
from typing import Any, Dict, Sequence, Tuple

from .deal import check_occupancy_map
from .errors import InvalidInputError

OccupancyMap = Tuple[Tuple[int, ...], ...]


def full_map(width: int, height: int) -> OccupancyMap:
    """All-ones map, the editor's starting layout."""
    if width <= 0 or height <= 0:
        raise InvalidInputError(f'Map dimensions must be positive, got {width}x{height}')
    return tuple(tuple([1] * width) for _ in range(height))


def map_from_document(doc: Any) -> OccupancyMap:
    """Validates a {"width", "height", "map"} document and returns the occupancy map."""
    if not isinstance(doc, dict):
        raise InvalidInputError('Map document must be a JSON object')
    try:
        width = doc['width']
        height = doc['height']
        rows = doc['map']
    except KeyError as e:
        raise InvalidInputError(f'Map document is missing {e.args[0]!r}') from e
    if isinstance(width, bool) or isinstance(height, bool) or not isinstance(width, int) or not isinstance(height, int):
        raise InvalidInputError('Map width and height must be integers')
    if not isinstance(rows, list):
        raise InvalidInputError('Map field must be a 2D array')
    check_occupancy_map(rows)
    if len(rows) != height or len(rows[0]) != width:
        raise InvalidInputError(
            f'Map array is {len(rows[0])}x{len(rows)} but the document declares {width}x{height}'
        )
    return tuple(tuple(int(cell) for cell in row) for row in rows)


def map_to_document(occupancy: Sequence[Sequence[int]]) -> Dict[str, Any]:
    check_occupancy_map(occupancy)
    return {
        'width': len(occupancy[0]),
        'height': len(occupancy),
        'map': [[int(cell) for cell in row] for row in occupancy],
    }


def load_map(path: str) -> OccupancyMap:
    """Reads a map document saved by the editor."""
    with open(path, 'r', encoding='utf-8') as f:
        try:
            doc = json.load(f)
        except json.JSONDecodeError as e:
            raise InvalidInputError(f'{path} is not valid JSON: {e}') from e
    return map_from_document(doc)


def save_map(path: str, occupancy: Sequence[Sequence[int]]) -> None:
    directory = os.path.dirname(path)
    if directory and not os.path.exists(directory):
        os.makedirs(directory, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(map_to_document(occupancy), f, indent=2)
