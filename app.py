from __future__ import annotations

import logging
import os
import random
from typing import Any, Dict, List, Optional, Tuple

from flask import Flask, jsonify, request

from game import (
    Grid,
    InvalidInputError,
    Position,
    Tile,
    UnpairableLayoutError,
    check_solvability,
    count_turns,
    create_grid,
    create_grid_from_map,
    find_path,
    get_hint,
    load_settings,
    map_from_document,
    match_pair,
    shuffle_grid,
)
from linkup_core.config import configure_logging, parse_tile_types
from linkup_core.deal import check_occupancy_map

logger = logging.getLogger(__name__)

SETTINGS = load_settings()

app = Flask(__name__)


# ---------- JSON codecs ----------

def tile_to_json(t: Optional[Tile]) -> Optional[Dict[str, Any]]:
    if t is None:
        return None
    return {"id": t.id, "type": t.type, "x": int(t.x), "y": int(t.y)}


def grid_to_json(g: Grid) -> Dict[str, Any]:
    return {
        "width": int(g.width),
        "height": int(g.height),
        "cells": [[tile_to_json(t) for t in row] for row in g.to_rows()],
    }


def json_to_grid(obj: Any) -> Grid:
    """Rebuilds a Grid from grid_to_json output; shape problems raise InvalidInputError."""
    if not isinstance(obj, dict):
        raise InvalidInputError("grid must be an object")
    width, height = obj["width"], obj["height"]
    if not all(isinstance(v, int) and not isinstance(v, bool) for v in (width, height)):
        raise InvalidInputError("grid width and height must be integers")
    rows = obj["cells"]
    if not isinstance(rows, list) or len(rows) != height + 2:
        raise InvalidInputError(f"grid cells must have {height + 2} rows")
    cells: List[Optional[Tile]] = []
    for row in rows:
        if not isinstance(row, list) or len(row) != width + 2:
            raise InvalidInputError(f"every grid row must have {width + 2} cells")
        for t in row:
            if t is None:
                cells.append(None)
            else:
                cells.append(Tile(id=str(t["id"]), type=str(t["type"]), x=int(t["x"]), y=int(t["y"])))
    return Grid(width=width, height=height, cells=tuple(cells))


def json_to_pos(obj: Any) -> Position:
    x, y = obj
    return (int(x), int(y))


def path_to_json(path: Optional[Any]) -> Optional[List[List[int]]]:
    if path is None:
        return None
    return [[int(x), int(y)] for (x, y) in path]


def _bad_request(e: Exception) -> Tuple[Any, int]:
    msg = str(e) if isinstance(e, InvalidInputError) else f"bad request: {e!r}"
    return jsonify({"ok": False, "error": msg}), 400


def _json_body() -> Dict[str, Any]:
    body = request.get_json(force=True, silent=True)
    if body is None:
        return {}
    if not isinstance(body, dict):
        raise InvalidInputError("request body must be a JSON object")
    return body


def _rng(body: Dict[str, Any]) -> random.Random:
    seed = body.get("seed", SETTINGS.seed)
    return random.Random(None if seed is None else int(seed))


# ---------- Game API ----------

@app.post("/api/new")
def api_new() -> Any:
    try:
        body = _json_body()
        rng = _rng(body)
        types_in = body.get("types")
        if isinstance(types_in, str):
            tile_types = parse_tile_types(types_in)
        elif types_in is not None:
            tile_types = tuple(types_in)
        else:
            tile_types = SETTINGS.tile_types
        occupancy = body.get("map")
        if occupancy is not None:
            if isinstance(occupancy, dict):
                occupancy = map_from_document(occupancy)
            odd_cells = str(body.get("oddCells", "drop"))
            grid = create_grid_from_map(occupancy, tile_types, rng=rng, odd_cells=odd_cells)
        else:
            width = int(body.get("width", SETTINGS.width))
            height = int(body.get("height", SETTINGS.height))
            grid = create_grid(width, height, tile_types, rng=rng)
    except UnpairableLayoutError as e:
        return jsonify({"ok": False, "error": str(e), "active": e.active}), 400
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    logger.info("New %dx%d game with %d tiles", grid.width, grid.height, grid.tile_count)
    return jsonify({"ok": True, "grid": grid_to_json(grid), "solvable": check_solvability(grid)})


@app.post("/api/path")
def api_path() -> Any:
    try:
        body = _json_body()
        grid = json_to_grid(body["grid"])
        path = find_path(json_to_pos(body["start"]), json_to_pos(body["end"]), grid)
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({
        "ok": True,
        "path": path_to_json(path),
        "turns": count_turns(path) if path is not None else None,
    })


@app.post("/api/match")
def api_match() -> Any:
    try:
        body = _json_body()
        grid = json_to_grid(body["grid"])
        match = match_pair(grid, json_to_pos(body["start"]), json_to_pos(body["end"]))
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    if match is None:
        return jsonify({"ok": False, "error": "Tiles cannot be connected"}), 400
    return jsonify({
        "ok": True,
        "grid": grid_to_json(match.grid),
        "path": path_to_json(match.path),
        "cleared": match.grid.is_cleared(),
        "solvable": check_solvability(match.grid),
    })


@app.post("/api/hint")
def api_hint() -> Any:
    try:
        body = _json_body()
        grid = json_to_grid(body["grid"])
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    hint = get_hint(grid)
    if hint is None:
        return jsonify({"ok": True, "hint": None})
    return jsonify({
        "ok": True,
        "hint": {
            "start": list(hint.start),
            "end": list(hint.end),
            "path": path_to_json(hint.path),
        },
    })


@app.post("/api/solvable")
def api_solvable() -> Any:
    try:
        body = _json_body()
        grid = json_to_grid(body["grid"])
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({"ok": True, "solvable": check_solvability(grid)})


@app.post("/api/shuffle")
def api_shuffle() -> Any:
    try:
        body = _json_body()
        grid = json_to_grid(body["grid"])
        shuffled = shuffle_grid(grid, rng=_rng(body))
    except (InvalidInputError, KeyError, TypeError, ValueError) as e:
        return _bad_request(e)
    return jsonify({"ok": True, "grid": grid_to_json(shuffled), "solvable": check_solvability(shuffled)})


@app.post("/api/map/validate")
def api_map_validate() -> Any:
    try:
        body = _json_body()
        occupancy = map_from_document(body)
    except InvalidInputError as e:
        return _bad_request(e)
    active = check_occupancy_map(occupancy)
    return jsonify({"ok": True, "active": active, "pairable": active % 2 == 0})


# Entrypoint for "python app.py"
if __name__ == "__main__":
    configure_logging(SETTINGS.debug)
    debug = os.getenv("FLASK_DEBUG", os.getenv("DEBUG", "0")).lower() in ("1", "true", "yes", "on")
    app.run(host="0.0.0.0", port=int(os.getenv("PORT", "5000")), debug=debug)
