from __future__ import annotations

import logging

from flask import Flask, request, jsonify
from flask_cors import CORS

from sudoku_hints.bitsets import ValueSet
from sudoku_hints.errors import Contradiction, InvalidPuzzle, UnsupportedTechnique
from sudoku_hints.grid import Grid
from sudoku_hints.models import GRID_TYPES, GridType, SolvingTechnique
from sudoku_hints.solver import find_all_hints, find_next_hints, finder_for, solve

log = logging.getLogger(__name__)

DEFAULT_CONFIG = {
    "DEFAULT_GRID_TYPE": "CLASSIC_9x9",
    "MAX_SOLVE_STEPS": 1000,
    "LOG_LEVEL": "INFO",
}

app = Flask(__name__)
app.config.from_mapping(DEFAULT_CONFIG)
app.config.from_prefixed_env("SUDOKU_HINTS")
CORS(app)


def _grid_type(name) -> GridType:
    name = name or app.config["DEFAULT_GRID_TYPE"]
    try:
        return GRID_TYPES[name]
    except KeyError:
        raise InvalidPuzzle(f"Unknown grid type '{name}'. Known types: {sorted(GRID_TYPES)}")


def _parse_values(raw, grid_type: GridType):
    """
    Accepts a list of ints or a string with one character per cell
    ('0' or '.' for blanks, whitespace ignored).
    """
    if isinstance(raw, list):
        return raw
    if raw is None:
        raw = ""
    if not isinstance(raw, str):
        raise InvalidPuzzle(f"'values' must be a string or a list, got {type(raw).__name__}")
    s = "".join(raw.split()).replace(".", "0")
    if len(s) != grid_type.cell_count:
        raise InvalidPuzzle(f"Expected {grid_type.cell_count} characters, got {len(s)}")
    if any(not ch.isdigit() for ch in s):
        raise InvalidPuzzle("Only digits, 0, '.' and whitespace are allowed")
    return [int(ch) for ch in s]


def _parse_excluded(raw, grid: Grid):
    """
    {"<cell index>": [values...]} -> (cell, ValueSet) pairs for Grid.eliminate.
    Lets a client carry eliminations from earlier hints into the next call.
    """
    if raw is None:
        return []
    if not isinstance(raw, dict):
        raise InvalidPuzzle("'excluded' must map cell indexes to lists of values")
    pairs = []
    for key, values in raw.items():
        try:
            index = int(key)
            grid.cell(index)
        except (ValueError, IndexError):
            raise InvalidPuzzle(f"Invalid cell index {key!r} in 'excluded'")
        if not isinstance(values, list) or any(isinstance(v, bool) or not isinstance(v, int) for v in values):
            raise InvalidPuzzle(f"Excluded values for cell {index} must be a list of ints")
        try:
            pairs.append((index, ValueSet.from_iterable(grid.type.size, values)))
        except IndexError:
            raise InvalidPuzzle(f"Excluded values {values} for cell {index} are out of range")
    return pairs


def _request_data():
    data = request.get_json(force=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise InvalidPuzzle("Request body must be a JSON object")
    return data


def _grid_from_request(data) -> Grid:
    grid_type = _grid_type(data.get("type"))
    grid = Grid.from_values(_parse_values(data.get("values"), grid_type), grid_type)
    excluded = _parse_excluded(data.get("excluded"), grid)
    if excluded:
        grid.eliminate(excluded)
    return grid


def _finders_from_request(data):
    names = data.get("techniques")
    if names is None:
        return None
    if not isinstance(names, list) or any(not isinstance(name, str) for name in names):
        raise InvalidPuzzle("'techniques' must be a list of technique ids")
    if not names:
        return None
    try:
        return [finder_for(SolvingTechnique[name]) for name in names]
    except KeyError as e:
        raise InvalidPuzzle(f"Unknown technique {e}")


def _max_steps_from_request(data) -> int:
    limit = int(app.config["MAX_SOLVE_STEPS"])
    steps = data.get("max_steps")
    if steps is None:
        return limit
    if isinstance(steps, bool) or not isinstance(steps, int) or steps < 0:
        raise InvalidPuzzle("'max_steps' must be a non-negative integer")
    return min(steps, limit)


def _grid_state(grid: Grid):
    return {
        "values": "".join(str(v) for v in grid.to_values()),
        "candidates": [list(cell.possible_values) for cell in grid.cells()],
        "excluded": {
            str(cell.index): list(cell.excluded_values)
            for cell in grid.cells()
            if cell.excluded_values and not cell.is_assigned()
        },
    }


@app.errorhandler(InvalidPuzzle)
def invalid_puzzle(e):
    return jsonify({"error": str(e), "kind": "InvalidPuzzle"}), 400


@app.errorhandler(UnsupportedTechnique)
def unsupported_technique(e):
    return jsonify({"error": str(e), "kind": "UnsupportedTechnique"}), 400


@app.errorhandler(Contradiction)
def contradiction(e):
    return jsonify({"error": f"This puzzle is unsolvable from here: {e}", "kind": "Contradiction"}), 422


@app.get("/health")
def health():
    return jsonify({"ok": True})


@app.get("/techniques")
def techniques():
    return jsonify({
        "techniques": [
            {"id": t.name, "name": t.technique_name, "difficulty": t.difficulty.value}
            for t in SolvingTechnique
        ]
    })


@app.post("/hints")
def hints():
    data = _request_data()
    grid = _grid_from_request(data)
    found = find_all_hints(grid, _finders_from_request(data))
    return jsonify({"hints": [h.to_dict() for h in found], **_grid_state(grid)})


@app.post("/next-hint")
def next_hint():
    data = _request_data()
    grid = _grid_from_request(data)
    found = find_next_hints(grid, _finders_from_request(data))
    return jsonify({
        "has_hint": len(found) > 0,
        "hints": [h.to_dict() for h in found],
        **_grid_state(grid),
    })


@app.post("/solve")
def solve_puzzle():
    data = _request_data()
    grid = _grid_from_request(data)
    result = solve(grid, _finders_from_request(data), max_steps=_max_steps_from_request(data))
    log.info("Solve request finished: solved=%s steps=%d", result.is_solved, len(result.steps))
    return jsonify({
        "is_solved": result.is_solved,
        **_grid_state(grid),
        "steps": [
            {"technique": s.technique.name, "description": s.description}
            for s in result.steps
        ],
    })


if __name__ == "__main__":
    logging.basicConfig(level=app.config["LOG_LEVEL"])
    app.run(host="0.0.0.0", port=8000, debug=True)
