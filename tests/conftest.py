# tests/conftest.py
import sys
from pathlib import Path

import pytest

# Add project root to sys.path so "sudoku_hints" and "flask_api" can be imported in tests
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from sudoku_hints.bitsets import ValueSet  # noqa: E402

WIKI_PUZZLE = "530070000600195000098000060800060003400803001700020006060000280000419005000080079"
WIKI_SOLUTION = "534678912672195348198342567859761423426853791713924856961537284287419635345286179"

# the singles get stuck on this one until naked pairs open it up; same solution as WIKI_PUZZLE
PAIR_PUZZLE = "000670900672100000100000000050000000400000701703004056000537004080400635340080000"

SOLVED_4x4 = [1, 2, 3, 4, 3, 4, 1, 2, 2, 1, 4, 3, 4, 3, 2, 1]


def digits(s):
    return [int(ch) for ch in s]


def restrict(grid, index, *values):
    """Leave only the given candidates in a cell."""
    keep = ValueSet.of(grid.type.size, *values)
    grid.eliminate([(index, ValueSet.full(grid.type.size) - keep)])


@pytest.fixture
def wiki_values():
    return digits(WIKI_PUZZLE)
