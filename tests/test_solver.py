import pytest

from conftest import PAIR_PUZZLE, WIKI_SOLUTION, digits
from sudoku_hints.errors import UnsupportedTechnique
from sudoku_hints.grid import Grid
from sudoku_hints.models import CLASSIC_4x4, CLASSIC_9x9, SolvingTechnique
from sudoku_hints.solver import DEFAULT_FINDERS, find_all_hints, find_next_hints, finder_for, solve
from sudoku_hints.singles import FullHouseFinder, HiddenSingleFinder, NakedSingleFinder
from sudoku_hints.subsets import HiddenPairFinder, NakedPairFinder, NakedQuadrupleFinder


def _is_permutation_everywhere(grid):
    size = grid.type.size
    return all(sorted(c.value for c in house.cells()) == list(range(1, size + 1)) for house in grid.houses())


def test_solves_classic_puzzle(wiki_values):
    grid = Grid.from_values(wiki_values)
    result = solve(grid)

    assert result.is_solved
    assert result.values == digits(WIKI_SOLUTION)
    assert result.steps
    assert _is_permutation_everywhere(grid)


def test_solves_4x4_puzzle():
    values = [0, 2, 3, 0,
              3, 0, 1, 2,
              2, 1, 0, 3,
              0, 3, 2, 0]
    grid = Grid.from_values(values, CLASSIC_4x4)
    result = solve(grid)

    assert result.is_solved
    assert result.values == [1, 2, 3, 4, 3, 4, 1, 2, 2, 1, 4, 3, 4, 3, 2, 1]


SINGLES = [FullHouseFinder(), NakedSingleFinder(), HiddenSingleFinder()]


def test_singles_alone_get_stuck_on_pair_puzzle():
    result = solve(Grid.from_values(digits(PAIR_PUZZLE)), SINGLES)
    assert not result.is_solved
    assert result.steps
    assert {s.technique for s in result.steps} <= {f.technique for f in SINGLES}


def test_pairs_finish_what_singles_cannot():
    grid = Grid.from_values(digits(PAIR_PUZZLE))
    result = solve(grid, SINGLES + [NakedPairFinder(), HiddenPairFinder()])

    assert result.is_solved
    assert result.values == digits(WIKI_SOLUTION)
    assert SolvingTechnique.NAKED_PAIR in {s.technique for s in result.steps}
    assert _is_permutation_everywhere(grid)


def test_stuck_on_empty_grid():
    grid = Grid.from_values([0] * 81)
    result = solve(grid)
    assert not result.is_solved
    assert result.steps == []


def test_max_steps_is_honoured(wiki_values):
    result = solve(Grid.from_values(wiki_values), max_steps=3)
    assert len(result.steps) == 3
    assert not result.is_solved


def test_next_hints_come_from_a_single_technique(wiki_values):
    grid = Grid.from_values(wiki_values)
    hints = find_next_hints(grid)
    assert len(hints) > 0
    assert len(hints.techniques()) == 1


def test_find_all_hints_is_repeatable(wiki_values):
    grid = Grid.from_values(wiki_values)
    assert find_all_hints(grid).hints == find_all_hints(grid).hints


def test_default_registry_skips_unsupported_finders():
    grid = Grid.from_values([1, 2, 3, 0] + [0] * 12, CLASSIC_4x4)
    assert len(find_all_hints(grid)) > 0
    with pytest.raises(UnsupportedTechnique):
        find_all_hints(grid, [NakedQuadrupleFinder()])


def test_registry_covers_every_technique():
    assert {f.technique for f in DEFAULT_FINDERS} == set(SolvingTechnique)
    assert finder_for(SolvingTechnique.HIDDEN_PAIR).technique == SolvingTechnique.HIDDEN_PAIR
    assert all(f.supports(CLASSIC_9x9) for f in DEFAULT_FINDERS)
