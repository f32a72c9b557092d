import pytest

from sudoku_hints.bitsets import CellSet, ValueSet
from sudoku_hints.errors import StaleHint
from sudoku_hints.grid import Grid
from sudoku_hints.hints import EliminationHint, HintAggregator, PlacementHint, apply_hint
from sudoku_hints.models import CLASSIC_4x4, CLASSIC_9x9, SolvingTechnique


def _elimination():
    return EliminationHint(
        CLASSIC_9x9,
        SolvingTechnique.NAKED_PAIR,
        CellSet.of(81, 2, 10),
        (ValueSet.of(9, 3, 5), ValueSet.of(9, 3)),
    )


def test_placement_validates_then_applies():
    grid = Grid(CLASSIC_9x9)
    hint = PlacementHint(CLASSIC_9x9, SolvingTechnique.NAKED_SINGLE, 0, 5)

    assert hint.apply(grid, update_grid=False)
    assert not grid.cell(0).is_assigned()

    assert hint.apply(grid)
    assert grid.cell(0).value == 5
    assert not grid.cell(1).possible_values.test(5)

    assert not hint.apply(grid, update_grid=False)
    with pytest.raises(StaleHint):
        hint.apply(grid)


def test_elimination_removes_exactly_the_listed_candidates():
    grid = Grid(CLASSIC_9x9)
    hint = _elimination()
    apply_hint(hint, grid)

    assert grid.cell(2).possible_values == ValueSet.full(9) - ValueSet.of(9, 3, 5)
    assert grid.cell(10).possible_values == ValueSet.full(9) - ValueSet.of(9, 3)
    for cell in grid.cells():
        if cell.index not in (2, 10):
            assert cell.possible_values == ValueSet.full(9)

    with pytest.raises(StaleHint):
        apply_hint(hint, grid)
    assert grid.cell(2).possible_values == ValueSet.full(9) - ValueSet.of(9, 3, 5)


def test_stale_elimination_leaves_grid_untouched():
    grid = Grid(CLASSIC_9x9)
    grid.eliminate([(10, ValueSet.of(9, 3))])
    with pytest.raises(StaleHint):
        _elimination().apply(grid)
    assert grid.cell(2).possible_values == ValueSet.full(9)


def test_hint_for_another_grid_type_does_not_apply():
    hint = PlacementHint(CLASSIC_9x9, SolvingTechnique.NAKED_SINGLE, 0, 1)
    assert not hint.apply(Grid(CLASSIC_4x4), update_grid=False)


def test_elimination_requires_one_value_set_per_cell():
    with pytest.raises(ValueError):
        EliminationHint(CLASSIC_9x9, SolvingTechnique.NAKED_PAIR, CellSet.of(81, 2, 10), (ValueSet.of(9, 3),))


def test_descriptions_and_dicts():
    placement = PlacementHint(CLASSIC_9x9, SolvingTechnique.HIDDEN_SINGLE, 0, 5)
    assert placement.description == "r1c1=5"
    assert str(placement) == "Hidden Single: r1c1=5"
    assert placement.to_dict()["action"] == "PLACE"

    elimination = _elimination()
    assert elimination.description == "r1c3<>3,5, r2c2<>3"
    assert elimination.to_dict()["eliminations"] == [
        {"cell": 2, "values": [3, 5]},
        {"cell": 10, "values": [3]},
    ]


def test_hints_compare_structurally():
    assert _elimination() == _elimination()
    assert hash(_elimination()) == hash(_elimination())
    a = PlacementHint(CLASSIC_9x9, SolvingTechnique.NAKED_SINGLE, 0, 5)
    b = PlacementHint(CLASSIC_9x9, SolvingTechnique.HIDDEN_SINGLE, 0, 5)
    assert a != b


def test_aggregator_keeps_insertion_order_and_duplicates():
    aggregator = HintAggregator()
    first = PlacementHint(CLASSIC_9x9, SolvingTechnique.HIDDEN_SINGLE, 4, 2)
    second = _elimination()
    aggregator.add_hint(first)
    aggregator.add_hint(second)
    aggregator.add_hint(first)

    assert len(aggregator) == 3
    assert list(aggregator) == [first, second, first]
    assert aggregator[1] is second
    assert aggregator.techniques() == [SolvingTechnique.HIDDEN_SINGLE, SolvingTechnique.NAKED_PAIR]
