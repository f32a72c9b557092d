from __future__ import annotations

from sudoku_hints.finders import HintFinder
from sudoku_hints.grid import Grid, House
from sudoku_hints.hints import HintAggregator
from sudoku_hints.models import SolvingTechnique


class FullHouseFinder(HintFinder):
    """A house with a single blank cell: the missing value goes there."""

    technique = SolvingTechnique.FULL_HOUSE

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        def visit(house: House) -> None:
            blanks = [cell for cell in house.cells() if not cell.is_assigned()]
            if len(blanks) != 1:
                return
            value = next(house.unassigned_values(), None)
            if value is not None and blanks[0].possible_values.test(value):
                self.place_value_in_cell(grid, aggregator, blanks[0].index, value)

        grid.accept_houses(visit)


class NakedSingleFinder(HintFinder):
    technique = SolvingTechnique.NAKED_SINGLE

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        for cell in grid.cells():
            if not cell.is_assigned() and cell.possible_values.cardinality() == 1:
                self.place_value_in_cell(grid, aggregator, cell.index, cell.possible_values.first())


class HiddenSingleFinder(HintFinder):
    """A value with only one possible position left in a house."""

    technique = SolvingTechnique.HIDDEN_SINGLE

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        def visit(house: House) -> None:
            for value in house.unassigned_values():
                positions = house.potential_positions(value)
                if positions.cardinality() == 1:
                    self.place_value_in_cell(grid, aggregator, positions.first(), value)

        grid.accept_houses(visit)
