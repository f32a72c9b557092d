from __future__ import annotations

from itertools import combinations
from typing import Dict

from sudoku_hints.bitsets import CellSet, ValueSet
from sudoku_hints.finders import HintFinder
from sudoku_hints.grid import Grid, House
from sudoku_hints.hints import HintAggregator
from sudoku_hints.models import GridType, SolvingTechnique


class NakedSubsetFinder(HintFinder):
    """
    k blank cells of a house whose candidates together hold exactly k
    values: those values are locked into the k cells and are removed from
    the other cells of the house.

    With locked=True only subsets that also lie on a single row or column
    other than the scanned house are reported, and the eliminations cover
    that line as well.
    """

    def __init__(self, subset_size: int, technique: SolvingTechnique, locked: bool = False):
        self.subset_size = subset_size
        self.technique = technique
        self.locked = locked

    def supports(self, grid_type: GridType) -> bool:
        return self.subset_size < grid_type.size

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        grid.accept_houses(lambda house: self._visit(grid, aggregator, house))

    def _visit(self, grid: Grid, aggregator: HintAggregator, house: House) -> None:
        k = self.subset_size
        cells = [
            cell for cell in house.cells()
            if not cell.is_assigned() and 2 <= cell.possible_values.cardinality() <= k
        ]

        for subset in combinations(cells, k):
            values = subset[0].possible_values
            for cell in subset[1:]:
                values = values | cell.possible_values
            if values.cardinality() != k:
                continue

            subset_cells = CellSet.from_iterable(grid.cell_count, (cell.index for cell in subset))
            affected = house.cell_set
            if self.locked:
                for line in (grid.single_row(subset_cells), grid.single_column(subset_cells)):
                    if line is not None and line is not house:
                        affected = affected | line.cell_set
                if affected == house.cell_set:
                    continue

            self.eliminate_values_from_cells(grid, aggregator, affected, subset_cells, values)


class HiddenSubsetFinder(HintFinder):
    """
    k values of a house whose positions together cover exactly k cells:
    those cells must hold the k values, so every other candidate is
    removed from them.
    """

    def __init__(self, subset_size: int, technique: SolvingTechnique):
        self.subset_size = subset_size
        self.technique = technique

    def supports(self, grid_type: GridType) -> bool:
        return self.subset_size < grid_type.size

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        grid.accept_houses(lambda house: self._visit(grid, aggregator, house))

    def _visit(self, grid: Grid, aggregator: HintAggregator, house: House) -> None:
        k = self.subset_size
        positions: Dict[int, CellSet] = {}
        for value in house.unassigned_values():
            p = house.potential_positions(value)
            if 2 <= p.cardinality() <= k:
                positions[value] = p

        for values in combinations(positions, k):
            covered = positions[values[0]]
            for value in values[1:]:
                covered = covered | positions[value]
            if covered.cardinality() != k:
                continue

            allowed = ValueSet.from_iterable(grid.type.size, values)
            self.eliminate_not_allowed_values_from_cells(grid, aggregator, covered, allowed)


class NakedPairFinder(NakedSubsetFinder):
    def __init__(self):
        super().__init__(2, SolvingTechnique.NAKED_PAIR)


class NakedTripleFinder(NakedSubsetFinder):
    def __init__(self):
        super().__init__(3, SolvingTechnique.NAKED_TRIPLE)


class NakedQuadrupleFinder(NakedSubsetFinder):
    def __init__(self):
        super().__init__(4, SolvingTechnique.NAKED_QUADRUPLE)


class LockedPairFinder(NakedSubsetFinder):
    def __init__(self):
        super().__init__(2, SolvingTechnique.LOCKED_PAIR, locked=True)


class LockedTripleFinder(NakedSubsetFinder):
    def __init__(self):
        super().__init__(3, SolvingTechnique.LOCKED_TRIPLE, locked=True)


class HiddenPairFinder(HiddenSubsetFinder):
    def __init__(self):
        super().__init__(2, SolvingTechnique.HIDDEN_PAIR)


class HiddenTripleFinder(HiddenSubsetFinder):
    def __init__(self):
        super().__init__(3, SolvingTechnique.HIDDEN_TRIPLE)


class HiddenQuadrupleFinder(HiddenSubsetFinder):
    def __init__(self):
        super().__init__(4, SolvingTechnique.HIDDEN_QUADRUPLE)
