from __future__ import annotations

from sudoku_hints.finders import HintFinder
from sudoku_hints.grid import Grid
from sudoku_hints.hints import HintAggregator
from sudoku_hints.models import SolvingTechnique


class PointingFinder(HintFinder):
    """
    Locked candidates, type 1: inside a box all positions of a value lie on
    one row (or column), so the value is removed from the rest of that line.
    """

    technique = SolvingTechnique.POINTING

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        for box in grid.boxes:
            for value in box.unassigned_values():
                positions = box.potential_positions(value)
                if positions.cardinality() < 2:
                    continue
                for line in (grid.single_row(positions), grid.single_column(positions)):
                    if line is not None:
                        self.eliminate_value_from_cells(grid, aggregator, line, box, value)


class ClaimingFinder(HintFinder):
    """
    Locked candidates, type 2: inside a row (or column) all positions of a
    value lie in one box, so the value is removed from the rest of that box.
    """

    technique = SolvingTechnique.CLAIMING

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        for line in grid.rows + grid.columns:
            for value in line.unassigned_values():
                positions = line.potential_positions(value)
                if positions.cardinality() < 2:
                    continue
                box = grid.single_box(positions)
                if box is not None:
                    self.eliminate_value_from_cells(grid, aggregator, box, line, value)
