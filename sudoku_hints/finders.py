from __future__ import annotations

import logging
from typing import Dict, Union

from sudoku_hints.bitsets import CellSet, ValueSet
from sudoku_hints.errors import UnsupportedTechnique
from sudoku_hints.grid import Grid, House
from sudoku_hints.hints import EliminationHint, HintAggregator, PlacementHint
from sudoku_hints.models import GridType, SolvingTechnique

log = logging.getLogger(__name__)


class HintFinder:
    """
    Base class for technique finders.

    A finder reads a Grid and adds zero or more hints to a HintAggregator.
    It keeps no state between calls, so one instance can scan any number
    of grids. Subclasses set `technique` and implement `scan`; the helper
    methods below build the hints so no finder repeats the cell/value
    bookkeeping. All of them work on copies of candidate sets.
    """

    technique: SolvingTechnique

    def supports(self, grid_type: GridType) -> bool:
        return True

    def find_hints(self, grid: Grid, aggregator: HintAggregator) -> None:
        if not self.supports(grid.type):
            raise UnsupportedTechnique(f"{self.technique.technique_name} does not support {grid.type.name}")
        self.scan(grid, aggregator)

    def scan(self, grid: Grid, aggregator: HintAggregator) -> None:
        raise NotImplementedError

    # ------------------ hint builders ------------------
    def place_value_in_cell(self, grid: Grid, aggregator: HintAggregator, cell_index: int, value: int) -> None:
        hint = PlacementHint(grid.type, self.technique, cell_index, value)
        log.debug("Found %s", hint)
        aggregator.add_hint(hint)

    def eliminate_value_from_cells(
        self,
        grid: Grid,
        aggregator: HintAggregator,
        affected_house: House,
        excluded: Union[House, CellSet],
        excluded_value: int,
    ) -> None:
        """Remove excluded_value from every cell of affected_house outside `excluded`."""
        eliminated = ValueSet.of(grid.type.size, excluded_value)
        pairs: Dict[int, ValueSet] = {}
        for cell in affected_house.cells_excluding(excluded):
            if not cell.is_assigned() and cell.possible_values.test(excluded_value):
                pairs[cell.index] = eliminated
        self._add_elimination(grid, aggregator, pairs)

    def eliminate_not_allowed_values_from_cells(
        self,
        grid: Grid,
        aggregator: HintAggregator,
        affected_cells: CellSet,
        allowed_values: ValueSet,
    ) -> None:
        """Remove every candidate not in allowed_values from the affected cells."""
        pairs: Dict[int, ValueSet] = {}
        for cell in grid.cells(affected_cells):
            if cell.is_assigned():
                continue
            to_exclude = cell.possible_values - allowed_values
            if to_exclude:
                pairs[cell.index] = to_exclude
        self._add_elimination(grid, aggregator, pairs)

    def eliminate_values_from_cells(
        self,
        grid: Grid,
        aggregator: HintAggregator,
        affected: Union[House, CellSet],
        excluded_cells: CellSet,
        excluded_values: ValueSet,
    ) -> bool:
        """
        Remove excluded_values from every affected cell not in excluded_cells.
        Returns True if a hint was added.
        """
        if isinstance(affected, House):
            cells = affected.cells_excluding(excluded_cells)
        else:
            cells = grid.cells(affected - excluded_cells)

        pairs: Dict[int, ValueSet] = {}
        for cell in cells:
            if cell.is_assigned():
                continue
            to_exclude = cell.possible_values & excluded_values
            if to_exclude:
                pairs[cell.index] = to_exclude
        return self._add_elimination(grid, aggregator, pairs)

    def _add_elimination(self, grid: Grid, aggregator: HintAggregator, pairs: Dict[int, ValueSet]) -> bool:
        if not pairs:
            return False
        affected = CellSet.from_iterable(grid.cell_count, pairs)
        hint = EliminationHint(grid.type, self.technique, affected, tuple(pairs[i] for i in affected))
        log.debug("Found %s", hint)
        aggregator.add_hint(hint)
        return True
