from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterator, List, Tuple, Union

from sudoku_hints.bitsets import CellSet, ValueSet
from sudoku_hints.errors import StaleHint
from sudoku_hints.grid import Grid
from sudoku_hints.models import GridType, SolvingTechnique

log = logging.getLogger(__name__)


def _cell_name(grid_type: GridType, index: int) -> str:
    return f"r{index // grid_type.size + 1}c{index % grid_type.size + 1}"


# ------------------ Hint variants ------------------
@dataclass(frozen=True)
class PlacementHint:
    grid_type: GridType
    technique: SolvingTechnique
    cell_index: int
    value: int

    @property
    def action(self) -> str:
        return "PLACE"

    @property
    def description(self) -> str:
        return f"{_cell_name(self.grid_type, self.cell_index)}={self.value}"

    def apply(self, grid: Grid, update_grid: bool = True) -> bool:
        return apply_hint(self, grid, update_grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "technique": self.technique.name,
            "technique_name": self.technique.technique_name,
            "action": self.action,
            "cell": self.cell_index,
            "value": self.value,
            "description": self.description,
        }

    def __str__(self) -> str:
        return f"{self.technique.technique_name}: {self.description}"


@dataclass(frozen=True)
class EliminationHint:
    """
    excluded_values[i] is removed from the i-th cell of affected_cells,
    in ascending cell index order.
    """

    grid_type: GridType
    technique: SolvingTechnique
    affected_cells: CellSet
    excluded_values: Tuple[ValueSet, ...]

    def __post_init__(self):
        if len(self.excluded_values) != self.affected_cells.cardinality():
            raise ValueError(
                f"{len(self.excluded_values)} value sets for {self.affected_cells.cardinality()} affected cells"
            )

    @property
    def action(self) -> str:
        return "ELIMINATE"

    def eliminations(self) -> Iterator[Tuple[int, ValueSet]]:
        return zip(self.affected_cells, self.excluded_values)

    @property
    def description(self) -> str:
        return ", ".join(
            f"{_cell_name(self.grid_type, index)}<>{values}" for index, values in self.eliminations()
        )

    def apply(self, grid: Grid, update_grid: bool = True) -> bool:
        return apply_hint(self, grid, update_grid)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "technique": self.technique.name,
            "technique_name": self.technique.technique_name,
            "action": self.action,
            "eliminations": [
                {"cell": index, "values": list(values)} for index, values in self.eliminations()
            ],
            "description": self.description,
        }

    def __str__(self) -> str:
        return f"{self.technique.technique_name}: {self.description}"


Hint = Union[PlacementHint, EliminationHint]


# ------------------ applying ------------------
def is_applicable(hint: Hint, grid: Grid) -> bool:
    """True while every cell the hint references is blank and still holds the referenced candidates."""
    if hint.grid_type != grid.type:
        return False
    if isinstance(hint, PlacementHint):
        cell = grid.cell(hint.cell_index)
        return not cell.is_assigned() and cell.possible_values.test(hint.value)
    for index, values in hint.eliminations():
        cell = grid.cell(index)
        if cell.is_assigned() or values - cell.possible_values:
            return False
    return True


def apply_hint(hint: Hint, grid: Grid, update_grid: bool = True) -> bool:
    """
    With update_grid=False only report whether the hint still applies.
    Otherwise apply it: a placement assigns and propagates to peers, an
    elimination removes exactly the listed candidates. Raises StaleHint
    (grid untouched) if the hint no longer applies.
    """
    valid = is_applicable(hint, grid)
    if not update_grid:
        return valid
    if not valid:
        raise StaleHint(f"Hint no longer applies: {hint}")

    if isinstance(hint, PlacementHint):
        grid.assign(hint.cell_index, hint.value)
    else:
        grid.eliminate(hint.eliminations())
    log.debug("Applied %s", hint)
    return True


# ------------------ aggregation ------------------
class HintAggregator:
    """Hints of one scan in the order they were found. No dedup, no ranking."""

    def __init__(self):
        self.hints: List[Hint] = []

    def add_hint(self, hint: Hint) -> None:
        self.hints.append(hint)

    def techniques(self) -> List[SolvingTechnique]:
        seen: List[SolvingTechnique] = []
        for hint in self.hints:
            if hint.technique not in seen:
                seen.append(hint.technique)
        return seen

    def __iter__(self) -> Iterator[Hint]:
        return iter(self.hints)

    def __len__(self) -> int:
        return len(self.hints)

    def __getitem__(self, i: int) -> Hint:
        return self.hints[i]
