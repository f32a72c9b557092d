from __future__ import annotations

import logging
from typing import Callable, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from sudoku_hints.bitsets import CellSet, ValueSet
from sudoku_hints.errors import Contradiction, InvalidPuzzle
from sudoku_hints.models import CLASSIC_9x9, GridType, HouseKind

log = logging.getLogger(__name__)


class Cell:
    """
    One grid position:
    - index/row/column/box never change after construction
    - value = 0 while unassigned
    - candidates are empty once a value is assigned
    - excluded values remember candidates removed by eliminations
    """

    def __init__(self, index: int, row: int, column: int, box: int, grid_size: int):
        self.index = index
        self.row = row
        self.column = column
        self.box = box
        self.given = False
        self._grid_size = grid_size
        self._value = 0
        self._candidates = ValueSet.full(grid_size)
        self._excluded = ValueSet.empty(grid_size)

    @property
    def name(self) -> str:
        return f"r{self.row + 1}c{self.column + 1}"

    @property
    def value(self) -> int:
        return self._value

    @property
    def possible_values(self) -> ValueSet:
        return self._candidates

    @property
    def excluded_values(self) -> ValueSet:
        return self._excluded

    def is_assigned(self) -> bool:
        return self._value != 0

    def set_value(self, value: int) -> None:
        """
        Assign a value (0 clears it) without touching any peer cell.
        Callers editing cells directly should follow up with Grid.update_candidates().
        """
        if not 0 <= value <= self._grid_size:
            raise ValueError(f"invalid value for cell: {value} outside allowed range [0, {self._grid_size}]")
        if self.given:
            raise ValueError(f"cell {self.name} holds a given value")
        self._value = value
        if value:
            self._candidates = ValueSet.empty(self._grid_size)
        else:
            self._candidates = ValueSet.full(self._grid_size) - self._excluded

    def clear_excluded_values(self) -> None:
        """
        Forget every recorded elimination. A blank cell gets all values back
        as candidates; Grid.update_candidates() narrows them again.
        """
        self._excluded = ValueSet.empty(self._grid_size)
        if not self.is_assigned():
            self._candidates = ValueSet.full(self._grid_size)

    def reset(self) -> None:
        """Clear exclusions and, unless the cell is a given, its value."""
        self._excluded = ValueSet.empty(self._grid_size)
        if not self.given:
            self.set_value(0)

    def __repr__(self) -> str:
        state = "given" if self.given else str(self._candidates)
        return f"{self.name} = {self._value} ({state})"


class House:
    """
    A row, column or box. Membership is fixed; every query reads the
    current cell state of the owning grid.
    """

    def __init__(self, grid: Grid, kind: HouseKind, index: int, cell_indices: Iterable[int]):
        self._grid = grid
        self.kind = kind
        self.index = index
        self.cell_indices: Tuple[int, ...] = tuple(cell_indices)
        self.cell_set = CellSet.from_iterable(grid.cell_count, self.cell_indices)

    @property
    def name(self) -> str:
        return f"{self.kind.value.lower()} {self.index + 1}"

    def cells(self, from_index: int = 0) -> Iterator[Cell]:
        """Member cells in order, skipping those with a cell index below from_index."""
        for i in self.cell_indices:
            if i >= from_index:
                yield self._grid.cell(i)

    def cells_excluding(self, excluded: Union[House, CellSet]) -> Iterator[Cell]:
        excluded_set = excluded.cell_set if isinstance(excluded, House) else excluded
        for i in self.cell_indices:
            if not excluded_set.test(i):
                yield self._grid.cell(i)

    def assigned_values(self) -> ValueSet:
        values = ValueSet.empty(self._grid.type.size)
        for cell in self.cells():
            if cell.is_assigned():
                values = values.set(cell.value)
        return values

    def unassigned_values(self, from_value: int = 1) -> Iterator[int]:
        """Values not yet placed in this house, ascending, starting at from_value."""
        assigned = self.assigned_values()
        for v in range(max(from_value, 1), self._grid.type.size + 1):
            if not assigned.test(v):
                yield v

    def potential_positions(self, value: int) -> CellSet:
        positions = CellSet.empty(self._grid.cell_count)
        for cell in self.cells():
            if not cell.is_assigned() and cell.possible_values.test(value):
                positions = positions.set(cell.index)
        return positions

    def __repr__(self) -> str:
        return f"House({self.name})"


class Grid:
    """
    Cells and houses of one puzzle. Topology is built once; only cell
    values and candidates change afterwards, through assign/eliminate.
    """

    def __init__(self, grid_type: GridType = CLASSIC_9x9):
        size = grid_type.size
        if size % grid_type.box_rows or size % grid_type.box_cols or grid_type.box_rows * grid_type.box_cols != size:
            raise InvalidPuzzle(f"Box shape {grid_type.box_rows}x{grid_type.box_cols} does not tile a {size}x{size} grid.")

        self.type = grid_type
        self._cells: List[Cell] = [
            Cell(i, i // size, i % size, grid_type.box_index(i // size, i % size), size)
            for i in range(grid_type.cell_count)
        ]

        self.rows = [House(self, HouseKind.ROW, r, [r * size + c for c in range(size)]) for r in range(size)]
        self.columns = [House(self, HouseKind.COLUMN, c, [r * size + c for r in range(size)]) for c in range(size)]
        box_members: List[List[int]] = [[] for _ in range(size)]
        for cell in self._cells:
            box_members[cell.box].append(cell.index)
        self.boxes = [House(self, HouseKind.BOX, b, members) for b, members in enumerate(box_members)]

        self._peers: List[CellSet] = []
        self._precompute_peers()

    @classmethod
    def from_values(cls, values: Sequence[int], grid_type: GridType = CLASSIC_9x9) -> Grid:
        """
        Build a grid from one value per cell (0 = blank). Non-zero values
        become givens and candidates are derived from them.
        """
        grid = cls(grid_type)
        values = list(values)
        if len(values) != grid.cell_count:
            raise InvalidPuzzle(f"Expected {grid.cell_count} values for {grid_type.name}, got {len(values)}")

        for cell, v in zip(grid._cells, values):
            if isinstance(v, bool) or not isinstance(v, int) or not 0 <= v <= grid_type.size:
                raise InvalidPuzzle(f"Invalid value {v!r} at {cell.name}.")
            if v:
                cell.set_value(v)
                cell.given = True

        dup = grid._find_duplicate()
        if dup is not None:
            house, value = dup
            raise InvalidPuzzle(f"Given value {value} appears more than once in {house.name}.")

        grid.update_candidates()
        return grid

    def _precompute_peers(self) -> None:
        for cell in self._cells:
            peers = (
                self.rows[cell.row].cell_set
                | self.columns[cell.column].cell_set
                | self.boxes[cell.box].cell_set
            )
            self._peers.append(peers.clear(cell.index))

    # ------------------ topology ------------------
    @property
    def cell_count(self) -> int:
        return self.type.cell_count

    def cell(self, index: int) -> Cell:
        if not 0 <= index < self.cell_count:
            raise IndexError(f"cell index {index} outside allowed range [0, {self.cell_count})")
        return self._cells[index]

    def cells(self, cell_set: Optional[CellSet] = None) -> Iterator[Cell]:
        if cell_set is None:
            return iter(self._cells)
        return (self._cells[i] for i in cell_set)

    def peers(self, index: int) -> CellSet:
        return self._peers[index]

    def houses(self) -> Iterator[House]:
        yield from self.rows
        yield from self.columns
        yield from self.boxes

    def accept_houses(self, callback: Callable[[House], None]) -> None:
        """Call callback once for every row, column and box, in that order."""
        for house in self.houses():
            callback(house)

    def _single_house(self, cell_set: CellSet, houses: List[House], attr: str) -> Optional[House]:
        keys = {getattr(self._cells[i], attr) for i in cell_set}
        if len(keys) != 1:
            return None
        return houses[keys.pop()]

    def single_row(self, cell_set: CellSet) -> Optional[House]:
        return self._single_house(cell_set, self.rows, "row")

    def single_column(self, cell_set: CellSet) -> Optional[House]:
        return self._single_house(cell_set, self.columns, "column")

    def single_box(self, cell_set: CellSet) -> Optional[House]:
        return self._single_house(cell_set, self.boxes, "box")

    # ------------------ state checks ------------------
    def _find_duplicate(self) -> Optional[Tuple[House, int]]:
        for house in self.houses():
            seen = ValueSet.empty(self.type.size)
            for cell in house.cells():
                if not cell.is_assigned():
                    continue
                if seen.test(cell.value):
                    return house, cell.value
                seen = seen.set(cell.value)
        return None

    def validate(self) -> None:
        """Raise Contradiction if a house repeats a value or a blank cell has no candidates."""
        dup = self._find_duplicate()
        if dup is not None:
            house, value = dup
            raise Contradiction(f"Value {value} is assigned more than once in {house.name}.")
        for cell in self._cells:
            if not cell.is_assigned() and not cell.possible_values:
                raise Contradiction(f"No candidates left for {cell.name}.")

    def is_solved(self) -> bool:
        return all(cell.is_assigned() for cell in self._cells) and self._find_duplicate() is None

    # ------------------ mutation ------------------
    def update_candidates(self) -> None:
        """
        Recompute every blank cell's candidates from the assigned values of
        its houses, keeping previously eliminated values excluded. Raises
        Contradiction, leaving every cell as it was, if a house repeats a
        value or a blank cell would end up without candidates.
        """
        size = self.type.size
        dup = self._find_duplicate()
        if dup is not None:
            house, value = dup
            log.warning("Value %d is repeated in %s", value, house.name)
            raise Contradiction(f"Value {value} is assigned more than once in {house.name}.")

        assigned: Dict[Tuple[HouseKind, int], ValueSet] = {
            (house.kind, house.index): house.assigned_values() for house in self.houses()
        }
        updates: Dict[int, ValueSet] = {}
        for cell in self._cells:
            if cell.is_assigned():
                updates[cell.index] = ValueSet.empty(size)
                continue
            taken = (
                assigned[(HouseKind.ROW, cell.row)]
                | assigned[(HouseKind.COLUMN, cell.column)]
                | assigned[(HouseKind.BOX, cell.box)]
            )
            candidates = ValueSet.full(size) - cell._excluded - taken
            if not candidates:
                log.warning("No candidates left for %s", cell.name)
                raise Contradiction(f"No candidates left for {cell.name}.")
            updates[cell.index] = candidates

        for index, candidates in updates.items():
            self._cells[index]._candidates = candidates

    def clear_excluded_values(self, index: Optional[int] = None) -> None:
        """
        Forget recorded eliminations of one cell, or of every cell when no
        index is given, and rebuild the candidates from the assigned values.
        """
        cells = self._cells if index is None else [self.cell(index)]
        for cell in cells:
            cell.clear_excluded_values()
        self.update_candidates()

    def assign(self, index: int, value: int) -> None:
        """
        Place value in a blank cell and remove it from the candidates of all
        peers. Nothing changes if the placement would break a house.
        """
        cell = self.cell(index)
        size = self.type.size
        if not 1 <= value <= size:
            raise ValueError(f"invalid value {value} outside allowed range [1, {size}]")
        if cell.is_assigned():
            raise ValueError(f"cell {cell.name} is already assigned")

        single = ValueSet.of(size, value)
        for peer in self.cells(self._peers[index]):
            if peer.value == value:
                log.warning("Placing %d in %s duplicates %s", value, cell.name, peer.name)
                raise Contradiction(f"Value {value} already assigned to {peer.name}, a peer of {cell.name}.")
            if not peer.is_assigned() and peer.possible_values == single:
                log.warning("Placing %d in %s empties %s", value, cell.name, peer.name)
                raise Contradiction(f"Placing {value} in {cell.name} leaves no candidates for {peer.name}.")

        cell._value = value
        cell._candidates = ValueSet.empty(size)
        for peer in self.cells(self._peers[index]):
            if not peer.is_assigned():
                peer._candidates = peer._candidates - single

    def eliminate(self, eliminations: Iterable[Tuple[int, ValueSet]]) -> None:
        """
        Remove each paired value set from its cell's candidates, all or
        nothing. Assigned cells are left alone.
        """
        updates: Dict[int, ValueSet] = {}
        for index, values in eliminations:
            cell = self.cell(index)
            if cell.is_assigned():
                continue
            remaining = updates.get(index, cell.possible_values) - values
            if not remaining:
                log.warning("Eliminating %s from %s empties the cell", values, cell.name)
                raise Contradiction(f"Eliminating {values} leaves no candidates for {cell.name}.")
            updates[index] = remaining

        for index, remaining in updates.items():
            cell = self._cells[index]
            cell._excluded = cell._excluded | (cell._candidates - remaining)
            cell._candidates = remaining

    # ------------------ output ------------------
    def to_values(self) -> List[int]:
        return [cell.value for cell in self._cells]

    def pretty(self) -> str:
        size = self.type.size
        width = size * 2 + (size // self.type.box_cols - 1) * 2 - 1
        lines = []
        for r in range(size):
            if r and r % self.type.box_rows == 0:
                lines.append("-" * width)
            row = []
            for c in range(size):
                if c and c % self.type.box_cols == 0:
                    row.append("|")
                v = self._cells[r * size + c].value
                row.append(str(v) if v != 0 else ".")
            lines.append(" ".join(row))
        return "\n".join(lines)
