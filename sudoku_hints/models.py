from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List


@dataclass(frozen=True)
class GridType:
    name: str
    size: int
    box_rows: int
    box_cols: int

    @property
    def cell_count(self) -> int:
        return self.size * self.size

    def box_index(self, row: int, col: int) -> int:
        boxes_per_band = self.size // self.box_cols
        return (row // self.box_rows) * boxes_per_band + (col // self.box_cols)


CLASSIC_4x4 = GridType("CLASSIC_4x4", 4, 2, 2)
CLASSIC_6x6 = GridType("CLASSIC_6x6", 6, 2, 3)
CLASSIC_9x9 = GridType("CLASSIC_9x9", 9, 3, 3)

GRID_TYPES: Dict[str, GridType] = {t.name: t for t in (CLASSIC_4x4, CLASSIC_6x6, CLASSIC_9x9)}


class HouseKind(str, Enum):
    ROW = "ROW"
    COLUMN = "COLUMN"
    BOX = "BOX"


class DifficultyLevel(str, Enum):
    EASY = "EASY"
    MEDIUM = "MEDIUM"
    HARD = "HARD"


class SolvingTechnique(str, Enum):
    FULL_HOUSE = "Full House"
    NAKED_SINGLE = "Naked Single"
    HIDDEN_SINGLE = "Hidden Single"
    POINTING = "Pointing"
    CLAIMING = "Claiming"
    LOCKED_PAIR = "Locked Pair"
    LOCKED_TRIPLE = "Locked Triple"
    NAKED_PAIR = "Naked Pair"
    NAKED_TRIPLE = "Naked Triple"
    NAKED_QUADRUPLE = "Naked Quadruple"
    HIDDEN_PAIR = "Hidden Pair"
    HIDDEN_TRIPLE = "Hidden Triple"
    HIDDEN_QUADRUPLE = "Hidden Quadruple"

    @property
    def technique_name(self) -> str:
        return self.value

    @property
    def difficulty(self) -> DifficultyLevel:
        return _DIFFICULTY[self]


_DIFFICULTY: Dict[SolvingTechnique, DifficultyLevel] = {
    SolvingTechnique.FULL_HOUSE: DifficultyLevel.EASY,
    SolvingTechnique.NAKED_SINGLE: DifficultyLevel.EASY,
    SolvingTechnique.HIDDEN_SINGLE: DifficultyLevel.EASY,
    SolvingTechnique.POINTING: DifficultyLevel.MEDIUM,
    SolvingTechnique.CLAIMING: DifficultyLevel.MEDIUM,
    SolvingTechnique.LOCKED_PAIR: DifficultyLevel.MEDIUM,
    SolvingTechnique.LOCKED_TRIPLE: DifficultyLevel.MEDIUM,
    SolvingTechnique.NAKED_PAIR: DifficultyLevel.MEDIUM,
    SolvingTechnique.NAKED_TRIPLE: DifficultyLevel.MEDIUM,
    SolvingTechnique.HIDDEN_PAIR: DifficultyLevel.MEDIUM,
    SolvingTechnique.HIDDEN_TRIPLE: DifficultyLevel.HARD,
    SolvingTechnique.NAKED_QUADRUPLE: DifficultyLevel.HARD,
    SolvingTechnique.HIDDEN_QUADRUPLE: DifficultyLevel.HARD,
}


@dataclass(frozen=True)
class SolveStep:
    technique: SolvingTechnique
    description: str


@dataclass(frozen=True)
class SolutionResult:
    is_solved: bool
    values: List[int]
    steps: List[SolveStep] = field(default_factory=list)
