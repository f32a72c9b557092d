from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from sudoku_hints.finders import HintFinder
from sudoku_hints.grid import Grid
from sudoku_hints.hints import HintAggregator
from sudoku_hints.intersections import ClaimingFinder, PointingFinder
from sudoku_hints.models import SolutionResult, SolveStep, SolvingTechnique
from sudoku_hints.singles import FullHouseFinder, HiddenSingleFinder, NakedSingleFinder
from sudoku_hints.subsets import (
    HiddenPairFinder,
    HiddenQuadrupleFinder,
    HiddenTripleFinder,
    LockedPairFinder,
    LockedTripleFinder,
    NakedPairFinder,
    NakedQuadrupleFinder,
    NakedTripleFinder,
)

log = logging.getLogger(__name__)

# Easiest first; the driver always restarts from the top after progress.
DEFAULT_FINDERS: Tuple[HintFinder, ...] = (
    FullHouseFinder(),
    NakedSingleFinder(),
    HiddenSingleFinder(),
    PointingFinder(),
    ClaimingFinder(),
    LockedPairFinder(),
    LockedTripleFinder(),
    NakedPairFinder(),
    HiddenPairFinder(),
    NakedTripleFinder(),
    HiddenTripleFinder(),
    NakedQuadrupleFinder(),
    HiddenQuadrupleFinder(),
)


def finder_for(technique: SolvingTechnique) -> HintFinder:
    for finder in DEFAULT_FINDERS:
        if finder.technique == technique:
            return finder
    raise KeyError(technique)


def _finders_for(grid: Grid, finders: Optional[Iterable[HintFinder]]) -> List[HintFinder]:
    # explicit finders are used as given, so unsupported ones raise
    if finders is None:
        return [f for f in DEFAULT_FINDERS if f.supports(grid.type)]
    return list(finders)


def find_all_hints(grid: Grid, finders: Optional[Iterable[HintFinder]] = None) -> HintAggregator:
    """Run every finder over the same grid state and collect all hints."""
    aggregator = HintAggregator()
    for finder in _finders_for(grid, finders):
        finder.find_hints(grid, aggregator)
    return aggregator


def find_next_hints(grid: Grid, finders: Optional[Iterable[HintFinder]] = None) -> HintAggregator:
    """Hints of the first finder, in order, that finds anything."""
    for finder in _finders_for(grid, finders):
        aggregator = HintAggregator()
        finder.find_hints(grid, aggregator)
        if len(aggregator):
            return aggregator
    return HintAggregator()


def solve(
    grid: Grid,
    finders: Optional[Iterable[HintFinder]] = None,
    max_steps: int = 1000,
) -> SolutionResult:
    """
    Repeatedly apply the hints of the easiest technique that finds any,
    until the grid is solved, nothing applies or max_steps hints were
    applied. The grid is updated in place; a Contradiction propagates.
    """
    finders = _finders_for(grid, finders)
    steps: List[SolveStep] = []

    while not grid.is_solved() and len(steps) < max_steps:
        hints = find_next_hints(grid, finders)
        if not len(hints):
            log.info("Stuck after %d steps: no technique applies", len(steps))
            break

        applied = 0
        for hint in hints:
            if len(steps) >= max_steps:
                break
            # earlier hints of the same pass may have made this one obsolete
            if not hint.apply(grid, update_grid=False):
                log.debug("Skipping stale %s", hint)
                continue
            hint.apply(grid)
            applied += 1
            steps.append(SolveStep(hint.technique, hint.description))
            log.debug("Step %d: %s", len(steps), hint)

        if not applied:
            break

    solved = grid.is_solved()
    if solved:
        log.info("Solved in %d steps", len(steps))
    elif len(steps) >= max_steps:
        log.info("Gave up after %d steps", max_steps)
    return SolutionResult(solved, grid.to_values(), steps)
