class SudokuError(Exception):
    """Base class for all errors raised by the hint engine."""


class InvalidPuzzle(SudokuError, ValueError):
    """Malformed input: wrong length, out-of-domain or duplicate givens."""


class Contradiction(SudokuError):
    """A house holds a value twice or an unassigned cell has no candidates left."""


class StaleHint(SudokuError):
    """The hint's preconditions no longer hold; discard it and rescan."""


class UnsupportedTechnique(SudokuError):
    """A finder was asked to scan a grid type it cannot handle."""
