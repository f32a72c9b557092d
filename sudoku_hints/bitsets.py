from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable, Iterator, Optional


def bit(i: int) -> int:
    return 1 << i


def popcount(mask: int) -> int:
    return mask.bit_count()


@dataclass(frozen=True, repr=False)
class _BitSet:
    """
    Fixed-capacity bitset with value semantics:
    - bits is an int, bit i set <=> index i is a member
    - every operation returns a new set, nothing mutates in place
    """

    capacity: int
    bits: int = 0

    def _check(self, index: int) -> None:
        if not 0 <= index < self.capacity:
            raise IndexError(f"index {index} outside allowed range [0, {self.capacity})")

    def _check_compatible(self, other: _BitSet) -> None:
        if type(other) is not type(self) or other.capacity != self.capacity:
            raise ValueError(f"incompatible bitsets: {self!r} and {other!r}")

    def test(self, index: int) -> bool:
        self._check(index)
        return bool(self.bits & bit(index))

    def set(self, index: int):
        """Return a copy with index added."""
        self._check(index)
        return replace(self, bits=self.bits | bit(index))

    def clear(self, index: int):
        """Return a copy with index removed."""
        self._check(index)
        return replace(self, bits=self.bits & ~bit(index))

    def copy(self):
        return replace(self)

    def cardinality(self) -> int:
        return popcount(self.bits)

    def first(self) -> Optional[int]:
        if self.bits == 0:
            return None
        return (self.bits & -self.bits).bit_length() - 1

    def __and__(self, other):
        self._check_compatible(other)
        return replace(self, bits=self.bits & other.bits)

    def __or__(self, other):
        self._check_compatible(other)
        return replace(self, bits=self.bits | other.bits)

    def __sub__(self, other):
        self._check_compatible(other)
        return replace(self, bits=self.bits & ~other.bits)

    def __xor__(self, other):
        self._check_compatible(other)
        return replace(self, bits=self.bits ^ other.bits)

    def and_not(self, other):
        return self - other

    def __contains__(self, index: int) -> bool:
        return self.test(index)

    def __iter__(self) -> Iterator[int]:
        mask = self.bits
        while mask:
            low = mask & -mask
            yield low.bit_length() - 1
            mask ^= low

    def __len__(self) -> int:
        return self.cardinality()

    def __bool__(self) -> bool:
        return self.bits != 0

    def __repr__(self) -> str:
        return f"{type(self).__name__}({{{', '.join(str(i) for i in self)}}})"


class ValueSet(_BitSet):
    """Candidate values 1..grid_size; slot 0 is reserved for "no value"."""

    @classmethod
    def empty(cls, grid_size: int) -> ValueSet:
        return cls(grid_size + 1)

    @classmethod
    def full(cls, grid_size: int) -> ValueSet:
        return cls(grid_size + 1, ((1 << grid_size) - 1) << 1)

    @classmethod
    def of(cls, grid_size: int, *values: int) -> ValueSet:
        return cls.from_iterable(grid_size, values)

    @classmethod
    def from_iterable(cls, grid_size: int, values: Iterable[int]) -> ValueSet:
        vs = cls.empty(grid_size)
        for v in values:
            if v == 0:
                raise IndexError("value 0 is not a valid candidate")
            vs = vs.set(v)
        return vs

    @property
    def grid_size(self) -> int:
        return self.capacity - 1

    def __str__(self) -> str:
        return ",".join(str(v) for v in self)


class CellSet(_BitSet):
    """Set of cell indices 0..cell_count-1."""

    @classmethod
    def empty(cls, cell_count: int) -> CellSet:
        return cls(cell_count)

    @classmethod
    def full(cls, cell_count: int) -> CellSet:
        return cls(cell_count, (1 << cell_count) - 1)

    @classmethod
    def of(cls, cell_count: int, *indices: int) -> CellSet:
        return cls.from_iterable(cell_count, indices)

    @classmethod
    def from_iterable(cls, cell_count: int, indices: Iterable[int]) -> CellSet:
        cs = cls.empty(cell_count)
        for i in indices:
            cs = cs.set(i)
        return cs
