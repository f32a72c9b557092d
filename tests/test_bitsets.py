import pytest

from sudoku_hints.bitsets import CellSet, ValueSet


def test_full_value_set_skips_zero_slot():
    vs = ValueSet.full(9)
    assert list(vs) == list(range(1, 10))
    assert vs.cardinality() == 9
    assert not vs.test(0)
    assert vs.grid_size == 9


def test_set_algebra():
    a = ValueSet.of(9, 1, 3, 5)
    b = ValueSet.of(9, 3, 7)
    assert list(a | b) == [1, 3, 5, 7]
    assert list(a & b) == [3]
    assert list(a - b) == [1, 5]
    assert a.and_not(b) == a - b
    assert list(a ^ b) == [1, 5, 7]


def test_operations_never_mutate():
    a = ValueSet.of(9, 2)
    b = a.set(4)
    assert list(a) == [2]
    assert list(b) == [2, 4]
    assert list(b.clear(2)) == [4]
    assert list(b) == [2, 4]

    c = b.copy()
    assert c == b
    assert c is not b


def test_out_of_range_index_fails_fast():
    with pytest.raises(IndexError):
        ValueSet.empty(9).set(10)
    with pytest.raises(IndexError):
        CellSet.empty(81).test(81)
    with pytest.raises(IndexError):
        ValueSet.of(9, 0)


def test_mixing_incompatible_sets_is_rejected():
    with pytest.raises(ValueError):
        ValueSet.full(9) | CellSet.full(10)
    with pytest.raises(ValueError):
        ValueSet.full(4) & ValueSet.full(9)


def test_iteration_is_ordered_and_restartable():
    cs = CellSet.of(81, 80, 0, 40)
    assert list(cs) == [0, 40, 80]
    assert list(cs) == [0, 40, 80]
    assert cs.first() == 0
    assert len(cs) == 3
    assert 40 in cs
    assert CellSet.empty(81).first() is None
    assert not CellSet.empty(81)


def test_equality_and_hashing_are_structural():
    assert ValueSet.of(9, 1, 2) == ValueSet.of(9, 2, 1)
    assert len({ValueSet.of(9, 1, 2), ValueSet.of(9, 2, 1)}) == 1
    assert ValueSet.of(9, 1) != CellSet.of(10, 1)
    assert repr(ValueSet.of(9, 3, 5)) == "ValueSet({3, 5})"
    assert str(ValueSet.of(9, 3, 5)) == "3,5"
