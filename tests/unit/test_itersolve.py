"""
Tests for itersolve() solution enumeration.
"""
import gc
from itertools import product

import pytest
from zuspec.be.sat import SolutionIterator, itersolve
from zuspec.be.sat.allocator import HostAllocator
from zuspec.be.sat.errors import InternalConsistencyError, ShapeMismatch, TypeMismatch, ZeroLiteral

from test_z3_engine import pigeonhole


def satisfies(solution, clauses):
    true_lits = set(solution)
    return all(any(lit in true_lits for lit in clause) for clause in clauses)


def brute_force(clauses, nvars):
    """All assignments over 1..nvars satisfying ``clauses``."""
    sols = []
    for signs in product((1, -1), repeat=nvars):
        sol = [s * (i + 1) for i, s in enumerate(signs)]
        if satisfies(sol, clauses):
            sols.append(sol)
    return sols


def test_itersolve_or():
    sols = list(itersolve([[1, 2]]))

    assert len(sols) == 3
    assert sorted(sols) == [[-1, 2], [1, -2], [1, 2]]


def test_itersolve_xor():
    sols = list(itersolve([[1, 2], [-1, -2]]))
    assert sorted(sols) == [[-1, 2], [1, -2]]


def test_itersolve_unsat_is_empty():
    assert list(itersolve([[1], [-1]])) == []


def test_itersolve_no_clauses():
    """With no variables there is exactly one (empty) assignment."""
    assert list(itersolve([])) == [[]]


def test_itersolve_free_variables():
    sols = list(itersolve([], vars=3))
    assert len(sols) == 8
    assert len({tuple(s) for s in sols}) == 8


@pytest.mark.parametrize("clauses,nvars", [
    ([[1, -5, 4], [-1, 5, 3, 4], [-3, -4]], 5),
    ([[1, 2, 3], [-1, -2], [-2, -3], [-1, -3]], 3),
    ([[-1, 2], [-2, 3], [-3, 4]], 4),
])
def test_itersolve_matches_brute_force(clauses, nvars):
    sols = list(itersolve(clauses))
    expected = brute_force(clauses, nvars)

    assert len(sols) == len(expected)
    assert len({tuple(s) for s in sols}) == len(sols)
    assert sorted(sols) == sorted(expected)
    assert all(satisfies(s, clauses) for s in sols)


def test_itersolve_exhaustion_is_sticky():
    it = itersolve([[1]])
    assert next(it) == [1]
    with pytest.raises(StopIteration):
        next(it)
    with pytest.raises(StopIteration):
        next(it)

    assert it.exhausted
    assert it.closed
    assert it.count == 1


def test_itersolve_is_not_restartable():
    it = itersolve([[1, 2]])
    assert iter(it) is it
    assert len(list(it)) == 3
    assert list(it) == []


def test_itersolve_fresh_iterators_are_independent():
    clauses = [[1, 2], [-1, -2]]
    first = list(itersolve(clauses))
    second = list(itersolve(clauses))
    assert sorted(first) == sorted(second)


def test_itersolve_close_early():
    alloc = HostAllocator()
    it = itersolve([], vars=4, allocator=alloc)
    next(it)
    next(it)
    assert alloc.blocks == 3  # value table, clause store, scratch buffer

    it.close()
    it.close()

    assert it.closed
    assert not it.exhausted
    assert alloc.in_use == 0
    assert alloc.blocks == 0
    with pytest.raises(StopIteration):
        next(it)


def test_itersolve_context_manager():
    alloc = HostAllocator()
    with itersolve([[1, 2, 3]], allocator=alloc) as it:
        assert isinstance(it, SolutionIterator)
        next(it)
    assert it.closed
    assert alloc.in_use == 0


def test_itersolve_finalizer_releases():
    alloc = HostAllocator()
    it = itersolve([[1, 2]], allocator=alloc)
    next(it)
    del it
    gc.collect()
    assert alloc.in_use == 0


def test_itersolve_exhaustion_releases_memory():
    alloc = HostAllocator()
    assert len(list(itersolve([[1, 2]], vars=6, allocator=alloc))) == 48
    assert alloc.in_use == 0
    assert alloc.blocks == 0


def test_itersolve_prop_limit_stops():
    """An UNKNOWN answer ends the enumeration."""
    assert list(itersolve(pigeonhole(8, 7), prop_limit=1)) == []


def test_itersolve_zero_literal_raises_immediately():
    with pytest.raises(ZeroLiteral):
        itersolve([[1, 0]])


def test_itersolve_engine_sequence(fake_engine):
    make = fake_engine(codes=(10, 10, 20), model=(1, -1))
    it = itersolve([[1, 2]], engine=make)

    assert list(it) == [[1, -2], [1, -2]]
    engine = make.instances[0]
    # Each solution was blocked before the next invocation
    assert engine.clauses[1:] == [[-1, 2], [-1, 2]]
    assert engine.resets == 1


def test_itersolve_unknown_code_releases(fake_engine):
    make = fake_engine(codes=(10, 3))
    it = itersolve([[1]], engine=make)

    assert next(it) == [1]
    with pytest.raises(InternalConsistencyError):
        next(it)

    assert it.closed
    assert make.instances[0].resets == 1
    with pytest.raises(StopIteration):
        next(it)


@pytest.mark.parametrize("clauses,error", [
    ([[1, "x"]], TypeMismatch),
    ([[1], 2], ShapeMismatch),
    ([[1, 2], [3, 0]], ZeroLiteral),
])
def test_itersolve_bad_input_releases_engine(clauses, error):
    alloc = HostAllocator()
    with pytest.raises(error):
        itersolve(clauses, allocator=alloc)
    assert alloc.in_use == 0
    assert alloc.blocks == 0
