"""
Pytest configuration and fixtures for zuspec-be-sat tests.
"""
import sys
from pathlib import Path

import pytest

# Add src to path for imports
src_path = Path(__file__).parent.parent.parent / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from zuspec.be.sat.allocator import HostAllocator


class FakeEngine:
    """Scripted engine for exercising the binding without a real solver.

    ``codes`` are returned by successive ``solve`` calls; ``model`` gives the
    value returned by ``value_of`` for each variable (1-indexed list).
    """

    instances = []

    def __init__(self, allocator, codes=(10,), model=(1,)):
        self.allocator = allocator
        self.codes = list(codes)
        self.model = list(model)
        self.clauses = []
        self.pending = []
        self.calls = []
        self.resets = 0
        self.nvars = 0
        FakeEngine.instances.append(self)

    def set_verbosity(self, level):
        self.calls.append(("set_verbosity", level))

    def reserve_variables(self, count):
        self.calls.append(("reserve_variables", count))
        self.nvars = max(self.nvars, count)

    def set_propagation_limit(self, limit):
        self.calls.append(("set_propagation_limit", limit))

    def add_literal(self, lit):
        self.pending.append(lit)
        self.nvars = max(self.nvars, abs(lit))

    def terminate_clause(self):
        self.clauses.append(self.pending)
        self.pending = []

    def solve(self, budget=-1):
        self.calls.append(("solve", budget))
        return self.codes.pop(0) if len(self.codes) > 1 else self.codes[0]

    def variable_count(self):
        return self.nvars

    def value_of(self, var):
        return self.model[var - 1]

    def write_problem(self, stream):
        stream.write("p cnf %d %d\n" % (self.nvars, len(self.clauses)))

    def reset(self):
        self.resets += 1


@pytest.fixture
def fake_engine():
    """Build FakeEngine factories; ``factory.instances`` lists the engines created."""
    FakeEngine.instances = []

    def make(codes=(10,), model=(1,)):
        def factory(allocator):
            return FakeEngine(allocator, codes=codes, model=model)
        factory.instances = FakeEngine.instances
        return factory

    return make


@pytest.fixture
def allocator():
    return HostAllocator()