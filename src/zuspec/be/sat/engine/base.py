"""
Interface every SAT engine must satisfy.
"""
from typing import Protocol, TextIO

from ..allocator import Allocator


class SatEngine(Protocol):
    """Protocol defining the incremental SAT engine contract.

    This allows pluggable engines while the binding (sessions, iterators)
    stays the same. Clauses enter one literal at a time and are closed by
    ``terminate_clause`` (the equivalent of adding literal 0).
    """

    def __init__(self, allocator: Allocator) -> None:
        """Create an engine whose tables are obtained from ``allocator``."""
        ...

    def set_verbosity(self, level: int) -> None:
        """Set the verbosity level (0 is silent)."""
        ...

    def reserve_variables(self, count: int) -> None:
        """Make sure variables 1..count exist."""
        ...

    def set_propagation_limit(self, limit: int) -> None:
        """Cap solving effort per invocation (0 means unbounded)."""
        ...

    def add_literal(self, lit: int) -> None:
        """Append a non-zero literal to the clause under construction."""
        ...

    def terminate_clause(self) -> None:
        """Close the clause under construction and add it to the problem."""
        ...

    def solve(self, budget: int = -1) -> int:
        """Search for a satisfying assignment.

        Args:
            budget: Additional per-call effort cap, -1 for none

        Returns:
            SATISFIABLE (10), UNSATISFIABLE (20) or UNKNOWN (0)
        """
        ...

    def variable_count(self) -> int:
        """Return the highest variable index the engine knows about."""
        ...

    def value_of(self, var: int) -> int:
        """Return 1 if ``var`` is true in the current model, -1 if false."""
        ...

    def write_problem(self, stream: TextIO) -> None:
        """Write the loaded problem to ``stream`` in DIMACS format."""
        ...

    def reset(self) -> None:
        """Release every resource held by the engine."""
        ...
