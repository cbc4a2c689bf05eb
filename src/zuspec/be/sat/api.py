"""
Public solving API.

``solve`` returns one satisfying assignment; ``itersolve`` lazily enumerates
all of them. Both take the clause set as a sequence of clauses, each clause a
sequence of non-zero integers (negative for negated variables).
"""
from typing import Any, List, Optional, Union

from .allocator import Allocator
from .cursor import SolutionIterator
from .engine import EngineFactory, SatResult
from .session import SolverConfig, create_session
from .solution import decode_solution

UNSAT = "UNSAT"
UNKNOWN = "UNKNOWN"


def solve(clauses: Any,
          vars: int = -1,
          verbose: int = 0,
          prop_limit: int = 0,
          *,
          engine: Union[str, EngineFactory, None] = None,
          allocator: Optional[Allocator] = None) -> Union[List[int], str]:
    """Solve a SAT problem.

    Args:
        clauses: List of clauses, e.g. ``[[1, -5, 4], [-1, 5, 3, 4]]``
        vars: Number of variables, -1 to take it from the clauses
        verbose: Engine verbosity (0 is silent)
        prop_limit: Per-call effort cap, 0 for no limit
        engine: Engine name or factory (defaults to ``$ZUSPEC_SAT_ENGINE`` or z3)
        allocator: Allocator for engine memory

    Returns:
        The assignment as a list of literals (``i`` true, ``-i`` false), or
        ``"UNSAT"``, or ``"UNKNOWN"`` when ``prop_limit`` stopped the search

    Example:
        >>> solve([[1], [-1, 2]])
        [1, 2]
        >>> solve([[1], [-1]])
        'UNSAT'
    """
    config = SolverConfig(vars=vars, verbose=verbose, prop_limit=prop_limit)
    with create_session(clauses, config, engine=engine, allocator=allocator) as session:
        result = session.invoke()
        if result is SatResult.SATISFIABLE:
            return decode_solution(session)
        if result is SatResult.UNSATISFIABLE:
            return UNSAT
        return UNKNOWN


def itersolve(clauses: Any,
              vars: int = -1,
              verbose: int = 0,
              prop_limit: int = 0,
              *,
              engine: Union[str, EngineFactory, None] = None,
              allocator: Optional[Allocator] = None) -> SolutionIterator:
    """Return an iterator over all solutions of a SAT problem.

    Takes the same arguments as :func:`solve`. Enumeration stops when no
    further solution exists, or when ``prop_limit`` stops a search.

    Example:
        >>> sorted(itersolve([[1, 2], [-1, -2]]))
        [[-1, 2], [1, -2]]
    """
    config = SolverConfig(vars=vars, verbose=verbose, prop_limit=prop_limit)
    return SolutionIterator(create_session(clauses, config, engine=engine, allocator=allocator))
