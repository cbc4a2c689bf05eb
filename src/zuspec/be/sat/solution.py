"""
Reading assignments out of a session and blocking them.
"""
from typing import List, Optional

from .errors import InternalConsistencyError, OutOfMemory
from .session import SolverSession


def _value(session: SolverSession, var: int) -> int:
    v = session.engine.value_of(var)
    if v != 1 and v != -1:
        raise InternalConsistencyError(f"engine value for variable {var}: {v!r}")
    return v


def decode_solution(session: SolverSession) -> List[int]:
    """Return the current assignment as signed literals.

    Element ``i - 1`` is ``i`` when variable ``i`` is true and ``-i`` when it
    is false, for every variable the engine knows about.

    Raises:
        PreconditionViolation: The last invocation was not satisfiable
    """
    session.require_model()
    n = session.engine.variable_count()
    return [_value(session, i) * i for i in range(1, n + 1)]


def block_solution(session: SolverSession, scratch: Optional[bytearray] = None) -> bytearray:
    """Add the clause that rules out the current assignment.

    The assignment is read again from the engine into ``scratch`` (one byte
    per variable, index 0 unused), then the opposite literal of every variable
    is added as a single clause.

    Args:
        session: Session whose last invocation was satisfiable
        scratch: Polarity buffer from a previous call, or None to allocate one

    Returns:
        The scratch buffer, to be passed back on the next call and released
        by the owner with ``session.allocator.free(scratch, len(scratch))``
    """
    session.require_model()
    engine = session.engine
    allocator = session.allocator
    n = engine.variable_count()

    if scratch is None:
        scratch = allocator.alloc(n + 1)
    elif len(scratch) < n + 1:
        scratch = allocator.realloc(scratch, len(scratch), n + 1)
    if scratch is None:
        raise OutOfMemory("allocator returned no memory for the blocking buffer")

    for i in range(1, n + 1):
        scratch[i] = 1 if _value(session, i) > 0 else 0

    for i in range(1, n + 1):
        engine.add_literal(-i if scratch[i] else i)
    engine.terminate_clause()
    return scratch
