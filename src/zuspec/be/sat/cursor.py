"""
Lazy enumeration of all satisfying assignments.
"""
from typing import List, Optional
import logging

from .engine import SatResult
from .session import SolverSession
from .solution import block_solution, decode_solution

logger = logging.getLogger(__name__)


class SolutionIterator:
    """Iterator over every satisfying assignment of a clause set.

    After each solution the assignment is blocked in the private session, so
    every solution is produced exactly once. The iterator is finite and not
    restartable; a new enumeration needs a new iterator.

    Resources (the scratch buffer and the session) are released exactly once,
    on exhaustion, ``close()``, ``__exit__`` or finalization, whichever comes
    first. Advancing a closed iterator behaves like advancing an exhausted
    one and raises ``StopIteration``.
    """

    def __init__(self, session: SolverSession):
        self._session: Optional[SolverSession] = session
        self._scratch: Optional[bytearray] = None
        self._exhausted = False
        self.count = 0

    @property
    def exhausted(self) -> bool:
        return self._exhausted

    @property
    def closed(self) -> bool:
        return self._session is None

    def __iter__(self) -> "SolutionIterator":
        return self

    def __next__(self) -> List[int]:
        if self._exhausted or self._session is None:
            raise StopIteration

        session = self._session
        try:
            result = session.invoke()
            if result is SatResult.SATISFIABLE:
                solution = decode_solution(session)
                self._scratch = block_solution(session, self._scratch)
                self.count += 1
                return solution
        except BaseException:
            self.close()
            raise

        # UNSAT and UNKNOWN both end the enumeration
        logger.debug("enumeration finished after %d solution(s): %s",
                     self.count, result.name)
        self._exhausted = True
        self.close()
        raise StopIteration

    def close(self) -> None:
        """Release the scratch buffer and the session. Safe to call repeatedly."""
        session = self._session
        if session is None:
            return
        self._session = None
        try:
            if self._scratch is not None:
                scratch, self._scratch = self._scratch, None
                session.allocator.free(scratch, len(scratch))
        finally:
            session.destroy()

    def __enter__(self) -> "SolutionIterator":
        return self

    def __exit__(self, *_) -> None:
        self.close()

    def __del__(self):
        # __init__ may not have run to completion
        if getattr(self, "_session", None) is not None:
            self.close()
