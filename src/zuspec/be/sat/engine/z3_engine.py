"""
Z3 SAT engine implementation.
"""
import logging
import struct
import time
from typing import List, Optional, TextIO, Tuple
import z3

from ..allocator import Allocator
from ..dimacs import write_dimacs
from ..errors import OutOfMemory, PreconditionViolation
from .result import SATISFIABLE, UNKNOWN, UNSATISFIABLE

logger = logging.getLogger(__name__)

_INITIAL_CAPACITY = 16
_INITIAL_LITERALS = 16

# Clause store entries are 32-bit signed literals, 0 terminates a clause.
_LIT = struct.Struct("<i")
_LIT_MAX = 2 ** 31 - 1


class Z3Engine:
    """Incremental SAT engine on top of the Z3 Python bindings.

    Each engine owns a private ``z3.Context``, so engines driven from
    different threads never share solver state. ``z3.Solver.check`` is a
    ctypes foreign call and releases the GIL while searching.

    Two tables are obtained from the allocator handed in at construction:
    the per-variable value table (one byte per variable, refreshed after each
    satisfiable ``solve``) and the clause store, which keeps every literal
    added so far in the zero-terminated wire form. Z3's own clause database
    and the ``z3.BoolRef`` handles live in Z3's native heap and are not
    accounted by the allocator.
    """

    def __init__(self, allocator: Allocator):
        """Initialize engine state.

        Args:
            allocator: Allocator the value table and clause store come from
        """
        self.allocator = allocator
        self._capacity = _INITIAL_CAPACITY
        self._values = self._checked(allocator.alloc(self._capacity + 1))

        self._lit_capacity = _INITIAL_LITERALS
        lits = allocator.alloc(self._lit_capacity * _LIT.size)
        if lits is None:
            allocator.free(self._values, self._capacity + 1)
            raise OutOfMemory("allocator returned no memory for the clause store")
        self._lits = lits
        self._nlits = 0
        self._clause_start = 0
        self._nclauses = 0

        self._ctx: Optional[z3.Context] = z3.Context()
        self._solver: Optional[z3.Solver] = z3.Solver(ctx=self._ctx)
        self._vars: List[Optional[z3.BoolRef]] = [None]
        self._verbosity = 0
        self._prop_limit = 0
        self._has_model = False

    def _checked(self, block: Optional[bytearray]) -> bytearray:
        if block is None:
            raise OutOfMemory("allocator returned no memory for the value table")
        return block

    def _check_live(self) -> None:
        if self._solver is None:
            raise PreconditionViolation("engine already reset")

    def _ensure_var(self, var: int) -> None:
        if var > self._capacity:
            new_capacity = self._capacity
            while new_capacity < var:
                new_capacity *= 2
            self._values = self._checked(
                self.allocator.realloc(self._values, self._capacity + 1, new_capacity + 1))
            self._capacity = new_capacity
        while len(self._vars) <= var:
            self._vars.append(z3.Bool(f"x{len(self._vars)}", self._ctx))

    def _push(self, lit: int) -> None:
        if self._nlits == self._lit_capacity:
            new_capacity = self._lit_capacity * 2
            lits = self.allocator.realloc(self._lits, self._lit_capacity * _LIT.size,
                                          new_capacity * _LIT.size)
            if lits is None:
                raise OutOfMemory("allocator returned no memory for the clause store")
            self._lits = lits
            self._lit_capacity = new_capacity
        _LIT.pack_into(self._lits, self._nlits * _LIT.size, lit)
        self._nlits += 1

    def _read(self, start: int, end: int) -> Tuple[int, ...]:
        return struct.unpack_from(f"<{end - start}i", self._lits, start * _LIT.size)

    def _to_expr(self, lit: int) -> z3.BoolRef:
        v = self._vars[abs(lit)]
        return v if lit > 0 else z3.Not(v)

    def set_verbosity(self, level: int) -> None:
        self._verbosity = level

    def reserve_variables(self, count: int) -> None:
        self._check_live()
        self._ensure_var(count)

    def set_propagation_limit(self, limit: int) -> None:
        self._prop_limit = limit

    def add_literal(self, lit: int) -> None:
        self._check_live()
        if lit == 0:
            self.terminate_clause()
            return
        if abs(lit) > _LIT_MAX:
            raise ValueError(f"literal {lit} outside the 32-bit range")
        self._ensure_var(abs(lit))
        self._push(lit)

    def terminate_clause(self) -> None:
        self._check_live()
        lits = self._read(self._clause_start, self._nlits)
        self._push(0)
        self._clause_start = self._nlits
        self._nclauses += 1

        if not lits:
            expr = z3.BoolVal(False, self._ctx)
        elif len(lits) == 1:
            expr = self._to_expr(lits[0])
        else:
            expr = z3.Or([self._to_expr(lit) for lit in lits])

        self._solver.add(expr)
        self._has_model = False

    def solve(self, budget: int = -1) -> int:
        """Check satisfiability of the clauses added so far.

        The propagation limit and ``budget`` map onto Z3's per-check resource
        limit (``rlimit``); the smaller positive one wins, and neither being
        positive means unbounded.

        Args:
            budget: Extra per-call cap, values <= 0 add no cap

        Returns:
            SATISFIABLE, UNSATISFIABLE or UNKNOWN
        """
        self._check_live()
        limits = [x for x in (self._prop_limit, budget) if x > 0]
        self._solver.set("rlimit", min(limits) if limits else 0)

        start_time = time.time()
        result = self._solver.check()
        elapsed_ms = (time.time() - start_time) * 1000

        if result == z3.sat:
            self._load_model(self._solver.model())
            code = SATISFIABLE
        elif result == z3.unsat:
            self._has_model = False
            code = UNSATISFIABLE
        else:
            self._has_model = False
            code = UNKNOWN

        if self._verbosity > 0:
            logger.info("z3 check: %s (%.2fms, %d variables, %d clauses%s)",
                        result, elapsed_ms, self.variable_count(), self._nclauses,
                        f", {self._solver.reason_unknown()}" if code == UNKNOWN else "")
        return code

    def _load_model(self, model: z3.ModelRef) -> None:
        values = self._values
        for i in range(1, len(self._vars)):
            values[i] = 1 if z3.is_true(model.eval(self._vars[i], model_completion=True)) else 0
        self._has_model = True

    def variable_count(self) -> int:
        return len(self._vars) - 1

    def value_of(self, var: int) -> int:
        if not self._has_model:
            raise PreconditionViolation("no model: last solve was not satisfiable")
        if not 1 <= var <= self.variable_count():
            raise ValueError(f"variable {var} out of range 1..{self.variable_count()}")
        return 1 if self._values[var] else -1

    def clauses(self) -> List[Tuple[int, ...]]:
        """Return the terminated clauses held in the clause store."""
        out: List[Tuple[int, ...]] = []
        start = 0
        for pos, lit in enumerate(self._read(0, self._clause_start)):
            if lit == 0:
                out.append(self._read(start, pos))
                start = pos + 1
        return out

    def write_problem(self, stream: TextIO) -> None:
        write_dimacs(self.clauses(), stream, variables=self.variable_count(),
                     comment="zuspec.be.sat z3 engine")

    def reset(self) -> None:
        """Release the allocator tables and the Z3 solver."""
        if self._solver is None:
            return
        self.allocator.free(self._values, self._capacity + 1)
        self.allocator.free(self._lits, self._lit_capacity * _LIT.size)
        self._values = None
        self._lits = None
        self._solver = None
        self._ctx = None
        self._vars = [None]
        self._nlits = self._clause_start = self._nclauses = 0
        self._has_model = False
        logger.debug("z3 engine reset")
