"""
Solver sessions: one engine instance from creation to teardown.
"""
from dataclasses import dataclass
from numbers import Integral
from typing import Any, Optional, Union
import logging
import sys
import time

from .allocator import Allocator, HostAllocator
from .engine import EngineFactory, SatEngine, SatResult, resolve_engine
from .errors import ConfigError, InternalConsistencyError, PreconditionViolation
from .ingest import ingest_clauses

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SolverConfig:
    """Per-session engine configuration.

    Attributes:
        vars: Variable-count hint, -1 when unspecified
        verbose: Verbosity level, 0 is silent; 2 and above also dumps the
            problem to stdout in DIMACS format
        prop_limit: Per-invocation effort cap, 0 for unbounded
    """
    vars: int = -1
    verbose: int = 0
    prop_limit: int = 0

    def __post_init__(self):
        for name in ("vars", "verbose", "prop_limit"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, Integral):
                raise ConfigError(f"{name}: integer expected, got {type(value).__name__}")
        if self.vars < -1:
            raise ConfigError(f"vars must be -1 or a non-negative count, got {self.vars}")
        if self.verbose < 0:
            raise ConfigError(f"verbose must be >= 0, got {self.verbose}")
        if self.prop_limit < 0:
            raise ConfigError(f"prop_limit must be >= 0, got {self.prop_limit}")


class SolverSession:
    """Owns exactly one live engine handle.

    Sessions are built by :func:`create_session`, which either returns a fully
    loaded session or tears the engine down before raising.
    """

    def __init__(self, engine: SatEngine, allocator: Allocator, config: SolverConfig):
        self.engine = engine
        self.allocator = allocator
        self.config = config
        self.last_result: Optional[SatResult] = None
        self.invocations = 0
        self.solver_time_ms = 0.0
        self._destroyed = False

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    def invoke(self, budget: int = -1) -> SatResult:
        """Run the engine on the clauses loaded so far.

        Args:
            budget: Extra per-call effort cap, -1 for none

        Returns:
            SatResult; UNKNOWN means the effort limit stopped the search

        Raises:
            InternalConsistencyError: The engine answered with an undefined code
        """
        if self._destroyed:
            raise PreconditionViolation("session already destroyed")

        start_time = time.time()
        code = self.engine.solve(budget)
        self.solver_time_ms += (time.time() - start_time) * 1000
        self.invocations += 1

        try:
            self.last_result = SatResult.from_code(code)
        except ValueError:
            self.last_result = None
            raise InternalConsistencyError(f"engine return value: {code!r}") from None

        logger.debug("invocation %d: %s", self.invocations, self.last_result.name)
        return self.last_result

    def require_model(self) -> None:
        """Raise unless the last invocation was satisfiable."""
        if self._destroyed:
            raise PreconditionViolation("session already destroyed")
        if self.last_result is not SatResult.SATISFIABLE:
            raise PreconditionViolation(
                f"no satisfying assignment available (last result: "
                f"{None if self.last_result is None else self.last_result.name})")

    def destroy(self) -> None:
        """Reset the engine. Safe to call more than once."""
        if self._destroyed:
            return
        self._destroyed = True
        self.last_result = None
        self.engine.reset()
        logger.debug("session destroyed after %d invocation(s), %.2fms in engine",
                     self.invocations, self.solver_time_ms)

    def __enter__(self) -> "SolverSession":
        return self

    def __exit__(self, *_) -> None:
        self.destroy()


def create_session(clauses: Any,
                   config: Optional[SolverConfig] = None,
                   engine: Union[str, EngineFactory, None] = None,
                   allocator: Optional[Allocator] = None) -> SolverSession:
    """Create an engine, configure it and load ``clauses``.

    Args:
        clauses: Sequence of clauses, each a sequence of non-zero integers
        config: Engine configuration (defaults to ``SolverConfig()``)
        engine: Engine name or factory; see :func:`resolve_engine`
        allocator: Allocator for engine memory (defaults to a new HostAllocator)

    Returns:
        A loaded SolverSession

    Raises:
        ValidationError: Malformed clause data
        OutOfMemory: The allocator refused a request
    """
    config = config or SolverConfig()
    allocator = allocator if allocator is not None else HostAllocator()
    factory = engine if callable(engine) else resolve_engine(engine)

    handle = factory(allocator)
    try:
        handle.set_verbosity(config.verbose)
        if config.vars != -1:
            handle.reserve_variables(config.vars)
        if config.prop_limit:
            handle.set_propagation_limit(config.prop_limit)

        count = ingest_clauses(handle, clauses)

        if config.verbose >= 2:
            handle.write_problem(sys.stdout)
    except BaseException:
        handle.reset()
        raise

    logger.debug("session created: %d clauses, %d variables", count, handle.variable_count())
    return SolverSession(handle, allocator, config)
