"""
SAT solving backend for Zuspec.

This package binds an incremental SAT engine (Z3 by default) behind a small
clause-list API: ``solve`` finds one satisfying assignment, ``itersolve``
enumerates all of them by blocking each solution it returns.
"""

__version__ = "0.1.0"

from .api import solve, itersolve, UNSAT, UNKNOWN
from .allocator import Allocator, HostAllocator
from .cursor import SolutionIterator
from .engine import SatEngine, SatResult, resolve_engine
from .errors import (
    SatError,
    ValidationError,
    ShapeMismatch,
    TypeMismatch,
    ZeroLiteral,
    ConfigError,
    OutOfMemory,
    InternalConsistencyError,
    PreconditionViolation,
)
from .session import SolverConfig, SolverSession, create_session

__all__ = [
    "solve",
    "itersolve",
    "UNSAT",
    "UNKNOWN",
    "Allocator",
    "HostAllocator",
    "SolutionIterator",
    "SatEngine",
    "SatResult",
    "resolve_engine",
    "SatError",
    "ValidationError",
    "ShapeMismatch",
    "TypeMismatch",
    "ZeroLiteral",
    "ConfigError",
    "OutOfMemory",
    "InternalConsistencyError",
    "PreconditionViolation",
    "SolverConfig",
    "SolverSession",
    "create_session",
]
