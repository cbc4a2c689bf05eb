"""
Exception types raised by the SAT binding.

Validation errors also derive from the builtin ``TypeError``/``ValueError``
so that code written against the classic ``solve``/``itersolve`` API keeps
catching what it always caught.
"""


class SatError(Exception):
    """Base class for all errors raised by zuspec.be.sat."""


class ValidationError(SatError):
    """Caller supplied malformed clause data."""


class ShapeMismatch(ValidationError, TypeError):
    """Clause set or clause is not a sequence."""


class TypeMismatch(ValidationError, TypeError):
    """A literal is not an integer."""


class ZeroLiteral(ValidationError, ValueError):
    """A literal is zero (zero only terminates clauses)."""


class ConfigError(SatError, ValueError):
    """Invalid solver configuration value."""


class OutOfMemory(SatError, MemoryError):
    """The allocator could not satisfy a request."""


class InternalConsistencyError(SatError, SystemError):
    """The engine answered outside its contract.

    This indicates a defect in the engine or in the binding, never a property
    of the problem being solved.
    """


class PreconditionViolation(SatError, RuntimeError):
    """An operation was called in a state where it is not defined."""
