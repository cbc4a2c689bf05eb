"""
Validation and loading of clause data into an engine.
"""
from collections.abc import Sequence
from numbers import Integral
from typing import Any, List

from .engine import SatEngine
from .errors import ShapeMismatch, TypeMismatch, ZeroLiteral


def _is_sequence(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def validate_clause(clause: Any, index: int = 0) -> List[int]:
    """Check one clause and return its literals as plain ints.

    Args:
        clause: Sequence of non-zero integers
        index: Position of the clause in its clause set (for messages)

    Raises:
        ShapeMismatch: ``clause`` is not a sequence
        TypeMismatch: a literal is not an integer
        ZeroLiteral: a literal is zero
    """
    if not _is_sequence(clause):
        raise ShapeMismatch(f"clause {index}: sequence expected, got {type(clause).__name__}")

    lits = []
    for pos, lit in enumerate(clause):
        if isinstance(lit, bool) or not isinstance(lit, Integral):
            raise TypeMismatch(
                f"clause {index}, literal {pos}: integer expected, got {type(lit).__name__}")
        if lit == 0:
            raise ZeroLiteral(f"clause {index}, literal {pos}: non-zero integer expected")
        lits.append(int(lit))
    return lits


def ingest_clauses(engine: SatEngine, clauses: Any) -> int:
    """Stream ``clauses`` into ``engine``.

    Each clause is validated completely before any of its literals reach the
    engine, so a failure never leaves a partial clause behind. Ingestion stops
    at the first invalid clause; the caller is responsible for tearing the
    engine down.

    Returns:
        Number of clauses added
    """
    if not _is_sequence(clauses):
        raise ShapeMismatch(f"clause set: sequence expected, got {type(clauses).__name__}")

    count = 0
    for index, clause in enumerate(clauses):
        for lit in validate_clause(clause, index):
            engine.add_literal(lit)
        engine.terminate_clause()
        count += 1
    return count
