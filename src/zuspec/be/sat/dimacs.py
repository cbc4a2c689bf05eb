"""DIMACS CNF rendering of a loaded clause set.

Used by engines to dump the problem when running at verbosity level 2.
"""

from __future__ import annotations

from pathlib import Path
from typing import Sequence, TextIO


def generate_dimacs(
    clauses: Sequence[Sequence[int]],
    *,
    variables: int,
    comment: str | None = None,
) -> str:
    lines: list[str] = []

    if comment:
        for c in comment.splitlines():
            lines.append(f"c {c}")

    lines.append(f"p cnf {variables} {len(clauses)}")
    for clause in clauses:
        lines.append(" ".join([*(str(lit) for lit in clause), "0"]))

    return "\n".join(lines) + "\n"


def write_dimacs(
    clauses: Sequence[Sequence[int]],
    out: str | Path | TextIO,
    *,
    variables: int,
    comment: str | None = None,
) -> None:
    """Write ``clauses`` in DIMACS CNF format to a path or an open text stream."""
    text = generate_dimacs(clauses, variables=variables, comment=comment)
    if isinstance(out, (str, Path)):
        Path(out).write_text(text)
    else:
        out.write(text)
