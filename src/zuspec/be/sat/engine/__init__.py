"""SAT engine layer.

Engines are looked up by name so that importing this package does not
require Z3 unless the Z3 engine is actually used.
"""

from __future__ import annotations

from importlib import import_module
from typing import Callable, Optional
import os

from ..allocator import Allocator
from ..errors import ConfigError
from .base import SatEngine
from .result import SATISFIABLE, UNKNOWN, UNSATISFIABLE, SatResult

EngineFactory = Callable[[Allocator], SatEngine]

DEFAULT_ENGINE = "z3"

_KNOWN_ENGINES = {
    "z3": "zuspec.be.sat.engine.z3_engine:Z3Engine",
}


def resolve_engine(name_or_path: Optional[str] = None) -> EngineFactory:
    """Resolve an engine name to a factory.

    Accepts a registered name (``"z3"``) or a ``"module:attribute"`` path to
    any class implementing :class:`SatEngine`. With no name, ``$ZUSPEC_SAT_ENGINE``
    is consulted, then the default engine is used.
    """
    if name_or_path is None:
        name_or_path = os.environ.get("ZUSPEC_SAT_ENGINE") or DEFAULT_ENGINE

    target = _KNOWN_ENGINES.get(name_or_path, name_or_path)
    module_name, sep, attr = target.partition(":")
    if not sep or not module_name or not attr:
        raise ConfigError(f"Unknown SAT engine: {name_or_path!r}")

    try:
        return getattr(import_module(module_name), attr)
    except (ImportError, AttributeError) as exc:
        raise ConfigError(f"Unknown SAT engine: {name_or_path!r} ({exc})") from exc


__all__ = [
    "SatEngine",
    "SatResult",
    "EngineFactory",
    "SATISFIABLE",
    "UNSATISFIABLE",
    "UNKNOWN",
    "DEFAULT_ENGINE",
    "resolve_engine",
]
