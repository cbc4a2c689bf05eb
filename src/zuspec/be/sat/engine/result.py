"""
Engine result codes.
"""
from enum import Enum

# Raw codes returned by SatEngine.solve (the IPASIR/picosat convention).
UNKNOWN = 0
SATISFIABLE = 10
UNSATISFIABLE = 20


class SatResult(Enum):
    """Outcome of one engine invocation."""
    SATISFIABLE = 10
    UNSATISFIABLE = 20
    UNKNOWN = 0

    @classmethod
    def from_code(cls, code: int) -> "SatResult":
        """Map a raw engine code to a result.

        Raises:
            ValueError: If ``code`` is not an int equal to one of the three
                defined codes
        """
        if type(code) is not int:
            raise ValueError(f"engine result code must be an int, got {type(code).__name__}")
        return cls(code)
