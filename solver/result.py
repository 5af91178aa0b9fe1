"""Tagged result returned by every solve call."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

INCONSISTENT_MESSAGE = "The system is inconsistent (no solution exists)"
DEPENDENT_MESSAGE = "The system has infinitely many solutions"


class Status(str, Enum):
    SOLVED = "solved"
    INCONSISTENT = "inconsistent"
    DEPENDENT = "dependent"
    ERROR = "error"


@dataclass(frozen=True)
class SolutionResult:
    """Outcome of solving a linear system.

    Only ``solved`` results carry ``variables`` (variable name → value,
    rounded to 4 decimals).  The other three states carry a ``message``
    that callers can show as-is.  ``steps`` is only filled when a step
    trace was requested.
    """

    status: Status
    variables: Optional[dict] = None
    message: Optional[str] = None
    steps: Optional[list] = None

    @classmethod
    def solved(cls, variables: dict, steps: Optional[list] = None) -> "SolutionResult":
        return cls(Status.SOLVED, variables=dict(variables), steps=steps)

    @classmethod
    def inconsistent(cls, steps: Optional[list] = None) -> "SolutionResult":
        return cls(Status.INCONSISTENT, message=INCONSISTENT_MESSAGE, steps=steps)

    @classmethod
    def dependent(cls, steps: Optional[list] = None) -> "SolutionResult":
        return cls(Status.DEPENDENT, message=DEPENDENT_MESSAGE, steps=steps)

    @classmethod
    def error(cls, message: str) -> "SolutionResult":
        return cls(Status.ERROR, message=message or "An unknown error occurred")

    @property
    def ok(self) -> bool:
        return self.status is Status.SOLVED

    def to_dict(self) -> dict:
        """JSON-ready form; ``message`` and ``steps`` are left out when unset."""
        out = {"status": self.status.value, "variables": self.variables}
        if self.message is not None:
            out["message"] = self.message
        if self.steps is not None:
            out["steps"] = list(self.steps)
        return out
