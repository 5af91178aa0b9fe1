"""Linear system solver: equation parsing and Gaussian elimination."""

import logging as _logging

from solver.engine import (
    GAUSSIAN_ELIMINATION,
    MATRIX_INVERSION,
    METHODS,
    parse,
    solve,
)
from solver.parser import LinearSystem, ParseError
from solver.result import SolutionResult, Status

__all__ = [
    "GAUSSIAN_ELIMINATION",
    "MATRIX_INVERSION",
    "METHODS",
    "LinearSystem",
    "ParseError",
    "SolutionResult",
    "Status",
    "parse",
    "solve",
]

_logging.getLogger(__name__).addHandler(_logging.NullHandler())
