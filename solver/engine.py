"""Public entry points: parse equation strings and solve them by method."""

import logging

from solver.elimination import gaussian_elimination
from solver.inversion import matrix_inversion
from solver.parser import LinearSystem, ParseError, parse_equations, split_equations
from solver.result import SolutionResult

logger = logging.getLogger(__name__)

GAUSSIAN_ELIMINATION = "Gaussian Elimination"
MATRIX_INVERSION = "Matrix Inversion"

_METHODS = {
    GAUSSIAN_ELIMINATION: gaussian_elimination,
    MATRIX_INVERSION: matrix_inversion,
}
METHODS = tuple(_METHODS)


def _as_list(equations) -> list:
    if isinstance(equations, str):
        return split_equations(equations)
    return [eq.strip() for eq in equations]


def parse(equations) -> LinearSystem:
    """Parse *equations* (a list, or one comma-separated string).

    Raises ParseError on malformed input.
    """
    return parse_equations(_as_list(equations))


def solve(equations, method: str = GAUSSIAN_ELIMINATION,
          steps: bool = False) -> SolutionResult:
    """
    Solve a system of linear equations.

    Never raises: malformed equations, an unknown *method* and unexpected
    failures all come back as the ``error`` variant.  With ``steps=True``
    the result also carries a trace of the row operations.
    """
    algorithm = _METHODS.get(method) if isinstance(method, str) else None
    if algorithm is None:
        return SolutionResult.error(
            f"Unknown method '{method}'. Choose one of: {', '.join(METHODS)}"
        )

    try:
        system = parse(equations)
        result = algorithm(system, trace=steps)
    except ParseError as e:
        return SolutionResult.error(str(e))
    except Exception as e:
        logger.exception("Unexpected failure while solving %r", equations)
        return SolutionResult.error(str(e))

    logger.debug("%s: %d equation(s), %d variable(s) -> %s",
                 method, system.n_equations, system.n_variables,
                 result.status.value)
    return result
