"""Matrix-inversion solver: ``x = A⁻¹b``.

Classification is shared with Gaussian elimination so both methods agree
on solved / inconsistent / dependent.  Only the values of a solved system
are recomputed from the inverse (or the pseudo-inverse when there are
more equations than unknowns).
"""

import numpy as np

from solver.elimination import DECIMALS, gaussian_elimination
from solver.formatting import format_matrix, format_vector
from solver.parser import LinearSystem
from solver.result import SolutionResult


def matrix_inversion(system: LinearSystem, trace: bool = False) -> SolutionResult:
    outcome = gaussian_elimination(system, trace=trace)
    if not outcome.ok:
        # No inverse exists; the elimination trace shows why.
        return outcome

    A = system.coefficients
    b = system.constants
    if system.n_equations == system.n_variables:
        inverse = np.linalg.inv(A)
        label = "A⁻¹"
    else:
        # Consistent and of full column rank, so A⁺b is the exact solution.
        inverse = np.linalg.pinv(A)
        label = "A⁺"
    x = inverse @ b

    solution = {
        name: round(float(x[j]), DECIMALS) + 0.0
        for j, name in enumerate(system.variables)
    }

    steps = None
    if trace:
        steps = [
            f"Coefficient matrix A = {format_matrix(A)}",
            f"Constant vector b = {format_vector(b)}",
            f"{label} = {format_matrix(inverse)}",
            f"x = {label}b = {format_vector(x)}",
        ]
    return SolutionResult.solved(solution, steps)
