"""
Gaussian elimination with partial pivoting.

Reduces the augmented matrix ``[A | b]`` of a LinearSystem to reduced row
echelon form, then classifies the system as solved, inconsistent or
dependent.  Optionally records a human-readable trace of every row
operation.
"""

import numpy as np

from solver.formatting import format_augmented_matrix
from solver.parser import LinearSystem
from solver.result import SolutionResult

# Anything smaller in magnitude counts as zero.
TOLERANCE = 1e-10
# Reported values are rounded to this many decimals.
DECIMALS = 4


class _Trace:
    """Collects step lines; a disabled trace ignores everything."""

    def __init__(self, enabled: bool, variables) -> None:
        self.enabled = enabled
        self.variables = variables
        self.lines = [] if enabled else None

    def note(self, text: str) -> None:
        if self.enabled:
            self.lines.append(text)

    def snapshot(self, text: str, matrix: np.ndarray) -> None:
        if self.enabled:
            self.lines.append(text)
            self.lines.append(format_augmented_matrix(matrix, self.variables))


def _round(value: float) -> float:
    return round(float(value), DECIMALS) + 0.0


def reduce(aug: np.ndarray, n_vars: int, trace: _Trace) -> None:
    """Gauss-Jordan reduction of *aug* in place over ``min(n, m)`` pivots."""
    n = aug.shape[0]
    m = n_vars

    for i in range(min(n, m)):
        # np.argmax returns the first maximum, so ties keep the earlier row.
        max_row = i + int(np.argmax(np.abs(aug[i:, i])))
        if max_row != i:
            aug[[i, max_row]] = aug[[max_row, i]]
            trace.snapshot(f"Swap rows {i + 1} and {max_row + 1}:", aug)

        if abs(aug[i, i]) < TOLERANCE:
            trace.note(f"Skipping row {i + 1} due to zero pivot.")
            continue

        pivot = aug[i, i]
        aug[i, i:] /= pivot
        trace.snapshot(f"Normalize row {i + 1} (divide by {pivot:.4f}):", aug)

        for j in range(n):
            if j == i:
                continue
            factor = aug[j, i]
            if abs(factor) < TOLERANCE:
                continue
            aug[j, i:] -= factor * aug[i, i:]
            trace.snapshot(
                f"Eliminate variable {trace.variables[i]} from row {j + 1} "
                f"(subtract {factor:.4f} times row {i + 1}):",
                aug,
            )


def classify(aug: np.ndarray, variables, steps=None) -> SolutionResult:
    """Read the outcome off a reduced augmented matrix."""
    n = aug.shape[0]
    m = len(variables)

    # A row 0 = c with c != 0 means no solution at all.
    for row in aug:
        if np.all(np.abs(row[:m]) <= TOLERANCE) and abs(row[m]) > TOLERANCE:
            return SolutionResult.inconsistent(steps)

    if m > n:
        return SolutionResult.dependent(steps)

    solution = {}
    for i in range(min(n, m)):
        if abs(aug[i, i]) < TOLERANCE:
            return SolutionResult.dependent(steps)
        solution[variables[i]] = _round(aug[i, m])
    return SolutionResult.solved(solution, steps)


def gaussian_elimination(system: LinearSystem, trace: bool = False) -> SolutionResult:
    """Solve *system* by Gaussian elimination with partial pivoting.

    The system itself is left untouched; all work happens on a private
    copy of its augmented matrix.
    """
    aug = system.augmented()
    steps = _Trace(trace, system.variables)
    steps.snapshot("Initial augmented matrix:", aug)

    reduce(aug, system.n_variables, steps)
    return classify(aug, system.variables, steps.lines)
