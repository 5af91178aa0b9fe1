"""Text rendering for step traces."""

import numpy as np


def _fmt_num(value: float, max_decimals: int = 10) -> str:
    """Format a float into a clean decimal string.

    - Removes trailing zeros after the decimal point.
    - Returns integers without a decimal point (e.g. ``7`` not ``7.0``).
    """
    value = round(float(value), max_decimals) + 0.0
    if abs(value - round(value)) < 1e-12:
        return str(int(round(value)))
    return f"{value:.{max_decimals}f}".rstrip("0").rstrip(".")


def _cell(value: float, width: int) -> str:
    # + 0.0 turns -0.0 into 0.0 so zeros never print with a sign
    return f"{float(value) + 0.0:{width}.4f}"


def format_augmented_matrix(matrix: np.ndarray, variables) -> str:
    """Render ``[A | b]`` as a fixed-width table headed by the variable names.

    ::

        |        x |        y |   RHS  |
        |--------------------------------|
        |   2.0000 |   1.0000 | 5.0000 |
    """
    m = len(variables)
    lines = ["| " + "".join(f"{name:>8} | " for name in variables) + "  RHS  |"]
    lines.append("|" + "-" * ((m + 1) * 11 - 1) + "|")
    for row in matrix:
        cells = "".join(f"{_cell(row[j], 8)} | " for j in range(m))
        lines.append(f"| {cells}{_cell(row[m], 6)} |")
    return "\n".join(lines) + "\n"


def format_matrix(A: np.ndarray) -> str:
    """Format a 2-D NumPy array as a readable bracketed matrix."""
    rows = []
    for row in np.atleast_2d(A):
        rows.append("[" + ", ".join(_fmt_num(v, 4) for v in row) + "]")
    return "[" + ", ".join(rows) + "]"


def format_vector(v: np.ndarray) -> str:
    return "[" + ", ".join(_fmt_num(x, 4) for x in v) + "]"
