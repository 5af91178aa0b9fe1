"""
Equation parser.

Turns free-text equations such as ``2x + y = 5`` into a numeric linear
system: a coefficient matrix, a constants vector and the sorted list of
variables.  Each left-hand term is ``[sign][number]letter``; the right-hand
side must be a single number.
"""

import re
from dataclasses import dataclass, field

import numpy as np

# One monomial: optional sign / digits / decimal point, then one letter.
MONOMIAL_PATTERN = re.compile(r'([+-]?\s*\d*\.?\d*)\s*([A-Za-z])')
# The right-hand side: one signed decimal number.
CONSTANT_PATTERN = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)')


class ParseError(ValueError):
    """Raised when an equation string does not follow the accepted grammar."""


@dataclass
class LinearSystem:
    """Coefficient matrix, constants and column order for a set of equations.

    Row *i* of ``coefficients`` and ``constants[i]`` come from
    ``equations[i]``; column *j* belongs to ``variables[j]``.
    """

    coefficients: np.ndarray
    constants: np.ndarray
    variables: list
    equations: list = field(default_factory=list)

    @property
    def n_equations(self) -> int:
        return self.coefficients.shape[0]

    @property
    def n_variables(self) -> int:
        return len(self.variables)

    def augmented(self) -> np.ndarray:
        """Return a fresh ``[A | b]`` matrix the caller may mutate."""
        return np.column_stack(
            (self.coefficients, self.constants)
        ).astype(np.float64, copy=True)


def split_equations(text: str) -> list:
    """Split one string holding a whole system (``x + y = 10, x - y = 2``)."""
    return [eq.strip() for eq in re.split(r'\s*[;,\n]\s*', text) if eq.strip()]


def detect_variables(equations) -> list:
    """Return the sorted set of single-letter variables across *equations*."""
    found = set()
    for eq in equations:
        for match in MONOMIAL_PATTERN.finditer(eq):
            found.add(match.group(2))
    return sorted(found)


def _parse_coefficient(raw: str, term: str, equation: str) -> float:
    coeff = re.sub(r'\s+', '', raw)
    if coeff in ('', '+'):
        return 1.0
    if coeff == '-':
        return -1.0
    try:
        return float(coeff)
    except ValueError:
        raise ParseError(
            f"Invalid coefficient '{coeff}' in term '{term}' of '{equation}'"
        ) from None


def _parse_constant(rhs: str, equation: str) -> float:
    # Plain decimals only: exponents, underscores, inf and nan are rejected.
    if CONSTANT_PATTERN.fullmatch(rhs) is None:
        raise ParseError(
            f"Right-hand side must be a single number: '{rhs}' in '{equation}'"
        )
    return float(rhs)


def parse_equations(equations) -> LinearSystem:
    """Parse an ordered sequence of equation strings into a LinearSystem.

    Raises ParseError on the first malformed equation.
    """
    equations = [str(eq) for eq in equations]
    if not equations:
        raise ParseError("No equations given.")

    variables = detect_variables(equations)
    if not variables:
        raise ParseError("No variable found. Include a letter like x, y, or z.")
    column = {name: j for j, name in enumerate(variables)}

    coefficients = np.zeros((len(equations), len(variables)), dtype=np.float64)
    constants = np.zeros(len(equations), dtype=np.float64)

    for i, equation in enumerate(equations):
        sides = equation.split('=')
        if len(sides) != 2:
            raise ParseError(f"Invalid equation format: {equation}")

        lhs, rhs = sides[0].strip(), sides[1].strip()
        if not lhs or not rhs:
            raise ParseError(
                f"Both sides of the equation must have expressions: {equation}"
            )

        # Give every term an explicit sign, then split on '+'.
        terms = [t.strip() for t in lhs.replace('-', '+-').split('+')]
        for term in terms:
            if not term:
                continue
            match = MONOMIAL_PATTERN.fullmatch(term)
            if match is None:
                raise ParseError(f"Could not parse term '{term}' in '{equation}'")
            coeff = _parse_coefficient(match.group(1), term, equation)
            # A repeated variable overwrites its earlier coefficient.
            coefficients[i, column[match.group(2)]] = coeff

        constants[i] = _parse_constant(rhs, equation)

    return LinearSystem(coefficients, constants, variables, equations)
