import numpy as np
import pytest

from solver import parser
from solver.parser import ParseError, parse_equations


def test_detect_variables_sorted_and_deduplicated() -> None:
    assert parser.detect_variables(["y + x = 3", "2z - x = 1"]) == ["x", "y", "z"]
    # uppercase sorts before lowercase
    assert parser.detect_variables(["a + B = 1"]) == ["B", "a"]


def test_split_equations() -> None:
    assert parser.split_equations("x + y = 10, x - y = 2") == ["x + y = 10", "x - y = 2"]
    assert parser.split_equations("x = 1; y = 2\nz = 3 ,") == ["x = 1", "y = 2", "z = 3"]


def test_parse_two_by_two() -> None:
    system = parse_equations(["2x + y = 5", "x - y = 1"])
    assert system.variables == ["x", "y"]
    np.testing.assert_array_equal(system.coefficients, [[2, 1], [1, -1]])
    np.testing.assert_array_equal(system.constants, [5, 1])
    assert system.n_equations == 2
    assert system.n_variables == 2
    assert system.equations == ["2x + y = 5", "x - y = 1"]


def test_column_order_is_lexicographic() -> None:
    system = parse_equations(["y + x = 3", "3y - 2x = 4"])
    assert system.variables == ["x", "y"]
    np.testing.assert_array_equal(system.coefficients, [[1, 1], [-2, 3]])


@pytest.mark.parametrize(
    "equation,expected",
    [
        ("x = 1", 1.0),
        ("+x = 1", 1.0),
        ("-x = 1", -1.0),
        ("2.5x = 1", 2.5),
        ("-0.5x = 1", -0.5),
        (".5x = 1", 0.5),
        ("- 3 x = 1", -3.0),
    ],
)
def test_coefficient_forms(equation: str, expected: float) -> None:
    system = parse_equations([equation])
    assert system.coefficients[0, 0] == expected


def test_missing_variable_gets_zero_coefficient() -> None:
    system = parse_equations(["x + y + z = 6", "x - z = 0"])
    np.testing.assert_array_equal(system.coefficients[1], [1, 0, -1])


def test_repeated_variable_last_write_wins() -> None:
    system = parse_equations(["2x + 3x = 5"])
    assert system.coefficients[0, 0] == 3.0


def test_right_side_accepts_signed_and_decimal_constants() -> None:
    system = parse_equations(["x = -2.5", "y = +4", "x + y = 12.75"])
    np.testing.assert_array_equal(system.constants, [-2.5, 4, 12.75])


@pytest.mark.parametrize(
    "rhs,expected",
    [("  +.5 ", 0.5), ("5.", 5.0), ("-0.25", -0.25), ("007", 7.0)],
)
def test_right_side_decimal_forms(rhs: str, expected: float) -> None:
    system = parse_equations([f"x + y ={rhs}", "x - y = 0"])
    assert system.constants[0] == expected
    assert system.variables == ["x", "y"]


def test_augmented_is_an_independent_copy() -> None:
    system = parse_equations(["2x + y = 5", "x - y = 1"])
    aug = system.augmented()
    np.testing.assert_array_equal(aug, [[2, 1, 5], [1, -1, 1]])
    aug[0, 0] = 99
    assert system.coefficients[0, 0] == 2


@pytest.mark.parametrize(
    "equations,message",
    [
        (["2x + y 5"], "Invalid equation format"),
        (["x = 1 = 2"], "Invalid equation format"),
        (["= 4", "x = 1"], "Both sides"),
        (["x + y ="], "Both sides"),
        (["2x + 3 = 7"], "Could not parse term '3'"),
        (["2xy = 1"], "Could not parse term"),
        (["2x = y + 3"], "Right-hand side must be a single number"),
        (["x = abc"], "Right-hand side must be a single number"),
        (["x = inf"], "Right-hand side must be a single number"),
        (["x = nan"], "Right-hand side must be a single number"),
        (["x - y = 1e0", "x + y = 3"], "Right-hand side must be a single number: .1e0."),
        (["x = 1_0"], "Right-hand side must be a single number"),
        (["x = - 5"], "Right-hand side must be a single number"),
        (["3 = 3"], "No variable found"),
        ([], "No equations"),
    ],
)
def test_parse_errors(equations, message: str) -> None:
    with pytest.raises(ParseError, match=message):
        parse_equations(equations)


def test_parse_error_is_a_value_error() -> None:
    with pytest.raises(ValueError):
        parse_equations(["x + y"])
