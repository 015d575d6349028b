import math

import pytest

from plotterm.expression import ExpressionError, compile_expression, evaluate


@pytest.mark.parametrize("expression, x, expected", [
    ("x", 3, 3),
    ("x*x", -2, 4),
    ("x^2 - 3*x", 4, 4),
    ("x**3", 2, 8),
    ("2 ^ 3 ^ 2", 0, 512),
    ("sin(x)", math.pi / 2, 1),
    ("Math.sin(x) + Math.cos(0)", 0, 1),
    ("Math.PI", 0, math.pi),
    ("pi + e", 0, math.pi + math.e),
    ("sqrt(x)", 9, 3),
    ("abs(x)", -7.5, 7.5),
    ("ln(e)", 0, 1),
    ("log10(x)", 1000, 3),
    ("max(x, 1, 2)", 0, 2),
    ("x % 3", 7, 1),
    ("-x", 5, -5),
    ("sign(x)", -3, -1),
    ("round(x)", 2.5, 3),
    ("round(x)", -2.5, -2),
    ("1 if x > 0 else -1", 0.5, 1),
    ("1 if x > 0 else -1", -0.5, -1),
    ("x > 0 and x < 1", 0.5, 1),
    ("0 < x < 1", 2, 0),
    ("cbrt(x)", -8, -2),
])
def test_evaluate(expression, x, expected):
    assert evaluate(expression, x) == pytest.approx(expected)


@pytest.mark.parametrize("expression, x", [
    ("sqrt(x)", -1),
    ("1/x", 0),
    ("log(x)", 0),
    ("log(x)", -5),
    ("asin(x)", 2),
    ("x ^ 0.5", -4),
    ("exp(x)", 1e6),
    ("10 ^ x", 400),
    ("tan(x) * 0 + 1/0", 1),
])
def test_undefined_points_give_nan(expression, x):
    assert math.isnan(evaluate(expression, x))


@pytest.mark.parametrize("expression", [
    "",
    "   ",
    "x +",
    "foo(x)",
    "y",
    "__import__('os')",
    "x.__class__",
    "Math.__dict__",
    "(lambda: 1)()",
    "[1, 2][0]",
    "'text'",
    "sin(x=1)",
    "sin()",
    "x if True else 0",
    "x" * 2000,
])
def test_rejected_expressions(expression):
    with pytest.raises(ExpressionError):
        compile_expression(expression)
    assert math.isnan(evaluate(expression, 1.0))


def test_expression_error_is_value_error():
    assert issubclass(ExpressionError, ValueError)


def test_compiled_expression_is_reusable():
    function = compile_expression("x*x + 1")
    assert [function(x) for x in (0, 1, 2)] == [1, 2, 5]
    assert compile_expression("x*x + 1") is function


def test_evaluate_always_returns_float():
    assert isinstance(evaluate("x > 1", 2), float)
    assert isinstance(evaluate("floor(x)", 2.5), float)


def test_deeply_nested_expression_is_rejected():
    expression = "-" * 1020 + "x"
    with pytest.raises(ExpressionError, match="nested"):
        compile_expression(expression)
    assert math.isnan(evaluate(expression, 1.0))
