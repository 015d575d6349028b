"""Expression evaluator for plotted functions of 'x'

Expressions use Python/JavaScript style arithmetic: ``sin(x) / x``,
``x^2 - 3*x``, ``Math.exp(-x*x)``, ``1 if x > 0 else -1``.
The source text is parsed with :mod:`ast` and checked against a fixed set of
node types, functions and constants; the accepted tree is then compiled into
nested closures. Nothing in the expression is ever handed to ``eval``.

Use :any:`compile_expression` to validate an expression and get an error
message, and :any:`evaluate` in plotting code: it never raises, and returns
``nan`` wherever the function is undefined.
"""
import ast
import logging
import math
import operator
from functools import lru_cache

logger = logging.getLogger(__name__)

MAX_EXPRESSION_LENGTH = 1024

#: Name of the free variable in plotted expressions
VARIABLE = "x"

#: Namespace prefix accepted in front of function and constant names ("Math.sin")
NAMESPACE = "Math"


class ExpressionError(ValueError):
    """Raised when an expression cannot be parsed or uses forbidden constructs."""


def _sign(value):
    return math.copysign(1.0, value) if value else 0.0


def _round(value):
    # Rounds halves towards +infinity, unlike Python's banker's rounding
    return float(math.floor(value + 0.5))


FUNCTIONS = {
    "abs": abs,
    "acos": math.acos,
    "acosh": math.acosh,
    "asin": math.asin,
    "asinh": math.asinh,
    "atan": math.atan,
    "atan2": math.atan2,
    "atanh": math.atanh,
    "cbrt": lambda value: math.copysign(abs(value) ** (1 / 3), value),
    "ceil": math.ceil,
    "cos": math.cos,
    "cosh": math.cosh,
    "exp": math.exp,
    "expm1": math.expm1,
    "floor": math.floor,
    "hypot": math.hypot,
    "ln": math.log,
    "log": math.log,
    "log10": math.log10,
    "log1p": math.log1p,
    "log2": math.log2,
    "max": max,
    "min": min,
    "pow": math.pow,
    "round": _round,
    "sign": _sign,
    "sin": math.sin,
    "sinh": math.sinh,
    "sqrt": math.sqrt,
    "tan": math.tan,
    "tanh": math.tanh,
    "trunc": math.trunc,
}

CONSTANTS = {
    "E": math.e,
    "LN2": math.log(2),
    "LN10": math.log(10),
    "LOG2E": math.log2(math.e),
    "LOG10E": math.log10(math.e),
    "PI": math.pi,
    "SQRT1_2": math.sqrt(0.5),
    "SQRT2": math.sqrt(2),
    "e": math.e,
    "pi": math.pi,
    "tau": math.tau,
}

_binary_operators = {
    ast.Add: operator.add,
    ast.Sub: operator.sub,
    ast.Mult: operator.mul,
    ast.Div: operator.truediv,
    ast.Mod: math.fmod,
    ast.Pow: operator.pow,
}

_unary_operators = {
    ast.UAdd: operator.pos,
    ast.USub: operator.neg,
    ast.Not: lambda value: float(not value),
}

_comparisons = {
    ast.Lt: operator.lt,
    ast.LtE: operator.le,
    ast.Gt: operator.gt,
    ast.GtE: operator.ge,
    ast.Eq: operator.eq,
    ast.NotEq: operator.ne,
}


def _normalize(expression):
    if not isinstance(expression, str):
        raise ExpressionError(f"Expression must be a string, not {type(expression).__name__}")
    expression = expression.strip()
    if not expression:
        raise ExpressionError("Expression is empty")
    if len(expression) > MAX_EXPRESSION_LENGTH:
        raise ExpressionError("Expression is too long")
    # Caret is read as exponentiation, as on calculators
    return expression.replace("^", "**")


def _lookup_name(node):
    """Returns the identifier for a Name node or a 'Math.<name>' attribute"""
    if isinstance(node, ast.Name):
        return node.id
    if (
        isinstance(node, ast.Attribute)
        and isinstance(node.value, ast.Name)
        and node.value.id == NAMESPACE
    ):
        return node.attr
    raise ExpressionError("Only plain names can be used as values and functions")


def _compile_node(node):
    """Turns an accepted ast node into a callable taking 'x' and returning a number"""
    if isinstance(node, ast.Constant):
        if isinstance(node.value, bool) or not isinstance(node.value, (int, float)):
            raise ExpressionError(f"Only numeric literals are allowed, got {node.value!r}")
        # Floats only: integer '**' chains could otherwise grow without bound
        value = float(node.value)
        return lambda x: value

    if isinstance(node, (ast.Name, ast.Attribute)):
        name = _lookup_name(node)
        if name == VARIABLE and isinstance(node, ast.Name):
            return lambda x: x
        if name in CONSTANTS:
            value = CONSTANTS[name]
            return lambda x: value
        raise ExpressionError(f"Unknown name {name!r}")

    if isinstance(node, ast.BinOp):
        op = _binary_operators.get(type(node.op))
        if op is None:
            raise ExpressionError(f"Operator {type(node.op).__name__} is not allowed")
        left, right = _compile_node(node.left), _compile_node(node.right)
        return lambda x: op(left(x), right(x))

    if isinstance(node, ast.UnaryOp):
        op = _unary_operators.get(type(node.op))
        if op is None:
            raise ExpressionError(f"Operator {type(node.op).__name__} is not allowed")
        operand = _compile_node(node.operand)
        return lambda x: op(operand(x))

    if isinstance(node, ast.Compare):
        ops = []
        for op_node in node.ops:
            op = _comparisons.get(type(op_node))
            if op is None:
                raise ExpressionError(f"Comparison {type(op_node).__name__} is not allowed")
            ops.append(op)
        operands = [_compile_node(item) for item in [node.left, *node.comparators]]

        def compare(x):
            values = [operand(x) for operand in operands]
            return float(all(op(a, b) for op, a, b in zip(ops, values, values[1:])))

        return compare

    if isinstance(node, ast.BoolOp):
        operands = [_compile_node(item) for item in node.values]
        combine = all if isinstance(node.op, ast.And) else any
        return lambda x: float(combine(operand(x) for operand in operands))

    if isinstance(node, ast.IfExp):
        test, body, orelse = (_compile_node(item) for item in (node.test, node.body, node.orelse))
        return lambda x: body(x) if test(x) else orelse(x)

    if isinstance(node, ast.Call):
        name = _lookup_name(node.func)
        function = FUNCTIONS.get(name)
        if function is None:
            raise ExpressionError(f"Function {name!r} is not allowed")
        if node.keywords:
            raise ExpressionError("Keyword arguments are not supported")
        arguments = [_compile_node(arg) for arg in node.args]
        if not arguments:
            raise ExpressionError(f"Function {name!r} needs at least one argument")
        return lambda x: function(*(argument(x) for argument in arguments))

    raise ExpressionError(f"Unsupported syntax: {type(node).__name__}")


@lru_cache(maxsize=64)
def compile_expression(expression):
    """Parses and validates 'expression', returning a function of x

    Raises :any:`ExpressionError` when the expression cannot be parsed or uses
    anything besides numbers, 'x', arithmetic, comparisons, conditionals and
    the functions and constants in FUNCTIONS and CONSTANTS.

    The returned callable may raise arithmetic errors for points outside the
    function domain; :any:`evaluate` takes care of those.
    """
    source = _normalize(expression)
    try:
        tree = ast.parse(source, mode="eval")
        return _compile_node(tree.body)
    except SyntaxError as error:
        raise ExpressionError(f"Could not parse expression: {error.msg}") from error
    except (RecursionError, MemoryError) as error:
        raise ExpressionError("Expression is too deeply nested") from error


@lru_cache(maxsize=64)
def _compiled_or_none(expression):
    try:
        return compile_expression(expression)
    except ExpressionError as error:
        logger.debug("Expression %r rejected: %s", expression, error)
        return None


def evaluate(expression, x):
    """Value of 'expression' at 'x', or nan where it is undefined

    Never raises: parse failures, forbidden constructs, domain errors, division
    by zero, overflows and complex results all come back as ``nan``.
    """
    function = _compiled_or_none(expression)
    if function is None:
        return math.nan
    try:
        value = function(x)
    except (ArithmeticError, ValueError, TypeError, RecursionError):
        return math.nan
    if isinstance(value, complex):
        return math.nan
    try:
        return float(value)
    except (OverflowError, TypeError):
        return math.nan
