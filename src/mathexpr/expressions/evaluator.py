"""Tree-walking evaluator for parsed expressions.

Arithmetic follows IEEE-754 double semantics: division by zero and
out-of-domain powers produce ``inf``/``nan`` rather than raising, unlike
Python's own ``/`` and ``**`` on floats.
"""

from __future__ import annotations

import math

from mathexpr.expressions.errors import ExpressionError, MissingVariableBinding
from mathexpr.expressions.functions import apply_function
from mathexpr.expressions.tree import (
    BinaryOperation,
    BinaryOperator,
    Constant,
    ExpressionValue,
    FunctionApplication,
    Variable,
    references_variable,
)
from mathexpr.logging import EventType, emit_error

_INF = float("inf")
_NAN = float("nan")


def evaluate(tree: ExpressionValue, variable: float | None = None) -> float:
    """Evaluate *tree*, logging a structured event on failure.

    See :func:`evaluate_expression` for arguments and errors.
    """
    try:
        return evaluate_expression(tree, variable)
    except MissingVariableBinding as exc:
        emit_error(
            EventType.evaluate_failed,
            str(exc),
            {"expression": str(exc.expression)},
            error_code=exc.code,
        )
        raise


def evaluate_expression(tree: ExpressionValue, variable: float | None = None) -> float:
    """Evaluate *tree* with an optional binding for ``x``.

    Args:
        tree: A tree returned by ``parse()`` or built by hand.
        variable: Value of ``x``; may be omitted when the tree has no ``x``.

    Returns:
        The computed value (possibly ``nan`` or an infinity).

    Raises:
        MissingVariableBinding: The tree contains ``x`` and *variable* is None.
    """
    if variable is None and references_variable(tree):
        raise MissingVariableBinding(tree)
    bound = None if variable is None else float(variable)
    return _eval(tree, bound)


def _eval(node: ExpressionValue, variable: float | None) -> float:
    """Recursively evaluate a tree node."""
    if isinstance(node, Constant):
        return float(node.value)

    if isinstance(node, Variable):
        return variable

    if isinstance(node, BinaryOperation):
        left = _eval(node.left, variable)
        right = _eval(node.right, variable)
        return _BINARY[node.op](left, right)

    if isinstance(node, FunctionApplication):
        return apply_function(node.kind, _eval(node.operand, variable))

    raise ExpressionError(f"Unknown node type: {type(node).__name__}")


# ---------- Arithmetic ----------


def _add(left: float, right: float) -> float:
    return left + right


def _sub(left: float, right: float) -> float:
    return left - right


def _mul(left: float, right: float) -> float:
    return left * right


def _div(left: float, right: float) -> float:
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return _NAN
        # sign of a signed zero divisor matters: 1 / -0.0 == -inf
        return math.copysign(_INF, left) * math.copysign(1.0, right)
    return left / right


def _is_odd_integer(value: float) -> bool:
    return math.isfinite(value) and value.is_integer() and value % 2 == 1


def _pow(base: float, exponent: float) -> float:
    try:
        return math.pow(base, exponent)
    except ValueError:
        # math.pow rejects 0 ** negative and negative ** fraction
        if base == 0.0 and exponent < 0:
            if _is_odd_integer(exponent):
                return math.copysign(_INF, base)
            return _INF
        return _NAN
    except OverflowError:
        if base < 0 and _is_odd_integer(exponent):
            return -_INF
        return _INF


_BINARY = {
    BinaryOperator.add: _add,
    BinaryOperator.sub: _sub,
    BinaryOperator.mul: _mul,
    BinaryOperator.div: _div,
    BinaryOperator.pow: _pow,
}
