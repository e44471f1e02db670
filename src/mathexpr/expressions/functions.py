"""Function table: unary transcendental functions by name.

Each function follows IEEE-754 double semantics: out-of-domain input gives
``nan`` and overflow gives an infinity, never a Python exception.  The
``math`` module raises instead, so the edge cases are handled here.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Callable


class FunctionKind(str, Enum):
    sin = "sin"
    cos = "cos"
    tan = "tan"
    sinh = "sinh"
    cosh = "cosh"
    tanh = "tanh"
    exp = "exp"
    acos = "acos"
    asin = "asin"
    atan = "atan"
    asinh = "asinh"
    acosh = "acosh"
    atanh = "atanh"
    ln = "ln"


_NAN = float("nan")
_INF = float("inf")

_FUNCTIONS: dict[FunctionKind, Callable[[float], float]] = {}


def register_function(kind: FunctionKind) -> Callable:
    """Decorator that registers the real implementation of *kind*.

    Args:
        kind: The function tag to bind.

    Returns:
        The original function, unmodified.
    """

    def decorator(fn: Callable[[float], float]) -> Callable[[float], float]:
        _FUNCTIONS[kind] = fn
        return fn

    return decorator


def lookup_function(name: str) -> FunctionKind | None:
    """Return the kind for a lowercase function name, or ``None``.

    Lookup is case-sensitive: ``"Sin"`` does not match.
    """
    try:
        return FunctionKind(name)
    except ValueError:
        return None


def apply_function(kind: FunctionKind, value: float) -> float:
    """Apply the real function registered for *kind* to *value*."""
    return _FUNCTIONS[kind](value)


def function_names() -> list[str]:
    """All recognised function names, sorted."""
    return sorted(kind.value for kind in FunctionKind)


# ---------------------------------------------------------------------------
# Trigonometric
# ---------------------------------------------------------------------------


@register_function(FunctionKind.sin)
def _sin(value: float) -> float:
    if math.isinf(value):
        return _NAN
    return math.sin(value)


@register_function(FunctionKind.cos)
def _cos(value: float) -> float:
    if math.isinf(value):
        return _NAN
    return math.cos(value)


@register_function(FunctionKind.tan)
def _tan(value: float) -> float:
    if math.isinf(value):
        return _NAN
    return math.tan(value)


@register_function(FunctionKind.asin)
def _asin(value: float) -> float:
    if not -1.0 <= value <= 1.0:
        return _NAN
    return math.asin(value)


@register_function(FunctionKind.acos)
def _acos(value: float) -> float:
    if not -1.0 <= value <= 1.0:
        return _NAN
    return math.acos(value)


@register_function(FunctionKind.atan)
def _atan(value: float) -> float:
    return math.atan(value)


# ---------------------------------------------------------------------------
# Hyperbolic
# ---------------------------------------------------------------------------


@register_function(FunctionKind.sinh)
def _sinh(value: float) -> float:
    try:
        return math.sinh(value)
    except OverflowError:
        return math.copysign(_INF, value)


@register_function(FunctionKind.cosh)
def _cosh(value: float) -> float:
    try:
        return math.cosh(value)
    except OverflowError:
        return _INF


@register_function(FunctionKind.tanh)
def _tanh(value: float) -> float:
    return math.tanh(value)


@register_function(FunctionKind.asinh)
def _asinh(value: float) -> float:
    return math.asinh(value)


@register_function(FunctionKind.acosh)
def _acosh(value: float) -> float:
    # nan fails the comparison too
    if not value >= 1.0:
        return _NAN
    return math.acosh(value)


@register_function(FunctionKind.atanh)
def _atanh(value: float) -> float:
    if value == 1.0 or value == -1.0:
        return math.copysign(_INF, value)
    if not -1.0 < value < 1.0:
        return _NAN
    return math.atanh(value)


# ---------------------------------------------------------------------------
# Exponential / logarithm
# ---------------------------------------------------------------------------


@register_function(FunctionKind.exp)
def _exp(value: float) -> float:
    try:
        return math.exp(value)
    except OverflowError:
        return _INF


@register_function(FunctionKind.ln)
def _ln(value: float) -> float:
    if value == 0.0:
        return -_INF
    if not value > 0.0:
        return _NAN
    return math.log(value)
