"""Tests for tree evaluation, IEEE-754 edge cases and the function table."""

from __future__ import annotations

import math

import pytest

from mathexpr import evaluate, parse
from mathexpr.expressions import (
    BinaryOperation,
    BinaryOperator,
    Constant,
    ExpressionEvalError,
    FunctionApplication,
    FunctionKind,
    MissingVariableBinding,
    Variable,
    evaluate_expression,
    function_names,
    references_variable,
)
from mathexpr.expressions.functions import apply_function, lookup_function


def _eval(text: str, x: float | None = None) -> float:
    """Parse and evaluate an expression string."""
    return evaluate(parse(text), x)


# ────────────────────────────────────────────────────────────────
# Basics
# ────────────────────────────────────────────────────────────────


class TestEvaluate:
    def test_constant(self) -> None:
        assert evaluate(parse("3")) == 3.0

    def test_variable_binding(self) -> None:
        assert evaluate(parse("x"), 5.0) == 5.0

    def test_int_binding_is_accepted(self) -> None:
        assert evaluate(parse("x*2"), 4) == 8.0

    def test_missing_binding(self) -> None:
        with pytest.raises(MissingVariableBinding):
            evaluate(parse("x"))

    def test_missing_binding_names_expression(self) -> None:
        tree = parse("1 + cos(x)")
        with pytest.raises(MissingVariableBinding) as exc_info:
            evaluate(tree)
        assert exc_info.value.expression is tree
        assert str(exc_info.value).endswith(": (1.0 + cos(x))")

    def test_missing_binding_is_eval_error(self) -> None:
        with pytest.raises(ExpressionEvalError):
            evaluate_expression(parse("1 + cos(x)"))

    def test_tree_without_variable_ignores_binding(self) -> None:
        assert evaluate(parse("2^10"), 99.0) == 1024.0

    def test_same_tree_many_bindings(self) -> None:
        tree = parse("x^2 + 1")
        assert [evaluate(tree, v) for v in (0.0, 1.0, 3.0)] == [1.0, 2.0, 10.0]

    def test_hand_built_tree(self) -> None:
        """cos(x) * 15, built without the parser."""
        tree = BinaryOperation(
            BinaryOperator.mul,
            FunctionApplication(FunctionKind.cos, Variable()),
            Constant(15.0),
        )
        assert evaluate(tree, 3.14) == pytest.approx(math.cos(3.14) * 15.0)

    def test_constant_only_trees_never_need_binding(self) -> None:
        for op in BinaryOperator:
            tree = BinaryOperation(op, Constant(2.0), Constant(0.5))
            assert isinstance(evaluate(tree), float)

    def test_composite_example(self) -> None:
        result = _eval("(80+x)^sin(x^2+(2*5))", 10.0)
        assert result == pytest.approx(90.0 ** math.sin(110.0))

    def test_references_variable(self) -> None:
        assert references_variable(parse("1 + sin(x)"))
        assert not references_variable(parse("1 + sin(2)"))


# ────────────────────────────────────────────────────────────────
# IEEE-754 arithmetic
# ────────────────────────────────────────────────────────────────


class TestArithmeticEdgeCases:
    def test_division_by_zero_is_infinite(self) -> None:
        assert _eval("1/0") == math.inf

    def test_negative_division_by_zero(self) -> None:
        assert _eval("(0-1)/0") == -math.inf

    def test_zero_over_zero_is_nan(self) -> None:
        assert math.isnan(_eval("0/0"))

    def test_negative_base_fractional_power_is_nan(self) -> None:
        assert math.isnan(_eval("(0-8)^(1/3)"))

    def test_negative_base_integer_power(self) -> None:
        assert _eval("(0-2)^3") == -8.0

    def test_zero_to_negative_power(self) -> None:
        assert _eval("0^(0-1)") == math.inf

    def test_power_overflow(self) -> None:
        assert _eval("10^400") == math.inf

    def test_multiplication_overflow(self) -> None:
        assert _eval("10^200*10^200") == math.inf


# ────────────────────────────────────────────────────────────────
# Function table
# ────────────────────────────────────────────────────────────────


class TestFunctions:
    def test_fourteen_functions(self) -> None:
        assert function_names() == sorted(
            [
                "sin", "cos", "tan", "sinh", "cosh", "tanh", "exp",
                "acos", "asin", "atan", "asinh", "acosh", "atanh", "ln",
            ]
        )

    def test_lookup(self) -> None:
        assert lookup_function("atanh") is FunctionKind.atanh
        assert lookup_function("log") is None
        assert lookup_function("COS") is None

    @pytest.mark.parametrize(
        ("name", "arg", "expected"),
        [
            ("sin", 0.5, math.sin(0.5)),
            ("cos", 0.5, math.cos(0.5)),
            ("tan", 0.5, math.tan(0.5)),
            ("sinh", 0.5, math.sinh(0.5)),
            ("cosh", 0.5, math.cosh(0.5)),
            ("tanh", 0.5, math.tanh(0.5)),
            ("exp", 0.5, math.exp(0.5)),
            ("acos", 0.5, math.acos(0.5)),
            ("asin", 0.5, math.asin(0.5)),
            ("atan", 0.5, math.atan(0.5)),
            ("asinh", 0.5, math.asinh(0.5)),
            ("acosh", 1.5, math.acosh(1.5)),
            ("atanh", 0.5, math.atanh(0.5)),
            ("ln", 0.5, math.log(0.5)),
        ],
    )
    def test_real_counterparts(self, name: str, arg: float, expected: float) -> None:
        assert _eval(f"{name}({arg})") == pytest.approx(expected)

    @pytest.mark.parametrize(
        "text", ["asin(2)", "acos(0-2)", "ln(0-1)", "acosh(0.5)", "atanh(2)"]
    )
    def test_out_of_domain_is_nan(self, text: str) -> None:
        assert math.isnan(_eval(text))

    def test_ln_zero(self) -> None:
        assert _eval("ln(0)") == -math.inf

    def test_atanh_one(self) -> None:
        assert _eval("atanh(1)") == math.inf

    def test_exp_overflow(self) -> None:
        assert _eval("exp(1000)") == math.inf

    def test_sinh_overflow_keeps_sign(self) -> None:
        assert _eval("sinh(0-1000)") == -math.inf

    def test_sin_of_infinity_is_nan(self) -> None:
        assert math.isnan(apply_function(FunctionKind.sin, math.inf))

    def test_nan_propagates(self) -> None:
        for kind in FunctionKind:
            assert math.isnan(apply_function(kind, math.nan))
