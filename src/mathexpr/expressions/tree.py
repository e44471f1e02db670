"""Expression tree node types.

Nodes are frozen dataclasses: a tree is built once by the resolver and is
never mutated afterwards.  Each operation owns its operands outright.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union

from mathexpr.expressions.functions import FunctionKind


class BinaryOperator(str, Enum):
    add = "+"
    sub = "-"
    mul = "*"
    div = "/"
    pow = "^"


@dataclass(frozen=True)
class Constant:
    """A numeric literal."""

    value: float

    def __str__(self) -> str:
        return repr(self.value)


@dataclass(frozen=True)
class Variable:
    """The free variable ``x``."""

    def __str__(self) -> str:
        return "x"


@dataclass(frozen=True)
class BinaryOperation:
    """``left <op> right``."""

    op: BinaryOperator
    left: ExpressionValue
    right: ExpressionValue

    def __str__(self) -> str:
        return f"({self.left} {self.op.value} {self.right})"


@dataclass(frozen=True)
class FunctionApplication:
    """A unary function applied to one operand."""

    kind: FunctionKind
    operand: ExpressionValue

    def __str__(self) -> str:
        return f"{self.kind.value}({self.operand})"


ExpressionValue = Union[Constant, Variable, BinaryOperation, FunctionApplication]


def references_variable(node: ExpressionValue) -> bool:
    """Return True if *node* contains a :class:`Variable` anywhere."""
    if isinstance(node, Variable):
        return True
    if isinstance(node, BinaryOperation):
        return references_variable(node.left) or references_variable(node.right)
    if isinstance(node, FunctionApplication):
        return references_variable(node.operand)
    return False
