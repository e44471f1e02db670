"""Single-variable expression parsing and evaluation.

Public API::

    from mathexpr.expressions import parse, evaluate
"""

from mathexpr.expressions.errors import (
    ExpressionError,
    ExpressionEvalError,
    ExpressionParseError,
    InvalidNumberLiteral,
    MissingOperand,
    MissingVariableBinding,
    TooDeeplyNested,
    UnclosedParenthesis,
    UnexpectedCharacter,
    UnknownFunction,
)
from mathexpr.expressions.evaluator import evaluate, evaluate_expression
from mathexpr.expressions.functions import FunctionKind, function_names
from mathexpr.expressions.parser import parse
from mathexpr.expressions.resolver import resolve
from mathexpr.expressions.tokenizer import tokenize
from mathexpr.expressions.tree import (
    BinaryOperation,
    BinaryOperator,
    Constant,
    ExpressionValue,
    FunctionApplication,
    Variable,
    references_variable,
)

__all__ = [
    "BinaryOperation",
    "BinaryOperator",
    "Constant",
    "ExpressionError",
    "ExpressionEvalError",
    "ExpressionParseError",
    "ExpressionValue",
    "FunctionApplication",
    "FunctionKind",
    "InvalidNumberLiteral",
    "MissingOperand",
    "MissingVariableBinding",
    "TooDeeplyNested",
    "UnclosedParenthesis",
    "UnexpectedCharacter",
    "UnknownFunction",
    "Variable",
    "evaluate",
    "evaluate_expression",
    "function_names",
    "parse",
    "references_variable",
    "resolve",
    "tokenize",
]
