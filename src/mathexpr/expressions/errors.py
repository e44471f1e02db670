"""Error types for expression parsing and evaluation."""

from __future__ import annotations

from typing import Any


class ExpressionError(Exception):
    """Base class for all expression-related errors."""

    #: Short machine-readable kind, used as the logged error code.
    code = "expression_error"


class ExpressionParseError(ExpressionError):
    """Malformed expression text.

    Attributes:
        position: Character offset into the top-level input, if known.
        fragment: The offending piece of text, if known.
    """

    code = "parse_error"

    def __init__(
        self,
        message: str,
        position: int | None = None,
        fragment: str | None = None,
    ) -> None:
        self.position = position
        self.fragment = fragment
        full = f"Expression parse error: {message}"
        if position is not None:
            full += f" (at position {position})"
        super().__init__(full)


class UnclosedParenthesis(ExpressionParseError):
    """A ``(`` was opened and never closed."""

    code = "unclosed_parenthesis"

    def __init__(self, position: int, fragment: str | None = None) -> None:
        super().__init__("unclosed parenthesis", position, fragment)


class InvalidNumberLiteral(ExpressionParseError):
    """A run of digits and dots is not a valid float."""

    code = "invalid_number_literal"

    def __init__(self, literal: str, position: int) -> None:
        super().__init__(f"invalid number literal {literal!r}", position, literal)


class UnknownFunction(ExpressionParseError):
    """An alphabetic run does not name a known function.

    Attributes:
        name: The unmatched name.
    """

    code = "unknown_function"

    def __init__(self, name: str, position: int) -> None:
        self.name = name
        super().__init__(f"unknown function {name!r}", position, name)


class MissingOperand(ExpressionParseError):
    """An operator or function lacks a usable neighbouring operand."""

    code = "missing_operand"


class UnexpectedCharacter(ExpressionParseError):
    """A character that cannot start any symbol (only in ``reject`` mode)."""

    code = "unexpected_character"

    def __init__(self, char: str, position: int) -> None:
        super().__init__(f"unexpected character {char!r}", position, char)


class TooDeeplyNested(ExpressionParseError):
    """Groups nest, or the tree grows, deeper than the configured limit.

    Attributes:
        depth: The limit that was exceeded.
    """

    code = "too_deeply_nested"

    def __init__(
        self,
        depth: int,
        position: int | None = None,
        what: str = "groups nested",
    ) -> None:
        self.depth = depth
        super().__init__(f"{what} deeper than {depth} levels", position)


class ExpressionEvalError(ExpressionError):
    """Failure while evaluating an expression tree."""

    code = "eval_error"


class MissingVariableBinding(ExpressionEvalError):
    """The tree references ``x`` but no value was supplied.

    Attributes:
        expression: The tree that was being evaluated, if known.
    """

    code = "missing_variable_binding"

    def __init__(self, expression: Any = None) -> None:
        self.expression = expression
        msg = "Expression references 'x' but no value was given"
        if expression is not None:
            msg += f": {expression}"
        super().__init__(msg)
