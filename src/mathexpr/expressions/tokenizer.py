"""Scanner that turns expression text into a flat list of symbols.

Symbols:
- ``Number``: a numeric literal (digits and ``.``)
- ``VariableMark``: the character ``x``
- ``OperatorMark``: one of ``+ - * / ^``
- ``FunctionMark``: a name from the function table
- ``NestedText``: the raw text between a ``(`` and its matching ``)``

Nested text is not scanned here; the resolver tokenizes it on demand.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from mathexpr.expressions.errors import (
    InvalidNumberLiteral,
    UnclosedParenthesis,
    UnexpectedCharacter,
    UnknownFunction,
)
from mathexpr.expressions.functions import FunctionKind, lookup_function
from mathexpr.expressions.tree import BinaryOperator
from mathexpr.settings import DEFAULT_SETTINGS, ParserSettings


@dataclass(frozen=True)
class Number:
    value: float
    position: int


@dataclass(frozen=True)
class VariableMark:
    position: int


@dataclass(frozen=True)
class OperatorMark:
    op: BinaryOperator
    position: int


@dataclass(frozen=True)
class FunctionMark:
    kind: FunctionKind
    position: int


@dataclass(frozen=True)
class NestedText:
    """Text strictly inside a parenthesized group.

    ``position`` is the offset of the first inner character, so errors
    raised while resolving the group point into the original input.
    """

    text: str
    position: int


Symbol = Union[Number, VariableMark, OperatorMark, FunctionMark, NestedText]

_OPERATORS = {op.value: op for op in BinaryOperator}


def tokenize(
    text: str,
    settings: ParserSettings | None = None,
    offset: int = 0,
) -> list[Symbol]:
    """Scan *text* left to right into symbols.

    Args:
        text: Expression text, e.g. ``"(80+x)^sin(x^2)"``.
        settings: Parser settings; controls unknown-character handling.
        offset: Absolute position of ``text[0]`` in the top-level input.

    Returns:
        The symbols in textual order.

    Raises:
        UnclosedParenthesis: A group is never closed.
        InvalidNumberLiteral: A digit/dot run is not a float.
        UnknownFunction: An alphabetic run is not a known function.
        UnexpectedCharacter: Stray character in ``reject`` mode.
    """
    settings = settings or DEFAULT_SETTINGS
    symbols: list[Symbol] = []
    i = 0
    n = len(text)

    while i < n:
        c = text[i]

        if c.isspace():
            i += 1
            continue

        if c == "(":
            end = _matching_paren(text, i, offset)
            symbols.append(NestedText(text[i + 1:end], offset + i + 1))
            i = end + 1
            continue

        if c in _OPERATORS:
            symbols.append(OperatorMark(_OPERATORS[c], offset + i))
            i += 1
            continue

        if c == "x":
            symbols.append(VariableMark(offset + i))
            i += 1
            continue

        if _is_number_char(c):
            start = i
            while i < n and _is_number_char(text[i]):
                i += 1
            literal = text[start:i]
            try:
                value = float(literal)
            except ValueError:
                raise InvalidNumberLiteral(literal, offset + start) from None
            symbols.append(Number(value, offset + start))
            continue

        if c.isascii() and c.isalpha():
            start = i
            while i < n and text[i].isascii() and text[i].isalpha():
                i += 1
            name = text[start:i]
            kind = lookup_function(name)
            if kind is None:
                raise UnknownFunction(name, offset + start)
            symbols.append(FunctionMark(kind, offset + start))
            continue

        if settings.unknown_characters == "reject":
            raise UnexpectedCharacter(c, offset + i)
        i += 1

    return symbols


def _matching_paren(text: str, open_index: int, offset: int) -> int:
    """Return the index of the ``)`` closing the group opened at *open_index*."""
    depth = 0
    for j in range(open_index + 1, len(text)):
        ch = text[j]
        if ch == "(":
            depth += 1
        elif ch == ")":
            if depth == 0:
                return j
            depth -= 1
    raise UnclosedParenthesis(offset + open_index, text[open_index:])


def _is_number_char(c: str) -> bool:
    return c == "." or (c.isascii() and c.isdigit())
