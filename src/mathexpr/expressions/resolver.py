"""Tier-by-tier resolution of a flat symbol list into an expression tree.

The resolver makes six full passes over the symbols, in this fixed order:

1. function application
2. power (``^``)
3. multiplication (``*``)
4. division (``/``)
5. addition (``+``)
6. subtraction (``-``)

Within one pass, occurrences are folded left to right.  Because ``*`` is
folded completely before any ``/`` (and ``+`` before any ``-``), operators
of equal mathematical precedence do not associate in textual order:
``6 / 2 * 3`` resolves as ``6 / (2 * 3)``.  Repeated operators of the same
kind do fold left to right, so ``8 / 2 / 2`` is ``(8 / 2) / 2``.

Folded sub-expressions live in a side table of slots keyed by the position
of the symbol that created them.  Folded groups always cover a contiguous span of positions.  Only the two ends
of a span can neighbour an unfolded symbol, so only the ends are re-pointed
when a group is folded into a larger one.

Each slot also records the height of its tree.  Operator and function chains
deepen the tree without any parentheses, and every tree walker recurses once
per level, so heights over ``settings.max_height`` are rejected here.
"""

from __future__ import annotations

from mathexpr.expressions.errors import MissingOperand, TooDeeplyNested
from mathexpr.expressions.tokenizer import (
    FunctionMark,
    NestedText,
    Number,
    OperatorMark,
    Symbol,
    VariableMark,
    tokenize,
)
from mathexpr.expressions.tree import (
    BinaryOperation,
    BinaryOperator,
    Constant,
    ExpressionValue,
    FunctionApplication,
    Variable,
)
from mathexpr.settings import DEFAULT_SETTINGS, ParserSettings

BINARY_TIERS: tuple[BinaryOperator, ...] = (
    BinaryOperator.pow,
    BinaryOperator.mul,
    BinaryOperator.div,
    BinaryOperator.add,
    BinaryOperator.sub,
)


# A resolved operand: its tree and the tree's height
_Resolved = tuple[ExpressionValue, int]


def resolve(
    symbols: list[Symbol],
    settings: ParserSettings | None = None,
    depth: int = 0,
) -> ExpressionValue:
    """Collapse *symbols* into a single expression tree.

    Args:
        symbols: Output of :func:`tokenize`.
        settings: Parser settings; ``max_depth`` bounds group nesting and
            ``max_height`` bounds the depth of the finished tree.
        depth: Current group nesting level (0 at the top level).

    Returns:
        The root of the resolved tree.

    Raises:
        MissingOperand: An operator or function lacks an operand, or the
            symbols do not reduce to exactly one value.
        TooDeeplyNested: Groups nest deeper than ``settings.max_depth`` or
            the tree grows deeper than ``settings.max_height``.
    """
    settings = settings or DEFAULT_SETTINGS
    value, _height = _resolve(symbols, settings, depth)
    return value


def resolve_text(
    text: str,
    settings: ParserSettings | None = None,
    depth: int = 0,
    offset: int = 0,
) -> ExpressionValue:
    """Tokenize and resolve *text* in one step."""
    settings = settings or DEFAULT_SETTINGS
    return resolve(tokenize(text, settings, offset), settings, depth)


def _resolve(
    symbols: list[Symbol], settings: ParserSettings, depth: int
) -> _Resolved:
    if not symbols:
        raise MissingOperand("empty expression")

    if len(symbols) == 1:
        only = symbols[0]
        if isinstance(only, (Number, VariableMark, NestedText)):
            return _operand_value(only, settings, depth)
        raise MissingOperand(
            "expression must be a number, 'x' or a group",
            position=only.position,
        )

    return _SlotTable(symbols, settings, depth).run()


def _operand_value(
    symbol: Symbol, settings: ParserSettings, depth: int
) -> _Resolved:
    """Convert a not-yet-folded operand symbol into a tree node."""
    if isinstance(symbol, Number):
        return Constant(symbol.value), 1
    if isinstance(symbol, VariableMark):
        return Variable(), 1
    if isinstance(symbol, NestedText):
        return _resolve_group(symbol, settings, depth)
    raise MissingOperand(
        f"expected an operand, found {_describe(symbol)}",
        position=symbol.position,
    )


def _resolve_group(
    group: NestedText, settings: ParserSettings, depth: int
) -> _Resolved:
    """Recursively parse the text of a parenthesized group."""
    # group.position is the first inner character; the "(" sits just before
    open_position = group.position - 1
    if depth + 1 > settings.max_depth:
        raise TooDeeplyNested(settings.max_depth, open_position)
    inner = tokenize(group.text, settings, group.position)
    if not inner:
        raise MissingOperand(
            "empty group", position=open_position, fragment=f"({group.text})"
        )
    return _resolve(inner, settings, depth + 1)


def _describe(symbol: Symbol) -> str:
    if isinstance(symbol, OperatorMark):
        return f"operator {symbol.op.value!r}"
    if isinstance(symbol, FunctionMark):
        return f"function {symbol.kind.value!r}"
    return type(symbol).__name__


class _SlotTable:
    """Side table of partially built sub-expressions for one resolve call."""

    def __init__(
        self, symbols: list[Symbol], settings: ParserSettings, depth: int
    ) -> None:
        self.symbols = symbols
        self.settings = settings
        self.depth = depth
        # slot key -> (pending value, tree height)
        self.slots: dict[int, _Resolved] = {}
        # slot key -> (first, last) position covered by the slot
        self.spans: dict[int, tuple[int, int]] = {}
        # position -> slot key, or None while unfolded; exact at span ends
        self.owner: list[int | None] = [None] * len(symbols)

    def run(self) -> _Resolved:
        self._fold_functions()
        for op in BINARY_TIERS:
            self._fold_binary(op)

        unfolded = [i for i, key in enumerate(self.owner) if key is None]
        if unfolded or len(self.slots) != 1:
            stray = self.symbols[unfolded[0]] if unfolded else self.symbols[0]
            raise MissingOperand(
                "expression does not reduce to a single value "
                "(missing operator?)",
                position=stray.position,
            )
        return next(iter(self.slots.values()))

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def _fold_functions(self) -> None:
        positions = [
            i for i, s in enumerate(self.symbols) if isinstance(s, FunctionMark)
        ]
        # Right to left, so in "sin cos x" the inner application exists
        # before the outer one needs it.
        for i in reversed(positions):
            mark = self.symbols[i]
            if i + 1 >= len(self.symbols):
                raise MissingOperand(
                    f"function {mark.kind.value!r} has no argument",
                    position=mark.position,
                )
            (operand, height), (_, end) = self._take(i + 1)
            self._store(
                i, FunctionApplication(mark.kind, operand), height + 1, (i, end)
            )

    def _fold_binary(self, op: BinaryOperator) -> None:
        positions = [
            i
            for i, s in enumerate(self.symbols)
            if isinstance(s, OperatorMark) and s.op is op and self.owner[i] is None
        ]
        for i in positions:
            mark = self.symbols[i]
            if i == 0 or i + 1 >= len(self.symbols):
                side = "left" if i == 0 else "right"
                raise MissingOperand(
                    f"operator {op.value!r} has no {side} operand",
                    position=mark.position,
                )
            (left, left_height), (start, _) = self._take(i - 1)
            (right, right_height), (_, end) = self._take(i + 1)
            self._store(
                i,
                BinaryOperation(op, left, right),
                max(left_height, right_height) + 1,
                (start, end),
            )

    # ------------------------------------------------------------------
    # Slot bookkeeping
    # ------------------------------------------------------------------

    def _take(self, position: int) -> tuple[_Resolved, tuple[int, int]]:
        """Consume the operand at *position*.

        *position* is always an unfolded symbol or the end of a span.
        Returns the operand and the span it covers; a folded group is
        removed from the table.
        """
        key = self.owner[position]
        if key is not None:
            return self.slots.pop(key), self.spans.pop(key)
        operand = _operand_value(self.symbols[position], self.settings, self.depth)
        return operand, (position, position)

    def _store(
        self, key: int, value: ExpressionValue, height: int, span: tuple[int, int]
    ) -> None:
        if height > self.settings.max_height:
            raise TooDeeplyNested(
                self.settings.max_height,
                self.symbols[key].position,
                what="expression tree",
            )
        start, end = span
        self.slots[key] = (value, height)
        self.spans[key] = span
        self.owner[start] = key
        self.owner[key] = key
        self.owner[end] = key
