"""Parse expression text into an :mod:`mathexpr.expressions.tree`.

Supports:
- Numeric literals: ``3``, ``2.5``, ``.5``
- The free variable ``x``
- Binary operators ``+ - * / ^`` (tier order, see ``resolver``)
- Parenthesized groups, nested to ``settings.max_depth``
- Unary functions: sin cos tan sinh cosh tanh exp acos asin atan
  asinh acosh atanh ln
"""

from __future__ import annotations

from mathexpr.expressions.errors import ExpressionParseError
from mathexpr.expressions.resolver import resolve_text
from mathexpr.expressions.tree import ExpressionValue
from mathexpr.logging import EventType, emit_error, emit_info
from mathexpr.settings import DEFAULT_SETTINGS, ParserSettings


def parse(text: str, settings: ParserSettings | None = None) -> ExpressionValue:
    """Parse *text* into an expression tree.

    Args:
        text: The expression, e.g. ``"(80+x)^sin(x^2+(2*5))"``.
        settings: Optional parser settings.

    Returns:
        The fully resolved tree.  No partial tree is ever returned.

    Raises:
        ExpressionParseError: One of its subclasses, describing the
            first problem found.
    """
    settings = settings or DEFAULT_SETTINGS
    try:
        tree = resolve_text(text, settings)
    except ExpressionParseError as exc:
        emit_error(
            EventType.parse_failed,
            str(exc),
            {"text": text, "position": exc.position, "fragment": exc.fragment},
            error_code=exc.code,
        )
        raise
    emit_info(EventType.parse_completed, "Parsed expression", {"text": text})
    return tree
