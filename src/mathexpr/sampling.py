"""Evaluate one expression tree over many values of ``x``."""

from __future__ import annotations

from typing import Iterable

import polars as pl

from mathexpr.expressions.evaluator import evaluate
from mathexpr.expressions.tree import ExpressionValue
from mathexpr.logging import EventType, emit_info

SAMPLE_SCHEMA = {"x": pl.Float64, "y": pl.Float64}


def sample(tree: ExpressionValue, values: Iterable[float]) -> pl.DataFrame:
    """Tabulate *tree* at each value in *values*.

    Args:
        tree: A parsed or hand-built expression tree.
        values: Bindings for ``x``, in the order the rows should appear.

    Returns:
        A DataFrame with Float64 columns ``x`` and ``y``.  ``nan`` and
        infinities are kept as-is.
    """
    xs = [float(v) for v in values]
    ys = [evaluate(tree, v) for v in xs]
    df = pl.DataFrame({"x": xs, "y": ys}, schema=SAMPLE_SCHEMA)
    emit_info(
        EventType.sample_completed,
        f"Sampled {df.height} points",
        {"expression": str(tree), "rows": df.height},
    )
    return df
