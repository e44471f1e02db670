"""mathexpr -- parse and evaluate single-variable math expressions."""

__version__ = "0.1.0"

from mathexpr.expressions import evaluate, parse  # noqa: E402

__all__ = ["__version__", "evaluate", "parse"]
