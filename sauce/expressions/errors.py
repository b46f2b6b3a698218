"""
Errors of the expression layer.

None of them reach the caller of Template.render: a failing expression makes
its node contribute nothing (see evaluator.fetch_value).
"""

from __future__ import annotations


class ExpressionError(ValueError):
    """Base class for expression failures."""
    pass


class ExpressionSyntaxError(ExpressionError):
    """Expression text could not be tokenized or parsed."""

    def __init__(self, message: str, position: int):
        self.message = message
        self.position = position
        super().__init__(f"Parse error at position {position}: {message}")


class ExpressionEvaluationError(ExpressionError):
    """Well-formed expression that cannot be computed (type mismatch, division by zero)."""
    pass


__all__ = [
    "ExpressionError",
    "ExpressionSyntaxError",
    "ExpressionEvaluationError",
]
