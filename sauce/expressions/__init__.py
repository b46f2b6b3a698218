"""
Template expression language.

Provides tokenizing, parsing and evaluation of the expressions used in
value tags, variable assignments, loop sources and if / else if predicates.
"""

from .errors import ExpressionError, ExpressionSyntaxError, ExpressionEvaluationError
from .evaluator import (
    ExpressionEvaluator,
    KeyPathResolver,
    evaluate_expression_string,
    evaluate_predicate,
    fetch_value,
)
from .lexer import ExpressionLexer, Token
from .parser import ExpressionParser, parse_expression
from .values import NULL, is_absent, is_truthy, stringify

__all__ = [
    # Statement-level entry points
    "fetch_value",
    "evaluate_predicate",
    "evaluate_expression_string",

    # Components
    "ExpressionLexer",
    "ExpressionParser",
    "ExpressionEvaluator",
    "KeyPathResolver",
    "Token",
    "parse_expression",

    # Values
    "NULL",
    "is_absent",
    "is_truthy",
    "stringify",

    # Exceptions
    "ExpressionError",
    "ExpressionSyntaxError",
    "ExpressionEvaluationError",
]
