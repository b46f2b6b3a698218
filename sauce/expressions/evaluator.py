"""
Expression evaluator.

Walks the expression AST and computes its value against a key-path
resolver (the render context). Also hosts the statement-level entry points
used by the renderer: fetch_value() with its JSON / expression / key-path
fallbacks, and evaluate_predicate() for if / else if.
"""

from __future__ import annotations

import json
import logging
import operator
from collections.abc import Mapping
from typing import Any, Callable, Dict, Protocol, cast

from .errors import ExpressionError, ExpressionEvaluationError
from .model import (
    ArithmeticExpr,
    ComparisonExpr,
    Expression,
    ExprType,
    GroupExpr,
    IndexExpr,
    LiteralExpr,
    LogicalExpr,
    NotExpr,
    PathExpr,
    UnaryExpr,
)
from .parser import ExpressionParser
from .values import NULL, is_absent, is_number, is_truthy

logger = logging.getLogger(__name__)


class KeyPathResolver(Protocol):
    """Anything that resolves a dotted key path to a value (or None)."""

    def get(self, key_path: str) -> Any:
        ...


_ORDERING: Dict[str, Callable[[Any, Any], bool]] = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_ARITHMETIC: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
    "/": operator.truediv,
    "%": operator.mod,
}


def _normalize(value: Any) -> Any:
    return None if value is NULL else value


class ExpressionEvaluator:
    """
    Evaluator for expression ASTs.

    Arithmetic on an absent operand yields absent; comparisons and logical
    operators always yield booleans.
    """

    def __init__(self, resolver: KeyPathResolver):
        """
        Args:
            resolver: Source of values for key paths (usually a RenderContext)
        """
        self.resolver = resolver

    def evaluate(self, expr: Expression) -> Any:
        """
        Computes the value of an expression.

        Raises:
            ExpressionEvaluationError: On type mismatch or division by zero
        """
        expr_type = expr.get_type()

        if expr_type == ExprType.LITERAL:
            return cast(LiteralExpr, expr).value
        elif expr_type == ExprType.PATH:
            return _normalize(self.resolver.get(cast(PathExpr, expr).key_path))
        elif expr_type == ExprType.INDEX:
            return self._evaluate_index(cast(IndexExpr, expr))
        elif expr_type == ExprType.UNARY:
            return self._evaluate_unary(cast(UnaryExpr, expr))
        elif expr_type == ExprType.ARITHMETIC:
            return self._evaluate_arithmetic(cast(ArithmeticExpr, expr))
        elif expr_type == ExprType.COMPARISON:
            return self._evaluate_comparison(cast(ComparisonExpr, expr))
        elif expr_type == ExprType.AND:
            return self._evaluate_and(cast(LogicalExpr, expr))
        elif expr_type == ExprType.OR:
            return self._evaluate_or(cast(LogicalExpr, expr))
        elif expr_type == ExprType.NOT:
            return not is_truthy(self.evaluate(cast(NotExpr, expr).operand))
        elif expr_type == ExprType.GROUP:
            return self.evaluate(cast(GroupExpr, expr).expression)
        else:
            raise ExpressionEvaluationError(f"Unknown expression type: {expr_type}")

    def _evaluate_index(self, expr: IndexExpr) -> Any:
        """
        items[0], user["name"]

        Out-of-range indices and missing keys are absent.
        """
        target = self.evaluate(expr.target)
        index = self.evaluate(expr.index)
        if is_absent(target) or is_absent(index):
            return None

        if isinstance(target, Mapping):
            try:
                return _normalize(target.get(index))
            except TypeError as e:
                raise ExpressionEvaluationError(f"Invalid mapping key: {e}") from e

        if isinstance(target, (list, tuple, str)):
            if isinstance(index, float) and index.is_integer():
                index = int(index)
            if not isinstance(index, int) or isinstance(index, bool):
                raise ExpressionEvaluationError(
                    f"Sequence index must be an integer, got {type(index).__name__}"
                )
            try:
                return _normalize(target[index])
            except IndexError:
                return None

        raise ExpressionEvaluationError(f"Value of type {type(target).__name__} is not subscriptable")

    def _evaluate_unary(self, expr: UnaryExpr) -> Any:
        operand = self.evaluate(expr.operand)
        if is_absent(operand):
            return None
        if not is_number(operand):
            raise ExpressionEvaluationError(
                f"Unary '{expr.operator}' needs a number, got {type(operand).__name__}"
            )
        return -operand if expr.operator == "-" else operand

    def _evaluate_arithmetic(self, expr: ArithmeticExpr) -> Any:
        left = self.evaluate(expr.left)
        right = self.evaluate(expr.right)
        if is_absent(left) or is_absent(right):
            return None

        op = expr.operator
        if op == "+" and isinstance(left, str) and isinstance(right, str):
            return left + right

        if not (is_number(left) and is_number(right)):
            raise ExpressionEvaluationError(
                f"Operator '{op}' not supported between "
                f"{type(left).__name__} and {type(right).__name__}"
            )

        if op in ("/", "%") and right == 0:
            raise ExpressionEvaluationError("Division by zero")
        try:
            return _ARITHMETIC[op](left, right)
        except OverflowError as e:
            raise ExpressionEvaluationError(f"Arithmetic overflow in '{op}': {e}") from e

    def _evaluate_comparison(self, expr: ComparisonExpr) -> bool:
        left = _normalize(self.evaluate(expr.left))
        right = _normalize(self.evaluate(expr.right))
        op = expr.operator

        if op == "==":
            return left == right
        if op == "!=":
            return left != right

        if left is None or right is None:
            return False
        comparable = (
            (is_number(left) and is_number(right))
            or (isinstance(left, str) and isinstance(right, str))
        )
        if not comparable:
            raise ExpressionEvaluationError(
                f"Cannot compare {type(left).__name__} and {type(right).__name__} with '{op}'"
            )
        return _ORDERING[op](left, right)

    def _evaluate_and(self, expr: LogicalExpr) -> bool:
        if not is_truthy(self.evaluate(expr.left)):
            return False
        return is_truthy(self.evaluate(expr.right))

    def _evaluate_or(self, expr: LogicalExpr) -> bool:
        if is_truthy(self.evaluate(expr.left)):
            return True
        return is_truthy(self.evaluate(expr.right))


def evaluate_expression_string(text: str, resolver: KeyPathResolver) -> Any:
    """
    Parses and evaluates an expression string.

    Raises:
        ExpressionSyntaxError: On a parse error
        ExpressionEvaluationError: On an evaluation error
    """
    expr = ExpressionParser().parse(text)
    return ExpressionEvaluator(resolver).evaluate(expr)


def fetch_value(
    statement: str,
    resolver: KeyPathResolver,
    allow_json: bool = True,
    allow_expressions: bool = True,
) -> Any:
    """
    Evaluates a statement string the way tags do.

    1. With allow_json, text starting with '[' or '{' is parsed as JSON.
       When that fails, evaluation continues with step 2 if expressions are
       allowed; otherwise the result is absent.
    2. With allow_expressions, the text is evaluated as an expression.
    3. Otherwise the whole text is a key path for the resolver.

    Failures never propagate: they are logged and yield None.

    Args:
        statement: Statement text (surrounding whitespace is ignored)
        resolver: Key path resolver
        allow_json: Try JSON literals first
        allow_expressions: Evaluate as an expression

    Returns:
        The value, or None when absent
    """
    text = statement.strip()
    if not text:
        return None

    if allow_json and text[0] in "[{":
        try:
            return json.loads(text)
        except ValueError as e:
            logger.debug("Not a JSON literal %r: %s", text, e)
            if not allow_expressions:
                return None

    if allow_expressions:
        try:
            return evaluate_expression_string(text, resolver)
        except ExpressionError as e:
            logger.debug("Failed to evaluate %r: %s", text, e)
            return None

    return _normalize(resolver.get(text))


def evaluate_predicate(text: str, resolver: KeyPathResolver) -> bool:
    """
    Evaluates an if / else if predicate.

    Empty predicates, failures and absent results are false.
    """
    text = text.strip()
    if not text:
        return False
    try:
        return is_truthy(evaluate_expression_string(text, resolver))
    except ExpressionError as e:
        logger.debug("Failed to evaluate predicate %r: %s", text, e)
        return False


__all__ = [
    "KeyPathResolver",
    "ExpressionEvaluator",
    "evaluate_expression_string",
    "fetch_value",
    "evaluate_predicate",
]
