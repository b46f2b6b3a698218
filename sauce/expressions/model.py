"""
Expression AST.

Node classes for the template expression language: literals, key paths,
indexing, unary/binary arithmetic, comparisons and logical operators.
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Any, List


class ExprType(Enum):
    """Expression node kinds."""
    LITERAL = "literal"
    PATH = "path"
    INDEX = "index"
    UNARY = "unary"
    ARITHMETIC = "arithmetic"
    COMPARISON = "comparison"
    AND = "and"
    OR = "or"
    NOT = "not"
    GROUP = "group"  # explicit parentheses


@dataclass
class Expression(ABC):
    """Base class for all expression nodes."""

    @abstractmethod
    def get_type(self) -> ExprType:
        """Returns the node kind."""
        pass

    def __str__(self) -> str:
        return self._to_string()

    @abstractmethod
    def _to_string(self) -> str:
        pass


@dataclass
class LiteralExpr(Expression):
    """Number, string, boolean or null literal."""
    value: Any

    def get_type(self) -> ExprType:
        return ExprType.LITERAL

    def _to_string(self) -> str:
        if self.value is None:
            return "null"
        return json.dumps(self.value, ensure_ascii=False)


@dataclass
class PathExpr(Expression):
    """
    Dotted key path: user.address.city

    Resolved through the render context, innermost scope first,
    then against the model.
    """
    segments: List[str]

    @property
    def key_path(self) -> str:
        return ".".join(self.segments)

    def get_type(self) -> ExprType:
        return ExprType.PATH

    def _to_string(self) -> str:
        return self.key_path


@dataclass
class IndexExpr(Expression):
    """Subscript: items[0], user["name"]"""
    target: Expression
    index: Expression

    def get_type(self) -> ExprType:
        return ExprType.INDEX

    def _to_string(self) -> str:
        return f"{self.target}[{self.index}]"


@dataclass
class UnaryExpr(Expression):
    """Sign operator: -x, +x"""
    operator: str
    operand: Expression

    def get_type(self) -> ExprType:
        return ExprType.UNARY

    def _to_string(self) -> str:
        return f"{self.operator}{self.operand}"


@dataclass
class ArithmeticExpr(Expression):
    """left (+ - * / %) right"""
    left: Expression
    right: Expression
    operator: str

    def get_type(self) -> ExprType:
        return ExprType.ARITHMETIC

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass
class ComparisonExpr(Expression):
    """left (== != < <= > >=) right; '=' and '<>' are normalized by the parser."""
    left: Expression
    right: Expression
    operator: str

    def get_type(self) -> ExprType:
        return ExprType.COMPARISON

    def _to_string(self) -> str:
        return f"{self.left} {self.operator} {self.right}"


@dataclass
class LogicalExpr(Expression):
    """
    Logical conjunction / disjunction: left and right, left or right

    Both short-circuit.
    """
    left: Expression
    right: Expression
    operator: ExprType  # AND or OR

    def get_type(self) -> ExprType:
        return self.operator

    def _to_string(self) -> str:
        op_str = "and" if self.operator == ExprType.AND else "or"
        return f"{self.left} {op_str} {self.right}"


@dataclass
class NotExpr(Expression):
    """Negation: not x, !x"""
    operand: Expression

    def get_type(self) -> ExprType:
        return ExprType.NOT

    def _to_string(self) -> str:
        return f"not {self.operand}"


@dataclass
class GroupExpr(Expression):
    """Parenthesized expression."""
    expression: Expression

    def get_type(self) -> ExprType:
        return ExprType.GROUP

    def _to_string(self) -> str:
        return f"({self.expression})"


__all__ = [
    "ExprType",
    "Expression",
    "LiteralExpr",
    "PathExpr",
    "IndexExpr",
    "UnaryExpr",
    "ArithmeticExpr",
    "ComparisonExpr",
    "LogicalExpr",
    "NotExpr",
    "GroupExpr",
]
