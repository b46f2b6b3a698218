"""
Recursive-descent parser for template expressions.

Grammar:
expression  → or_expr
or_expr     → and_expr (("or" | "||") and_expr)*
and_expr    → not_expr (("and" | "&&") not_expr)*
not_expr    → ("not" | "!") not_expr | comparison
comparison  → additive (("==" | "=" | "!=" | "<>" | "<" | "<=" | ">" | ">=") additive)?
additive    → term (("+" | "-") term)*
term        → unary (("*" | "/" | "%") unary)*
unary       → ("-" | "+") unary | postfix
postfix     → primary ("[" expression "]")*
primary     → NUMBER | STRING | "true" | "false" | "null" | "nil"
            | path | "(" expression ")"
path        → IDENTIFIER ("." (IDENTIFIER | NUMBER))*
"""

from __future__ import annotations

from typing import List

from .errors import ExpressionSyntaxError
from .lexer import ExpressionLexer, Token
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

_COMPARISON_OPERATORS = {
    "==": "==",
    "=": "==",
    "!=": "!=",
    "<>": "!=",
    "<": "<",
    "<=": "<=",
    ">": ">",
    ">=": ">=",
}

_KEYWORD_LITERALS = {
    "true": True,
    "false": False,
    "null": None,
    "nil": None,
}


def _parse_number(text: str):
    if any(c in text for c in ".eE"):
        return float(text)
    return int(text)


class ExpressionParser:
    """
    Recursive-descent parser.

    Turns the token list into an AST honoring operator precedence and
    parenthesized grouping.
    """

    def __init__(self):
        self.lexer = ExpressionLexer()
        self._tokens: List[Token] = []
        self._position = 0

    def parse(self, text: str) -> Expression:
        """
        Parses an expression string into an AST.

        Args:
            text: Expression string

        Returns:
            Root AST node

        Raises:
            ExpressionSyntaxError: On a syntax error or empty input
        """
        self._tokens = self.lexer.tokenize(text)
        self._position = 0

        if self._is_at_end():
            raise ExpressionSyntaxError("Empty expression", 0)

        result = self._parse_or()

        if not self._is_at_end():
            current = self._current_token()
            raise ExpressionSyntaxError(f"Unexpected token '{current.value}'", current.position)

        return result

    def _parse_or(self) -> Expression:
        """Lowest precedence: or / ||."""
        left = self._parse_and()
        while self._match_keyword("or") or self._match_operator("||"):
            right = self._parse_and()
            left = LogicalExpr(left=left, right=right, operator=ExprType.OR)
        return left

    def _parse_and(self) -> Expression:
        left = self._parse_not()
        while self._match_keyword("and") or self._match_operator("&&"):
            right = self._parse_not()
            left = LogicalExpr(left=left, right=right, operator=ExprType.AND)
        return left

    def _parse_not(self) -> Expression:
        if self._match_keyword("not") or self._match_operator("!"):
            # Right-associative
            return NotExpr(operand=self._parse_not())
        return self._parse_comparison()

    def _parse_comparison(self) -> Expression:
        left = self._parse_additive()
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value in _COMPARISON_OPERATORS:
            self._advance()
            right = self._parse_additive()
            return ComparisonExpr(left=left, right=right, operator=_COMPARISON_OPERATORS[current.value])
        return left

    def _parse_additive(self) -> Expression:
        left = self._parse_term()
        while True:
            operator = self._match_any_operator("+", "-")
            if operator is None:
                return left
            left = ArithmeticExpr(left=left, right=self._parse_term(), operator=operator)

    def _parse_term(self) -> Expression:
        left = self._parse_unary()
        while True:
            operator = self._match_any_operator("*", "/", "%")
            if operator is None:
                return left
            left = ArithmeticExpr(left=left, right=self._parse_unary(), operator=operator)

    def _parse_unary(self) -> Expression:
        operator = self._match_any_operator("-", "+")
        if operator is not None:
            return UnaryExpr(operator=operator, operand=self._parse_unary())
        return self._parse_postfix()

    def _parse_postfix(self) -> Expression:
        expr = self._parse_primary()
        while self._match_symbol("["):
            index = self._parse_or()
            if not self._match_symbol("]"):
                raise ExpressionSyntaxError("Expected ']' after index", self._current_position())
            expr = IndexExpr(target=expr, index=index)
        return expr

    def _parse_primary(self) -> Expression:
        """Atoms and parenthesized groups."""
        if self._match_symbol("("):
            expr = self._parse_or()
            if not self._match_symbol(")"):
                raise ExpressionSyntaxError("Expected ')' after grouped expression", self._current_position())
            return GroupExpr(expression=expr)

        current = self._current_token()

        if current.type == 'NUMBER':
            self._advance()
            return LiteralExpr(value=_parse_number(current.value))

        if current.type == 'STRING':
            self._advance()
            return LiteralExpr(value=current.value)

        if current.type == 'KEYWORD' and current.value in _KEYWORD_LITERALS:
            self._advance()
            return LiteralExpr(value=_KEYWORD_LITERALS[current.value])

        if current.type == 'IDENTIFIER':
            return self._parse_path()

        if current.type == 'EOF':
            raise ExpressionSyntaxError("Unexpected end of expression", current.position)
        raise ExpressionSyntaxError(f"Unexpected token '{current.value}'", current.position)

    def _parse_path(self) -> PathExpr:
        segments = [self._advance().value]
        while self._match_symbol("."):
            current = self._current_token()
            if current.type in ('IDENTIFIER', 'KEYWORD'):
                segments.append(self._advance().value)
            elif current.type == 'NUMBER' and current.value.replace(".", "").isdigit():
                # 'items.0.1' lexes the tail as the number '0.1'
                segments.extend(self._advance().value.split("."))
            else:
                raise ExpressionSyntaxError("Expected key after '.'", current.position)
        return PathExpr(segments=segments)

    # Token helpers

    def _current_token(self) -> Token:
        if self._position >= len(self._tokens):
            end = self._tokens[-1].position if self._tokens else 0
            return Token(type='EOF', value='', position=end)
        return self._tokens[self._position]

    def _current_position(self) -> int:
        return self._current_token().position

    def _is_at_end(self) -> bool:
        return self._current_token().type == 'EOF'

    def _advance(self) -> Token:
        token = self._current_token()
        if not self._is_at_end():
            self._position += 1
        return token

    def _match_keyword(self, keyword: str) -> bool:
        current = self._current_token()
        if current.type == 'KEYWORD' and current.value == keyword:
            self._advance()
            return True
        return False

    def _match_operator(self, operator: str) -> bool:
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value == operator:
            self._advance()
            return True
        return False

    def _match_any_operator(self, *operators: str):
        current = self._current_token()
        if current.type == 'OPERATOR' and current.value in operators:
            self._advance()
            return current.value
        return None

    def _match_symbol(self, symbol: str) -> bool:
        current = self._current_token()
        if current.type == 'SYMBOL' and current.value == symbol:
            self._advance()
            return True
        return False


def parse_expression(text: str) -> Expression:
    """Parses an expression string with a fresh parser."""
    return ExpressionParser().parse(text)


__all__ = ["ExpressionParser", "parse_expression"]
