"""
Lexer for template expressions.

Splits an expression string into meaningful elements:
- Numbers and quoted strings
- Keywords (true, false, null, nil, and, or, not), case-insensitive
- Identifiers (key path segments)
- Operators (arithmetic, comparison, logical)
- Symbols (parentheses, brackets, dots)
- Whitespace (ignored)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import List

from .errors import ExpressionSyntaxError


@dataclass
class Token:
    """
    Expression token.

    Attributes:
        type: NUMBER, STRING, KEYWORD, IDENTIFIER, OPERATOR, SYMBOL or EOF
        value: Token text (keywords lowercased, strings unescaped)
        position: Offset in the expression string
    """
    type: str
    value: str
    position: int

    def __repr__(self):
        return f"Token({self.type}, '{self.value}', pos={self.position})"


_ESCAPES = {
    'n': '\n',
    't': '\t',
    'r': '\r',
    '0': '\0',
}

_ESCAPE_PATTERN = re.compile(r'\\(.)', re.DOTALL)


def _unescape(body: str) -> str:
    return _ESCAPE_PATTERN.sub(lambda m: _ESCAPES.get(m.group(1), m.group(1)), body)


class ExpressionLexer:
    """
    Lexer splitting an expression string into tokens.

    Numbers require a leading digit so that path segments such as
    'items.0' keep their dot as a SYMBOL.
    """

    # Token specs: (regex_pattern, token_type, ignore_flag)
    TOKEN_SPECS = [
        (r'\s+', 'WHITESPACE', True),

        (r'\d+(?:\.\d+)?(?:[eE][+-]?\d+)?', 'NUMBER', False),
        (r'"(?:[^"\\]|\\.)*"', 'STRING', False),
        (r"'(?:[^'\\]|\\.)*'", 'STRING', False),

        # Two-character operators before single-character ones
        (r'==|!=|<>|<=|>=|&&|\|\|', 'OPERATOR', False),
        (r'[-+*/%<>=!]', 'OPERATOR', False),

        (r'[()\[\].]', 'SYMBOL', False),

        # Keywords are recognized after capture
        (r'[A-Za-z_][A-Za-z0-9_]*', 'IDENTIFIER', False),

        # Unknown character (error)
        (r'.', 'UNKNOWN', False),
    ]

    KEYWORDS = {
        'true', 'false', 'null', 'nil', 'and', 'or', 'not'
    }

    def __init__(self):
        self._compiled_patterns = [
            (re.compile(pattern, re.DOTALL), token_type, ignore)
            for pattern, token_type, ignore in self.TOKEN_SPECS
        ]

    def tokenize(self, text: str) -> List[Token]:
        """
        Splits text into tokens.

        Args:
            text: Expression string

        Returns:
            List of tokens, EOF last

        Raises:
            ExpressionSyntaxError: On an unexpected character or unterminated string
        """
        tokens: List[Token] = []
        position = 0

        while position < len(text):
            for pattern, token_type, ignore in self._compiled_patterns:
                match = pattern.match(text, position)
                if not match:
                    continue

                value = match.group(0)
                if not ignore:
                    tokens.append(self._make_token(token_type, value, position))
                position = match.end()
                break

        tokens.append(Token(type='EOF', value='', position=position))
        return tokens

    def _make_token(self, token_type: str, value: str, position: int) -> Token:
        if token_type == 'UNKNOWN':
            if value in ('"', "'"):
                raise ExpressionSyntaxError("Unterminated string literal", position)
            raise ExpressionSyntaxError(f"Unexpected character '{value}'", position)

        if token_type == 'STRING':
            return Token(type='STRING', value=_unescape(value[1:-1]), position=position)

        if token_type == 'IDENTIFIER' and value.lower() in self.KEYWORDS:
            return Token(type='KEYWORD', value=value.lower(), position=position)

        return Token(type=token_type, value=value, position=position)


__all__ = ["Token", "ExpressionLexer"]
