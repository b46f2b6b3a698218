"""
Statement classifier.

Maps a trimmed tag body to a node type plus its parsed payload. Matchers are
tried in a fixed order; the first one that matches wins and anything left
over becomes a Value statement.

Recognized forms (keywords are case-insensitive):
- var NAME = EXPR / NAME = EXPR      -> Variable
- if( PREDICATE )                    -> If
- else if( PREDICATE )               -> ElseIf
- else                               -> Else
- end                                -> End
- foreach( NAME in EXPR )            -> ForEach
- debug( EXPR )                      -> Debug
- anything else                      -> Value
"""

from __future__ import annotations

import re
from typing import Callable, List, Optional

from .nodes import NodeType, Statement

_FLAGS = re.IGNORECASE | re.DOTALL

# '=' must not start '==', so that 'x == 1' stays a Value expression
_VARIABLE = re.compile(r'^(?:(var)\s+)?([A-Za-z_][A-Za-z0-9_]*)\s*=(?!=)\s*(.*)$', _FLAGS)

# The closing ')' is optional: 'if(x > 1' still yields the predicate 'x > 1'
_IF = re.compile(r'^if\s*\((.*?)(?:\)\s*)?$', _FLAGS)
_ELSE_IF = re.compile(r'^else\s+if\s*\((.*?)(?:\)\s*)?$', _FLAGS)
_ELSE = re.compile(r'^else\b', _FLAGS)
_END = re.compile(r'^end\b', _FLAGS)
_FOR_EACH = re.compile(r'^foreach\s*\(', _FLAGS)
_FOR_EACH_HEADER = re.compile(
    r'^foreach\s*\(\s*([A-Za-z_][A-Za-z0-9_]*)\s+in\s+(.*?)(?:\)\s*)?$', _FLAGS
)
_DEBUG = re.compile(r'^debug\s*\((.*?)(?:\)\s*)?$', _FLAGS)

Matcher = Callable[[str], Optional[Statement]]


def _match_variable(body: str) -> Optional[Statement]:
    m = _VARIABLE.match(body)
    if not m:
        return None
    return Statement(
        type=NodeType.VARIABLE,
        content=body,
        expression=m.group(3).strip(),
        name=m.group(2),
        declaration=m.group(1) is not None,
    )


def _match_if(body: str) -> Optional[Statement]:
    m = _IF.match(body)
    if not m:
        return None
    return Statement(type=NodeType.IF, content=body, expression=m.group(1).strip())


def _match_else_if(body: str) -> Optional[Statement]:
    m = _ELSE_IF.match(body)
    if not m:
        return None
    return Statement(type=NodeType.ELSE_IF, content=body, expression=m.group(1).strip())


def _match_else(body: str) -> Optional[Statement]:
    if not _ELSE.match(body):
        return None
    return Statement(type=NodeType.ELSE, content=body)


def _match_end(body: str) -> Optional[Statement]:
    if not _END.match(body):
        return None
    return Statement(type=NodeType.END, content=body)


def _match_for_each(body: str) -> Optional[Statement]:
    if not _FOR_EACH.match(body):
        return None
    header = _FOR_EACH_HEADER.match(body)
    if not header:
        # Malformed header: still a loop (it opens a branch), but with no source
        return Statement(type=NodeType.FOR_EACH, content=body)
    return Statement(
        type=NodeType.FOR_EACH,
        content=body,
        expression=header.group(2).strip(),
        name=header.group(1),
    )


def _match_debug(body: str) -> Optional[Statement]:
    m = _DEBUG.match(body)
    if not m:
        return None
    return Statement(type=NodeType.DEBUG, content=body, expression=m.group(1).strip())


class StatementClassifier:
    """
    Ordered list of matchers.

    The order is significant: 'end = 1' is an assignment, not an End tag,
    and 'else if(...)' must be tested before the bare 'else'.
    """

    MATCHERS: List[Matcher] = [
        _match_variable,
        _match_if,
        _match_else_if,
        _match_else,
        _match_end,
        _match_for_each,
        _match_debug,
    ]

    def classify(self, body: str) -> Statement:
        """
        Classifies a tag body.

        Args:
            body: Tag body; surrounding whitespace is stripped first

        Returns:
            Parsed statement; Value when no other form matches
        """
        body = body.strip()
        for matcher in self.MATCHERS:
            statement = matcher(body)
            if statement is not None:
                return statement
        return Statement(type=NodeType.VALUE, content=body, expression=body)


_default_classifier = StatementClassifier()


def classify_statement(body: str) -> Statement:
    """Classifies a tag body with the default classifier."""
    return _default_classifier.classify(body)


__all__ = [
    "Matcher",
    "StatementClassifier",
    "classify_statement",
]
