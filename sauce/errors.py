"""
Base exceptions for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from SauceUserError.

Programming errors and bugs should NOT inherit from SauceUserError:
they will propagate with full tracebacks.
"""

from __future__ import annotations

from typing import Optional


class SauceUserError(Exception):
    """
    Base class for all user-facing errors in Sauce.

    These errors indicate problems that the user can fix:
    malformed templates, broken configuration files, unreadable data files.
    """
    pass


class TemplateParseError(SauceUserError):
    """Template source could not be turned into a syntax tree."""
    pass


class UnmatchedCloseError(TemplateParseError):
    """
    A branch-closing tag (else if / else / end) appeared with no open branch.

    Attributes:
        node_type: Name of the offending node type ("ElseIf", "Else", "End")
        content: Trimmed tag body as written in the template
        position: Offset of the tag's begin marker in the source, if known
    """

    def __init__(self, node_type: str, content: str, position: Optional[int] = None):
        self.node_type = node_type
        self.content = content
        self.position = position
        where = f" at offset {position}" if position is not None else ""
        super().__init__(
            f"Unmatched closing tag '{content}' ({node_type}){where}: no open branch to close"
        )


class ConfigError(SauceUserError):
    """Configuration file is unreadable or malformed."""
    pass


__all__ = [
    "SauceUserError",
    "TemplateParseError",
    "UnmatchedCloseError",
    "ConfigError",
]
