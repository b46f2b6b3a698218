"""
Template compilation and rendering.

Pipeline: source text -> TagScanner -> StatementClassifier -> TreeBuilder
-> trim_whitespace (optional) -> TemplateRenderer.
"""

from .builder import TreeBuilder, build_tree
from .classifier import StatementClassifier, classify_statement
from .nodes import NodeType, Statement, SyntaxNode, SyntaxTree, format_tree
from .renderer import TemplateRenderer
from .scanner import (
    DEFAULT_MARKERS,
    Markers,
    StatementToken,
    TagScanner,
    TextToken,
    scan_tags,
)
from .trimmer import trim_whitespace

__all__ = [
    # Tree model
    "NodeType",
    "Statement",
    "SyntaxNode",
    "SyntaxTree",
    "format_tree",

    # Pipeline stages
    "TagScanner",
    "TextToken",
    "StatementToken",
    "Markers",
    "DEFAULT_MARKERS",
    "scan_tags",
    "StatementClassifier",
    "classify_statement",
    "TreeBuilder",
    "build_tree",
    "trim_whitespace",
    "TemplateRenderer",
]
