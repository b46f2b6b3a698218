"""
Tree builder.

Consumes the scanner's token stream, classifies statements and assembles
the nested syntax tree together with the flat document-order chain.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .classifier import StatementClassifier
from .nodes import NodeType, SyntaxTree
from .scanner import DEFAULT_MARKERS, Markers, ScanToken, TextToken, scan_tags
from ..errors import UnmatchedCloseError


class TreeBuilder:
    """
    Builds a SyntaxTree with a branch cursor.

    - If / ForEach open a nesting level that End closes.
    - ElseIf / Else close the previous clause and open the next one, so a
      whole if/else-if/else/end chain ends up as siblings under one parent,
      each clause holding its own body as children.
    """

    def __init__(self, classifier: Optional[StatementClassifier] = None):
        self.classifier = classifier or StatementClassifier()

    def build(self, tokens: Iterable[ScanToken]) -> SyntaxTree:
        """
        Builds the tree from scanner tokens.

        Args:
            tokens: Token stream from TagScanner

        Returns:
            Untrimmed syntax tree

        Raises:
            UnmatchedCloseError: A closing tag has no open branch to close
        """
        tree = SyntaxTree()
        cursor = tree.root
        previous = tree.root

        for token in tokens:
            if isinstance(token, TextToken):
                node = tree.add(NodeType.TEXT, token.text, position=token.position)
                tree.attach(node, cursor)
            else:
                statement = self.classifier.classify(token.body)
                node = tree.add(
                    statement.type,
                    statement.content,
                    statement=statement,
                    position=token.position,
                )

                if node.type.is_branch_end:
                    parent = tree.parent(cursor)
                    if parent is None:
                        raise UnmatchedCloseError(node.type.value, node.content, token.position)
                    cursor = parent

                tree.attach(node, cursor)

                if node.type.is_branch_start:
                    cursor = node

            tree.link_after(node, previous)
            previous = node

        return tree


def build_tree(source: str, markers: Markers = DEFAULT_MARKERS) -> SyntaxTree:
    """
    Convenience function: scan and build in one step (no trimming).

    Raises:
        UnmatchedCloseError: A closing tag has no open branch to close
    """
    return TreeBuilder().build(scan_tags(source, markers))


__all__ = ["TreeBuilder", "build_tree"]
