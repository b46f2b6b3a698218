"""
Whitespace trimmer.

Removes the structural whitespace a control tag leaves behind when it sits
on a line of its own:

- spaces and tabs leading a trimmable tag are removed;
- spaces, tabs and a single line break trailing a trimmable tag are removed;
- nothing is removed if either of those line fragments contains anything
  other than whitespace.

Adjacency is decided on the flat previous/next chain, not on the nesting.

A single pass is not idempotent: each pass can cut one more line break from
a run of blank lines. Trees are therefore trimmed once and flagged.
"""

from __future__ import annotations

import re
from typing import Optional

from .nodes import NodeType, SyntaxNode, SyntaxTree

_LINE_BREAK = re.compile(r'\r\n|[\n\r\u2028\u2029\x85]')


def _last_line_start(text: str) -> int:
    """Offset where the last line of text begins."""
    start = 0
    for m in _LINE_BREAK.finditer(text):
        start = m.end()
    return start


def _first_line_end(text: str) -> int:
    """Offset just past the first line of text, its line break included."""
    m = _LINE_BREAK.search(text)
    return m.end() if m else len(text)


def _text_neighbour(node: Optional[SyntaxNode]) -> Optional[SyntaxNode]:
    if node is not None and node.type is NodeType.TEXT:
        return node
    return None


def _trim_node(tree: SyntaxTree, node: SyntaxNode) -> None:
    before = _text_neighbour(tree.previous(node))
    after = _text_neighbour(tree.next(node))

    start_cut: Optional[int] = None
    end_cut: Optional[int] = None

    if before is not None:
        start_cut = _last_line_start(before.content)
        if before.content[start_cut:].strip():
            return

    if after is not None:
        end_cut = _first_line_end(after.content)
        if after.content[:end_cut].strip():
            return

    if before is not None and start_cut is not None:
        before.content = before.content[:start_cut]
    if after is not None and end_cut is not None:
        after.content = after.content[end_cut:]


def _trim_children(tree: SyntaxTree, parent: SyntaxNode) -> None:
    for child in tree.children(parent):
        if child.type.is_trimmable:
            _trim_node(tree, child)
        if child.children:
            _trim_children(tree, child)


def trim_whitespace(tree: SyntaxTree) -> SyntaxTree:
    """
    Trims structural whitespace in place, pre-order over the nesting.

    A tree is trimmed at most once: SyntaxTree.trimmed is set after the
    pass, and calling this again on a flagged tree is a no-op.

    Returns:
        The same tree, for chaining
    """
    if tree.trimmed:
        return tree
    _trim_children(tree, tree.root)
    tree.trimmed = True
    return tree


__all__ = ["trim_whitespace"]
