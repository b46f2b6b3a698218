"""
Syntax tree nodes.

The tree is stored as an arena: a flat, indexable list of nodes owned by
SyntaxTree. Every node refers to its parent, children and its neighbours in
the flat document-order chain by index. Two traversal orders live over the
same nodes:

- parent/children: the nesting of branches ({% if %}, {% foreach %} ...)
- previous/next: document emission order, threading straight through
  branch boundaries (used by the whitespace trimmer)
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple


class NodeType(enum.Enum):
    """Variants of syntax nodes."""
    ROOT = "Root"
    TEXT = "Text"
    VALUE = "Value"
    VARIABLE = "Variable"
    IF = "If"
    ELSE_IF = "ElseIf"
    ELSE = "Else"
    FOR_EACH = "ForEach"
    END = "End"
    DEBUG = "Debug"

    @property
    def is_branch_start(self) -> bool:
        """Node opens a nested level: subsequent nodes become its children."""
        return self in _BRANCH_STARTS

    @property
    def is_branch_end(self) -> bool:
        """Node closes the currently open level before being attached."""
        return self in _BRANCH_ENDS

    @property
    def is_trimmable(self) -> bool:
        """
        Node is eligible for whitespace trimming.

        Text and Value nodes are never trimmable: interpolated values must
        keep the whitespace around them.
        """
        return self in _TRIMMABLE


_BRANCH_STARTS = frozenset({NodeType.IF, NodeType.ELSE_IF, NodeType.ELSE, NodeType.FOR_EACH})
_BRANCH_ENDS = frozenset({NodeType.ELSE_IF, NodeType.ELSE, NodeType.END})
_TRIMMABLE = frozenset({
    NodeType.VARIABLE,
    NodeType.IF,
    NodeType.ELSE_IF,
    NodeType.ELSE,
    NodeType.END,
    NodeType.FOR_EACH,
    NodeType.DEBUG,
})


@dataclass(frozen=True)
class Statement:
    """
    Parsed payload of a tag body.

    Attributes:
        type: Node variant the body was classified as
        content: Whole trimmed tag body
        expression: Predicate (If/ElseIf), loop source (ForEach), assigned
            expression (Variable), inspected expression (Debug) or the whole
            body (Value). Empty for Else/End.
        name: Variable name or loop variable name
        declaration: True when a Variable statement starts with 'var'
    """
    type: NodeType
    content: str
    expression: str = ""
    name: Optional[str] = None
    declaration: bool = False


@dataclass
class SyntaxNode:
    """
    One node of the arena.

    Content is mutable: the whitespace trimmer rewrites Text nodes in place.
    """
    index: int
    type: NodeType
    content: str = ""
    statement: Optional[Statement] = None
    position: Optional[int] = None  # offset of the token in the source
    parent: Optional[int] = None
    children: List[int] = field(default_factory=list)
    previous: Optional[int] = None
    next: Optional[int] = None

    def __repr__(self) -> str:
        return f"SyntaxNode({self.type.value}, {self.content!r}, #{self.index})"


class SyntaxTree:
    """
    Arena of syntax nodes with a single Root at index 0.
    """

    def __init__(self):
        self.nodes: List[SyntaxNode] = []
        self.trimmed = False
        self.add(NodeType.ROOT)

    @property
    def root(self) -> SyntaxNode:
        return self.nodes[0]

    def __len__(self) -> int:
        return len(self.nodes)

    def add(
        self,
        node_type: NodeType,
        content: str = "",
        statement: Optional[Statement] = None,
        position: Optional[int] = None,
    ) -> SyntaxNode:
        """Creates a detached node owned by the arena."""
        node = SyntaxNode(
            index=len(self.nodes),
            type=node_type,
            content=content,
            statement=statement,
            position=position,
        )
        self.nodes.append(node)
        return node

    def attach(self, node: SyntaxNode, parent: SyntaxNode) -> None:
        """Appends node to the children of parent."""
        node.parent = parent.index
        parent.children.append(node.index)

    def link_after(self, node: SyntaxNode, previous: SyntaxNode) -> None:
        """Threads node into the flat chain right after previous."""
        node.previous = previous.index
        previous.next = node.index

    def node(self, index: int) -> SyntaxNode:
        return self.nodes[index]

    def parent(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        return None if node.parent is None else self.nodes[node.parent]

    def children(self, node: SyntaxNode) -> List[SyntaxNode]:
        return [self.nodes[i] for i in node.children]

    def previous(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        return None if node.previous is None else self.nodes[node.previous]

    def next(self, node: SyntaxNode) -> Optional[SyntaxNode]:
        return None if node.next is None else self.nodes[node.next]

    def walk(self) -> Iterator[Tuple[SyntaxNode, int]]:
        """Pre-order traversal over the nesting, yielding (node, depth)."""
        stack: List[Tuple[SyntaxNode, int]] = [(self.root, 0)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            for child_index in reversed(node.children):
                stack.append((self.nodes[child_index], depth + 1))

    def chain(self) -> Iterator[SyntaxNode]:
        """Document-order traversal over the flat previous/next chain."""
        node: Optional[SyntaxNode] = self.root
        while node is not None:
            yield node
            node = self.next(node)

    def node_types(self) -> List[NodeType]:
        """Node types in document order (Root first)."""
        return [node.type for node in self.chain()]


def format_tree(tree: SyntaxTree, contents: bool = False) -> str:
    """
    Formats the tree for debugging: one node per line, tab-indented by depth.

    Args:
        tree: Tree to dump
        contents: Also show the quoted content of every node

    Returns:
        Multi-line dump without a trailing newline
    """
    lines = []
    for node, depth in tree.walk():
        desc = node.type.value
        if contents:
            desc += f': "{node.content}"'
        lines.append("\t" * depth + desc)
    return "\n".join(lines)


__all__ = [
    "NodeType",
    "Statement",
    "SyntaxNode",
    "SyntaxTree",
    "format_tree",
]
