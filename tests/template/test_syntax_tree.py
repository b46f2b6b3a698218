"""
Tests for the syntax tree arena and its diagnostic dump.
"""

from sauce.template.builder import build_tree
from sauce.template.nodes import NodeType, SyntaxTree, format_tree


class TestNodeType:

    def test_branch_starts(self):
        starts = {t for t in NodeType if t.is_branch_start}
        assert starts == {NodeType.IF, NodeType.ELSE_IF, NodeType.ELSE, NodeType.FOR_EACH}

    def test_branch_ends(self):
        ends = {t for t in NodeType if t.is_branch_end}
        assert ends == {NodeType.ELSE_IF, NodeType.ELSE, NodeType.END}

    def test_text_and_value_are_not_trimmable(self):
        assert not NodeType.TEXT.is_trimmable
        assert not NodeType.VALUE.is_trimmable
        assert not NodeType.ROOT.is_trimmable
        assert NodeType.DEBUG.is_trimmable
        assert NodeType.VARIABLE.is_trimmable


class TestSyntaxTree:

    def test_new_tree_has_root(self):
        tree = SyntaxTree()
        assert len(tree) == 1
        assert tree.root.index == 0
        assert tree.root.type is NodeType.ROOT
        assert tree.trimmed is False

    def test_attach_and_link(self):
        tree = SyntaxTree()
        text = tree.add(NodeType.TEXT, "hi")
        tree.attach(text, tree.root)
        tree.link_after(text, tree.root)

        assert tree.children(tree.root) == [text]
        assert tree.parent(text) is tree.root
        assert tree.next(tree.root) is text
        assert tree.previous(text) is tree.root
        assert tree.next(text) is None

    def test_walk_yields_depths(self):
        """Pre-order over the nesting, with depth"""
        tree = build_tree("{% if(x) %}a{% end %}")
        walked = [(node.type, depth) for node, depth in tree.walk()]
        assert walked == [
            (NodeType.ROOT, 0),
            (NodeType.IF, 1),
            (NodeType.TEXT, 2),
            (NodeType.END, 1),
        ]


class TestFormatTree:

    def test_types_only(self):
        tree = build_tree("{% if(x) %}a{% end %}")
        assert format_tree(tree) == "Root\n\tIf\n\t\tText\n\tEnd"

    def test_with_contents(self):
        tree = build_tree("{% if(x) %}a{% end %}")
        assert format_tree(tree, contents=True) == (
            'Root: ""\n'
            '\tIf: "if(x)"\n'
            '\t\tText: "a"\n'
            '\tEnd: "end"'
        )

    def test_loop_nesting(self):
        tree = build_tree("{% foreach(n in xs) %}{% n %},{% end %}")
        assert format_tree(tree) == "Root\n\tForEach\n\t\tValue\n\t\tText\n\tEnd"
