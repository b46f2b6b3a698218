"""
Renderer.

Pre-order tree-walking interpreter: walks the children of each node in
order, drives the scope stack of the render context and the expression
evaluator, and collects output text.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .nodes import NodeType, SyntaxNode, SyntaxTree
from ..context import RenderContext
from ..diagnostics import DebugSink, log_sink
from ..expressions import evaluate_predicate, fetch_value, stringify

logger = logging.getLogger(__name__)

# A Value tag containing none of these is a bare key path
_EXPRESSION_CHARS = frozenset("*-+()[]=/0123456789")


class TemplateRenderer:
    """
    Interpreter over a built (and possibly trimmed) syntax tree.

    If / ElseIf / Else / End nodes are siblings under one parent, so the
    "has a clause matched yet" flag lives in the loop over that parent's
    children. Each clause opens its own scope; End closes the last one.
    """

    def __init__(
        self,
        tree: SyntaxTree,
        *,
        allow_json: bool = True,
        allow_expressions: bool = True,
        debug_sink: Optional[DebugSink] = None,
    ):
        """
        Args:
            tree: Syntax tree to interpret
            allow_json: Default JSON switch for assignments, loops and debug tags
            allow_expressions: Default expression switch for the same tags
            debug_sink: Receiver of {% debug %} output (logs by default)
        """
        self.tree = tree
        self.allow_json = allow_json
        self.allow_expressions = allow_expressions
        self.debug_sink = debug_sink or log_sink

    def render(self, context: RenderContext) -> str:
        """
        Renders the whole tree.

        Args:
            context: Fresh render context holding the model

        Returns:
            Output text
        """
        output: List[str] = []
        self._render_children(self.tree.root, context, output)
        return "".join(output)

    def _render_children(self, node: SyntaxNode, context: RenderContext, output: List[str]) -> None:
        is_root = node.type is NodeType.ROOT
        if is_root:
            context.push()

        matched = False

        for child in self.tree.children(node):
            child_type = child.type

            if child_type is NodeType.TEXT:
                output.append(child.content)

            elif child_type is NodeType.IF:
                context.push()
                matched = self._evaluate_condition(child, context)
                if matched:
                    self._render_children(child, context, output)

            elif child_type is NodeType.ELSE_IF:
                context.pop()
                context.push()
                if not matched:
                    matched = self._evaluate_condition(child, context)
                    if matched:
                        self._render_children(child, context, output)

            elif child_type is NodeType.ELSE:
                context.pop()
                context.push()
                if not matched:
                    matched = True
                    self._render_children(child, context, output)

            elif child_type is NodeType.END:
                context.pop()
                matched = False

            elif child_type is NodeType.FOR_EACH:
                context.push()
                self._render_loop(child, context, output)

            elif child_type is NodeType.VARIABLE:
                self._bind_variable(child, context)

            elif child_type is NodeType.VALUE:
                value = self._evaluate_value(child, context)
                if value is not None:
                    output.append(stringify(value))

            elif child_type is NodeType.DEBUG:
                self._emit_debug(child, context)

        if is_root:
            context.pop()

    def _evaluate_condition(self, node: SyntaxNode, context: RenderContext) -> bool:
        return evaluate_predicate(node.statement.expression, context)

    def _render_loop(self, node: SyntaxNode, context: RenderContext, output: List[str]) -> None:
        """
        Renders the loop body once per element of the source list.

        Each iteration runs in its own nested scope binding the loop variable
        and '<name>Index' (0-based). The loop's outer scope is closed later
        by the matching End.
        """
        statement = node.statement
        if not statement.name:
            logger.debug("Malformed loop header %r: skipping", node.content)
            return

        items = fetch_value(
            statement.expression,
            context,
            allow_json=self.allow_json,
            allow_expressions=self.allow_expressions,
        )
        if not isinstance(items, (list, tuple)):
            if items is not None:
                logger.debug(
                    "Loop source %r is %s, not a list: skipping",
                    statement.expression, type(items).__name__,
                )
            return

        index_name = f"{statement.name}Index"
        for index, item in enumerate(items):
            context.push()
            context.set(statement.name, item)
            context.set(index_name, index)
            self._render_children(node, context, output)
            context.pop()

    def _bind_variable(self, node: SyntaxNode, context: RenderContext) -> None:
        # 'var x = ...' and 'x = ...' bind identically
        statement = node.statement
        value = fetch_value(
            statement.expression,
            context,
            allow_json=self.allow_json,
            allow_expressions=self.allow_expressions,
        )
        context.set(statement.name, value)

    def _evaluate_value(self, node: SyntaxNode, context: RenderContext):
        content = node.content
        is_expression = any(c in _EXPRESSION_CHARS for c in content)
        return fetch_value(content, context, allow_json=False, allow_expressions=is_expression)

    def _emit_debug(self, node: SyntaxNode, context: RenderContext) -> None:
        value = fetch_value(
            node.statement.expression,
            context,
            allow_json=self.allow_json,
            allow_expressions=self.allow_expressions,
        )
        if value is not None:
            self.debug_sink(stringify(value))


__all__ = ["TemplateRenderer"]
