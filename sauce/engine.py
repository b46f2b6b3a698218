"""
Template entry point.

Template owns the source text, the marker pair and the trimming flag, and
caches the built (and trimmed) syntax tree until one of them changes.

Usage::

    from sauce import Template

    tpl = Template("Hello {% name %}!")
    tpl.render({"name": "World"})   # 'Hello World!'
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Optional, Sequence, TextIO

from .config import TemplateOptions, load_options
from .context import ModelAccessor, RenderContext
from .diagnostics import DebugSink, resolve_debug_sink
from .template import (
    Markers,
    SyntaxTree,
    TagScanner,
    TemplateRenderer,
    TreeBuilder,
    format_tree,
    trim_whitespace,
)

logger = logging.getLogger(__name__)


class Template:
    """
    Compiled-on-demand template.

    The cached tree is valid only while source, markers and trimming are
    unchanged; assigning any of them forces a rebuild on the next render.
    Instances are not thread-safe: concurrent renders of one instance must
    be serialized by the caller.
    """

    def __init__(
        self,
        source: str = "",
        markers: Optional[Sequence[str]] = None,
        trimming: Optional[bool] = None,
        *,
        accessor: Optional[ModelAccessor] = None,
        options: Optional[TemplateOptions] = None,
        debug_sink: Optional[DebugSink] = None,
    ):
        """
        Args:
            source: Template source text
            markers: (begin, end) tag delimiters; defaults to ('{%', '%}')
            trimming: Remove structural whitespace around control tags (default on)
            accessor: Model key-path capability (DefaultModelAccessor if omitted)
            options: Engine options; explicit markers/trimming take precedence
            debug_sink: Receiver of {% debug %} output; defaults to the
                stream named by options.debug_stream
        """
        self.options = options or TemplateOptions()
        self._source = source
        self._markers = Markers(*markers) if markers is not None else self.options.markers
        self._trimming = self.options.trimming if trimming is None else trimming
        self.accessor = accessor
        self.debug_sink = debug_sink or resolve_debug_sink(self.options.debug_stream)
        self.last_context: Optional[RenderContext] = None
        self._tree: Optional[SyntaxTree] = None

    @classmethod
    def from_file(cls, path: Path | str, encoding: str = "utf-8", **kwargs: Any) -> Template:
        """
        Creates a template from a file's contents.

        Raises:
            OSError: The file cannot be read
        """
        return cls(Path(path).read_text(encoding=encoding), **kwargs)

    @classmethod
    def from_config(cls, source: str, config_path: Path | str, **kwargs: Any) -> Template:
        """
        Creates a template with options loaded from a YAML config file.

        Raises:
            ConfigError: The config file is malformed
        """
        return cls(source, options=load_options(Path(config_path)), **kwargs)

    @property
    def source(self) -> str:
        return self._source

    @source.setter
    def source(self, value: str) -> None:
        self._source = value
        self._tree = None

    @property
    def trimming(self) -> bool:
        return self._trimming

    @trimming.setter
    def trimming(self, value: bool) -> None:
        self._trimming = value
        self._tree = None

    @property
    def markers(self) -> Markers:
        return self._markers

    @markers.setter
    def markers(self, value: Sequence[str]) -> None:
        self._markers = Markers(*value)
        self._tree = None

    @property
    def is_compiled(self) -> bool:
        """True while a cached tree is available."""
        return self._tree is not None

    @property
    def syntax_tree(self) -> SyntaxTree:
        """
        The built tree, compiled on first access.

        Raises:
            UnmatchedCloseError: A closing tag has no open branch
        """
        if self._tree is None:
            self._tree = self._compile()
        return self._tree

    def _compile(self) -> SyntaxTree:
        tokens = TagScanner(self._source, self._markers).scan()
        tree = TreeBuilder().build(tokens)
        if self._trimming:
            trim_whitespace(tree)
        logger.debug("Compiled template: %d nodes (trimming=%s)", len(tree), self._trimming)
        return tree

    def render(self, model: Any = None) -> str:
        """
        Renders the template against a model.

        Per-node evaluation problems (unknown keys, malformed expressions)
        never fail the render: the affected node contributes nothing.

        Args:
            model: Opaque model object resolved through the accessor

        Returns:
            Output text

        Raises:
            UnmatchedCloseError: The source cannot be parsed
        """
        context = RenderContext(model, self.accessor)
        self.last_context = context
        renderer = TemplateRenderer(
            self.syntax_tree,
            allow_json=self.options.allow_json,
            allow_expressions=self.options.allow_expressions,
            debug_sink=self.debug_sink,
        )
        return renderer.render(context)

    def format_tree(self, contents: bool = False) -> str:
        """Diagnostic dump of the syntax tree (node types indented by depth)."""
        return format_tree(self.syntax_tree, contents=contents)

    def print_tree(self, contents: bool = False, file: Optional[TextIO] = None) -> None:
        """Writes the diagnostic tree dump to file (stdout by default)."""
        print(self.format_tree(contents=contents), file=file or sys.stdout)


def render_template(source: str, model: Any = None, **kwargs: Any) -> str:
    """
    Convenience function: compile and render in one step.

    Args:
        source: Template source text
        model: Model object
        **kwargs: Template constructor arguments

    Returns:
        Output text
    """
    return Template(source, **kwargs).render(model)


__all__ = ["Template", "render_template"]
