"""
Sauce: a small text-templating engine.

Templates embed control tags between a begin/end marker pair
(default '{%' / '%}'):

    {% var NAME = EXPR %}             variable declare+assign
    {% NAME = EXPR %}                 variable assign
    {% if( PREDICATE ) %} ... {% else if( PREDICATE ) %} ... {% else %} ... {% end %}
    {% foreach( NAME in EXPR ) %} ... {% end %}
    {% EXPR %}                        value interpolation
    {% debug( EXPR ) %}               diagnostic output only

Usage::

    from sauce import Template

    tpl = Template("{% foreach(n in items) %}{% n %},{% end %}")
    tpl.render({"items": [1, 2, 3]})   # '1,2,3,'
"""

from .config import TemplateOptions, load_options
from .context import NULL, DefaultModelAccessor, ModelAccessor, RenderContext
from .engine import Template, render_template
from .errors import ConfigError, SauceUserError, TemplateParseError, UnmatchedCloseError
from .template import DEFAULT_MARKERS, Markers, NodeType

__all__ = [
    # Entry points
    "Template",
    "render_template",

    # Configuration
    "TemplateOptions",
    "load_options",
    "Markers",
    "DEFAULT_MARKERS",

    # Model access
    "RenderContext",
    "ModelAccessor",
    "DefaultModelAccessor",
    "NULL",
    "NodeType",

    # Exceptions
    "SauceUserError",
    "TemplateParseError",
    "UnmatchedCloseError",
    "ConfigError",
]
