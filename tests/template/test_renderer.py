"""
Tests for the tree-walking renderer.
"""

from datetime import date

import pytest

from sauce.context import RenderContext
from sauce.template.builder import build_tree
from sauce.template.renderer import TemplateRenderer
from sauce.template.trimmer import trim_whitespace


def render(source, model=None, trimming=True, **kwargs):
    tree = build_tree(source)
    if trimming:
        trim_whitespace(tree)
    return TemplateRenderer(tree, **kwargs).render(RenderContext(model))


class TestValues:

    def test_interpolation(self):
        assert render("Hello {% name %}!", {"name": "World"}) == "Hello World!"

    def test_tagless_source_is_unchanged(self):
        source = "  no tags here\n\n  at all\n"
        assert render(source) == source

    def test_missing_key_renders_nothing(self):
        assert render("[{% missing %}]", {}) == "[]"

    def test_dotted_path(self):
        model = {"user": {"address": {"city": "Oslo"}}}
        assert render("{% user.address.city %}", model) == "Oslo"

    def test_arithmetic(self):
        assert render("{% a + b * 2 %}", {"a": 1, "b": 3}) == "7"

    def test_division_results(self):
        assert render("{% 7 / 2 %}") == "3.5"
        assert render("{% 4 / 2 %}") == "2"

    def test_malformed_expression_renders_nothing(self):
        """Evaluation problems never fail the render"""
        assert render("[{% 1 + %}]") == "[]"
        assert render("[{% 1 / 0 %}]") == "[]"

    def test_arithmetic_with_absent_operand(self):
        assert render("[{% missing + 1 %}]", {}) == "[]"

    def test_booleans_and_lists(self):
        model = {"flag": True, "items": [1, "a"]}
        assert render("{% flag %} {% items %}", model) == 'true [1, "a"]'

    def test_value_tags_do_not_parse_json(self):
        """A Value tag is never a JSON literal"""
        assert render("[{% [1, 2] %}]") == "[]"

    def test_unhashable_mapping_key_renders_nothing(self):
        """Indexing a mapping with a list is a node failure, not a render failure"""
        model = {"m": {"a": 1}, "k": [1]}
        assert render("[{% m[k] %}]", model) == "[]"
        assert render("{% if(m[k]) %}y{% else %}n{% end %}", model) == "n"

    def test_arithmetic_overflow_renders_nothing(self):
        source = "[{% " + "1" * 400 + " / 3 %}]"
        assert render(source) == "[]"

    def test_mapping_with_non_string_keys(self):
        """Mappings JSON cannot encode fall back to their plain text form"""
        value = {date(2024, 1, 1): "x"}
        assert render("[{% d %}]", {"d": value}) == "[" + str(value) + "]"


class TestConditionals:

    SOURCE = "{% if(x > 1) %}big{% else %}small{% end %}"

    def test_if_branch(self):
        assert render(self.SOURCE, {"x": 5}) == "big"

    def test_else_branch(self):
        assert render(self.SOURCE, {"x": 0}) == "small"

    @pytest.mark.parametrize("x,expected", [(1, "one"), (2, "two"), (3, "other")])
    def test_else_if_chain(self, x, expected):
        source = "{% if(x == 1) %}one{% else if(x == 2) %}two{% else %}other{% end %}"
        assert render(source, {"x": x}) == expected

    def test_first_true_clause_wins(self):
        source = "{% if(x > 0) %}a{% else if(x > 1) %}b{% end %}"
        assert render(source, {"x": 5}) == "a"

    def test_no_clause_matches(self):
        assert render("<{% if(false) %}x{% else if(false) %}y{% end %}>") == "<>"

    def test_absent_predicate_is_false(self):
        assert render("{% if(missing) %}yes{% else %}no{% end %}", {}) == "no"

    def test_failing_predicate_is_false(self):
        assert render("{% if(1 +) %}yes{% else %}no{% end %}") == "no"

    def test_keywords_are_case_insensitive(self):
        source = "{% IF(x) %}a{% ELSE %}b{% END %}"
        assert render(source, {"x": False}) == "b"

    def test_unclosed_if(self):
        """A missing End is tolerated"""
        assert render("{% if(true) %}yes") == "yes"

    def test_chains_in_sequence(self):
        """The matched flag is reset by End"""
        source = "{% if(true) %}a{% end %}{% if(false) %}b{% else %}c{% end %}"
        assert render(source) == "ac"


class TestLoops:

    def test_foreach(self):
        source = "{% foreach(n in items) %}{% n %},{% end %}"
        assert render(source, {"items": [1, 2, 3]}) == "1,2,3,"

    def test_loop_index(self):
        source = "{% foreach(n in items) %}{% nIndex %}:{% n %},{% end %}"
        assert render(source, {"items": ["a", "b"]}) == "0:a,1:b,"

    def test_nested_loops(self):
        source = "{% foreach(r in rows) %}{% foreach(c in r) %}{% c %}{% end %};{% end %}"
        assert render(source, {"rows": [[1, 2], [3]]}) == "12;3;"

    def test_absent_source_skips_body(self):
        source = "{% foreach(x in nothing) %}x{% end %}done"
        assert render(source, {}) == "done"

    def test_non_list_source_skips_body(self):
        source = "{% foreach(x in name) %}x{% end %}done"
        assert render(source, {"name": "abc"}) == "done"

    def test_json_source(self):
        source = "{% foreach(x in [3, 4]) %}{% x %}{% end %}"
        assert render(source) == "34"

    def test_loop_variable_not_visible_after_loop(self):
        source = "{% foreach(n in items) %}{% end %}[{% n %}]"
        assert render(source, {"items": [1]}) == "[]"

    def test_malformed_header_skips_body(self):
        assert render("{% foreach(oops) %}x{% end %}y") == "y"

    def test_trimmed_loop(self):
        source = "<ul>\n{% foreach(i in items) %}\n  <li>{% i %}</li>\n{% end %}\n</ul>"
        assert render(source, {"items": [1, 2]}) == "<ul>\n  <li>1</li>\n  <li>2</li>\n</ul>"


class TestVariables:

    def test_json_list_variable(self):
        source = "{% var xs = [1, 2, 3] %}{% foreach(x in xs) %}{% x %}{% end %}"
        assert render(source) == "123"

    def test_json_object_variable(self):
        source = '{% var u = {"name": "Ann"} %}{% u.name %}'
        assert render(source) == "Ann"

    def test_expression_variable(self):
        assert render("{% var y = x * 2 %}{% y %}", {"x": 21}) == "42"

    def test_variable_scoped_to_branch(self):
        """Names bound inside a clause vanish when it closes"""
        source = "{% if(true) %}{% var y = 5 %}{% end %}[{% y %}]"
        assert render(source) == "[]"

    @pytest.mark.parametrize("inner", ["var y = 2", "y = 2"])
    def test_assignment_overwrites_outer_binding(self, inner):
        """Both assignment forms update the frame that declared the name"""
        source = "{% var y = 1 %}{% if(true) %}{% " + inner + " %}{% end %}{% y %}"
        assert render(source) == "2"

    def test_absent_value_shadows_model(self):
        """A variable bound to nothing hides the model's key of the same name"""
        source = "{% var x = missing %}[{% x %}]"
        assert render(source, {"x": "model"}) == "[]"

    def test_variable_shadows_model(self):
        assert render("{% var name = 'Bob' %}{% name %}", {"name": "Ann"}) == "Bob"

    def test_json_disabled(self):
        """Without JSON a list literal is a failing expression"""
        source = "{% var xs = [1, 2] %}[{% xs %}]"
        assert render(source, allow_json=False) == "[]"

    def test_expressions_disabled(self):
        """Without expressions an assignment copies a key path"""
        source = "{% var y = user.name %}{% y %}"
        model = {"user": {"name": "Ann"}}
        assert render(source, model, allow_expressions=False) == "Ann"


class TestDebug:

    def test_debug_goes_to_sink(self):
        """Debug output never reaches the rendered text"""
        seen = []
        out = render("a{% debug(x) %}b", {"x": 5}, debug_sink=seen.append)
        assert out == "ab"
        assert seen == ["5"]

    def test_debug_of_absent_value(self):
        seen = []
        render("{% debug(missing) %}", {}, debug_sink=seen.append)
        assert seen == []

    def test_debug_expression(self):
        seen = []
        render("{% debug(items) %}", {"items": [1, 2]}, debug_sink=seen.append)
        assert seen == ["[1, 2]"]


class TestScopeBalance:

    def test_context_is_balanced_after_render(self):
        """Every frame opened during a render is closed again"""
        context = RenderContext({"items": [1, 2]})
        tree = trim_whitespace(build_tree(
            "{% foreach(i in items) %}{% if(i > 1) %}{% i %}{% end %}{% end %}"
        ))
        assert TemplateRenderer(tree).render(context) == "2"
        assert context.depth == 0

    def test_render_is_deterministic(self):
        tree = build_tree("{% foreach(i in items) %}{% i %}{% end %}")
        renderer = TemplateRenderer(tree)
        first = renderer.render(RenderContext({"items": [1, 2]}))
        second = renderer.render(RenderContext({"items": [1, 2]}))
        assert first == second == "12"
