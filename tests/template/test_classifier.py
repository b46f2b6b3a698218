"""
Tests for the statement classifier.
"""

import pytest

from sauce.template.classifier import StatementClassifier, classify_statement
from sauce.template.nodes import NodeType


class TestStatementClassifier:

    def setup_method(self):
        self.classifier = StatementClassifier()

    @pytest.mark.parametrize("body,expected", [
        ("var x = 1", NodeType.VARIABLE),
        ("x = 1", NodeType.VARIABLE),
        ("if(x > 1)", NodeType.IF),
        ("IF (x)", NodeType.IF),
        ("else if(y)", NodeType.ELSE_IF),
        ("Else If (y)", NodeType.ELSE_IF),
        ("else", NodeType.ELSE),
        ("end", NodeType.END),
        ("END", NodeType.END),
        ("foreach(item in items)", NodeType.FOR_EACH),
        ("debug(x + 1)", NodeType.DEBUG),
        ("name", NodeType.VALUE),
        ("x == 1", NodeType.VALUE),
        ("a + b", NodeType.VALUE),
        ("endless", NodeType.VALUE),
        ("elsewhere", NodeType.VALUE),
    ])
    def test_node_types(self, body, expected):
        """Each body maps to exactly one node type"""
        assert self.classifier.classify(body).type is expected

    def test_body_is_stripped(self):
        """Surrounding whitespace does not matter"""
        statement = self.classifier.classify("\n   end \t")
        assert statement.type is NodeType.END
        assert statement.content == "end"

    def test_assignment_wins_over_keywords(self):
        """Assignment is tried first, so 'end = 3' binds a variable"""
        statement = self.classifier.classify("end = 3")
        assert statement.type is NodeType.VARIABLE
        assert statement.name == "end"
        assert statement.expression == "3"

    def test_variable_payload(self):
        """Variable statements carry the name, expression and var flag"""
        declared = self.classifier.classify("var total = a + b")
        assert declared.name == "total"
        assert declared.expression == "a + b"
        assert declared.declaration is True

        assigned = self.classifier.classify("total=[1, 2]")
        assert assigned.name == "total"
        assert assigned.expression == "[1, 2]"
        assert assigned.declaration is False

    def test_if_predicate(self):
        assert self.classifier.classify("if( a > 1 )").expression == "a > 1"
        assert self.classifier.classify("if(x > 1").expression == "x > 1"

    def test_if_keeps_inner_parentheses(self):
        """Only the final closing parenthesis is removed"""
        statement = self.classifier.classify("if((a or b) and c)")
        assert statement.expression == "(a or b) and c"

    def test_else_if_predicate(self):
        statement = self.classifier.classify("else if(x == 2)")
        assert statement.expression == "x == 2"

    def test_foreach_header(self):
        """Loop variable name and source expression are extracted"""
        statement = self.classifier.classify("foreach( item in user.items )")
        assert statement.type is NodeType.FOR_EACH
        assert statement.name == "item"
        assert statement.expression == "user.items"

    def test_foreach_malformed_header(self):
        """A malformed header is still a loop, with no variable"""
        statement = self.classifier.classify("foreach(broken)")
        assert statement.type is NodeType.FOR_EACH
        assert statement.name is None
        assert statement.expression == ""

    def test_debug_expression(self):
        assert self.classifier.classify("debug(user.name)").expression == "user.name"

    def test_value_expression_is_whole_body(self):
        statement = self.classifier.classify(" user.name ")
        assert statement.type is NodeType.VALUE
        assert statement.expression == "user.name"

    def test_module_function(self):
        assert classify_statement("else").type is NodeType.ELSE
