"""
Tests for value helpers: the null marker, truthiness and stringification.
"""

import pytest

from sauce.expressions.values import NULL, is_absent, is_number, is_truthy, stringify


class TestNullMarker:

    def test_singleton(self):
        assert type(NULL)() is NULL

    def test_falsy_and_absent(self):
        assert not NULL
        assert is_absent(NULL)
        assert is_absent(None)
        assert not is_absent(0)
        assert repr(NULL) == "NULL"


class TestTruthiness:

    @pytest.mark.parametrize("value,expected", [
        (None, False),
        (NULL, False),
        (True, True),
        (False, False),
        (0, False),
        (0.0, False),
        (-1, True),
        ("", False),
        ("x", True),
        ([], False),
        ([0], True),
        ({}, False),
        ({"a": 1}, True),
        (object(), True),
    ])
    def test_is_truthy(self, value, expected):
        assert is_truthy(value) is expected

    def test_bool_is_not_a_number(self):
        assert is_number(1)
        assert is_number(1.5)
        assert not is_number(True)
        assert not is_number("1")


class TestStringify:

    @pytest.mark.parametrize("value,expected", [
        (None, ""),
        (NULL, ""),
        (True, "true"),
        (False, "false"),
        (3, "3"),
        (2.0, "2"),
        (2.5, "2.5"),
        ("text", "text"),
        ([1, "a"], '[1, "a"]'),
        ({"k": None}, '{"k": null}'),
        ({"k": NULL}, '{"k": null}'),
        (("x",), '["x"]'),
    ])
    def test_stringify(self, value, expected):
        assert stringify(value) == expected

    def test_non_ascii_kept(self):
        assert stringify(["é"]) == '["é"]'
