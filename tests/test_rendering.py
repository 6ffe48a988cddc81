"""Rendering semantics: variables, escaping, conditionals and loops."""

from __future__ import annotations

import copy
from types import SimpleNamespace

import pytest

from htmpl import Environment

from .conftest import render


class TestVariables:
    def test_literal_text_renders_unchanged(self, env):
        source = 'He said "hi" \\n and left <b>bold</b> { } $x'
        assert render(env, source) == source

    def test_interpolation(self, env):
        assert render(env, 'Hello, <tmpl_var name="name">!', {"name": "World"}) == "Hello, World!"

    def test_missing_name_renders_empty(self, env):
        assert render(env, "[<tmpl_var name=\"nope\">]", {}) == "[]"

    def test_no_data_renders_empty(self, env):
        assert render(env, "[<tmpl_var x>]") == "[]"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (0, "0"),
            (42, "42"),
            (1.5, "1.5"),
            ("text", "text"),
        ],
    )
    def test_value_conversion(self, env, value, expected):
        assert render(env, "<tmpl_var v>", {"v": value}) == expected

    def test_dotted_path_into_mapping(self, env):
        assert render(env, '<tmpl_var name="user.name">', {"user": {"name": "Ann"}}) == "Ann"

    def test_dotted_path_into_attribute(self, env):
        user = SimpleNamespace(name="Ann")
        assert render(env, '<tmpl_var name="user.name">', {"user": user}) == "Ann"

    def test_numeric_segment_indexes_sequence(self, env):
        data = {"rows": ["a", "b"]}
        assert render(env, "<tmpl_var rows.1>|<tmpl_var rows.5>", data) == "b|"

    def test_dotted_path_through_missing_parent(self, env):
        assert render(env, '<tmpl_var name="user.name.first">', {"user": None}) == ""


class TestEscaping:
    def test_html(self, env):
        assert render(env, '<tmpl_var name="x" escape="html">', {"x": "<b>"}) == "&lt;b&gt;"

    def test_html_quotes_and_ampersand(self, env):
        result = render(env, '<tmpl_var name="x" escape="html">', {"x": "\"'&"})
        assert result == "&quot;&#39;&amp;"

    def test_url(self, env):
        assert render(env, '<tmpl_var name="x" escape="url">', {"x": "a b"}) == "a%20b"

    def test_url_keeps_uri_punctuation(self, env):
        result = render(env, "<tmpl_var x escape=url>", {"x": "http://e.com/?q=a b&x=é"})
        assert result == "http://e.com/?q=a%20b&x=%C3%A9"

    def test_unescaped_by_default(self, env):
        assert render(env, "<tmpl_var x>", {"x": "<b>"}) == "<b>"

    def test_custom_escaper(self):
        env = Environment(html_escape=str.upper)
        assert render(env, "<tmpl_var x escape=html>", {"x": "abc"}) == "ABC"


IF_TEMPLATE = '<tmpl_if name="v">yes<tmpl_else>no</tmpl_if>'
UNLESS_TEMPLATE = '<tmpl_unless name="v">yes<tmpl_else>no</tmpl_unless>'


class TestConditionals:
    @pytest.mark.parametrize(
        "value",
        [[1], ("a",), "x", 1, -1, 0.5, True, {"a": 1}, {}, object()],
    )
    def test_if_truthy(self, env, value):
        assert render(env, IF_TEMPLATE, {"v": value}) == "yes"

    @pytest.mark.parametrize("value", [[], (), "", 0, 0.0, float("nan"), False, None])
    def test_if_falsy(self, env, value):
        assert render(env, IF_TEMPLATE, {"v": value}) == "no"

    def test_if_missing(self, env):
        assert render(env, IF_TEMPLATE, {}) == "no"

    def test_if_without_else(self, env):
        source = "a<tmpl_if v>b</tmpl_if>c"
        assert render(env, source, {"v": 1}) == "abc"
        assert render(env, source, {"v": 0}) == "ac"

    @pytest.mark.parametrize("value", ["", 0, False, None])
    def test_unless_falsy(self, env, value):
        assert render(env, UNLESS_TEMPLATE, {"v": value}) == "yes"

    @pytest.mark.parametrize("value", ["x", 1, True, [1]])
    def test_unless_truthy(self, env, value):
        assert render(env, UNLESS_TEMPLATE, {"v": value}) == "no"

    def test_unless_treats_empty_list_as_truthy(self, env):
        # Only <tmpl_if> special-cases sequences
        assert render(env, UNLESS_TEMPLATE, {"v": []}) == "no"

    def test_unless_missing(self, env):
        assert render(env, UNLESS_TEMPLATE, {}) == "yes"

    def test_nameless_unless_always_renders(self, env):
        assert render(env, "<tmpl_unless>shown</tmpl_unless>", {"x": 1}) == "shown"

    def test_nested_conditionals(self, env):
        source = "<tmpl_if a><tmpl_if b>ab<tmpl_else>a</tmpl_if><tmpl_else>-</tmpl_if>"
        assert render(env, source, {"a": 1, "b": 1}) == "ab"
        assert render(env, source, {"a": 1, "b": 0}) == "a"
        assert render(env, source, {"a": 0, "b": 1}) == "-"


class TestLoops:
    def test_loop(self, env):
        source = '<tmpl_loop name="rows"><tmpl_var name="v"></tmpl_loop>'
        assert render(env, source, {"rows": [{"v": 1}, {"v": 2}, {"v": 3}]}) == "123"

    def test_empty_loop(self, env):
        assert render(env, "<tmpl_loop rows>x</tmpl_loop>", {"rows": []}) == ""

    @pytest.mark.parametrize("value", [None, "abc", 3, {"a": 1}])
    def test_non_sequence_runs_zero_times(self, env, value):
        assert render(env, "<tmpl_loop rows>x</tmpl_loop>", {"rows": value}) == ""

    def test_missing_loop(self, env):
        assert render(env, "a<tmpl_loop rows>x</tmpl_loop>b", {}) == "ab"

    def test_tuple_rows(self, env):
        assert render(env, "<tmpl_loop rows><tmpl_var v></tmpl_loop>", {"rows": ({"v": "a"},)}) == "a"

    def test_nested_loops(self, env):
        source = (
            '<tmpl_loop name="outer"><tmpl_loop name="inner">'
            '<tmpl_var name="x"></tmpl_loop></tmpl_loop>'
        )
        data = {"outer": [{"inner": [{"x": "a"}]}, {"inner": [{"x": "b"}, {"x": "c"}]}]}
        assert render(env, source, data) == "abc"

    def test_three_levels(self, env):
        source = (
            "<tmpl_loop a>[<tmpl_var n>"
            "<tmpl_loop b>(<tmpl_var n><tmpl_loop c><tmpl_var n></tmpl_loop>)</tmpl_loop>"
            "]</tmpl_loop>"
        )
        data = {"a": [{"n": 1, "b": [{"n": 2, "c": [{"n": 3}, {"n": 4}]}, {"n": 5}]}]}
        assert render(env, source, data) == "[1(234)(5)]"

    def test_sibling_loops(self, env):
        source = "<tmpl_loop a><tmpl_var x></tmpl_loop>|<tmpl_loop b><tmpl_var x></tmpl_loop>"
        data = {"a": [{"x": 1}, {"x": 2}], "b": [{"x": 3}, {"x": 4}]}
        assert render(env, source, data) == "12|34"

    def test_names_after_loop_resolve_at_root(self, env):
        source = "<tmpl_loop rows><tmpl_var v></tmpl_loop><tmpl_var v>"
        assert render(env, source, {"rows": [{"v": 1}], "v": "r"}) == "1r"

    def test_loop_body_cannot_see_root_names(self, env):
        source = "<tmpl_loop rows>[<tmpl_var title>]</tmpl_loop>"
        assert render(env, source, {"title": "T", "rows": [{}, {}]}) == "[][]"

    def test_conditional_inside_loop(self, env):
        source = "<tmpl_loop rows><tmpl_if show><tmpl_var v><tmpl_else>-</tmpl_if></tmpl_loop>"
        data = {"rows": [{"show": True, "v": "a"}, {"show": False, "v": "b"}, {"v": "c"}]}
        assert render(env, source, data) == "a--"

    def test_loop_inside_false_conditional_is_skipped(self, env):
        source = "<tmpl_if on><tmpl_loop rows>x</tmpl_loop></tmpl_if>"
        assert render(env, source, {"on": False, "rows": [1, 2]}) == ""

    def test_dotted_loop_name(self, env):
        source = '<tmpl_loop name="page.rows"><tmpl_var v></tmpl_loop>'
        assert render(env, source, {"page": {"rows": [{"v": 1}, {"v": 2}]}}) == "12"

    def test_loop_items_that_are_not_mappings(self, env):
        source = "<tmpl_loop rows>[<tmpl_var v>]</tmpl_loop>"
        assert render(env, source, {"rows": [1, "two", None]}) == "[][][]"


class TestLines:
    def test_newlines_between_lines_are_dropped(self, env):
        assert render(env, "a\nb\r\nc") == "abc"

    def test_keep_newlines(self):
        env = Environment(keep_newlines=True)
        assert render(env, "a\n<tmpl_var x>\r\nc", {"x": 1}) == "a\n1\nc"


class TestPurity:
    def test_data_is_not_mutated(self, env):
        data = {"rows": [{"v": 1, "inner": [{"x": 2}]}], "flag": True}
        snapshot = copy.deepcopy(data)
        source = "<tmpl_loop rows><tmpl_var v><tmpl_loop inner><tmpl_var x></tmpl_loop></tmpl_loop>"
        assert render(env, source, data) == "12"
        assert data == snapshot

    def test_repeated_renders_are_identical(self, env):
        template = env.from_string("<tmpl_loop rows><tmpl_var v escape=html></tmpl_loop>")
        data = {"rows": [{"v": "<"}, {"v": ">"}]}
        assert template.render(data) == template.render(data) == "&lt;&gt;"
