"""Tests for tokens and nesting depth."""

import pytest

from codegauge.analysis import max_depth, tokens
from codegauge.analysis.nesting import depth_of
from codegauge.errors import ParseError
from codegauge.parser import load_source
from codegauge.parser.base import Token, TokenKind


def _token(kind):
    return Token(kind=kind, type="", text="", start_line=1, end_line=1)


class TestTokens:
    """Token classification."""

    def test_python_blocks_get_synthetic_braces(self):
        unit = load_source("if a and b:\n    pass\n", "python")
        kinds = [t.kind for t in tokens(unit)]
        assert kinds.count(TokenKind.BLOCK_START) == 1
        assert kinds.count(TokenKind.GROUP_END) == 1
        assert kinds.count(TokenKind.LOGICAL_AND) == 1

    def test_filter_by_kind(self):
        unit = load_source("x = a or b  # pick one\n", "python")
        comments = tokens(unit, {TokenKind.COMMENT})
        assert [t.text for t in comments] == ["# pick one"]
        assert comments[0].start_column == 12

    def test_java_braces(self):
        unit = load_source("if (a) { int[] xs = {1}; }\n", "java")
        kinds = [t.kind for t in tokens(unit)]
        assert kinds.count(TokenKind.BLOCK_START) == 1
        assert kinds.count(TokenKind.GROUP_START) == 1
        assert kinds.count(TokenKind.GROUP_END) == 2

    def test_parse_error_reports_unit_and_line(self):
        unit = load_source("x = 1\ndef broken(:\n    pass\n", "python", name="broken")
        with pytest.raises(ParseError) as excinfo:
            tokens(unit)
        error = excinfo.value
        assert error.unit_name == "broken"
        assert error.line is not None
        assert error.node is not None
        assert unit.line_of(error.node.start_point[0]) == error.line

    def test_java_parse_error(self):
        with pytest.raises(ParseError):
            tokens(load_source("int x = ;\n", "java"))


class TestNesting:
    """Maximum nesting depth."""

    def test_no_blocks(self):
        assert max_depth(load_source("x = 1\n", "python")) == 0

    def test_python_nested_blocks(self):
        code = '''
def f():
    if a:
        for x in y:
            pass
'''
        assert max_depth(load_source(code, "python")) == 3

    def test_python_dict_literals_count(self):
        assert max_depth(load_source('data = {"a": {"b": 1}}\n', "python")) == 2

    def test_fstring_fields_are_not_nesting(self):
        assert max_depth(load_source('x = f"{a}{b}"\n', "python")) == 0

    def test_dict_inside_fstring_field(self):
        assert max_depth(load_source('x = f"{ {1: 2}[1] }"\n', "python")) == 1

    def test_java_blocks_and_initializers(self):
        code = '''
if (a) {
    while (b) {
        int[] xs = {1, 2};
    }
}
'''
        assert max_depth(load_source(code, "java")) == 3

    def test_sibling_blocks_do_not_add_up(self):
        code = "if (a) { x(); }\nif (b) { y(); }\n"
        assert max_depth(load_source(code, "java")) == 1

    def test_unbalanced_stream(self):
        stream = [
            _token(TokenKind.GROUP_END),
            _token(TokenKind.GROUP_START),
            _token(TokenKind.GROUP_START),
        ]
        # Closing first drops below zero, so two opens only get back to 1.
        assert depth_of(stream) == 1

    def test_empty_stream(self):
        assert depth_of([]) == 0
