"""Tests for comment classification and line counts."""

from codegauge.analysis import CommentKind, count_lines
from codegauge.parser import load_source


class TestLineCounts:
    """Physical / logical / comment / blank breakdown."""

    def test_blank_lines_only(self):
        report = count_lines(load_source("\n\n", "python"))
        assert report.physical == 2
        assert report.blank_lines == 2
        assert report.logical == 0

    def test_empty_source(self):
        report = count_lines(load_source("", "python"))
        assert report.physical == 0
        assert report.logical == 0

    def test_python_comment_kinds(self):
        code = "x = 1  # set x\n# standalone\n\ny = 2\n"
        report = count_lines(load_source(code, "python"))
        assert report.physical == 4
        assert report.comment_count == 2
        assert report.comment_lines == 1
        assert report.blank_lines == 1
        assert report.logical == 2

        kinds = [c.classification for c in report.comments]
        assert kinds == [CommentKind.TRAILING, CommentKind.DEFAULT]
        assert report.comments[0].lines == (1,)

    def test_whitespace_only_line_is_blank_but_not_empty(self):
        report = count_lines(load_source("x = 1\n   \ny = 2\n", "python"))
        [blank] = report.blanks
        assert blank.line == 2
        assert not blank.is_empty

    def test_java_block_comment_with_blank_interior(self):
        code = (
            "int a = 1; // trailing\n"
            "// whole line\n"
            "/* block\n"
            "\n"
            "   comment */\n"
            "int b = 2;\n"
        )
        report = count_lines(load_source(code, "java"))
        assert report.physical == 6
        assert report.comment_count == 3
        assert report.comment_lines == 4
        assert report.blank_lines == 1
        assert report.block_comment_blank_lines == 1
        assert report.logical == 2

        block = report.comments[2]
        assert block.classification is CommentKind.BLOCK
        assert block.lines == (3, 4, 5)

    def test_line_shared_by_two_block_comments_counts_once(self):
        code = "/* a\n b */ /* c\n d */\nint x = 1;\n"
        report = count_lines(load_source(code, "java"))
        assert report.physical == 4
        assert report.comment_count == 2
        assert report.comment_lines == 3
        assert report.logical == 1

    def test_line_offset_is_respected(self):
        unit = load_source("# note\nx = 1\n", "python", line_offset=20)
        report = count_lines(unit)
        assert report.comments[0].lines == (21,)
        assert report.logical == 1
