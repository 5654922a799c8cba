"""Comment & blank-line classification and the line-count breakdown.

Line categories:
    - physical  every line of the unit's extent
    - blank     empty or whitespace-only lines
    - comment   lines occupied only by comments (block and whole-line comments)
    - logical   physical - comment - blank + blank lines inside block comments

A blank line inside a block comment is both a comment line and a blank
line; it is added back once so it is not subtracted twice.
"""

from dataclasses import dataclass, field
from enum import Enum

from codegauge.parser.base import SourceUnit, Token, TokenKind
from codegauge.analysis.tokens import tokens


class CommentKind(Enum):
    BLOCK = "block"          # spans more than one line
    DEFAULT = "default"      # alone on its line
    TRAILING = "trailing"    # follows code on the same line


@dataclass(frozen=True)
class CommentRecord:
    classification: CommentKind
    token: Token
    lines: tuple[int, ...]


@dataclass(frozen=True)
class BlankLineRecord:
    line: int
    is_empty: bool  # False when the line holds whitespace


@dataclass(frozen=True)
class LineCountReport:
    physical: int
    logical: int
    comment_count: int
    comment_lines: int
    blank_lines: int
    block_comment_blank_lines: int
    comments: tuple[CommentRecord, ...] = field(default=(), repr=False)
    blanks: tuple[BlankLineRecord, ...] = field(default=(), repr=False)


def find_blank_lines(unit: SourceUnit) -> list[BlankLineRecord]:
    """Every empty or whitespace-only line in the unit's extent."""
    blanks = []
    for line in range(unit.start_line, unit.start_line + unit.physical_line_count):
        text = unit.line_text(line)
        if not text.strip():
            blanks.append(BlankLineRecord(line=line, is_empty=text == ""))
    return blanks


def classify_comment(unit: SourceUnit, token: Token) -> CommentRecord:
    """Classify one comment token as block, trailing or default."""
    spanned = tuple(range(token.start_line, token.end_line + 1))
    if len(spanned) > 1:
        kind = CommentKind.BLOCK
    else:
        # Columns are byte offsets into the raw line.
        raw = unit.line_text(token.start_line).encode("utf-8")
        before = raw[:token.start_column]
        kind = CommentKind.TRAILING if before.strip() else CommentKind.DEFAULT
    return CommentRecord(classification=kind, token=token, lines=spanned)


def classify_comments(unit: SourceUnit) -> list[CommentRecord]:
    return [classify_comment(unit, t) for t in tokens(unit, {TokenKind.COMMENT})]


def count_lines(unit: SourceUnit) -> LineCountReport:
    """
    Break the unit down into physical, logical, comment and blank lines.

    Raises:
        ParseError: the unit contains syntax errors
    """
    comments = classify_comments(unit)
    blanks = find_blank_lines(unit)

    # A line shared by two comments is still one comment line.
    commented = set()
    for comment in comments:
        if comment.classification is not CommentKind.TRAILING:
            commented.update(comment.lines)
    comment_lines = len(commented)

    block_lines = set()
    for comment in comments:
        if comment.classification is CommentKind.BLOCK:
            block_lines.update(comment.lines)
    block_blank = sum(1 for b in blanks if b.line in block_lines)

    physical = unit.physical_line_count
    logical = physical - comment_lines - len(blanks) + block_blank

    return LineCountReport(
        physical=physical,
        logical=logical,
        comment_count=len(comments),
        comment_lines=comment_lines,
        blank_lines=len(blanks),
        block_comment_blank_lines=block_blank,
        comments=tuple(comments),
        blanks=tuple(blanks),
    )
