"""Base parser interface and the parsed-source data model."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from functools import cached_property
from pathlib import Path
from typing import Iterator, Optional

from tree_sitter import Language, Node, Parser, Tree


class ConstructKind(Enum):
    """Syntax constructs that contribute decision points."""

    CONDITIONAL = "conditional"
    FOREACH = "foreach"
    FOR = "for"
    WHILE = "while"
    EXCEPTION_BLOCK = "exception_block"
    MULTI_WAY_BRANCH = "multi_way_branch"
    TRAP = "trap"


class TokenKind(Enum):
    GROUP_START = "group_start"
    BLOCK_START = "block_start"
    GROUP_END = "group_end"
    COMMENT = "comment"
    LOGICAL_AND = "logical_and"
    LOGICAL_OR = "logical_or"
    LOGICAL_XOR = "logical_xor"
    OTHER = "other"


@dataclass(frozen=True)
class Token:
    """One lexical token of a source unit, with absolute line numbers."""

    kind: TokenKind
    type: str
    text: str
    start_line: int
    end_line: int
    start_column: int = 0


def split_lines(text: str) -> list[str]:
    """Split text into physical lines the way tree-sitter counts rows."""
    if not text:
        return []
    lines = text.split("\n")
    if text.endswith("\n"):
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def node_text(node: Node) -> str:
    return node.text.decode("utf-8") if node.text is not None else ""


def end_row(node: Node) -> int:
    """Last row a node occupies (a node ending at column 0 stops on the row above)."""
    row, column = node.end_point[0], node.end_point[1]
    if column == 0 and row > node.start_point[0]:
        return row - 1
    return row


@dataclass
class SourceUnit:
    """
    A parsed unit of source: a function, method or whole script.

    ``root`` may be the root of the parse tree (a whole script) or a node
    inside it (a single function). ``line_offset`` is the number of lines
    that precede the parsed text in the file it came from, so absolute line
    numbers are ``row + 1 + line_offset``.
    """

    name: str
    parser: "CodeParser"
    root: Node
    source: bytes
    line_offset: int = 0
    tree: Optional[Tree] = None

    @property
    def language(self) -> str:
        return self.parser.language

    @cached_property
    def lines(self) -> list[str]:
        """Raw lines of the parsed text (not only the unit's extent)."""
        return split_lines(self.source.decode("utf-8", errors="replace"))

    @property
    def is_whole_tree(self) -> bool:
        return self.root.parent is None

    @property
    def start_line(self) -> int:
        if self.is_whole_tree:
            return 1 + self.line_offset
        return self.line_of(self.root.start_point[0])

    @property
    def end_line(self) -> int:
        if self.is_whole_tree:
            return self.line_offset + max(len(self.lines), 1)
        return self.line_of(end_row(self.root))

    @property
    def physical_line_count(self) -> int:
        if self.is_whole_tree:
            return len(self.lines)
        return self.end_line - self.start_line + 1

    def line_of(self, row: int) -> int:
        """Convert a zero-based tree row to an absolute line number."""
        return row + 1 + self.line_offset

    def line_text(self, line: int) -> str:
        """Raw text of an absolute line number ("" outside the parsed text)."""
        index = line - self.line_offset - 1
        if 0 <= index < len(self.lines):
            return self.lines[index]
        return ""

    def text(self, node: Optional[Node] = None) -> str:
        return node_text(node if node is not None else self.root)


class CodeParser(ABC):
    """
    Abstract base class for language-specific parsers.

    A parser owns the tree-sitter grammar of one language and describes
    where each construct lives in that grammar. It never decides how many
    decision points a construct is worth; that policy lives in
    ``codegauge.analysis``.
    """

    def __init__(self):
        self._language = Language(self._grammar())

    @property
    @abstractmethod
    def language(self) -> str:
        """Return the language this parser handles (e.g., 'java', 'python')."""
        pass

    @property
    @abstractmethod
    def file_extensions(self) -> list[str]:
        """Return file extensions this parser handles (e.g., ['.java'])."""
        pass

    @abstractmethod
    def _grammar(self):
        """Return the tree-sitter language capsule for this grammar."""
        pass

    # Node type tables, filled in by subclasses
    construct_types: dict[ConstructKind, frozenset[str]] = {}
    scope_types: frozenset[str] = frozenset()
    call_types: frozenset[str] = frozenset()
    comment_types: frozenset[str] = frozenset()

    def parse(self, source: bytes) -> Tree:
        # A fresh Parser per call keeps parsing safe across threads.
        return Parser(self._language).parse(source)

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the given file."""
        return file_path.suffix.lower() in self.file_extensions

    def matches(self, node: Node, kind: ConstructKind) -> bool:
        return node.type in self.construct_types.get(kind, ())

    def is_scope_boundary(self, node: Node) -> bool:
        return node.type in self.scope_types

    def is_invocation(self, node: Node) -> bool:
        return node.type in self.call_types

    @abstractmethod
    def token_kind(self, leaf: Node) -> TokenKind:
        """Classify a leaf node of the tree."""
        pass

    def opens_block(self, node: Node) -> bool:
        """Whether ``node`` is a block with no brace tokens of its own."""
        return False

    # ── Construct structure ────────────────────────────────────

    @abstractmethod
    def conditional_parts(self, node: Node) -> tuple[list[Node], Optional[Node]]:
        """Return (condition-bearing clauses, else clause or None)."""
        pass

    @abstractmethod
    def foreach_parts(self, node: Node) -> tuple[str, str]:
        """Return (loop variable text, iterated collection text)."""
        pass

    def for_parts(self, node: Node) -> tuple[str, Optional[str], str]:
        """Return (initializer text, condition text or None, iterator text)."""
        return "", None, ""

    @abstractmethod
    def while_parts(self, node: Node) -> tuple[str, bool]:
        """Return (condition text, whether the test follows the body)."""
        pass

    @abstractmethod
    def catch_clauses(self, node: Node) -> list[Node]:
        pass

    @abstractmethod
    def is_catch_all(self, clause: Node) -> bool:
        pass

    def finally_clause(self, node: Node) -> Optional[Node]:
        for child in node.children:
            if child.type == "finally_clause":
                return child
        return None

    @abstractmethod
    def branch_clauses(self, node: Node) -> list[Node]:
        pass

    @abstractmethod
    def is_default_clause(self, clause: Node) -> bool:
        pass

    def trap_parts(self, node: Node) -> tuple[Node, str]:
        """Return (node whose extent the handler covers, handled condition text)."""
        return node, ""

    @abstractmethod
    def invocation_target(self, node: Node) -> Optional[str]:
        """Name invoked by a call node, or None when it is not a plain name."""
        pass

    # ── Declarations (used by resolvers) ───────────────────────

    @abstractmethod
    def iter_functions(self, root: Node) -> Iterator[tuple[str, Node]]:
        """Yield (qualified name, node) for every function/method under root."""
        pass

    @abstractmethod
    def iter_types(self, root: Node) -> Iterator[tuple[str, str, Node]]:
        """Yield (qualified name, kind, node) for every class-like declaration."""
        pass
