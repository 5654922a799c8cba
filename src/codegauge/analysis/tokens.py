"""Flatten a unit into classified tokens."""

import logging
from typing import Iterable, Optional

from tree_sitter import Node

from codegauge.errors import ParseError
from codegauge.parser.base import SourceUnit, Token, TokenKind, end_row, node_text

logger = logging.getLogger(__name__)

BRACE_KINDS = frozenset({TokenKind.GROUP_START, TokenKind.BLOCK_START, TokenKind.GROUP_END})
LOGICAL_KINDS = frozenset({TokenKind.LOGICAL_AND, TokenKind.LOGICAL_OR, TokenKind.LOGICAL_XOR})


def _first_error(node: Node) -> Optional[Node]:
    if node.type == "ERROR" or node.is_missing:
        return node
    if not node.has_error:
        return None
    for child in node.children:
        found = _first_error(child)
        if found is not None:
            return found
    return node


def check_syntax(unit: SourceUnit) -> None:
    """Raise ParseError if the unit's subtree holds syntax errors."""
    if not unit.root.has_error:
        return
    error = _first_error(unit.root)
    line = unit.line_of(error.start_point[0]) if error is not None else None
    if error is not None and error.is_missing:
        detail = f"missing '{error.type}'"
    elif error is not None and node_text(error):
        detail = f"unexpected '{node_text(error).splitlines()[0][:40]}'"
    else:
        detail = "syntax error"
    logger.debug("Syntax error in %s at line %s: %s", unit.name, line, detail)
    raise ParseError(unit.name, line, detail, node=error)


def tokens(unit: SourceUnit, kinds: Optional[Iterable[TokenKind]] = None) -> list[Token]:
    """
    Return the unit's tokens in source order, optionally filtered by kind.

    Tokens are the leaves of the unit's subtree. Grammars whose blocks are
    delimited by indentation contribute a zero-width BLOCK_START/GROUP_END
    pair around each block, so brace-style depth tracking works for them too.

    Raises:
        ParseError: the unit contains syntax errors
    """
    check_syntax(unit)
    wanted = frozenset(kinds) if kinds is not None else None
    parser = unit.parser
    result: list[Token] = []

    def emit(kind: TokenKind, node: Node, text: str, at_end: bool = False) -> None:
        if wanted is not None and kind not in wanted:
            return
        if at_end:
            line = unit.line_of(end_row(node))
            result.append(Token(kind, node.type, text, line, line, node.end_point[1]))
            return
        result.append(Token(
            kind=kind,
            type=node.type,
            text=text,
            start_line=unit.line_of(node.start_point[0]),
            end_line=unit.line_of(end_row(node)),
            start_column=node.start_point[1],
        ))

    def walk(node: Node) -> None:
        if node.child_count == 0:
            emit(parser.token_kind(node), node, node_text(node))
            return
        opens = parser.opens_block(node)
        if opens:
            emit(TokenKind.BLOCK_START, node, "")
        for child in node.children:
            walk(child)
        if opens:
            emit(TokenKind.GROUP_END, node, "", at_end=True)

    walk(unit.root)
    return result
