"""Nesting-depth tracker."""

from typing import Iterable

from codegauge.parser.base import SourceUnit, Token, TokenKind
from codegauge.analysis.tokens import BRACE_KINDS, tokens

_OPENERS = (TokenKind.GROUP_START, TokenKind.BLOCK_START)


def depth_of(stream: Iterable[Token]) -> int:
    """
    Deepest brace nesting reached in a token stream.

    The maximum grows by one each time the running depth passes it.
    """
    depth = 0
    max_depth = 0
    for token in stream:
        if token.kind in _OPENERS:
            depth += 1
            if depth > max_depth:
                max_depth += 1
        elif token.kind is TokenKind.GROUP_END:
            depth -= 1
    return max_depth


def max_depth(unit: SourceUnit) -> int:
    """
    Maximum number of simultaneously open blocks in the unit.

    Raises:
        ParseError: the unit contains syntax errors
    """
    return depth_of(tokens(unit, BRACE_KINDS))
