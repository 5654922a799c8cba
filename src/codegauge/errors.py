"""
Exception classes for codegauge.

Only the two boundary operations can fail: turning source into tokens
(``ParseError``) and resolving a name to source (``NotFoundError`` /
``InvalidKindError``). Analyzers and aggregators never raise on
well-formed input.
"""

from typing import Any, Optional


class CodeGaugeError(Exception):
    """Base exception for all codegauge errors."""
    pass


class ParseError(CodeGaugeError):
    """The source unit could not be tokenized or parsed."""

    def __init__(
        self,
        unit_name: str,
        line: Optional[int] = None,
        detail: str = "",
        node: Any = None,
    ):
        self.unit_name = unit_name
        self.line = line
        self.detail = detail
        # tree-sitter ERROR or MISSING node that stopped tokenizing
        self.node = node
        where = f" at line {line}" if line is not None else ""
        message = f"Cannot parse '{unit_name}'{where}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class NotFoundError(CodeGaugeError):
    """A name lookup found no source-backed function."""

    def __init__(self, name: str, where: str = ""):
        self.name = name
        suffix = f" in {where}" if where else ""
        super().__init__(f"No function named '{name}'{suffix}")


class InvalidKindError(CodeGaugeError):
    """A name resolved to something that is not source-backed code."""

    def __init__(self, name: str, found_kind: str):
        self.name = name
        self.found_kind = found_kind
        super().__init__(
            f"'{name}' is a {found_kind}, not a function with analyzable source"
        )
