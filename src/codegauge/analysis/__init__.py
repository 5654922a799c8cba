"""Construct analyzers, aggregators, line counts, nesting and reports."""

from codegauge.analysis.aggregators import AGGREGATORS
from codegauge.analysis.analyzers import ANALYZERS, analyze_boolean_operators
from codegauge.analysis.finder import find, find_invocations
from codegauge.analysis.invocations import InvocationStats, invocation_stats
from codegauge.analysis.lines import (
    BlankLineRecord,
    CommentKind,
    CommentRecord,
    LineCountReport,
    count_lines,
)
from codegauge.analysis.nesting import max_depth
from codegauge.analysis.report import (
    CompositeReport,
    analyze,
    analyze_file,
    analyze_source,
    collect_occurrences,
    compose,
    grade,
)
from codegauge.analysis.tokens import tokens

__all__ = [
    "AGGREGATORS",
    "ANALYZERS",
    "BlankLineRecord",
    "CommentKind",
    "CommentRecord",
    "CompositeReport",
    "InvocationStats",
    "LineCountReport",
    "analyze",
    "analyze_boolean_operators",
    "analyze_file",
    "analyze_source",
    "collect_occurrences",
    "compose",
    "count_lines",
    "find",
    "find_invocations",
    "grade",
    "invocation_stats",
    "max_depth",
    "tokens",
]
