"""codegauge — static code metrics for Python and Java functions.

Cyclomatic complexity and its grade, nesting depth, a lines-of-code
breakdown and call statistics, computed from tree-sitter syntax trees.

Usage:
    from codegauge import analyze_source

    report = analyze_source("if a and b:\\n    go()\\n")
    report.complexity   # 3
    report.grade        # "A"
"""

from codegauge.analysis import (
    CompositeReport,
    analyze,
    analyze_file,
    analyze_source,
)
from codegauge.errors import CodeGaugeError, InvalidKindError, NotFoundError, ParseError
from codegauge.parser import ConstructKind, SourceUnit, load_file, load_source
from codegauge.resolve import NamespaceResolver, SourceFileResolver

__version__ = "0.1.0"

__all__ = [
    "CodeGaugeError",
    "CompositeReport",
    "ConstructKind",
    "InvalidKindError",
    "NamespaceResolver",
    "NotFoundError",
    "ParseError",
    "SourceFileResolver",
    "SourceUnit",
    "analyze",
    "analyze_file",
    "analyze_source",
    "load_file",
    "load_source",
]
