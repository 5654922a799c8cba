"""Report composer — run every analysis over a unit and grade the result.

    complexity = 1 + decision points of every construct kind
                   + logical operator tokens

Grades follow the usual cyclomatic-complexity bands:

    A (1-5)    simple, low risk
    B (6-10)   well structured
    C (11-20)  moderately complex
    D (21-30)  complex, hard to test
    E (31-40)  very complex
    F (41+)    unmaintainable

All analyses are pure functions of the unit; the report is built only
once every one of them has succeeded.
"""

import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping, Optional, Union

from codegauge.parser import ConstructKind, SourceUnit, load_source
from codegauge.analysis.aggregators import AGGREGATORS
from codegauge.analysis.analyzers import ANALYZERS, analyze_boolean_operators
from codegauge.analysis.finder import find
from codegauge.analysis.invocations import InvocationStats, invocation_stats
from codegauge.analysis.lines import LineCountReport, count_lines
from codegauge.analysis.nesting import max_depth
from codegauge.analysis.occurrences import (
    BooleanOperatorTotal,
    ConstructOccurrence,
    ConstructTotal,
)
from codegauge.analysis.tokens import LOGICAL_KINDS, tokens
from codegauge.resolve import SourceFileResolver

logger = logging.getLogger(__name__)


def grade(complexity: int) -> str:
    """Letter grade for a cyclomatic complexity score."""
    if complexity <= 5:
        return "A"
    elif complexity <= 10:
        return "B"
    elif complexity <= 20:
        return "C"
    elif complexity <= 30:
        return "D"
    elif complexity <= 40:
        return "E"
    else:
        return "F"


@dataclass(frozen=True)
class CompositeReport:
    """Every metric computed for one unit."""

    name: str
    language: str
    start_line: int
    end_line: int
    complexity: int
    grade: str
    lines: LineCountReport
    max_nesting_depth: int
    invocations: InvocationStats
    boolean_operators: BooleanOperatorTotal
    constructs: Mapping[ConstructKind, ConstructTotal] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def total_for(self, kind: ConstructKind) -> ConstructTotal:
        return self.constructs[kind]

    def to_dict(self) -> dict:
        """Convert to plain JSON-ready types."""
        return {
            "name": self.name,
            "language": self.language,
            "start_line": self.start_line,
            "end_line": self.end_line,
            "complexity": self.complexity,
            "grade": self.grade,
            "max_nesting_depth": self.max_nesting_depth,
            "lines": {
                "physical": self.lines.physical,
                "logical": self.lines.logical,
                "comment_count": self.lines.comment_count,
                "comment_lines": self.lines.comment_lines,
                "blank_lines": self.lines.blank_lines,
                "block_comment_blank_lines": self.lines.block_comment_blank_lines,
            },
            "invocations": {
                "total_count": self.invocations.total_count,
                "distinct_count": self.invocations.distinct_count,
                "names": list(self.invocations.names),
            },
            "boolean_operators": {
                "and": self.boolean_operators.and_count,
                "or": self.boolean_operators.or_count,
                "xor": self.boolean_operators.xor_count,
            },
            "constructs": {
                kind.value: {
                    key: list(value) if isinstance(value, tuple) else value
                    for key, value in asdict(total).items()
                }
                for kind, total in self.constructs.items()
            },
        }

    def __str__(self) -> str:
        return (
            f"{self.name} [{self.grade}] complexity={self.complexity} "
            f"lloc={self.lines.logical} depth={self.max_nesting_depth}"
        )


def collect_occurrences(
    unit: SourceUnit,
    kind: ConstructKind,
    include_nested: bool = False,
) -> list[ConstructOccurrence]:
    """Analyze every occurrence of ``kind`` in the unit."""
    analyzer = ANALYZERS[kind]
    return [analyzer(node, unit) for node in find(unit, kind, include_nested)]


def compose(unit: SourceUnit) -> CompositeReport:
    """
    Build the full report for one unit.

    Raises:
        ParseError: the unit contains syntax errors
    """
    logger.debug("Analyzing %s (%s)", unit.name, unit.language)

    # Tokenizing first surfaces a parse failure before any other work.
    booleans = analyze_boolean_operators(tokens(unit, LOGICAL_KINDS))

    constructs: dict[ConstructKind, ConstructTotal] = {}
    for kind in ConstructKind:
        constructs[kind] = AGGREGATORS[kind](collect_occurrences(unit, kind))

    complexity = 1 + sum(t.total_decision_points for t in constructs.values()) + booleans.count
    lines = count_lines(unit)
    depth = max_depth(unit)
    invocations = invocation_stats(unit)

    report = CompositeReport(
        name=unit.name,
        language=unit.language,
        start_line=unit.start_line,
        end_line=unit.end_line,
        complexity=complexity,
        grade=grade(complexity),
        lines=lines,
        max_nesting_depth=depth,
        invocations=invocations,
        boolean_operators=booleans,
        constructs=MappingProxyType(constructs),
    )
    logger.debug("%s", report)
    return report


def analyze(target: Union[SourceUnit, str], resolver=None) -> CompositeReport:
    """
    Analyze a unit, or a function name looked up through ``resolver``.

    Raises:
        ValueError: a name was given without a resolver
        NotFoundError: the resolver knows no such function
        InvalidKindError: the name is not a source-backed function
        ParseError: the unit contains syntax errors
    """
    if isinstance(target, str):
        if resolver is None:
            raise ValueError(f"A resolver is required to analyze '{target}' by name")
        target = resolver.resolve(target)
    return compose(target)


def analyze_source(
    text: str,
    language: str = "python",
    name: str = "<source>",
) -> CompositeReport:
    """Analyze ``text`` as one script body."""
    return compose(load_source(text, language, name=name))


def analyze_file(file_path: Path, language: Optional[str] = None) -> list[CompositeReport]:
    """One report per function/method declared in the file."""
    resolver = SourceFileResolver(file_path, language)
    return [compose(unit) for unit in resolver.units()]
