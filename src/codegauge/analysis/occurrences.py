"""Per-occurrence records and per-kind totals."""

from dataclasses import dataclass
from typing import ClassVar

from codegauge.parser.base import ConstructKind


# ---------------------------------------------------------------------------
# One record per construct found in a unit
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConstructOccurrence:
    """A single construct instance and its contribution to complexity."""

    kind: ClassVar[ConstructKind]

    decision_points: int
    start_line: int
    end_line: int

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


@dataclass(frozen=True)
class ConditionalOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.CONDITIONAL

    branch_count: int
    has_else: bool


@dataclass(frozen=True)
class ForeachOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.FOREACH

    condition_text: str
    variable_text: str


@dataclass(frozen=True)
class ForOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.FOR

    condition_text: str
    initializer_text: str
    iterator_text: str


@dataclass(frozen=True)
class WhileOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.WHILE

    condition_text: str
    post_test: bool


@dataclass(frozen=True)
class ExceptionBlockOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.EXCEPTION_BLOCK

    catch_count: int
    catch_all_count: int
    has_finally: bool

    @property
    def typed_catch_count(self) -> int:
        return self.catch_count - self.catch_all_count


@dataclass(frozen=True)
class MultiWayBranchOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.MULTI_WAY_BRANCH

    clause_count: int
    has_default: bool


@dataclass(frozen=True)
class TrapOccurrence(ConstructOccurrence):
    kind: ClassVar[ConstructKind] = ConstructKind.TRAP

    condition_type: str


# ---------------------------------------------------------------------------
# Totals, one per construct kind
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ConstructTotal:
    """
    Aggregate of every occurrence of one construct kind.

    ``total_decision_points`` is always the sum over occurrences and
    ``largest_occurrence_line_count`` the longest occurrence (0 when none).
    """

    kind: ClassVar[ConstructKind]

    total_decision_points: int = 0
    occurrence_count: int = 0
    largest_occurrence_line_count: int = 0


@dataclass(frozen=True)
class ConditionalTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.CONDITIONAL

    branch_count: int = 0
    else_count: int = 0


@dataclass(frozen=True)
class ForeachTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.FOREACH


@dataclass(frozen=True)
class ForTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.FOR

    conditionless_count: int = 0


@dataclass(frozen=True)
class WhileTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.WHILE

    post_test_count: int = 0


@dataclass(frozen=True)
class ExceptionBlockTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.EXCEPTION_BLOCK

    catch_count: int = 0
    catch_all_count: int = 0
    typed_catch_count: int = 0
    finally_count: int = 0


@dataclass(frozen=True)
class MultiWayBranchTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.MULTI_WAY_BRANCH

    clause_count: int = 0
    default_count: int = 0


@dataclass(frozen=True)
class TrapTotal(ConstructTotal):
    kind: ClassVar[ConstructKind] = ConstructKind.TRAP

    condition_types: tuple[str, ...] = ()


@dataclass(frozen=True)
class BooleanOperatorTotal:
    """Logical operator tokens; each one is a decision point."""

    and_count: int = 0
    or_count: int = 0
    xor_count: int = 0

    @property
    def count(self) -> int:
        return self.and_count + self.or_count + self.xor_count
