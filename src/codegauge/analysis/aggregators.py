"""Reduce occurrence records to one total per construct kind."""

from typing import Callable, Sequence

from codegauge.parser.base import ConstructKind
from codegauge.analysis.occurrences import (
    ConditionalOccurrence,
    ConditionalTotal,
    ConstructOccurrence,
    ConstructTotal,
    ExceptionBlockOccurrence,
    ExceptionBlockTotal,
    ForeachOccurrence,
    ForeachTotal,
    ForOccurrence,
    ForTotal,
    MultiWayBranchOccurrence,
    MultiWayBranchTotal,
    TrapOccurrence,
    TrapTotal,
    WhileOccurrence,
    WhileTotal,
)


def _common(occurrences: Sequence[ConstructOccurrence]) -> dict:
    return {
        "total_decision_points": sum(o.decision_points for o in occurrences),
        "occurrence_count": len(occurrences),
        "largest_occurrence_line_count": max(
            (o.line_count for o in occurrences), default=0
        ),
    }


def aggregate_conditionals(occurrences: Sequence[ConditionalOccurrence]) -> ConditionalTotal:
    return ConditionalTotal(
        **_common(occurrences),
        branch_count=sum(o.branch_count for o in occurrences),
        else_count=sum(1 for o in occurrences if o.has_else),
    )


def aggregate_foreach_loops(occurrences: Sequence[ForeachOccurrence]) -> ForeachTotal:
    return ForeachTotal(**_common(occurrences))


def aggregate_for_loops(occurrences: Sequence[ForOccurrence]) -> ForTotal:
    return ForTotal(
        **_common(occurrences),
        conditionless_count=sum(1 for o in occurrences if not o.condition_text),
    )


def aggregate_while_loops(occurrences: Sequence[WhileOccurrence]) -> WhileTotal:
    return WhileTotal(
        **_common(occurrences),
        post_test_count=sum(1 for o in occurrences if o.post_test),
    )


def aggregate_exception_blocks(
    occurrences: Sequence[ExceptionBlockOccurrence],
) -> ExceptionBlockTotal:
    return ExceptionBlockTotal(
        **_common(occurrences),
        catch_count=sum(o.catch_count for o in occurrences),
        catch_all_count=sum(o.catch_all_count for o in occurrences),
        typed_catch_count=sum(o.typed_catch_count for o in occurrences),
        finally_count=sum(1 for o in occurrences if o.has_finally),
    )


def aggregate_multi_way_branches(
    occurrences: Sequence[MultiWayBranchOccurrence],
) -> MultiWayBranchTotal:
    return MultiWayBranchTotal(
        **_common(occurrences),
        clause_count=sum(o.clause_count for o in occurrences),
        default_count=sum(1 for o in occurrences if o.has_default),
    )


def aggregate_traps(occurrences: Sequence[TrapOccurrence]) -> TrapTotal:
    return TrapTotal(
        **_common(occurrences),
        condition_types=tuple(o.condition_type for o in occurrences if o.condition_type),
    )


AGGREGATORS: dict[ConstructKind, Callable[[Sequence], ConstructTotal]] = {
    ConstructKind.CONDITIONAL: aggregate_conditionals,
    ConstructKind.FOREACH: aggregate_foreach_loops,
    ConstructKind.FOR: aggregate_for_loops,
    ConstructKind.WHILE: aggregate_while_loops,
    ConstructKind.EXCEPTION_BLOCK: aggregate_exception_blocks,
    ConstructKind.MULTI_WAY_BRANCH: aggregate_multi_way_branches,
    ConstructKind.TRAP: aggregate_traps,
}
