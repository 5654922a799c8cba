"""Tests for occurrence aggregation."""

from codegauge.analysis import AGGREGATORS
from codegauge.analysis.aggregators import (
    aggregate_conditionals,
    aggregate_exception_blocks,
    aggregate_for_loops,
    aggregate_traps,
    aggregate_while_loops,
)
from codegauge.analysis.occurrences import (
    ConditionalOccurrence,
    ExceptionBlockOccurrence,
    ForOccurrence,
    TrapOccurrence,
    WhileOccurrence,
)
from codegauge.parser import ConstructKind


class TestAggregators:
    """Sums, counts and longest extents."""

    def test_every_kind_has_an_aggregator(self):
        assert set(AGGREGATORS) == set(ConstructKind)

    def test_empty_input_gives_zeros(self):
        for kind, aggregate in AGGREGATORS.items():
            total = aggregate([])
            assert total.total_decision_points == 0, kind
            assert total.occurrence_count == 0, kind
            assert total.largest_occurrence_line_count == 0, kind

    def test_conditionals(self):
        total = aggregate_conditionals([
            ConditionalOccurrence(2, 1, 6, branch_count=2, has_else=True),
            ConditionalOccurrence(1, 8, 9, branch_count=1, has_else=False),
        ])
        assert total.total_decision_points == 3
        assert total.occurrence_count == 2
        assert total.largest_occurrence_line_count == 6
        assert total.branch_count == 3
        assert total.else_count == 1

    def test_for_loops_without_condition(self):
        total = aggregate_for_loops([
            ForOccurrence(1, 1, 3, condition_text="i < n", initializer_text="int i = 0", iterator_text="i++"),
            ForOccurrence(0, 5, 5, condition_text="", initializer_text="", iterator_text=""),
        ])
        assert total.total_decision_points == 1
        assert total.conditionless_count == 1
        assert total.largest_occurrence_line_count == 3

    def test_while_loops(self):
        total = aggregate_while_loops([
            WhileOccurrence(1, 1, 2, condition_text="x", post_test=True),
            WhileOccurrence(1, 4, 5, condition_text="y", post_test=False),
        ])
        assert total.post_test_count == 1
        assert total.total_decision_points == 2

    def test_exception_blocks(self):
        total = aggregate_exception_blocks([
            ExceptionBlockOccurrence(2, 1, 8, catch_count=2, catch_all_count=1, has_finally=True),
            ExceptionBlockOccurrence(1, 10, 13, catch_count=1, catch_all_count=0, has_finally=False),
        ])
        assert total.catch_count == 3
        assert total.catch_all_count == 1
        assert total.typed_catch_count == 2
        assert total.finally_count == 1
        assert total.largest_occurrence_line_count == 8

    def test_traps_keep_condition_types_in_order(self):
        total = aggregate_traps([
            TrapOccurrence(1, 1, 2, condition_type="KeyError"),
            TrapOccurrence(1, 4, 5, condition_type="OSError"),
        ])
        assert total.condition_types == ("KeyError", "OSError")
        assert total.total_decision_points == 2
