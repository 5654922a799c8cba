"""Per-construct analyzers.

Each analyzer turns one node of its construct kind into one occurrence
record. The counting conventions:

    conditional      one decision per condition-bearing clause (if + each
                     else-if); the else clause adds none but extends the extent
    foreach          1
    for              1 when the header has a condition, otherwise 0
    while            1 (pre- or post-test)
    exception block  one decision per catch handler; finally adds none
    multi-way branch one decision per clause, default included
    trap             1 per handler
    boolean operator 1 per logical AND / OR / XOR token

Analyzers trust the syntax finder to hand them nodes of the right kind.
"""

from typing import Callable, Iterable

from tree_sitter import Node

from codegauge.parser.base import ConstructKind, SourceUnit, Token, TokenKind, end_row
from codegauge.analysis.occurrences import (
    BooleanOperatorTotal,
    ConditionalOccurrence,
    ConstructOccurrence,
    ExceptionBlockOccurrence,
    ForeachOccurrence,
    ForOccurrence,
    MultiWayBranchOccurrence,
    TrapOccurrence,
    WhileOccurrence,
)


def _extent(unit: SourceUnit, first: Node, last: Node) -> tuple[int, int]:
    start = unit.line_of(first.start_point[0])
    end = unit.line_of(end_row(last))
    return start, max(start, end)


def analyze_conditional(node: Node, unit: SourceUnit) -> ConditionalOccurrence:
    clauses, else_clause = unit.parser.conditional_parts(node)
    last = else_clause if else_clause is not None else clauses[-1]
    start, end = _extent(unit, node, last)
    return ConditionalOccurrence(
        decision_points=len(clauses),
        start_line=start,
        end_line=end,
        branch_count=len(clauses),
        has_else=else_clause is not None,
    )


def analyze_foreach(node: Node, unit: SourceUnit) -> ForeachOccurrence:
    variable, collection = unit.parser.foreach_parts(node)
    start, end = _extent(unit, node, node)
    return ForeachOccurrence(
        decision_points=1,
        start_line=start,
        end_line=end,
        condition_text=collection,
        variable_text=variable,
    )


def analyze_for(node: Node, unit: SourceUnit) -> ForOccurrence:
    initializer, condition, iterator = unit.parser.for_parts(node)
    start, end = _extent(unit, node, node)
    # A header without a condition never tests anything; only break leaves it.
    return ForOccurrence(
        decision_points=1 if condition else 0,
        start_line=start,
        end_line=end,
        condition_text=condition or "",
        initializer_text=initializer,
        iterator_text=iterator,
    )


def analyze_while(node: Node, unit: SourceUnit) -> WhileOccurrence:
    condition, post_test = unit.parser.while_parts(node)
    start, end = _extent(unit, node, node)
    return WhileOccurrence(
        decision_points=1,
        start_line=start,
        end_line=end,
        condition_text=condition,
        post_test=post_test,
    )


def analyze_exception_block(node: Node, unit: SourceUnit) -> ExceptionBlockOccurrence:
    parser = unit.parser
    handlers = parser.catch_clauses(node)
    catch_all = sum(1 for clause in handlers if parser.is_catch_all(clause))
    start, end = _extent(unit, node, node)
    return ExceptionBlockOccurrence(
        decision_points=len(handlers),
        start_line=start,
        end_line=end,
        catch_count=len(handlers),
        catch_all_count=catch_all,
        has_finally=parser.finally_clause(node) is not None,
    )


def analyze_multi_way_branch(node: Node, unit: SourceUnit) -> MultiWayBranchOccurrence:
    parser = unit.parser
    clauses = parser.branch_clauses(node)
    start, end = _extent(unit, node, node)
    # The default clause is counted like any other clause.
    return MultiWayBranchOccurrence(
        decision_points=len(clauses),
        start_line=start,
        end_line=end,
        clause_count=len(clauses),
        has_default=any(parser.is_default_clause(clause) for clause in clauses),
    )


def analyze_trap(node: Node, unit: SourceUnit) -> TrapOccurrence:
    scope, condition = unit.parser.trap_parts(node)
    start, end = _extent(unit, scope, scope)
    return TrapOccurrence(
        decision_points=1,
        start_line=start,
        end_line=end,
        condition_type=condition,
    )


ANALYZERS: dict[ConstructKind, Callable[[Node, SourceUnit], ConstructOccurrence]] = {
    ConstructKind.CONDITIONAL: analyze_conditional,
    ConstructKind.FOREACH: analyze_foreach,
    ConstructKind.FOR: analyze_for,
    ConstructKind.WHILE: analyze_while,
    ConstructKind.EXCEPTION_BLOCK: analyze_exception_block,
    ConstructKind.MULTI_WAY_BRANCH: analyze_multi_way_branch,
    ConstructKind.TRAP: analyze_trap,
}


def analyze_boolean_operators(tokens: Iterable[Token]) -> BooleanOperatorTotal:
    """Tally logical operator tokens by operator."""
    counts = {
        TokenKind.LOGICAL_AND: 0,
        TokenKind.LOGICAL_OR: 0,
        TokenKind.LOGICAL_XOR: 0,
    }
    for token in tokens:
        if token.kind in counts:
            counts[token.kind] += 1
    return BooleanOperatorTotal(
        and_count=counts[TokenKind.LOGICAL_AND],
        or_count=counts[TokenKind.LOGICAL_OR],
        xor_count=counts[TokenKind.LOGICAL_XOR],
    )
