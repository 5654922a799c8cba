"""Locate construct nodes in a unit's tree."""

from typing import Callable

from tree_sitter import Node

from codegauge.parser.base import ConstructKind, SourceUnit


def find_nodes(
    unit: SourceUnit,
    predicate: Callable[[Node], bool],
    include_nested: bool = False,
) -> list[Node]:
    """
    Depth-first search of the unit for nodes satisfying ``predicate``.

    Without ``include_nested`` the walk does not enter nested scopes
    (lambdas, inner functions, class bodies). The unit root itself is
    never treated as a nested scope.
    """
    parser = unit.parser
    found: list[Node] = []

    def walk(node: Node, is_root: bool) -> None:
        if not is_root and not include_nested and parser.is_scope_boundary(node):
            return
        if predicate(node):
            found.append(node)
        for child in node.children:
            walk(child, False)

    walk(unit.root, True)
    return found


def find(
    unit: SourceUnit,
    kind: ConstructKind,
    include_nested: bool = False,
) -> list[Node]:
    """All nodes of construct ``kind`` in the unit, in source order."""
    parser = unit.parser
    return find_nodes(unit, lambda node: parser.matches(node, kind), include_nested)


def find_invocations(unit: SourceUnit) -> list[Node]:
    """Every call node, nested scopes included."""
    return find_nodes(unit, unit.parser.is_invocation, include_nested=True)
