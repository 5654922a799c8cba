"""Invocation statistics: how many calls a unit makes and to what."""

from dataclasses import dataclass, field

from codegauge.parser.base import SourceUnit
from codegauge.analysis.finder import find_invocations


@dataclass(frozen=True)
class InvocationStats:
    total_count: int = 0
    distinct_count: int = 0
    names: tuple[str, ...] = field(default=())


def invocation_stats(unit: SourceUnit) -> InvocationStats:
    """
    Count every call in the unit, nested scopes included.

    Calls whose target is not a plain name (e.g. ``handlers[key]()``) count
    toward the total but add no name.
    """
    calls = find_invocations(unit)
    names: list[str] = []
    for call in calls:
        name = unit.parser.invocation_target(call)
        if name and name not in names:
            names.append(name)
    return InvocationStats(
        total_count=len(calls),
        distinct_count=len(names),
        names=tuple(names),
    )
