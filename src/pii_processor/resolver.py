"""Span resolver — de-conflicts overlapping spans and orders them for rewriting.

Overlap rule: the longest span wins; equal lengths are decided by category
priority (declaration order of Category), then by the leftmost start.  The
survivors come back sorted by start, highest first, so that rewriting one
span never shifts the offsets of the spans still to be processed.
"""

from __future__ import annotations
import bisect
import logging
from collections.abc import Iterable

from .types import Span

logger = logging.getLogger(__name__)


def _rank(span: Span) -> tuple[int, int, int]:
    return (-(span.end - span.start), span.category.priority, span.start)


def _clash(taken: list[Span], starts: list[int], span: Span) -> Span | None:
    """Return a kept span overlapping ``span``, if any.

    Kept spans are disjoint and ordered by start, so only the neighbours on
    either side of the insertion point can overlap.
    """
    i = bisect.bisect_right(starts, span.start)
    if i > 0 and taken[i - 1].end > span.start:
        return taken[i - 1]
    if i < len(taken) and taken[i].start < span.end:
        return taken[i]
    return None


def resolve(spans: Iterable[Span]) -> list[Span]:
    """Drop overlapping spans and return the rest in back-to-front order."""
    taken: list[Span] = []   # kept spans, ascending by start
    starts: list[int] = []
    for span in sorted(spans, key=_rank):
        clash = _clash(taken, starts, span)
        if clash is not None:
            logger.debug(
                "Dropping %s span [%d, %d) overlapping %s span [%d, %d)",
                span.category.value, span.start, span.end,
                clash.category.value, clash.start, clash.end,
            )
            continue
        i = bisect.bisect_right(starts, span.start)
        starts.insert(i, span.start)
        taken.insert(i, span)
    taken.reverse()
    return taken
