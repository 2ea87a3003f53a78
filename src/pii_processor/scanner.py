"""Span scanner — runs each requested category's pattern over the whole text."""

from __future__ import annotations
from collections.abc import Iterable

from .patterns import PatternRegistry, get_registry
from .types import Category, Span


def scan(
    source: str,
    categories: Iterable[Category],
    registry: PatternRegistry | None = None,
) -> list[Span]:
    """Collect every match of every requested category.

    Categories are scanned independently, so spans from different
    categories may overlap; the resolver deals with that.  Categories are
    visited in declaration order regardless of how they were requested.
    """
    registry = registry or get_registry()
    wanted = set(categories)
    spans: list[Span] = []
    for category in Category:
        if category not in wanted:
            continue
        for m in registry.lookup(category).finditer(source):
            # Zero-width matches cannot be rewritten
            if m.end() > m.start():
                spans.append(Span(category, m.start(), m.end()))
    return spans
