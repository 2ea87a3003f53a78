"""Rewriter — applies a privacy policy to resolved spans.

The output text is assembled from segments of the untouched source, so span
offsets stay valid throughout.  Mapping records are still reported in
back-to-front (rightmost first) order, the order a right-to-left in-place
rewrite would produce them.
"""

from __future__ import annotations
import hashlib
from collections import defaultdict
from collections.abc import Sequence

from .types import Category, MappingRecord, Output, Policy, Span

BLOCK_CHAR = "\u2588"
HASH_LENGTH = 8


def redact(original: str) -> str:
    """Length-preserving run of block characters."""
    return BLOCK_CHAR * len(original)


def placeholder(category: Category, n: int) -> str:
    return f"<{category.value}_{n}>"


def hash_value(original: str) -> str:
    """First 8 hex chars of the SHA-256 digest of the UTF-8 bytes."""
    return hashlib.sha256(original.encode("utf-8")).hexdigest()[:HASH_LENGTH]


def rewrite(source: str, spans: Sequence[Span], policy: Policy) -> Output:
    """Replace every span of ``source`` according to ``policy``.

    ``spans`` must be non-overlapping, as returned by ``resolve``.
    ANONYMIZE numbers placeholders per category in reading order, so the
    leftmost email is ``<EMAIL_1>`` wherever it sits in the mapping list.
    """
    ordered = sorted(spans, key=lambda s: s.start)
    counters: dict[Category, int] = defaultdict(int)

    parts: list[str] = []
    records: list[MappingRecord] = []
    cursor = 0
    for span in ordered:
        original = source[span.start:span.end]
        if policy is Policy.REDACT:
            replacement = redact(original)
        elif policy is Policy.ANONYMIZE:
            counters[span.category] += 1
            replacement = placeholder(span.category, counters[span.category])
        else:
            replacement = hash_value(original)

        parts.append(source[cursor:span.start])
        parts.append(replacement)
        cursor = span.end
        records.append(MappingRecord(span.category, original, replacement))
    parts.append(source[cursor:])

    records.reverse()
    return Output(redacted_text="".join(parts), mappings=tuple(records))
