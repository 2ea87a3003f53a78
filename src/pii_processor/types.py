"""Core types."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum


class Category(str, Enum):
    """Supported PII categories.

    Declaration order doubles as the priority used when spans from two
    categories overlap with equal length.
    """
    EMAIL = "EMAIL"
    PHONE = "PHONE"
    SSN = "SSN"
    CREDIT_CARD = "CREDIT_CARD"

    @property
    def priority(self) -> int:
        return _PRIORITY[self]


_PRIORITY = {c: i for i, c in enumerate(Category)}


class Policy(str, Enum):
    """Replacement strategy selected by the caller."""
    REDACT = "REDACT"
    ANONYMIZE = "ANONYMIZE"
    HASH = "HASH"


@dataclass(frozen=True, slots=True)
class Span:
    """A half-open [start, end) range of the original text."""
    category: Category
    start: int
    end: int

    def __post_init__(self) -> None:
        if not 0 <= self.start < self.end:
            raise ValueError(f"invalid span [{self.start}, {self.end})")

    def __len__(self) -> int:
        return self.end - self.start

    def overlaps(self, other: Span) -> bool:
        return self.start < other.end and self.end > other.start


@dataclass(frozen=True, slots=True)
class MappingRecord:
    """One rewritten match: what it was and what replaced it."""
    category: Category
    original: str
    replacement: str

    def as_triple(self) -> list[str]:
        return [self.category.value, self.original, self.replacement]


@dataclass(frozen=True, slots=True)
class Output:
    """Result of transforming one text."""
    redacted_text: str
    mappings: tuple[MappingRecord, ...] = ()

    def to_dict(self) -> dict:
        return {
            "redacted": self.redacted_text,
            "map": [m.as_triple() for m in self.mappings],
        }


@dataclass(frozen=True, slots=True)
class PiiRequest:
    """A validated request envelope."""
    text: str
    categories: frozenset[Category] = field(default_factory=frozenset)
    policy: Policy = Policy.REDACT
