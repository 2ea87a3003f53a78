"""Pattern registry — one compiled regex per PII category.

The registry is built once per process and is read-only afterwards, so it can
be shared freely between threads serving concurrent requests.
"""

from __future__ import annotations
import logging
import re
from collections.abc import Mapping
from types import MappingProxyType

from .types import Category

logger = logging.getLogger(__name__)

# Source patterns, compiled by compile_registry()
PATTERN_SOURCES: dict[Category, str] = {
    Category.EMAIL: r"(?i)[\w.+-]+@[\w.-]+\.\w{2,}",
    Category.PHONE: r"\b(?:\+1[-.\s]?)?\(?\d{3}\)?[-.\s]?\d{3}[-.\s]?\d{4}\b",
    Category.SSN: r"\b\d{3}[-]?\d{2}[-]?\d{4}\b",
    Category.CREDIT_CARD: r"\b(?:\d{4}[-\s]?){3}\d{4}\b",
}


class PatternRegistry:
    """Immutable category → compiled pattern lookup."""

    __slots__ = ("_patterns",)

    def __init__(self, patterns: Mapping[Category, re.Pattern]) -> None:
        self._patterns = MappingProxyType(dict(patterns))

    def lookup(self, category: Category) -> re.Pattern:
        return self._patterns[category]

    @property
    def categories(self) -> list[Category]:
        return [c for c in Category if c in self._patterns]

    def __contains__(self, category: object) -> bool:
        return category in self._patterns


def compile_registry(sources: Mapping[Category, str] | None = None) -> PatternRegistry:
    """Compile every pattern.  A malformed pattern raises re.error here."""
    sources = PATTERN_SOURCES if sources is None else sources
    compiled = {category: re.compile(src) for category, src in sources.items()}
    logger.debug("Compiled %d PII patterns", len(compiled))
    return PatternRegistry(compiled)


# Lazy singleton — built on first use, never rebuilt
_registry: PatternRegistry | None = None


def get_registry() -> PatternRegistry:
    """Return the process-wide registry, compiling it on first call."""
    global _registry
    if _registry is None:
        _registry = compile_registry()
    return _registry
