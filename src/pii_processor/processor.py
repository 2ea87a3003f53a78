"""Processor — the main API.  Validates a request, then scan → resolve → rewrite.

Usage:
    from pii_processor import PiiProcessor, Policy, Category

    processor = PiiProcessor()       # reusable, thread-safe
    out = processor.process(
        "Mail john@acme.com", {Category.EMAIL}, Policy.ANONYMIZE,
    )
    print(out.redacted_text)         # "Mail <EMAIL_1>"

    # Wire shape in, wire shape out
    processor.handle({"text": "...", "fields": ["EMAIL"], "priv_policy": "HASH"})
"""

from __future__ import annotations
import logging
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

from .errors import (
    InvalidFieldTypeError,
    InvalidPolicyError,
    InvalidRequestError,
    MissingFieldError,
    TextTooLargeError,
)
from .patterns import PatternRegistry, get_registry
from .resolver import resolve
from .rewriter import rewrite
from .scanner import scan
from .types import Category, Output, PiiRequest, Policy

logger = logging.getLogger(__name__)

DEFAULT_MAX_TEXT_LENGTH = 1_000_000


@dataclass
class ProcessorConfig:
    """Configuration for the PiiProcessor."""
    max_text_length: int | None = DEFAULT_MAX_TEXT_LENGTH   # None = unbounded
    # Fields used when a CLI/plain-text caller does not name any
    default_fields: tuple[str, ...] = tuple(c.value for c in Category)


def parse_categories(names: Iterable[Any]) -> frozenset[Category]:
    """Map category names (case-sensitive) to Category members."""
    out: set[Category] = set()
    for name in names:
        if not isinstance(name, str):
            raise InvalidFieldTypeError(repr(name))
        try:
            out.add(Category(name))
        except ValueError:
            raise InvalidFieldTypeError(name) from None
    return frozenset(out)


def parse_policy(value: Any) -> Policy:
    if isinstance(value, Policy):
        return value
    if not isinstance(value, str):
        raise InvalidPolicyError(value)
    try:
        return Policy(value)
    except ValueError:
        raise InvalidPolicyError(value) from None


def parse_request(payload: Mapping[str, Any]) -> PiiRequest:
    """Validate a ``{text, fields, priv_policy}`` envelope."""
    if not isinstance(payload, Mapping):
        raise InvalidRequestError("Request body must be a JSON object")
    for key in ("text", "fields", "priv_policy"):
        if key not in payload:
            raise MissingFieldError(key)

    text = payload["text"]
    if not isinstance(text, str):
        raise InvalidRequestError("Field 'text' must be a string")
    fields = payload["fields"]
    if isinstance(fields, str) or not isinstance(fields, (list, tuple)):
        raise InvalidRequestError("Field 'fields' must be a list of strings")

    return PiiRequest(
        text=text,
        categories=parse_categories(fields),
        policy=parse_policy(payload["priv_policy"]),
    )


class PiiProcessor:
    """Detects PII of the requested categories and rewrites it."""

    def __init__(
        self,
        config: ProcessorConfig | None = None,
        registry: PatternRegistry | None = None,
    ) -> None:
        self.config = config or ProcessorConfig()
        self.registry = registry or get_registry()

    def process(
        self,
        text: str,
        categories: Iterable[Category],
        policy: Policy,
    ) -> Output:
        """Transform ``text``; raises TextTooLargeError over the size cap."""
        limit = self.config.max_text_length
        if limit is not None and len(text) > limit:
            raise TextTooLargeError(len(text), limit)

        spans = scan(text, categories, self.registry)
        resolved = resolve(spans)
        output = rewrite(text, resolved, policy)

        if logger.isEnabledFor(logging.INFO):
            counts = Counter(m.category.value for m in output.mappings)
            logger.info(
                "Processed %d chars with %s: %d matches, %d rewritten %s",
                len(text), policy.value, len(spans), len(resolved), dict(counts),
            )
        return output

    def process_request(self, request: PiiRequest) -> Output:
        return self.process(request.text, request.categories, request.policy)

    def handle(self, payload: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a raw envelope and return the response envelope."""
        request = parse_request(payload)
        return self.process_request(request).to_dict()


# Default instance for detect_and_transform
_default: PiiProcessor | None = None


def detect_and_transform(
    text: str,
    fields: Iterable[str],
    policy: Policy | str,
) -> Output:
    """One-shot helper: validate names, then transform with default settings."""
    global _default
    categories = parse_categories(fields)
    policy = parse_policy(policy)
    if _default is None:
        _default = PiiProcessor()
    return _default.process(text, categories, policy)
