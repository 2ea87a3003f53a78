"""PII Processor — detect PII in text and redact, anonymize or hash it."""

from .types import Category, Policy, Span, MappingRecord, Output, PiiRequest
from .errors import (
    PiiError, InvalidRequestError, MissingFieldError,
    InvalidFieldTypeError, InvalidPolicyError, TextTooLargeError,
)
from .patterns import PatternRegistry, compile_registry, get_registry
from .scanner import scan
from .resolver import resolve
from .rewriter import rewrite
from .processor import (
    PiiProcessor, ProcessorConfig,
    detect_and_transform, parse_request, parse_categories, parse_policy,
)
from .config import create_processor, load_config, load_from_yaml

__all__ = [
    "Category", "Policy", "Span", "MappingRecord", "Output", "PiiRequest",
    "PiiError", "InvalidRequestError", "MissingFieldError",
    "InvalidFieldTypeError", "InvalidPolicyError", "TextTooLargeError",
    "PatternRegistry", "compile_registry", "get_registry",
    "scan", "resolve", "rewrite",
    "PiiProcessor", "ProcessorConfig",
    "detect_and_transform", "parse_request", "parse_categories", "parse_policy",
    "create_processor", "load_config", "load_from_yaml",
]
__version__ = "0.1.0"
