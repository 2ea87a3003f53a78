"""YAML/dict config loader for pii-processor.

Supports loading from a YAML file or a plain dict (for embedding
in a larger service config).

Example YAML:

    pii_processor:
      max_text_length: 200000
      default_fields:
        - EMAIL
        - PHONE
      log_level: INFO
      server:
        host: 127.0.0.1
        port: 8787
"""

from __future__ import annotations
import os
from pathlib import Path
from typing import Any

import yaml

from .processor import DEFAULT_MAX_TEXT_LENGTH, PiiProcessor, ProcessorConfig, parse_categories
from .types import Category

DEFAULT_HOST = os.environ.get("PII_PROCESSOR_HOST", "127.0.0.1")
DEFAULT_PORT = int(os.environ.get("PII_PROCESSOR_PORT", "8787"))


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    # Support nested under "pii_processor" key or flat
    if "pii_processor" in data:
        data = data["pii_processor"] or {}

    default_fields = data.get("default_fields") or [c.value for c in Category]
    # Validate eagerly so a bad config fails at startup
    parse_categories(default_fields)

    max_text_length = data.get("max_text_length", DEFAULT_MAX_TEXT_LENGTH)
    if max_text_length is not None:
        max_text_length = int(max_text_length)

    server = data.get("server") or {}
    return {
        "max_text_length": max_text_length,
        "default_fields": tuple(default_fields),
        "log_level": str(data.get("log_level", "INFO")).upper(),
        "host": server.get("host", DEFAULT_HOST),
        "port": int(server.get("port", DEFAULT_PORT)),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(Path(path).expanduser()) as f:
        return load_config(yaml.safe_load(f))


def create_processor(config: dict[str, Any] | None = None) -> PiiProcessor:
    """Create a fully configured processor from a config dict."""
    cfg = load_config(config)
    return PiiProcessor(ProcessorConfig(
        max_text_length=cfg["max_text_length"],
        default_fields=tuple(cfg["default_fields"]),
    ))
