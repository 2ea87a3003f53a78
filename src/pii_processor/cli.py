"""CLI interface for pii-processor.

Usage:
    # Transform a request envelope (stdin: JSON, stdout: JSON)
    echo '{"text":"I am john@x.com","fields":["EMAIL"],"priv_policy":"HASH"}' | \
        python -m pii_processor.cli transform

    # Transform plain text (stdin: text, stdout: JSON)
    echo 'Call 555-123-4567' | \
        python -m pii_processor.cli redact-text --fields PHONE --policy ANONYMIZE

    # List supported categories
    python -m pii_processor.cli categories

    # Run the HTTP sidecar
    python -m pii_processor.cli serve --port 8787
"""

from __future__ import annotations
import argparse
import json
import logging
import os
import sys
from typing import Any

from .config import load_config, load_from_yaml, create_processor
from .errors import InvalidRequestError
from .processor import PiiProcessor, parse_categories, parse_policy
from .types import Policy


def _load_cfg(args: argparse.Namespace) -> dict[str, Any]:
    if args.config:
        return load_from_yaml(args.config)
    return load_config({})


def _write_json(data: Any) -> None:
    json.dump(data, sys.stdout, ensure_ascii=False)
    sys.stdout.write("\n")


def cmd_transform(args: argparse.Namespace, processor: PiiProcessor) -> None:
    """Transform a JSON request envelope from stdin."""
    raw = sys.stdin.read()
    try:
        payload = json.loads(raw)
    except json.JSONDecodeError as e:
        raise InvalidRequestError(f"Invalid JSON on stdin: {e}") from e
    _write_json(processor.handle(payload))


def cmd_redact_text(args: argparse.Namespace, processor: PiiProcessor) -> None:
    """Transform plain text from stdin."""
    names = args.fields.split(",") if args.fields else list(processor.config.default_fields)
    categories = parse_categories(n.strip() for n in names if n.strip())
    policy = parse_policy(args.policy)
    text = sys.stdin.read()
    _write_json(processor.process(text, categories, policy).to_dict())


def cmd_categories(args: argparse.Namespace, processor: PiiProcessor) -> None:
    """List supported categories."""
    _write_json([c.value for c in processor.registry.categories])


def cmd_serve(args: argparse.Namespace, processor: PiiProcessor) -> None:
    from .server import serve
    serve(
        processor,
        host=args.host or args.cfg["host"],
        port=args.port or args.cfg["port"],
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pii-processor",
        description="Detect and rewrite PII in free-form text",
    )
    parser.add_argument(
        "--config", default=os.environ.get("PII_PROCESSOR_CONFIG"),
        help="YAML config file",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default from config)")

    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("transform", help="Transform a JSON request envelope (stdin)")

    p = sub.add_parser("redact-text", help="Transform plain text (stdin)")
    p.add_argument("--fields", default="", help="Comma-separated categories, e.g. EMAIL,PHONE")
    p.add_argument(
        "--policy", default=Policy.REDACT.value,
        choices=[x.value for x in Policy], help="Privacy policy",
    )

    sub.add_parser("categories", help="List supported categories")

    p = sub.add_parser("serve", help="Run the HTTP sidecar")
    p.add_argument("--host", default=None, help="Bind address (default from config)")
    p.add_argument("--port", type=int, default=None, help="Port (default from config)")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    cfg = args.cfg = _load_cfg(args)

    logging.basicConfig(
        level=(args.log_level or cfg["log_level"]).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    cmds = {
        "transform": cmd_transform,
        "redact-text": cmd_redact_text,
        "categories": cmd_categories,
        "serve": cmd_serve,
    }
    processor = create_processor(cfg)
    try:
        cmds[args.command](args, processor)
    except InvalidRequestError as e:
        sys.stderr.write(f"error: {e}\n")
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
