"""HTTP sidecar server for pii-processor.

Runs as a lightweight stdlib HTTP server on localhost.

Endpoints:
    GET  /          — Greeting (plain text)
    GET  /health    — Health check
    POST /pii       — Transform text (JSON body)

Body format: {"text": "...", "fields": ["EMAIL", ...], "priv_policy": "REDACT"}
Response:    {"redacted": "...", "map": [["EMAIL", "a@b.com", "<EMAIL_1>"], ...]}
"""

from __future__ import annotations
import json
import logging
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Any

from .config import DEFAULT_HOST, DEFAULT_PORT
from .errors import InvalidRequestError, TextTooLargeError
from .processor import PiiProcessor

logger = logging.getLogger(__name__)

GREETING = "Hello from PII Processor!"


class PIIHandler(BaseHTTPRequestHandler):
    """HTTP request handler for the PII processor sidecar."""

    # Set by make_server()
    processor: PiiProcessor

    def _read_body(self) -> bytes:
        header = self.headers.get("Content-Length")
        try:
            length = int(header)
        except (TypeError, ValueError):
            length = -1
        if length < 0:
            # Body left unread, so the connection cannot be reused
            self.close_connection = True
            raise InvalidRequestError(f"Invalid Content-Length header: {header!r}")
        return self.rfile.read(length)

    def _respond(self, status: int, data: Any) -> None:
        body = json.dumps(data, ensure_ascii=False).encode("utf-8")
        self._send(status, "application/json", body)

    def _send(self, status: int, content_type: str, body: bytes) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("%s - %s", self.address_string(), format % args)

    def do_GET(self) -> None:
        if self.path == "/":
            self._send(200, "text/plain; charset=utf-8", GREETING.encode("utf-8"))
        elif self.path == "/health":
            self._respond(200, {
                "status": "ok",
                "categories": [c.value for c in self.processor.registry.categories],
            })
        else:
            self._respond(404, {"error": "not found"})

    def do_POST(self) -> None:
        try:
            raw = self._read_body()
            if self.path != "/pii":
                self._respond(404, {"error": "not found"})
                return
            payload = json.loads(raw.decode("utf-8")) if raw else {}
            self._respond(200, self.processor.handle(payload))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            self._respond(400, {"error": f"Invalid JSON body: {e}"})
        except TextTooLargeError as e:
            self._respond(413, {"error": str(e)})
        except InvalidRequestError as e:
            logger.info("Rejected request: %s", e)
            self._respond(400, {"error": str(e)})
        except Exception:
            logger.exception("Error processing PII request")
            self._respond(500, {"error": "internal error"})


def make_server(
    processor: PiiProcessor,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> ThreadingHTTPServer:
    """Bind a server whose handlers share ``processor``."""
    handler = type("BoundPIIHandler", (PIIHandler,), {"processor": processor})
    return ThreadingHTTPServer((host, port), handler)


def serve(
    processor: PiiProcessor | None = None,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> None:
    """Start the PII processor HTTP sidecar."""
    server = make_server(processor or PiiProcessor(), host, port)
    logger.info("pii-processor sidecar listening on http://%s:%d", *server.server_address[:2])
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Shutting down...")
    finally:
        server.server_close()
