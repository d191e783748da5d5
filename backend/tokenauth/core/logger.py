"""JSON logging for the token service.

Every record carries the request id of the HTTP exchange it belongs to. Raw
tokens never reach a log line: callers pass ``subject_id`` and ``reason``
through ``extra=`` instead.
"""

from __future__ import annotations

import json
import logging
import re
import sys
from datetime import datetime, timezone
from typing import Any
from uuid import uuid4

from flask import Flask, Response, g, has_request_context, request

REQUEST_ID_HEADER = "X-Request-ID"
CORRELATION_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")

# Client-supplied ids end up in every log line, so only short opaque tokens pass.
_REQUEST_ID_RE = re.compile(r"[A-Za-z0-9._:-]{1,128}")

LOG_EXTRA_KEYS = (
    "endpoint",
    "elapsed_ms",
    "subject_id",
    "reason",
    "method",
    "path",
    "status",
)

access_log = logging.getLogger("tokenauth.access")


class JSONFormatter(logging.Formatter):
    """One JSON object per record, stamped with the record's creation time.

    :param extra_keys: Record attributes copied into the payload when set.
    """

    def __init__(self, extra_keys: tuple[str, ...] = LOG_EXTRA_KEYS) -> None:
        super().__init__()
        self.extra_keys = extra_keys

    def format(self, record: logging.LogRecord) -> str:
        created = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "time": created.isoformat(timespec="milliseconds"),
            "level": record.levelname,
            "name": record.name,
            "message": record.getMessage(),
            "request_id": getattr(record, "request_id", None),
        }
        payload.update(
            {key: getattr(record, key) for key in self.extra_keys if hasattr(record, key)}
        )
        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class RequestIdFilter(logging.Filter):
    """Stamp ``request_id`` on records (``None`` outside a request)."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = ensure_request_id() if has_request_context() else None
        return True


def accept_request_id(value: str | None) -> str | None:
    """Return ``value`` if it is safe to echo and log, else ``None``."""
    if value and _REQUEST_ID_RE.fullmatch(value):
        return value
    return None


def ensure_request_id() -> str:
    """Request id of the current exchange, fixed on first use.

    Taken from the first acceptable correlation header, otherwise a fresh
    uuid4. Outside a request context every call yields a new id.
    """
    if not has_request_context():
        return str(uuid4())
    request_id = g.get("request_id")
    if request_id is None:
        incoming = (accept_request_id(request.headers.get(h)) for h in CORRELATION_HEADERS)
        request_id = next((v for v in incoming if v), None) or str(uuid4())
        g.request_id = request_id
    return request_id


def configure_logging(level: str | int = "INFO") -> None:
    """Replace root handlers with a single JSON stream on stdout."""
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    handler.addFilter(RequestIdFilter())
    logging.basicConfig(
        level=level.upper() if isinstance(level, str) else level,
        handlers=[handler],
        force=True,
    )


def init_app(app: Flask) -> None:
    """Seed the request id, echo it on responses and emit one access record."""

    app.logger.addFilter(RequestIdFilter())

    @app.before_request
    def _seed_request_id() -> None:
        ensure_request_id()

    @app.after_request
    def _finish_request(response: Response) -> Response:
        response.headers[REQUEST_ID_HEADER] = ensure_request_id()
        claims = g.get("claims")
        access_log.info(
            "http.request",
            extra={
                "method": request.method,
                "path": request.path,
                "status": response.status_code,
                "subject_id": getattr(claims, "subject_id", None),
            },
        )
        return response


__all__ = [
    "JSONFormatter",
    "RequestIdFilter",
    "accept_request_id",
    "configure_logging",
    "ensure_request_id",
    "init_app",
]
