"""Shared API helpers for request parsing and cross-cutting concerns."""

from __future__ import annotations

import functools
import time
from collections.abc import Callable
from typing import Any, TypeVar, cast

from flask import Response, current_app, g, jsonify, request

from tokenauth.core.errors import Unauthorized
from tokenauth.core.extensions import get_auth_service
from tokenauth.services._shared.ports import Claims

F = TypeVar("F", bound=Callable[..., Any])

BEARER_PREFIX = "bearer "


def bearer_token() -> str | None:
    """Extract the bearer credential from the ``Authorization`` header."""

    header = request.headers.get("Authorization", "")
    if header[: len(BEARER_PREFIX)].lower() != BEARER_PREFIX:
        return None
    return header[len(BEARER_PREFIX) :].strip() or None


def require_auth(func: F) -> F:
    """Ensure the request carries a valid access token.

    On success the verified :class:`Claims` are available as ``g.claims``.
    """

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        outcome = get_auth_service().verify_access(bearer_token())
        if not outcome.ok:
            raise Unauthorized(outcome.failure.message)  # type: ignore[union-attr]
        g.claims = outcome.value
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def current_claims() -> Claims:
    """Return claims attached by :func:`require_auth`."""

    return cast(Claims, g.claims)


def json_response(payload: Any, *, status: int = 200) -> Response:
    """Return a JSON response enforcing a consistent MIME type."""

    response = jsonify(payload)
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            request_endpoint = getattr(request, "endpoint", None)
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request_endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]
