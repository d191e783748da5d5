"""Health check endpoint."""

from __future__ import annotations

from flask import Blueprint, current_app

from tokenauth.api.deps import json_response, timing

bp = Blueprint("health", __name__)


@bp.get("/health")
@timing
def healthcheck():
    """Return application liveness and build information."""

    version = current_app.config.get("APP_VERSION", "dev")
    return json_response({"status": "ok", "version": version})
