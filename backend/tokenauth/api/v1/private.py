"""Example protected resource gated by an access token."""

from __future__ import annotations

from flask import Blueprint

from tokenauth.api.deps import current_claims, json_response, require_auth, timing
from tokenauth.api.schemas import ClaimsSchema

bp = Blueprint("private", __name__)

claims_schema = ClaimsSchema()


@bp.get("")
@require_auth
@timing
def private():
    """Return the verified claims of the caller."""

    body = {
        "message": "This is a protected route!",
        "user": claims_schema.dump(current_claims()),
    }
    return json_response(body)
