"""Authentication endpoints: login, refresh rotation and logout."""

from __future__ import annotations

from flask import Blueprint, Response, current_app, request
from marshmallow import ValidationError

from tokenauth.api.deps import json_response, timing
from tokenauth.api.schemas import LoginSchema, TokenResponseSchema
from tokenauth.core.errors import Unauthorized
from tokenauth.core.extensions import get_auth_service, limiter
from tokenauth.services._shared.errors import AuthFailure
from tokenauth.services.auth.dto import LoginIn, LogoutIn, RefreshIn, TokenPair

bp = Blueprint("auth", __name__)

login_schema = LoginSchema()
token_schema = TokenResponseSchema()


def _login_rate_limit() -> str:
    return str(current_app.config.get("AUTH_LOGIN_RATE_LIMIT", "5 per minute"))


def _cookie_name() -> str:
    return str(current_app.config.get("REFRESH_COOKIE_NAME", "refreshToken"))


def _token_response(pair: TokenPair) -> Response:
    """Body carries the access token; the refresh token goes in an HTTP-only cookie."""

    response = json_response(token_schema.dump({"access_token": pair.access_token}))
    response.set_cookie(
        _cookie_name(),
        pair.refresh_token,
        max_age=int(current_app.config["REFRESH_TOKEN_EXPIRES"].total_seconds()),
        secure=bool(current_app.config.get("REFRESH_COOKIE_SECURE", False)),
        httponly=True,
        samesite="Strict",
    )
    return response


@bp.post("")
@limiter.limit(_login_rate_limit)
@timing
def login():
    """Authenticate credentials and issue a token pair."""

    try:
        data = login_schema.load(request.get_json(silent=True) or {})
    except ValidationError:
        raise Unauthorized(AuthFailure.INVALID_CREDENTIALS.message) from None

    outcome = get_auth_service().login(LoginIn(email=data["email"], password=data["password"]))
    if not outcome.ok:
        raise Unauthorized(outcome.failure.message)  # type: ignore[union-attr]
    return _token_response(outcome.unwrap())


@bp.post("/refresh")
@timing
def refresh():
    """Exchange the refresh cookie for a new token pair."""

    outcome = get_auth_service().refresh(RefreshIn(refresh_token=request.cookies.get(_cookie_name())))
    if not outcome.ok:
        raise Unauthorized(outcome.failure.message)  # type: ignore[union-attr]
    return _token_response(outcome.unwrap())


@bp.post("/logout")
@timing
def logout():
    """Revoke the refresh cookie (if any) and clear it."""

    get_auth_service().logout(LogoutIn(refresh_token=request.cookies.get(_cookie_name())))
    response = Response(status=204)
    response.delete_cookie(_cookie_name(), httponly=True, samesite="Strict")
    return response
