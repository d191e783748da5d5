"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, cast

from flask import Flask, current_app
from flask_limiter import Limiter
from flask_limiter.util import get_remote_address

from tokenauth.core.config import MIN_SECRET_BYTES, PLACEHOLDER_JWT_SECRET
from tokenauth.infra.jwt.pyjwt_token_codec import JWTTokenCodec
from tokenauth.services._shared.errors import ConfigurationError
from tokenauth.services.auth.dto import AuthTokenConfig
from tokenauth.services.auth.service import AuthService
from tokenauth.services.identity.service import CredentialChecker

# Global singletons (import-safe)
limiter = Limiter(key_func=get_remote_address)

AUTH_SERVICE_KEY = "auth_service"


def check_signing_secret(config: Mapping[str, Any]) -> None:
    """Refuse a guessable signing secret when the config demands a strong one.

    Raises
    ------
    ConfigurationError
        If ``REQUIRE_STRONG_SECRET`` is set and ``JWT_SECRET_KEY`` is missing,
        still the placeholder, or shorter than ``MIN_SECRET_BYTES``.
    """
    if not config.get("REQUIRE_STRONG_SECRET", False):
        return
    secret = config.get("JWT_SECRET_KEY") or ""
    if secret == PLACEHOLDER_JWT_SECRET:
        raise ConfigurationError("JWT_SECRET_KEY is unset; refusing the placeholder secret.")
    if len(secret.encode("utf-8")) < MIN_SECRET_BYTES:
        raise ConfigurationError(f"JWT_SECRET_KEY must be at least {MIN_SECRET_BYTES} bytes long.")


def build_auth_service(config: Mapping[str, Any]) -> AuthService:
    """Assemble the token core from Flask configuration values.

    Parameters
    ----------
    config: Mapping
        ``app.config`` (or any mapping with the same keys).

    Returns
    -------
    AuthService
        Service owning a fresh, empty refresh token store.

    Raises
    ------
    ConfigurationError
        See :func:`check_signing_secret`.
    """
    check_signing_secret(config)
    codec = JWTTokenCodec(
        secret_key=config["JWT_SECRET_KEY"],
        algorithm=config.get("JWT_ALGORITHM", "HS256"),
    )
    credentials = CredentialChecker(
        email=config["AUTH_USER_EMAIL"],
        password=config["AUTH_USER_PASSWORD"],
        subject_id=config["AUTH_USER_SUBJECT"],
    )
    token_cfg = AuthTokenConfig(
        access_expires=config["ACCESS_TOKEN_EXPIRES"],
        refresh_expires=config["REFRESH_TOKEN_EXPIRES"],
    )
    return AuthService.build(codec=codec, credentials=credentials, token_cfg=token_cfg)


def init_app(app: Flask) -> None:
    """Initialize the rate limiter and the per-app token core.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. The refresh token store
        lives in ``app.extensions`` and therefore dies with the process.
    """
    limiter.init_app(app)
    app.extensions[AUTH_SERVICE_KEY] = build_auth_service(app.config)


def get_auth_service() -> AuthService:
    """Return the token core bound to the current application."""
    service = current_app.extensions.get(AUTH_SERVICE_KEY)
    if service is None:
        raise RuntimeError("Auth service is not initialized. Call init_app() first.")
    return cast(AuthService, service)
