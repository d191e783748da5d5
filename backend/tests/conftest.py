"""Pytest fixtures wiring the token core and the Flask app for tests.

Each test gets a fresh refresh token store, so tokens never leak between cases.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any

import pytest
from flask import Flask
from tokenauth.core.config import TestingConfig
from tokenauth.factory import create_app
from tokenauth.infra.jwt.pyjwt_token_codec import JWTTokenCodec
from tokenauth.services._shared.ports import InMemoryRefreshTokenStore
from tokenauth.services.auth.access import AccessVerifier
from tokenauth.services.auth.dto import AuthTokenConfig
from tokenauth.services.auth.issuer import TokenIssuer
from tokenauth.services.auth.rotation import RotationEngine
from tokenauth.services.auth.service import AuthService
from tokenauth.services.identity.service import CredentialChecker

SECRET = "unit-test-secret-key-that-is-long-enough-for-hs256"
EMAIL = "john@doe.com"
PASSWORD = "123456"
SUBJECT = "user123"


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Rate limiting disabled so repeated logins never hit 429.
    - Proxy headers ignored.
    """

    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


# ------------------------------ core --------------------------------------- #


@pytest.fixture()
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(secret_key=SECRET)


@pytest.fixture()
def store() -> InMemoryRefreshTokenStore:
    return InMemoryRefreshTokenStore()


@pytest.fixture()
def token_cfg() -> AuthTokenConfig:
    return AuthTokenConfig()


@pytest.fixture()
def issuer(codec, token_cfg) -> TokenIssuer:
    return TokenIssuer(codec, token_cfg)


@pytest.fixture()
def engine(codec, issuer, store) -> RotationEngine:
    """Rotation engine over the ``store`` fixture so tests can inspect membership."""
    return RotationEngine(codec=codec, issuer=issuer, store=store)


@pytest.fixture()
def verifier(codec) -> AccessVerifier:
    return AccessVerifier(codec)


@pytest.fixture()
def credentials() -> CredentialChecker:
    return CredentialChecker(email=EMAIL, password=PASSWORD, subject_id=SUBJECT)


@pytest.fixture()
def service(credentials, engine, verifier) -> AuthService:
    return AuthService(credentials=credentials, engine=engine, verifier=verifier)


# ------------------------------ http --------------------------------------- #


@pytest.fixture()
def make_app() -> Callable[[], Flask]:
    """Return a factory building independent test applications."""
    return lambda: create_app(TestConfig)


@pytest.fixture()
def app(make_app) -> Flask:
    """Create a Flask application configured for testing."""
    return make_app()


@pytest.fixture()
def client(app: Flask) -> Any:
    """Flask test client without a cookie jar; tests send ``Cookie`` explicitly."""
    return app.test_client(use_cookies=False)


@pytest.fixture()
def refresh_cookie() -> Callable[[Any], str]:
    """Return a helper extracting the refresh token from a response's ``Set-Cookie``."""

    def _extract(response: Any) -> str:
        for header in response.headers.getlist("Set-Cookie"):
            match = re.match(r"refreshToken=([^;]*)", header)
            if match:
                return match.group(1)
        raise AssertionError("response did not set a refreshToken cookie")

    return _extract


@pytest.fixture()
def freeze_time() -> Callable[[str | None], Any]:
    """Factory returning :func:`freezegun.freeze_time`.

    Examples
    --------
    >>> def test_with_frozen_time(freeze_time):
    ...     with freeze_time("2024-01-01"):
    ...         ...
    """

    from freezegun import freeze_time as _freeze_time

    def _factory(target: str | None = None) -> Any:
        return _freeze_time(target or "2024-01-01")

    return _factory
