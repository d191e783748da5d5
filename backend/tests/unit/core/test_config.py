"""Unit tests for environment-driven configuration."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
import pytest
from tokenauth.core.config import (
    PLACEHOLDER_JWT_SECRET,
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    env_bool,
    env_seconds,
    get_config,
)
from tokenauth.core.extensions import build_auth_service
from tokenauth.factory import create_app
from tokenauth.services._shared.errors import ConfigurationError

STRONG_SECRET = "production-grade-secret-with-plenty-of-entropy-42"


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("production", ProductionConfig),
        ("testing", TestingConfig),
        (" Development ", DevelopmentConfig),
        ("unknown", DevelopmentConfig),
    ],
)
def test_get_config_selects_by_app_env(monkeypatch, name, expected) -> None:
    monkeypatch.setenv("APP_ENV", name)
    assert get_config() is expected


def test_env_bool(monkeypatch) -> None:
    monkeypatch.delenv("SOME_FLAG", raising=False)
    assert env_bool("SOME_FLAG", True) is True
    monkeypatch.setenv("SOME_FLAG", "Yes")
    assert env_bool("SOME_FLAG") is True
    monkeypatch.setenv("SOME_FLAG", "0")
    assert env_bool("SOME_FLAG", True) is False


def test_env_seconds(monkeypatch) -> None:
    default = timedelta(minutes=15)
    monkeypatch.delenv("SOME_TTL", raising=False)
    assert env_seconds("SOME_TTL", default) == default
    monkeypatch.setenv("SOME_TTL", "90")
    assert env_seconds("SOME_TTL", default) == timedelta(seconds=90)
    monkeypatch.setenv("SOME_TTL", "soon")
    with pytest.raises(ValueError):
        env_seconds("SOME_TTL", default)


def test_token_lifetime_defaults() -> None:
    assert TestingConfig.ACCESS_TOKEN_EXPIRES == timedelta(minutes=15)
    assert TestingConfig.REFRESH_TOKEN_EXPIRES == timedelta(days=30)
    assert TestingConfig.REFRESH_COOKIE_NAME == "refreshToken"


# --------------------------- signing secret -------------------------------- #


class _Production(ProductionConfig):
    USE_PROXYFIX = False
    LOG_LEVEL = "WARNING"


def _production(secret: str) -> type[ProductionConfig]:
    return type("ProductionWithSecret", (_Production,), {"JWT_SECRET_KEY": secret})


@pytest.mark.parametrize("secret", [PLACEHOLDER_JWT_SECRET, "", "short-but-not-empty"])
def test_production_refuses_weak_signing_secret(secret) -> None:
    with pytest.raises(ConfigurationError):
        create_app(_production(secret))


def test_production_rejects_tokens_forged_with_the_placeholder() -> None:
    app = create_app(_production(STRONG_SECRET))
    now = datetime.now(UTC)
    forged = jwt.encode(
        {
            "sub": "admin",
            "type": "access",
            "jti": "forged",
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(minutes=5)).timestamp()),
        },
        PLACEHOLDER_JWT_SECRET,
        algorithm="HS256",
    )

    resp = app.test_client().get("/api/v1/private", headers={"Authorization": f"Bearer {forged}"})

    assert resp.status_code == 401
    assert resp.get_json() == {"message": "Unauthorized"}


def test_placeholder_secret_allowed_outside_production() -> None:
    config = {
        key: getattr(DevelopmentConfig, key) for key in dir(DevelopmentConfig) if key.isupper()
    }
    config["JWT_SECRET_KEY"] = PLACEHOLDER_JWT_SECRET

    assert build_auth_service(config) is not None


def test_strong_secret_required_only_in_production() -> None:
    assert ProductionConfig.REQUIRE_STRONG_SECRET is True
    assert DevelopmentConfig.REQUIRE_STRONG_SECRET is False
    assert TestingConfig.REQUIRE_STRONG_SECRET is False
