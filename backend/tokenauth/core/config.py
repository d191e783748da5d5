"""Application settings with environment-based simple classes."""

from __future__ import annotations

import os
from collections.abc import Mapping
from datetime import timedelta
from typing import Final

from dotenv import load_dotenv

# Public selector env var (keep neutral name to avoid collisions)
ENV_VAR: Final[str] = "APP_ENV"  # 'development' | 'testing' | 'production'

# Development default; refused wherever REQUIRE_STRONG_SECRET is set.
PLACEHOLDER_JWT_SECRET: Final[str] = "CHANGE_ME_JWT"
# RFC 7518 3.2: HS256 keys must be at least as long as the hash output.
MIN_SECRET_BYTES: Final[int] = 32


# Load .env in development (no-op when the file is missing)
load_dotenv()


def env_bool(name: str, default: bool = False) -> bool:
    """Parse a boolean flag from an environment variable.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: bool, optional
        Value returned when the variable is unset. Defaults to ``False``.

    Returns
    -------
    bool
        ``True`` if the value resembles ``{"1", "true", "yes", "y", "on"}``
        ignoring case; otherwise ``False`` or ``default`` when missing.
    """
    val = os.getenv(name)
    if val is None:
        return default
    return str(val).strip().lower() in {"1", "true", "yes", "y", "on"}


def env_seconds(name: str, default: timedelta) -> timedelta:
    """Parse a duration expressed in whole seconds.

    Parameters
    ----------
    name: str
        Environment variable to inspect.
    default: datetime.timedelta
        Value returned when the variable is unset or blank.

    Returns
    -------
    datetime.timedelta
        Parsed duration.

    Raises
    ------
    ValueError
        If the variable is set but is not an integer.
    """
    val = os.getenv(name)
    if val is None or not val.strip():
        return default
    return timedelta(seconds=int(val))


class BaseConfig:
    """Base configuration shared across environments.

    Attributes
    ----------
    API_BASE_PREFIX: str
        Root path for registering API blueprints.
    JWT_SECRET_KEY: str
        Shared secret used to sign access and refresh tokens.
    REQUIRE_STRONG_SECRET: bool
        Refuse to start with the placeholder or a key shorter than
        ``MIN_SECRET_BYTES``.
    JWT_ALGORITHM: str
        HMAC algorithm for token signatures.
    ACCESS_TOKEN_EXPIRES: datetime.timedelta
        Access token lifetime (15 minutes).
    REFRESH_TOKEN_EXPIRES: datetime.timedelta
        Refresh token lifetime (30 days); also the refresh cookie ``Max-Age``.
    REFRESH_COOKIE_NAME: str
        Cookie carrying the refresh token.
    REFRESH_COOKIE_SECURE: bool
        Adds the ``Secure`` attribute; enable behind TLS.
    AUTH_USER_EMAIL / AUTH_USER_PASSWORD / AUTH_USER_SUBJECT: str
        The single account accepted at login and the subject it maps to.
    AUTH_LOGIN_RATE_LIMIT: str
        Flask-Limiter expression applied to the login endpoint.
    LOG_LEVEL: str
        Root logging verbosity (``INFO`` by default).
    CORS_ORIGINS: str
        Comma-separated list of allowed origins for CORS.
    USE_PROXYFIX: bool
        Trust one hop of ``X-Forwarded-*`` headers. Off unless deployed
        behind a reverse proxy, otherwise clients choose their own address.

    Notes
    -----
    Values are primarily sourced from environment variables, enabling
    configuration without code changes.
    """

    API_BASE_PREFIX = "/api"
    APP_VERSION = os.getenv("APP_VERSION", "dev")

    # Secrets / tokens
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", PLACEHOLDER_JWT_SECRET)
    JWT_ALGORITHM = os.getenv("JWT_ALGORITHM", "HS256")
    REQUIRE_STRONG_SECRET = False
    ACCESS_TOKEN_EXPIRES = env_seconds("ACCESS_TOKEN_EXPIRES", timedelta(minutes=15))
    REFRESH_TOKEN_EXPIRES = env_seconds("REFRESH_TOKEN_EXPIRES", timedelta(days=30))

    # Refresh cookie
    REFRESH_COOKIE_NAME = "refreshToken"
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", False)

    # Stub credential check
    AUTH_USER_EMAIL = os.getenv("AUTH_USER_EMAIL", "john@doe.com")
    AUTH_USER_PASSWORD = os.getenv("AUTH_USER_PASSWORD", "123456")
    AUTH_USER_SUBJECT = os.getenv("AUTH_USER_SUBJECT", "user123")

    # Rate limiting
    AUTH_LOGIN_RATE_LIMIT = os.getenv("AUTH_LOGIN_RATE_LIMIT", "5 per minute")
    RATELIMIT_ENABLED = env_bool("RATELIMIT_ENABLED", True)
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # Flask & JSON
    JSON_SORT_KEYS = False
    PROPAGATE_EXCEPTIONS = False
    USE_PROXYFIX = env_bool("USE_PROXYFIX", False)

    # Logging & CORS
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:5173")

    # Flask built-ins
    DEBUG = False
    TESTING = False


class DevelopmentConfig(BaseConfig):
    """Configuration tailored for local development."""

    DEBUG = env_bool("FLASK_DEBUG", True)
    CORS_MAX_AGE = 600  # 10 minutes


class TestingConfig(BaseConfig):
    """Configuration for automated test runs.

    Notes
    -----
    - Forces ``TESTING`` mode and disables rate limiting.
    - Uses a fixed signing secret so tokens are reproducible across fixtures.
    """

    TESTING = True
    DEBUG = False
    JWT_SECRET_KEY = "testing-secret-key-with-enough-entropy-0123456789"
    RATELIMIT_ENABLED = False
    PROPAGATE_EXCEPTIONS = True


class ProductionConfig(BaseConfig):
    """Configuration defaults for production deployments.

    Notes
    -----
    - The refresh cookie is ``Secure`` unless explicitly disabled.
    - ``JWT_SECRET_KEY`` must be set to a strong value; startup fails otherwise.
    - Assumes a reverse proxy in front (``USE_PROXYFIX``).
    """

    DEBUG = False
    PROPAGATE_EXCEPTIONS = False
    REQUIRE_STRONG_SECRET = True
    REFRESH_COOKIE_SECURE = env_bool("REFRESH_COOKIE_SECURE", True)
    USE_PROXYFIX = env_bool("USE_PROXYFIX", True)


# Map names -> classes (simple, explicit)
CONFIG_MAP: Mapping[str, type[BaseConfig]] = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
}


def get_config() -> type[BaseConfig]:
    """Return the configuration class inferred from ``APP_ENV``.

    Returns
    -------
    type[BaseConfig]
        Class to pass to :meth:`flask.Config.from_object`.

    Notes
    -----
    Falls back to :class:`DevelopmentConfig` when ``APP_ENV`` is unset or
    unknown.
    """
    name = os.getenv(ENV_VAR, "development").strip().lower()
    return CONFIG_MAP.get(name, DevelopmentConfig)
