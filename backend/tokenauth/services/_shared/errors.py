"""
Failure taxonomy used within the service layer.

These types are **framework-agnostic** and should never import or depend on
Flask or HTTP. Expected failures (bad tokens, bad credentials) travel as
:class:`~.results.Outcome` values carrying one of the enums below; exceptions
are reserved for programming and configuration errors.

The translation to HTTP responses is handled by the API layer
(``tokenauth/api/v1``) via :class:`tokenauth.core.errors.Unauthorized`.
"""

from __future__ import annotations

from enum import Enum

# --------------------------------------------------------------------------- #
# Expected failures (returned, never raised)
# --------------------------------------------------------------------------- #


class TokenError(Enum):
    """Reason a token codec rejected a token."""

    INVALID_SIGNATURE = "invalid_signature"
    EXPIRED = "expired"
    MALFORMED = "malformed"


class AuthFailure(Enum):
    """
    Client-facing failure of an authentication operation.

    The value is the exact message surfaced to clients. Causes are
    deliberately collapsed: a refresh attempt that fails because the token is
    expired looks the same as one that fails because it was already rotated.
    """

    INVALID_CREDENTIALS = "Invalid credentials"
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    UNAUTHORIZED = "Unauthorized"

    @property
    def message(self) -> str:
        return self.value


# --------------------------------------------------------------------------- #
# Exceptions
# --------------------------------------------------------------------------- #


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them (or lets them bubble up as 500s).
    """

    pass


class ConfigurationError(ServiceError):
    """Raised when a component is built with unusable settings (e.g. empty secret)."""

    pass
