"""Service layer public API.

Re-exports
----------
- Auth lifecycle (from ``tokenauth.services.auth``)
    * :class:`AuthService`, :class:`RotationEngine`, :class:`TokenIssuer`,
      :class:`AccessVerifier`
    * DTOs: :class:`LoginIn`, :class:`RefreshIn`, :class:`LogoutIn`,
      :class:`TokenPair`, :class:`AuthTokenConfig`

- Failure values (from ``tokenauth.services._shared``)
    * :class:`AuthFailure`, :class:`TokenError`, :class:`Outcome`
"""

from __future__ import annotations

from tokenauth.services._shared.errors import AuthFailure, ServiceError, TokenError
from tokenauth.services._shared.results import Outcome
from tokenauth.services.auth.access import AccessVerifier
from tokenauth.services.auth.dto import (
    AuthTokenConfig,
    LoginIn,
    LogoutIn,
    RefreshIn,
    TokenPair,
)
from tokenauth.services.auth.issuer import TokenIssuer
from tokenauth.services.auth.rotation import RotationEngine
from tokenauth.services.auth.service import AuthService

__all__ = [
    "AccessVerifier",
    "AuthFailure",
    "AuthService",
    "AuthTokenConfig",
    "LoginIn",
    "LogoutIn",
    "Outcome",
    "RefreshIn",
    "RotationEngine",
    "ServiceError",
    "TokenError",
    "TokenIssuer",
    "TokenPair",
]
