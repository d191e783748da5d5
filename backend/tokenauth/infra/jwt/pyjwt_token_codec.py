# tokenauth/infra/jwt/pyjwt_token_codec.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any

import jwt

from tokenauth.services._shared.errors import ConfigurationError, TokenError
from tokenauth.services._shared.ports import Claims, TokenCodec, TokenKind
from tokenauth.services._shared.results import Outcome

log = logging.getLogger(__name__)

REQUIRED_CLAIMS = ("sub", "type", "jti", "iat", "exp")


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    HMAC-signed JWT codec backed by PyJWT.

    Wire claims: ``sub`` (subject), ``type`` (``access`` | ``refresh``),
    ``jti`` (token id), ``iat`` and ``exp`` (epoch seconds).

    :param secret_key: Shared signing secret.
    :param algorithm: HMAC algorithm name understood by PyJWT.
    """

    secret_key: str
    algorithm: str = "HS256"

    def __post_init__(self) -> None:
        if not self.secret_key:
            raise ConfigurationError("JWT secret key must not be empty.")
        if not self.algorithm.startswith("HS"):
            # Shared-secret design: asymmetric keys are not supported here.
            raise ConfigurationError(f"Unsupported JWT algorithm: {self.algorithm!r}")

    def sign(self, claims: Claims) -> str:
        issued_at = claims.issued_at or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": claims.subject_id,
            "type": claims.kind.value,
            "jti": claims.token_id,
            "iat": int(issued_at.timestamp()),
            "exp": int(claims.expires_at.timestamp()),
        }
        return jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Outcome[Claims, TokenError]:
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.InvalidSignatureError:
            return Outcome.fail(TokenError.INVALID_SIGNATURE)
        except jwt.ExpiredSignatureError:
            return Outcome.fail(TokenError.EXPIRED)
        except jwt.InvalidTokenError as exc:
            log.debug("token.malformed: %s", type(exc).__name__)
            return Outcome.fail(TokenError.MALFORMED)

        claims = self._to_claims(payload)
        if claims is None:
            return Outcome.fail(TokenError.MALFORMED)
        return Outcome.success(claims)

    # ------------------------------------------------------------------ #
    # helpers
    # ------------------------------------------------------------------ #

    @staticmethod
    def _to_claims(payload: dict[str, Any]) -> Claims | None:
        """Build typed claims, rejecting unknown kinds and mistyped fields."""
        try:
            kind = TokenKind(payload["type"])
        except ValueError:
            return None

        subject, jti = payload["sub"], payload["jti"]
        if not isinstance(subject, str) or not isinstance(jti, str):
            return None
        if not isinstance(payload["exp"], int) or not isinstance(payload["iat"], int):
            return None

        return Claims(
            subject_id=subject,
            kind=kind,
            token_id=jti,
            expires_at=datetime.fromtimestamp(payload["exp"], tz=UTC),
            issued_at=datetime.fromtimestamp(payload["iat"], tz=UTC),
        )
