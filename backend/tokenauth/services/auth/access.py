# tokenauth/services/auth/access.py
from __future__ import annotations

import logging

from tokenauth.services._shared.errors import AuthFailure
from tokenauth.services._shared.ports import Claims, TokenCodec, TokenKind
from tokenauth.services._shared.results import Outcome

log = logging.getLogger(__name__)


class AccessVerifier:
    """Gate for protected resources. Access tokens are stateless: no store lookup."""

    def __init__(self, codec: TokenCodec) -> None:
        self.codec = codec

    def verify_access(self, token: str | None) -> Outcome[Claims, AuthFailure]:
        """
        Validate an access token presented as a bearer credential.

        :param token: Raw token (may be empty).
        :returns: Decoded claims, or ``AuthFailure.UNAUTHORIZED``.
        """
        if not token:
            return Outcome.fail(AuthFailure.UNAUTHORIZED)

        verified = self.codec.verify(token)
        if not verified.ok:
            log.info("auth.access_rejected", extra={"reason": verified.failure.value})  # type: ignore[union-attr]
            return Outcome.fail(AuthFailure.UNAUTHORIZED)

        claims = verified.unwrap()
        if claims.kind is not TokenKind.ACCESS:
            log.info("auth.access_rejected", extra={"reason": "wrong_kind"})
            return Outcome.fail(AuthFailure.UNAUTHORIZED)
        return Outcome.success(claims)
