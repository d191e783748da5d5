# tokenauth/services/auth/issuer.py
from __future__ import annotations

from datetime import UTC, datetime
from uuid import uuid4

from tokenauth.services._shared.ports import Claims, TokenCodec, TokenKind
from tokenauth.services.auth.dto import AuthTokenConfig, TokenPair


class TokenIssuer:
    """
    Produce an (access, refresh) pair for a subject.

    Stateless: the issuer only signs. Registering the refresh token as
    exchangeable is the rotation engine's job.
    """

    def __init__(self, codec: TokenCodec, config: AuthTokenConfig | None = None) -> None:
        self.codec = codec
        self.cfg = config or AuthTokenConfig()

    def issue_pair(self, subject_id: str) -> TokenPair:
        """
        Sign a fresh access token and a fresh refresh token for ``subject_id``.

        :param subject_id: Authenticated principal.
        :returns: Both raw signed tokens.
        :rtype: TokenPair
        """
        now = datetime.now(UTC)
        access = self.codec.sign(
            Claims(
                subject_id=subject_id,
                kind=TokenKind.ACCESS,
                token_id=str(uuid4()),
                expires_at=now + self.cfg.access_expires,
                issued_at=now,
            )
        )
        refresh = self.codec.sign(
            Claims(
                subject_id=subject_id,
                kind=TokenKind.REFRESH,
                token_id=str(uuid4()),
                expires_at=now + self.cfg.refresh_expires,
                issued_at=now,
            )
        )
        return TokenPair(access_token=access, refresh_token=refresh)
