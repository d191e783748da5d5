# tokenauth/services/auth/service.py
from __future__ import annotations

import logging

from tokenauth.services._shared.errors import AuthFailure
from tokenauth.services._shared.ports import Claims, InMemoryRefreshTokenStore, TokenCodec
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
from tokenauth.services.identity.service import CredentialChecker

log = logging.getLogger(__name__)


class AuthService:
    """
    Authentication lifecycle service (login / refresh / logout / access check).

    Thin orchestration over the credential checker, the rotation engine and
    the access verifier. Every operation returns an :class:`Outcome`; the API
    layer decides how failures become HTTP responses.
    """

    def __init__(
        self,
        *,
        credentials: CredentialChecker,
        engine: RotationEngine,
        verifier: AccessVerifier,
    ) -> None:
        """
        Initialize the service with its dependencies.

        :param credentials: Checker for the initial login.
        :param engine: Owner of the refresh token store.
        :param verifier: Access-token gate.
        """
        self.credentials = credentials
        self.engine = engine
        self.verifier = verifier

    @classmethod
    def build(
        cls,
        *,
        codec: TokenCodec,
        credentials: CredentialChecker,
        token_cfg: AuthTokenConfig | None = None,
    ) -> AuthService:
        """Wire an issuer, a fresh in-memory store and both token gates around ``codec``."""
        issuer = TokenIssuer(codec, token_cfg)
        engine = RotationEngine(codec=codec, issuer=issuer, store=InMemoryRefreshTokenStore())
        return cls(credentials=credentials, engine=engine, verifier=AccessVerifier(codec))

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def login(self, dto: LoginIn) -> Outcome[TokenPair, AuthFailure]:
        """
        Authenticate credentials and issue a fresh token pair.

        :param dto: Login input.
        :returns: Token pair or ``INVALID_CREDENTIALS``.
        """
        subject_id = self.credentials.authenticate(dto.email, dto.password)
        if subject_id is None:
            log.warning("auth.login_failed")
            return Outcome.fail(AuthFailure.INVALID_CREDENTIALS)
        return Outcome.success(self.engine.issue_pair(subject_id))

    # ------------------------------------------------------------------ #
    # Refresh / logout
    # ------------------------------------------------------------------ #

    def refresh(self, dto: RefreshIn) -> Outcome[TokenPair, AuthFailure]:
        """Rotate a refresh token and emit a new token pair."""
        return self.engine.rotate(dto.refresh_token)

    def logout(self, dto: LogoutIn) -> None:
        """Revoke the presented refresh token, if any."""
        self.engine.revoke(dto.refresh_token)

    # ------------------------------------------------------------------ #
    # Protected resources
    # ------------------------------------------------------------------ #

    def verify_access(self, token: str | None) -> Outcome[Claims, AuthFailure]:
        return self.verifier.verify_access(token)
