# tokenauth/services/auth/rotation.py
"""
Refresh-token rotation state machine.

Per refresh token value::

    Issued (in store) --rotate--> Consumed (removed, replacement issued)
    anything else     --rotate--> Rejected (no state change)

Store membership is the primary gate: a valid signature alone cannot tell a
first use from a replay.
"""

from __future__ import annotations

import logging
import threading

from tokenauth.services._shared.errors import AuthFailure
from tokenauth.services._shared.ports import RefreshTokenStore, TokenCodec, TokenKind
from tokenauth.services._shared.results import Outcome
from tokenauth.services.auth.dto import TokenPair
from tokenauth.services.auth.issuer import TokenIssuer

log = logging.getLogger(__name__)


class RotationEngine:
    """
    Sole owner of the refresh token store.

    :param codec: Token codec used to verify presented refresh tokens.
    :param issuer: Issuer producing replacement pairs.
    :param store: Set of currently exchangeable refresh tokens.
    """

    def __init__(
        self,
        *,
        codec: TokenCodec,
        issuer: TokenIssuer,
        store: RefreshTokenStore,
    ) -> None:
        self.codec = codec
        self.issuer = issuer
        self._store = store
        # Guards check -> verify -> remove -> issue -> insert as one unit.
        self._lock = threading.Lock()

    def issue_pair(self, subject_id: str) -> TokenPair:
        """Issue a new pair and register its refresh token as exchangeable."""
        pair = self.issuer.issue_pair(subject_id)
        with self._lock:
            self._store.insert(pair.refresh_token)
        log.info("auth.tokens_issued", extra={"subject_id": subject_id})
        return pair

    def rotate(self, presented: str | None) -> Outcome[TokenPair, AuthFailure]:
        """
        Exchange a refresh token for a new pair, invalidating it.

        :param presented: Raw refresh token as received from the client.
        :returns: New pair, or ``AuthFailure.INVALID_REFRESH_TOKEN``.
        """
        if not presented:
            return self._reject("missing")

        with self._lock:
            if not self._store.contains(presented):
                # never issued, already rotated, or revoked
                return self._reject("not_in_store")

            verified = self.codec.verify(presented)
            if not verified.ok:
                return self._reject(verified.failure.value)  # type: ignore[union-attr]

            claims = verified.unwrap()
            if claims.kind is not TokenKind.REFRESH:
                return self._reject("wrong_kind")

            # Point of no return: the presented token is dead from here on.
            self._store.remove(presented)
            pair = self.issuer.issue_pair(claims.subject_id)
            self._store.insert(pair.refresh_token)

        log.info("auth.refresh_rotated", extra={"subject_id": claims.subject_id})
        return Outcome.success(pair)

    def revoke(self, token: str | None) -> None:
        """Make ``token`` permanently unusable for rotation. Idempotent."""
        if not token:
            return
        with self._lock:
            self._store.remove(token)
        log.info("auth.refresh_revoked")

    @staticmethod
    def _reject(reason: str) -> Outcome[TokenPair, AuthFailure]:
        log.warning("auth.refresh_rejected", extra={"reason": reason})
        return Outcome.fail(AuthFailure.INVALID_REFRESH_TOKEN)
