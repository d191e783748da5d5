from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Protocol

from tokenauth.services._shared.errors import TokenError
from tokenauth.services._shared.results import Outcome


class TokenKind(Enum):
    """Token class carried in the ``type`` claim."""

    ACCESS = "access"
    REFRESH = "refresh"


@dataclass(frozen=True, slots=True)
class Claims:
    """
    Typed payload embedded in (and recovered from) a signed token.

    :ivar subject_id: Opaque identifier of the authenticated principal.
    :ivar kind: Access or refresh.
    :ivar token_id: Unique token identifier (``jti``).
    :ivar expires_at: Absolute expiry instant (UTC, whole seconds on the wire).
    :ivar issued_at: Issue instant (UTC). Filled by the codec when omitted.
    """

    subject_id: str
    kind: TokenKind
    token_id: str
    expires_at: datetime
    issued_at: datetime | None = None


class TokenCodec(Protocol):
    """
    Port for signing and verifying compact tamper-evident tokens.

    Implementations are stateless apart from their shared secret.
    """

    def sign(self, claims: Claims) -> str:
        """Serialize ``claims`` into a signed token string."""
        ...

    def verify(self, token: str) -> Outcome[Claims, TokenError]:
        """
        Check signature, expiry and structure of ``token``.

        The ``kind`` is *not* checked here; callers decide which kind they need.
        """
        ...
