from __future__ import annotations

import threading
from hashlib import sha256
from typing import Protocol


class RefreshTokenStore(Protocol):
    """
    Set of refresh tokens that are currently exchangeable.

    A token is present iff it was issued and has not been rotated or revoked.
    The store is authoritative over the token's own expiry: a validly signed
    token that is absent from the store is invalid.

    All operations MUST be safe to call from several threads.
    """

    def insert(self, token: str) -> None:
        """Add ``token`` to the valid set. Idempotent."""

    def remove(self, token: str) -> None:
        """Remove ``token`` if present; silently ignore unknown tokens."""

    def contains(self, token: str) -> bool:
        """Return ``True`` if ``token`` is currently valid."""


class InMemoryRefreshTokenStore(RefreshTokenStore):
    """
    Process-local refresh token set.

    Entries are keyed by the SHA-256 digest of the signed token so raw bearer
    secrets are never kept around. Growth is unbounded; entries for tokens that
    simply expire are never collected.
    """

    def __init__(self) -> None:
        self._digests: set[str] = set()
        self._lock = threading.Lock()

    @staticmethod
    def _key(token: str) -> str:
        return sha256(token.encode("utf-8")).hexdigest()

    def insert(self, token: str) -> None:
        with self._lock:
            self._digests.add(self._key(token))

    def remove(self, token: str) -> None:
        with self._lock:
            self._digests.discard(self._key(token))

    def contains(self, token: str) -> bool:
        with self._lock:
            return self._key(token) in self._digests

    def __len__(self) -> int:
        with self._lock:
            return len(self._digests)
