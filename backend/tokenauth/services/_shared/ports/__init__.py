"""
tokenauth.services._shared.ports
================================

Collection of *ports* (hexagonal interfaces) that define the contracts
for token signing and refresh-token bookkeeping.

These ports decouple the service layer from concrete implementations
of token encoding and refresh storage mechanisms.

Modules
-------
- :mod:`token_codec`:
    Defines :class:`~.TokenCodec` — abstraction for signing and verifying tokens,
    plus the :class:`~.Claims` payload and :class:`~.TokenKind` tag.

- :mod:`refresh_token_store`:
    Defines :class:`~.RefreshTokenStore` and the thread-safe
    :class:`~.InMemoryRefreshTokenStore`.

Design Notes
------------
Concrete codec adapters live under ``tokenauth.infra``.
"""

from __future__ import annotations

from .refresh_token_store import InMemoryRefreshTokenStore, RefreshTokenStore
from .token_codec import Claims, TokenCodec, TokenKind

__all__ = [
    "Claims",
    "TokenCodec",
    "TokenKind",
    "RefreshTokenStore",
    "InMemoryRefreshTokenStore",
]
