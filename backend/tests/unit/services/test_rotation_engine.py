# tests/unit/services/test_rotation_engine.py
"""
Unit tests for RotationEngine.

These tests exercise the refresh state machine:
- issue registers the refresh token (and only the refresh token)
- rotate succeeds once, then the old token is dead (sequential and concurrent)
- every rejection path returns INVALID_REFRESH_TOKEN and leaves the store untouched
- revoke kills a token
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor
from datetime import UTC, datetime, timedelta

import pytest
from tokenauth.infra.jwt.pyjwt_token_codec import JWTTokenCodec
from tokenauth.services._shared.errors import AuthFailure
from tokenauth.services._shared.ports import Claims, TokenKind
from tokenauth.services.auth.dto import AuthTokenConfig
from tokenauth.services.auth.issuer import TokenIssuer
from tokenauth.services.auth.rotation import RotationEngine


def test_issue_pair_registers_only_refresh_token(engine, store):
    pair = engine.issue_pair("user123")
    assert store.contains(pair.refresh_token)
    assert not store.contains(pair.access_token)


def test_rotate_returns_new_pair_and_consumes_old(engine, store, codec):
    pair = engine.issue_pair("user123")

    outcome = engine.rotate(pair.refresh_token)
    assert outcome.ok
    new_pair = outcome.unwrap()

    assert new_pair.refresh_token != pair.refresh_token
    assert new_pair.access_token
    assert not store.contains(pair.refresh_token)
    assert store.contains(new_pair.refresh_token)
    assert codec.verify(new_pair.access_token).unwrap().subject_id == "user123"
    assert codec.verify(new_pair.refresh_token).unwrap().subject_id == "user123"


def test_rotate_twice_is_rejected(engine):
    pair = engine.issue_pair("user123")

    assert engine.rotate(pair.refresh_token).ok
    second = engine.rotate(pair.refresh_token)
    assert not second.ok
    assert second.failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_rotation_chain_keeps_working(engine):
    token = engine.issue_pair("user123").refresh_token
    seen = {token}
    for _ in range(5):
        token = engine.rotate(token).unwrap().refresh_token
        assert token not in seen
        seen.add(token)


@pytest.mark.parametrize("presented", [None, ""])
def test_missing_token_is_rejected(engine, presented):
    assert engine.rotate(presented).failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_never_issued_token_is_rejected(engine, codec):
    """A validly signed refresh token that the store never saw is still invalid."""
    now = datetime.now(UTC)
    forged = codec.sign(
        Claims(
            subject_id="user123",
            kind=TokenKind.REFRESH,
            token_id="not-registered",
            expires_at=now + timedelta(days=1),
            issued_at=now,
        )
    )
    assert engine.rotate(forged).failure is AuthFailure.INVALID_REFRESH_TOKEN
    assert engine.rotate("invalid-token").failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_access_token_cannot_be_rotated(engine):
    pair = engine.issue_pair("user123")
    assert engine.rotate(pair.access_token).failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_access_token_in_store_is_still_rejected_by_kind(engine, store):
    """Kind check holds even if an access token somehow ends up in the store."""
    pair = engine.issue_pair("user123")
    store.insert(pair.access_token)

    assert engine.rotate(pair.access_token).failure is AuthFailure.INVALID_REFRESH_TOKEN
    # rejection performs no state transition
    assert store.contains(pair.access_token)
    assert store.contains(pair.refresh_token)


def test_expired_refresh_token_in_store_is_rejected(codec, store):
    issuer = TokenIssuer(codec, AuthTokenConfig(refresh_expires=timedelta(0)))
    engine = RotationEngine(codec=codec, issuer=issuer, store=store)
    pair = engine.issue_pair("user123")

    assert store.contains(pair.refresh_token)
    assert engine.rotate(pair.refresh_token).failure is AuthFailure.INVALID_REFRESH_TOKEN
    assert store.contains(pair.refresh_token)


def test_refresh_token_expires_after_lifetime(engine, freeze_time):
    with freeze_time("2024-01-01 00:00:00"):
        pair = engine.issue_pair("user123")
    with freeze_time("2024-01-31 00:00:00"):
        assert engine.rotate(pair.refresh_token).failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_token_signed_with_other_secret_is_rejected(engine, store, issuer):
    other = JWTTokenCodec(secret_key="a-completely-different-secret-key-for-tests")
    foreign = TokenIssuer(other).issue_pair("user123")
    store.insert(foreign.refresh_token)

    assert engine.rotate(foreign.refresh_token).failure is AuthFailure.INVALID_REFRESH_TOKEN


def test_revoke_makes_token_unusable(engine, store):
    pair = engine.issue_pair("user123")
    engine.revoke(pair.refresh_token)

    assert not store.contains(pair.refresh_token)
    assert engine.rotate(pair.refresh_token).failure is AuthFailure.INVALID_REFRESH_TOKEN
    # idempotent, and tolerant of missing tokens
    engine.revoke(pair.refresh_token)
    engine.revoke(None)


def test_concurrent_rotation_of_same_token_succeeds_once(engine, store):
    pair = engine.issue_pair("user123")
    workers = 16
    barrier = threading.Barrier(workers)

    def attempt(_: int):
        barrier.wait()
        return engine.rotate(pair.refresh_token)

    with ThreadPoolExecutor(max_workers=workers) as pool:
        outcomes = list(pool.map(attempt, range(workers)))

    winners = [o for o in outcomes if o.ok]
    losers = [o for o in outcomes if not o.ok]
    assert len(winners) == 1
    assert all(o.failure is AuthFailure.INVALID_REFRESH_TOKEN for o in losers)
    assert not store.contains(pair.refresh_token)
    assert store.contains(winners[0].unwrap().refresh_token)
    assert len(store) == 1


def test_concurrent_rotation_of_distinct_tokens_all_succeed(engine, store):
    pairs = [engine.issue_pair(f"user-{i}") for i in range(10)]

    with ThreadPoolExecutor(max_workers=10) as pool:
        outcomes = list(pool.map(lambda p: engine.rotate(p.refresh_token), pairs))

    assert all(o.ok for o in outcomes)
    assert len(store) == len(pairs)
