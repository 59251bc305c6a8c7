# inzozi/test/unit/test_jwt_token_service.py

# pytest inzozi/test/unit/test_jwt_token_service.py -v

import json

import pytest
from jose import jwt

from inzozi.adapters.outbound.security.jwt_token_service import (
    BLACKLIST_SENTINEL,
    blacklist_key,
    session_key,
)
from inzozi.domain.exceptions import (
    MalformedTokenException,
    SessionNotFoundException,
    TokenExpiredException,
    TokenRevokedException,
)
from inzozi.domain.models.principal import Principal
from inzozi.domain.models.role import RoleName
from inzozi.test.conftest import TEST_SECRET

PRINCIPAL = Principal(
    id="3fa85f64-5717-4562-b3fc-2c963f66afa6",
    email="aline@inzozi.rw",
    role=RoleName.ADMISSION_MANAGER,
    school_id="11111111-1111-1111-1111-111111111111",
)


@pytest.mark.asyncio
async def test_issue_stores_session_record(token_service, cache):
    """The session record carries the principal snapshot and the full TTL."""
    token = await token_service.issue(PRINCIPAL)
    claims = jwt.get_unverified_claims(token)

    record = await cache.get(session_key(claims["jti"]))
    assert json.loads(record) == PRINCIPAL.to_dict()
    assert await cache.ttl(session_key(claims["jti"])) == 12 * 60 * 60
    assert claims["sub"] == PRINCIPAL.id
    assert claims["role"] == "ADMISSION_MANAGER"
    assert claims["type"] == "access"


@pytest.mark.asyncio
async def test_tokens_are_never_reused(token_service):
    """Two issues for the same principal give independent tokens."""
    first = await token_service.issue(PRINCIPAL)
    second = await token_service.issue(PRINCIPAL)

    assert first != second
    assert jwt.get_unverified_claims(first)["jti"] != jwt.get_unverified_claims(second)["jti"]
    assert await token_service.verify(first) == PRINCIPAL
    assert await token_service.verify(second) == PRINCIPAL

    await token_service.revoke(first, token_service.remaining_lifetime(first))

    with pytest.raises(TokenRevokedException):
        await token_service.verify(first)
    assert await token_service.verify(second) == PRINCIPAL


@pytest.mark.asyncio
async def test_revoked_token_stays_revoked_until_natural_expiry(token_service, clock):
    token = await token_service.issue(PRINCIPAL)
    await token_service.revoke(token, token_service.remaining_lifetime(token))

    clock.advance(hours=11, minutes=59)
    with pytest.raises(TokenRevokedException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_revoke_uses_remaining_lifetime_as_ttl(token_service, cache, clock):
    token = await token_service.issue(PRINCIPAL)
    clock.advance(hours=2)

    remaining = token_service.remaining_lifetime(token)
    await token_service.revoke(token, remaining)

    assert remaining == 10 * 60 * 60
    assert await cache.get(blacklist_key(token)) == BLACKLIST_SENTINEL
    assert await cache.ttl(blacklist_key(token)) == remaining


@pytest.mark.asyncio
async def test_revoke_is_idempotent(token_service, cache):
    token = await token_service.issue(PRINCIPAL)
    await token_service.revoke(token, 100)
    await token_service.revoke(token, 5000)

    # second call did not extend the entry
    assert await cache.ttl(blacklist_key(token)) == 100


@pytest.mark.asyncio
async def test_revoke_with_non_positive_ttl_is_noop(token_service, cache):
    token = await token_service.issue(PRINCIPAL)
    await token_service.revoke(token, 0)
    await token_service.revoke(token, -30)

    assert not await cache.exists(blacklist_key(token))


@pytest.mark.asyncio
async def test_verify_rejects_tampered_token(token_service):
    token = await token_service.issue(PRINCIPAL)
    forged = jwt.encode(jwt.get_unverified_claims(token), "another-secret", algorithm="HS256")

    with pytest.raises(MalformedTokenException):
        await token_service.verify(forged)


@pytest.mark.asyncio
@pytest.mark.parametrize("garbage", ["", "not-a-jwt", "a.b.c"])
async def test_verify_rejects_garbage(token_service, garbage):
    with pytest.raises(MalformedTokenException):
        await token_service.verify(garbage)


@pytest.mark.asyncio
async def test_verify_rejects_token_without_required_claims(token_service):
    token = jwt.encode({"sub": "someone"}, TEST_SECRET, algorithm="HS256")

    with pytest.raises(MalformedTokenException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_forged_token_never_reaches_session_lookup(token_service, cache):
    """A bad signature fails before the blacklist or session is consulted."""
    token = await token_service.issue(PRINCIPAL)
    forged = jwt.encode(jwt.get_unverified_claims(token), "another-secret", algorithm="HS256")
    await cache.set(blacklist_key(forged), BLACKLIST_SENTINEL, 60)

    with pytest.raises(MalformedTokenException):
        await token_service.verify(forged)


@pytest.mark.asyncio
async def test_blacklist_is_checked_before_session(token_service, cache):
    token = await token_service.issue(PRINCIPAL)
    await cache.delete(session_key(jwt.get_unverified_claims(token)["jti"]))
    await token_service.revoke(token, 60)

    with pytest.raises(TokenRevokedException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_missing_session_is_rejected(token_service, cache):
    """Cold cache (e.g. after a restart) invalidates otherwise valid tokens."""
    token = await token_service.issue(PRINCIPAL)
    cache.clear()

    with pytest.raises(SessionNotFoundException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_session_expires_with_the_token(token_service, clock):
    token = await token_service.issue(PRINCIPAL)
    clock.advance(hours=12)

    with pytest.raises(SessionNotFoundException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_expiry_is_checked_even_if_session_survives(token_service, cache, clock):
    """The embedded expiry is enforced independently of the cache TTL."""
    token = await token_service.issue(PRINCIPAL)
    sid = jwt.get_unverified_claims(token)["jti"]
    await cache.set(session_key(sid), json.dumps(PRINCIPAL.to_dict()), 48 * 60 * 60)

    clock.advance(hours=12, seconds=1)

    with pytest.raises(TokenExpiredException):
        await token_service.verify(token)


@pytest.mark.asyncio
async def test_remaining_lifetime_falls_back_for_unreadable_token(token_service):
    assert token_service.remaining_lifetime("garbage") == 24 * 60 * 60


@pytest.mark.asyncio
async def test_remaining_lifetime_of_expired_token_is_not_positive(token_service, clock):
    token = await token_service.issue(PRINCIPAL)
    clock.advance(hours=13)

    assert token_service.remaining_lifetime(token) <= 0
