# inzozi/adapters/outbound/security/jwt_token_service.py

"""
Session token service.

Tokens are HS256 JWTs whose ``jti`` claim is a session identifier. Each
issued token has a session record in the cache under ``jwt:<jti>``; logout
puts the raw token under ``blacklist:<token>``. Verification runs the
checks in a fixed order: signature, blacklist, session, expiry.
"""

import json
import logging
from datetime import timedelta
from typing import Any, Dict

from jose import jwt, JWTError

from inzozi.application.ports.outbound.clock_port import IClock
from inzozi.application.ports.outbound.session_cache_port import ISessionCache
from inzozi.application.ports.outbound.token_service_port import ITokenService
from inzozi.domain.exceptions import (
    MalformedTokenException,
    SessionNotFoundException,
    TokenExpiredException,
    TokenRevokedException,
)
from inzozi.domain.models.principal import Principal
from inzozi.domain.services.auth_service import AuthService

logger = logging.getLogger(__name__)

SESSION_KEY_PREFIX = "jwt:"
BLACKLIST_KEY_PREFIX = "blacklist:"
BLACKLIST_SENTINEL = "true"


def session_key(session_id: str) -> str:
    return f"{SESSION_KEY_PREFIX}{session_id}"


def blacklist_key(token: str) -> str:
    return f"{BLACKLIST_KEY_PREFIX}{token}"


class JWTTokenService(ITokenService):
    """Issues, verifies and revokes session tokens."""

    def __init__(
            self,
            cache: ISessionCache,
            clock: IClock,
            secret: str,
            algorithm: str = "HS256",
            session_ttl_seconds: int = 12 * 60 * 60,
            fallback_blacklist_ttl_seconds: int = 24 * 60 * 60,
    ):
        self.cache = cache
        self.clock = clock
        self.secret = secret
        self.algorithm = algorithm
        self.session_ttl_seconds = session_ttl_seconds
        self.fallback_blacklist_ttl_seconds = fallback_blacklist_ttl_seconds

    # ──── ISSUE ────

    async def issue(self, principal: Principal) -> str:
        payload = AuthService.create_token_payload(
            principal,
            issued_at=self.clock.now(),
            expires_delta=timedelta(seconds=self.session_ttl_seconds),
        )
        token = jwt.encode(payload, self.secret, algorithm=self.algorithm)

        await self.cache.set(
            session_key(payload["jti"]),
            json.dumps(principal.to_dict()),
            self.session_ttl_seconds,
        )
        logger.debug(f"Session token issued for user={principal.id} sid={payload['jti']}")
        return token

    # ──── VERIFY ────

    def _decode(self, token: str) -> Dict[str, Any]:
        """Signature and structure check only; expiry is checked later against the clock."""
        try:
            payload = jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError as e:
            raise MalformedTokenException(details={"reason": str(e)})

        if not AuthService.has_valid_shape(payload):
            raise MalformedTokenException(details={"reason": "missing or invalid claims"})
        return payload

    async def verify(self, token: str) -> Principal:
        if not token:
            raise MalformedTokenException(details={"reason": "empty token"})

        payload = self._decode(token)

        if await self.cache.exists(blacklist_key(token)):
            raise TokenRevokedException()

        record = await self.cache.get(session_key(payload["jti"]))
        if record is None:
            raise SessionNotFoundException()

        if AuthService.is_expired(payload, self.clock.now()):
            raise TokenExpiredException()

        try:
            return Principal.from_dict(json.loads(record))
        except (ValueError, KeyError, TypeError):
            logger.warning(f"Corrupted session record for sid={payload['jti']}, using token claims")
            return AuthService.principal_from_payload(payload)

    # ──── REVOKE ────

    async def revoke(self, token: str, remaining_ttl_seconds: int) -> None:
        """
        Blacklist ``token`` for ``remaining_ttl_seconds``.

        Revoking an expired token (non-positive TTL) or one already on the
        blacklist is a silent no-op.
        """
        if remaining_ttl_seconds <= 0:
            logger.debug("Revoke skipped: token already expired")
            return

        key = blacklist_key(token)
        if await self.cache.exists(key):
            return

        await self.cache.set(key, BLACKLIST_SENTINEL, remaining_ttl_seconds)
        logger.info(f"Token blacklisted for {remaining_ttl_seconds}s")

    def remaining_lifetime(self, token: str) -> int:
        """
        Seconds until ``token`` expires, read from its unverified ``exp`` claim.

        Falls back to the fixed blacklist window when the claim can't be read.
        """
        try:
            claims = jwt.get_unverified_claims(token)
            return AuthService.remaining_seconds(claims, self.clock.now())
        except (JWTError, KeyError, TypeError, ValueError):
            return self.fallback_blacklist_ttl_seconds

    def decode_verified_signature(self, token: str) -> Dict[str, Any]:
        """Signature check without the session/blacklist lookups (used by logout)."""
        return self._decode(token)
