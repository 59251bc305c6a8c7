# inzozi/adapters/inbound/api/deps.py

"""
Dependencies for injection into API endpoints.

This module defines functions that provide dependencies via FastAPI
Depends(): database session, session cache, clock, mailer, token service,
and the authentication stage of the request gate.
"""

import logging
from typing import Optional

from fastapi import Depends, HTTPException, Request, Security, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.outbound.cache import redis_session_cache
from inzozi.adapters.outbound.cache.redis_session_cache import RedisSessionCache
from inzozi.adapters.outbound.clock.system_clock import SystemClock
from inzozi.adapters.outbound.mail.resend_mailer import ResendMailer
from inzozi.adapters.outbound.persistence.database import get_db
from inzozi.adapters.outbound.persistence.models import User
from inzozi.adapters.outbound.persistence.repositories import user_repository
from inzozi.adapters.outbound.security.jwt_config import JWT_ALGORITHM, JWT_SECRET
from inzozi.adapters.outbound.security.jwt_token_service import JWTTokenService
from inzozi.application.ports.outbound import IClock, IMailer, ISessionCache, ITokenService, IUserRepository
from inzozi.domain.exceptions import AuthenticationException, CacheOperationException
from inzozi.domain.models.principal import Principal
from inzozi.shared.utils.http_errors import to_http_exception
from inzozi.shared.utils.messages_utils import get_message

# Configure logger
logger = logging.getLogger(__name__)

# Bearer scheme for the OpenAPI docs; missing/garbled headers are reported by get_bearer_token
bearer_scheme = HTTPBearer(auto_error=False)

_system_clock = SystemClock()


def _unauthorized(message_key: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=get_message(message_key),
        headers={"WWW-Authenticate": "Bearer"},
    )


########################################################################
# Database Session Management
########################################################################

# Alias kept for endpoint signatures
get_session = get_db


########################################################################
# Collaborators
########################################################################

def get_session_cache() -> ISessionCache:
    client = redis_session_cache.redis_client
    if client is None:
        raise CacheOperationException(message="Session cache is not initialised.")
    return RedisSessionCache(client)


def get_clock() -> IClock:
    return _system_clock


def get_mailer() -> IMailer:
    return ResendMailer()


def get_user_repository() -> IUserRepository:
    return user_repository


def get_token_service(
        cache: ISessionCache = Depends(get_session_cache),
        clock: IClock = Depends(get_clock),
) -> ITokenService:
    return JWTTokenService(
        cache=cache,
        clock=clock,
        secret=JWT_SECRET,
        algorithm=JWT_ALGORITHM,
        session_ttl_seconds=settings.SESSION_TTL_SECONDS,
        fallback_blacklist_ttl_seconds=settings.BLACKLIST_TTL_SECONDS,
    )


########################################################################
# User Token Authentication
########################################################################

async def get_bearer_token(
        request: Request,
        credentials: Optional[HTTPAuthorizationCredentials] = Security(bearer_scheme),
) -> str:
    """
    Extract the raw token from ``Authorization: Bearer <token>``.

    Raises:
        HTTPException: 401 "Authorization header missing" when there is no
            header, 401 "Token missing" when it is not a bearer token.
    """
    if not request.headers.get("Authorization"):
        raise _unauthorized("authorization_header_missing")

    if credentials is None or not credentials.credentials:
        raise _unauthorized("token_missing")

    return credentials.credentials


async def get_current_principal(
        token: str = Depends(get_bearer_token),
        token_service: ITokenService = Depends(get_token_service),
) -> Principal:
    """
    Verify the bearer token.

    The caller only ever sees "Unauthorized"; the precise cause is logged.
    """
    try:
        return await token_service.verify(token)
    except AuthenticationException as e:
        logger.warning(f"Token rejected [{e.internal_code}]: {e.message}")
        raise to_http_exception(e)


async def get_current_user(
        principal: Principal = Depends(get_current_principal),
        db: AsyncSession = Depends(get_session),
        users: IUserRepository = Depends(get_user_repository),
) -> User:
    """
    Reload the authenticated user from the credential store.

    Role and school always come from this fresh row, never from the token.
    """
    user = await users.get_by_id(db, principal.id)
    if not user:
        logger.warning(f"Token for missing or deleted user {principal.id}")
        raise _unauthorized("unauthorized")
    return user
