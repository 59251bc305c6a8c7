# inzozi/shared/middleware/logging_middleware.py

"""
Middleware for HTTP request logging and password protection.
"""

import logging
import re
import time

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.outbound.security.password_manager import PasswordManager

logger = logging.getLogger(__name__)

BCRYPT_PATTERN = re.compile(r'^\$2[abxy]\$\d{2}\$[./A-Za-z0-9]{53}$')


def _describe(request: Request) -> str:
    line = f"{request.method} {request.url.path}"
    if settings.is_production:
        return line
    client = request.client.host if request.client else "N/A"
    query = request.url.query or "N/A"
    return f"{line} | Query: {query} | Client: {client}"


class AsyncRequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs every request with its status and duration and exposes the
    duration in ``X-Process-Time``.
    """

    async def dispatch(self, request: Request, call_next):
        logger.info(f"Request: {_describe(request)}")

        started = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - started

        level = logging.WARNING if response.status_code >= 500 else logging.INFO
        logger.log(level, f"Response: {response.status_code} for {request.method} {request.url.path} | "
                          f"Time: {elapsed:.4f}s")
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


class PasswordProtectionMiddleware:
    """
    ORM hook that refuses to store a plain-text password.

    Registered on ``before_insert`` and ``before_update`` of every model; a
    value that is not a bcrypt hash is hashed in place.
    """

    @staticmethod
    def before_insert_or_update(mapper, connection, target) -> None:
        password = getattr(target, "password", None)
        if not password or BCRYPT_PATTERN.match(password):
            return
        logger.warning(f"Plain text password reached {target.__class__.__name__}; hashing before saving")
        target.password = PasswordManager.hash_password_sync(password)
