# inzozi/adapters/outbound/security/jwt_config.py

"""Signing key and algorithm for session tokens, read once from settings."""

import logging

from inzozi.adapters.configuration.config import settings

logger = logging.getLogger(__name__)

DEVELOPMENT_SECRET = "change-this-secret-in-production"

JWT_SECRET: str = settings.SECRET_KEY.get_secret_value()
JWT_ALGORITHM: str = settings.ALGORITHM

if JWT_ALGORITHM not in ("HS256", "HS384", "HS512"):
    raise ValueError(f"Unsupported ALGORITHM for session tokens: {JWT_ALGORITHM}")

if settings.is_production and JWT_SECRET == DEVELOPMENT_SECRET:
    logger.critical("SECRET_KEY is still the development default in production")
