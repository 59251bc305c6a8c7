# inzozi/adapters/outbound/security/password_manager.py

import asyncio
import logging
import secrets

import bcrypt
from passlib.context import CryptContext

logger = logging.getLogger(__name__)

# No 0, 1, l or I
TEMPORARY_PASSWORD_ALPHABET = "ABCDEFGHJKLMNOPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz23456789!@#$%"
TEMPORARY_PASSWORD_LENGTH = 12


class PasswordManager:
    """
    Password hashing and generation.

    Responsibilities:
    - bcrypt hashing and verification, off the event loop
    - temporary passwords for accounts created or reset by a manager
    """

    crypt_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

    @classmethod
    async def hash_password(cls, password: str) -> str:
        """Hash a password in a worker thread; bcrypt is CPU bound."""
        return await asyncio.to_thread(cls.crypt_context.hash, password)

    @staticmethod
    def hash_password_sync(password: str) -> str:
        """Synchronously hash a password (for ORM hooks)."""
        password_bytes = password.encode("utf-8")
        hashed = bcrypt.hashpw(password_bytes, bcrypt.gensalt())
        return hashed.decode("utf-8")

    @classmethod
    async def verify_password(cls, plain_password: str, hashed_password: str) -> bool:
        """Verify a plain password against a hashed password."""
        if not hashed_password:
            return False
        try:
            return await asyncio.to_thread(cls.crypt_context.verify, plain_password, hashed_password)
        except ValueError:
            logger.warning("Stored password hash is not a recognised bcrypt hash")
            return False

    @staticmethod
    def generate_temporary_password(length: int = TEMPORARY_PASSWORD_LENGTH) -> str:
        return "".join(secrets.choice(TEMPORARY_PASSWORD_ALPHABET) for _ in range(length))
