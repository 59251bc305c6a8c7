# inzozi/application/use_cases/auth_use_cases.py

"""
Service for user authentication.

Registration, login, logout and profile lookup. Session handling is
delegated to the token service; this module never touches the cache
directly.
"""

import logging
from typing import Any, Optional, Tuple

from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.outbound.persistence.repositories import user_repository
from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.application.dtos.user_dto import UserLogin, UserRegister
from inzozi.application.ports.inbound.auth_port import IAuthUseCase
from inzozi.application.ports.outbound.token_service_port import ITokenService
from inzozi.application.ports.outbound.user_repository_port import IUserRepository
from inzozi.domain.exceptions import (
    DatabaseOperationException,
    InvalidCredentialsException,
    ResourceAlreadyExistsException,
)
from inzozi.domain.models.role import DEFAULT_REGISTRATION_ROLE
from inzozi.shared.utils.messages_utils import get_message

logger = logging.getLogger(__name__)


class AsyncAuthService(IAuthUseCase):
    """
    Application service for authentication-related operations.

    Responsibilities:
    - Register new users with the default role
    - Authenticate users and issue session tokens
    - Revoke tokens on logout
    """

    def __init__(
            self,
            db_session: AsyncSession,
            token_service: Optional[ITokenService] = None,
            user_repo: IUserRepository = user_repository,
    ):
        self.db = db_session
        self.token_service = token_service
        self.users = user_repo

    async def register_user(self, user_input: UserRegister) -> Any:
        """
        Register a new user with the default role and no school.

        Raises:
            ResourceAlreadyExistsException: Email already registered.
            DatabaseOperationException: Default role not seeded.
        """
        role = await self.users.get_role_by_name(self.db, DEFAULT_REGISTRATION_ROLE)
        if not role:
            logger.error(f"Default role {DEFAULT_REGISTRATION_ROLE.value} not found; run the role seed")
            raise DatabaseOperationException(message=f"Role {DEFAULT_REGISTRATION_ROLE.value} not found.")

        data = user_input.model_dump(exclude={"password"})
        data["email"] = data["email"].lower()
        data["password"] = await PasswordManager.hash_password(user_input.password)
        data["role_id"] = role.id
        data["school_id"] = None

        try:
            user = await self.users.create_user(self.db, data)
        except ResourceAlreadyExistsException:
            logger.warning(f"Registration failed - duplicate email: {user_input.email}")
            raise ResourceAlreadyExistsException(detail=get_message("email_in_use"))

        logger.info(f"User registered successfully: {user.email}")
        return user

    async def login_user(self, user_input: UserLogin) -> Tuple[Any, str]:
        """
        Authenticate user and issue a session token.

        Raises:
            InvalidCredentialsException: "Invalid credentials" for an unknown
                email or an account without a password, "Incorrect password"
                when the password does not match.
        """
        user = await self.users.get_by_email(self.db, user_input.email)

        if not user or not user.password:
            logger.warning(f"Login failed - unknown email or password-less account: {user_input.email}")
            raise InvalidCredentialsException(message=get_message("invalid_credentials"))

        if not await PasswordManager.verify_password(user_input.password, user.password):
            logger.warning(f"Login failed - incorrect password for: {user_input.email}")
            raise InvalidCredentialsException(message=get_message("incorrect_password"))

        token = await self.token_service.issue(user.to_principal())

        logger.info(f"User logged in successfully: {user.email}")
        return user, token

    async def logout_user(self, token: str) -> None:
        """
        Blacklist ``token`` for the rest of its lifetime.

        Only the signature is checked, so logging out twice, or with a token
        whose session already expired, still succeeds.

        Raises:
            MalformedTokenException: token is not one of ours.
        """
        payload = self.token_service.decode_verified_signature(token)
        await self.token_service.revoke(token, self.token_service.remaining_lifetime(token))
        logger.info(f"User logged out: {payload.get('sub')}")

