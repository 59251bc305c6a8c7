# inzozi/application/use_cases/password_reset_use_cases.py

"""
Self-service password reset.

A reset ticket is a random opaque string stored under ``reset:<ticket>``
with the user id as value. Consuming it is a single atomic get-and-delete,
so of several concurrent resets with the same ticket exactly one succeeds.
"""

import logging
import secrets
from datetime import timedelta
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.outbound.mail.templates import reset_link_email
from inzozi.adapters.outbound.persistence.repositories import user_repository
from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.application.ports.inbound.auth_port import IPasswordResetUseCase
from inzozi.application.ports.outbound.clock_port import IClock
from inzozi.application.ports.outbound.mailer_port import IMailer
from inzozi.application.ports.outbound.session_cache_port import ISessionCache
from inzozi.application.ports.outbound.user_repository_port import IUserRepository
from inzozi.domain.exceptions import (
    InvalidOrExpiredTicketException,
    ResourceNotFoundException,
    ValidationException,
)
from inzozi.shared.utils.datetime_utils import DateTimeUtil
from inzozi.shared.utils.input_validation import InputValidator
from inzozi.shared.utils.messages_utils import get_message

logger = logging.getLogger(__name__)

RESET_KEY_PREFIX = "reset:"
TICKET_BYTES = 32


def reset_key(ticket: str) -> str:
    return f"{RESET_KEY_PREFIX}{ticket}"


class PasswordResetService(IPasswordResetUseCase):

    def __init__(
            self,
            db_session: AsyncSession,
            cache: ISessionCache,
            mailer: IMailer,
            clock: IClock,
            user_repo: IUserRepository = user_repository,
            ticket_ttl_seconds: Optional[int] = None,
            frontend_url: Optional[str] = None,
    ):
        self.db = db_session
        self.cache = cache
        self.mailer = mailer
        self.clock = clock
        self.users = user_repo
        self.ticket_ttl_seconds = ticket_ttl_seconds or settings.RESET_TICKET_TTL_SECONDS
        self.frontend_url = (frontend_url or settings.FRONTEND_URL).rstrip("/")

    async def request_reset(self, email: str) -> str:
        """
        Create a reset ticket for ``email`` and mail the link.

        Returns:
            The ticket.

        Raises:
            ResourceNotFoundException: no active user with that email.
        """
        user = await self.users.get_by_email(self.db, email)
        if not user:
            logger.warning(f"Password reset requested for unknown email: {email}")
            raise ResourceNotFoundException(message=get_message("user_not_found"))

        ticket = secrets.token_hex(TICKET_BYTES)
        await self.cache.set(reset_key(ticket), str(user.id), self.ticket_ttl_seconds)

        expires_at = self.clock.now() + timedelta(seconds=self.ticket_ttl_seconds)
        subject, body = reset_link_email(
            user.first_name,
            f"{self.frontend_url}/reset-password/{ticket}",
            DateTimeUtil.utc_to_local(expires_at),
        )
        if not await self.mailer.send(user.email, subject, body):
            # the ticket stays valid; the user can ask again
            logger.error(f"Reset email could not be delivered to {user.email}")

        logger.info(f"Password reset ticket issued for user {user.id}")
        return ticket

    async def reset_password(self, ticket: str, new_password: str) -> None:
        """
        Consume ``ticket`` and set ``new_password``.

        Raises:
            ValidationException: password too weak (ticket is left untouched).
            InvalidOrExpiredTicketException: ticket unknown, already used,
                expired, or its user no longer exists.
        """
        is_valid, errors = InputValidator.validate_password(new_password)
        if not is_valid:
            raise ValidationException(message="; ".join(errors))

        if not ticket:
            raise InvalidOrExpiredTicketException()

        user_id = await self.cache.getdel(reset_key(ticket))
        if user_id is None:
            logger.warning("Password reset attempted with an unknown or used ticket")
            raise InvalidOrExpiredTicketException()

        user = await self.users.get_by_id(self.db, user_id)
        if not user:
            logger.warning(f"Reset ticket belonged to a missing or deleted user: {user_id}")
            raise InvalidOrExpiredTicketException()

        password_hash = await PasswordManager.hash_password(new_password)
        if not await self.users.update_password(self.db, user.id, password_hash):
            raise InvalidOrExpiredTicketException()

        logger.info(f"Password reset completed for user {user.id}")
