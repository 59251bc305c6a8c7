# inzozi/adapters/outbound/persistence/seeds/roles.py

"""
Seed script for roles and the first system administrator.

Idempotent: existing rows are left untouched.

    python -m inzozi.adapters.outbound.persistence.seeds.roles
"""

import asyncio
import logging

from sqlalchemy import select

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.outbound.persistence.database import async_session_maker
from inzozi.adapters.outbound.persistence.models import Role, User
from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.domain.models.role import ROLE_DESCRIPTIONS, RoleName

logger = logging.getLogger(__name__)


async def run_roles_seed(session) -> dict:
    """Create the four roles if missing; return them by name."""
    roles = {}
    for name in RoleName:
        role = (await session.execute(select(Role).where(Role.name == name.value))).scalar_one_or_none()
        if not role:
            role = Role(name=name.value, description=ROLE_DESCRIPTIONS[name])
            session.add(role)
            logger.info(f"Role created: {name.value}")
        roles[name] = role
    await session.flush()
    return roles


async def run_admin_seed(session, roles: dict) -> None:
    if not (settings.FIRST_ADMIN_EMAIL and settings.FIRST_ADMIN_PASSWORD):
        logger.info("FIRST_ADMIN_EMAIL/FIRST_ADMIN_PASSWORD not set, skipping admin seed")
        return

    existing = (await session.execute(
        select(User).where(User.email == settings.FIRST_ADMIN_EMAIL)
    )).unique().scalar_one_or_none()
    if existing:
        return

    session.add(User(
        first_name="System",
        last_name="Administrator",
        email=settings.FIRST_ADMIN_EMAIL,
        password=await PasswordManager.hash_password(settings.FIRST_ADMIN_PASSWORD.get_secret_value()),
        role_id=roles[RoleName.SYSTEM_ADMIN].id,
    ))
    logger.info(f"System administrator created: {settings.FIRST_ADMIN_EMAIL}")


async def run_seed() -> None:
    async with async_session_maker() as session:
        try:
            roles = await run_roles_seed(session)
            await run_admin_seed(session, roles)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seed failed")
            raise


if __name__ == "__main__":
    logging.basicConfig(level=settings.LOG_LEVEL)
    asyncio.run(run_seed())
