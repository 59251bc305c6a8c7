# inzozi/adapters/outbound/persistence/repositories/user_repository.py

"""
Async repository for the User entity: the credential store.

Implements IUserRepository on top of AsyncCRUDBase. Soft-deleted users are
invisible to every read; email uniqueness still counts them.
"""

import uuid
from typing import Any, Dict, Iterable, List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.exc import SQLAlchemyError

from inzozi.adapters.outbound.persistence.models import Role, User
from inzozi.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from inzozi.adapters.outbound.persistence.repositories.role_repository import role_repository
from inzozi.application.ports.outbound.user_repository_port import IUserRepository
from inzozi.domain.exceptions import DatabaseOperationException, ResourceAlreadyExistsException
from inzozi.domain.models.role import RoleName
from inzozi.shared.utils.datetime_utils import DateTimeUtil


def _as_uuid(value: Any) -> Optional[uuid.UUID]:
    """Ids arrive as strings from tokens and tickets."""
    if isinstance(value, uuid.UUID):
        return value
    try:
        return uuid.UUID(str(value))
    except ValueError:
        return None


class AsyncUserCRUD(AsyncCRUDBase[User, dict, dict], IUserRepository):
    """
    Concrete repository for User entity, fully async.
    """

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[User]:
        try:
            query = self._select().where(func.lower(User.email) == email.lower())
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while fetching user by email: {e}")
            raise DatabaseOperationException("Error fetching user by email.", original_error=e)

    async def get_by_id(self, db: AsyncSession, user_id: Any) -> Optional[User]:
        user_id = _as_uuid(user_id)
        if user_id is None:
            return None
        return await self.get(db, user_id)

    async def get_role_by_name(self, db: AsyncSession, name: RoleName) -> Optional[Role]:
        return await role_repository.get_by_name(db, name)

    async def get_role_by_id(self, db: AsyncSession, role_id: Any) -> Optional[Role]:
        return await role_repository.get(db, role_id)

    async def email_taken(self, db: AsyncSession, email: str) -> bool:
        try:
            result = await db.execute(
                select(User.id).where(func.lower(User.email) == email.lower()).limit(1)
            )
            return result.scalar_one_or_none() is not None
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while checking email: {e}")
            raise DatabaseOperationException("Error checking email.", original_error=e)

    async def create_user(self, db: AsyncSession, data: Dict[str, Any]) -> User:
        """
        Insert a user; ``data['password']`` must already be hashed.

        Raises:
            ResourceAlreadyExistsException: email already registered (even by a deleted user)
        """
        if await self.email_taken(db, data["email"]):
            raise ResourceAlreadyExistsException(detail=f"Email '{data['email']}' already exists.")

        user = await self.create(db, obj_in=data)
        # reload with the role relationship
        return await self.get(db, user.id)

    async def update_password(self, db: AsyncSession, user_id: Any, password_hash: str) -> bool:
        user_id = _as_uuid(user_id)
        if user_id is None:
            return False
        try:
            result = await db.execute(
                update(User)
                .where(User.id == user_id, User.deleted_at.is_(None))
                .values(password=password_hash, updated_at=DateTimeUtil.utcnow())
            )
            await db.commit()
            return result.rowcount > 0
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Database error while updating password: {e}")
            raise DatabaseOperationException("Error updating password.", original_error=e)

    async def update_fields(self, db: AsyncSession, user: User, patch: Dict[str, Any]) -> User:
        if "email" in patch and patch["email"].lower() != user.email.lower():
            if await self.email_taken(db, patch["email"]):
                raise ResourceAlreadyExistsException(detail=f"Email '{patch['email']}' is already in use.")

        updated = await self.update(db, db_obj=user, obj_in=patch)
        if "role_id" in patch:
            # relationship is stale after a FK change
            await db.refresh(updated, attribute_names=["role"])
        return updated

    async def soft_delete(self, db: AsyncSession, user: User) -> None:
        await self.soft_remove(db, db_obj=user)

    @staticmethod
    def _managed_filters(roles: Iterable[RoleName], school_id: Any, search: Optional[str]) -> list:
        conditions = [
            User.deleted_at.is_(None),
            Role.name.in_([RoleName(r).value for r in roles]),
        ]
        if school_id is not None:
            conditions.append(User.school_id == school_id)
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                    User.email.ilike(pattern),
                    User.phone.ilike(pattern),
                )
            )
        return conditions

    async def list_managed(
            self,
            db: AsyncSession,
            *,
            roles: Iterable[RoleName],
            school_id: Any = None,
            search: Optional[str] = None,
            offset: int = 0,
            limit: int = 10,
    ) -> Tuple[List[User], int]:
        roles = list(roles)
        try:
            conditions = self._managed_filters(roles, school_id, search)

            total = (await db.execute(
                select(func.count(User.id))
                .select_from(User)
                .join(Role, User.role_id == Role.id)
                .where(*conditions)
            )).scalar_one()

            result = await db.execute(
                select(User)
                .join(Role, User.role_id == Role.id)
                .where(*conditions)
                .order_by(User.created_at.desc()).offset(offset).limit(limit)
            )
            return list(result.unique().scalars().all()), total
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while listing managed users: {e}")
            raise DatabaseOperationException("Error listing users.", original_error=e)

    async def count_by_role(self, db: AsyncSession, *, roles: Iterable[RoleName], school_id: Any = None) -> Dict[str, int]:
        roles = [RoleName(r) for r in roles]
        counts = {r.value: 0 for r in roles}
        try:
            query = (
                select(Role.name, func.count(User.id))
                .join(User, User.role_id == Role.id)
                .where(Role.name.in_(list(counts)), User.deleted_at.is_(None))
                .group_by(Role.name)
            )
            if school_id is not None:
                query = query.where(User.school_id == school_id)

            for name, total in (await db.execute(query)).all():
                counts[name] = total
            return counts
        except SQLAlchemyError as e:
            self.logger.error(f"Database error while counting users by role: {e}")
            raise DatabaseOperationException("Error counting users.", original_error=e)


# Public instance for use
user_repository = AsyncUserCRUD(User)
