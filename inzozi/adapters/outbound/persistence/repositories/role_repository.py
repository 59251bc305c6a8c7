# inzozi/adapters/outbound/persistence/repositories/role_repository.py

from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.outbound.persistence.models import Role
from inzozi.adapters.outbound.persistence.repositories.base_repository import AsyncCRUDBase
from inzozi.domain.models.role import RoleName


class AsyncRoleCRUD(AsyncCRUDBase[Role, dict, dict]):
    """Read access to the role table."""

    async def get_by_name(self, db: AsyncSession, name: RoleName) -> Optional[Role]:
        return await self.get_by_field(db, "name", RoleName(name).value)


role_repository = AsyncRoleCRUD(Role)
