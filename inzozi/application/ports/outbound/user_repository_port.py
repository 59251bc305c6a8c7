# inzozi/application/ports/outbound/user_repository_port.py

from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional, Tuple

from inzozi.domain.models.role import RoleName


class IUserRepository(ABC):
    """
    Credential store interface.

    Every read hides soft-deleted users.
    """

    @abstractmethod
    async def get_by_email(self, db: Any, email: str) -> Optional[Any]:
        pass

    @abstractmethod
    async def get_by_id(self, db: Any, user_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    async def get_role_by_name(self, db: Any, name: RoleName) -> Optional[Any]:
        pass

    @abstractmethod
    async def get_role_by_id(self, db: Any, role_id: Any) -> Optional[Any]:
        pass

    @abstractmethod
    async def create_user(self, db: Any, data: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    async def update_password(self, db: Any, user_id: Any, password_hash: str) -> bool:
        pass

    @abstractmethod
    async def update_fields(self, db: Any, user: Any, patch: Dict[str, Any]) -> Any:
        pass

    @abstractmethod
    async def soft_delete(self, db: Any, user: Any) -> None:
        pass

    @abstractmethod
    async def list_managed(
            self,
            db: Any,
            *,
            roles: Iterable[RoleName],
            school_id: Any = None,
            search: Optional[str] = None,
            offset: int = 0,
            limit: int = 10,
    ) -> Tuple[List[Any], int]:
        pass

    @abstractmethod
    async def count_by_role(self, db: Any, *, roles: Iterable[RoleName], school_id: Any = None) -> Dict[str, int]:
        pass
