# inzozi/application/ports/inbound/user_management_port.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from fastapi_pagination import Params

from inzozi.application.dtos.user_dto import UserCreateByManager, UserUpdate
from inzozi.domain.models.principal import ManagedScope


class IUserManagementUseCase(ABC):
    """Interface for managers administering their subordinate users."""

    @abstractmethod
    async def create_user(self, scope: ManagedScope, data: UserCreateByManager) -> Tuple[Any, Optional[str]]:
        pass

    @abstractmethod
    async def list_users(
            self,
            scope: ManagedScope,
            params: Params,
            role: Optional[str] = None,
            school_id: Any = None,
            search: Optional[str] = None,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        pass

    @abstractmethod
    async def update_user(self, scope: ManagedScope, target: Any, data: UserUpdate) -> Any:
        pass

    @abstractmethod
    async def delete_user(self, target: Any) -> None:
        pass

    @abstractmethod
    async def reset_user_password(self, target: Any) -> bool:
        pass

    @abstractmethod
    async def get_user_stats(self, scope: ManagedScope) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def get_available_roles(self, role: Any, school_id: Any = None) -> Dict[str, Any]:
        pass
