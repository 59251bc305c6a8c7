# inzozi/application/ports/inbound/auth_port.py

from abc import ABC, abstractmethod
from typing import Any, Tuple

from inzozi.application.dtos.user_dto import UserLogin, UserRegister


class IAuthUseCase(ABC):
    """Interface for authentication use cases."""

    @abstractmethod
    async def register_user(self, user_input: UserRegister) -> Any:
        pass

    @abstractmethod
    async def login_user(self, user_input: UserLogin) -> Tuple[Any, str]:
        pass

    @abstractmethod
    async def logout_user(self, token: str) -> None:
        pass


class IPasswordResetUseCase(ABC):
    """Interface for the self-service password reset."""

    @abstractmethod
    async def request_reset(self, email: str) -> str:
        pass

    @abstractmethod
    async def reset_password(self, ticket: str, new_password: str) -> None:
        pass
