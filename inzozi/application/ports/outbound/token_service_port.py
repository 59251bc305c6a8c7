# inzozi/application/ports/outbound/token_service_port.py

from abc import ABC, abstractmethod
from typing import Any, Dict

from inzozi.domain.models.principal import Principal


class ITokenService(ABC):
    """Session token handling interface."""

    @abstractmethod
    async def issue(self, principal: Principal) -> str:
        pass

    @abstractmethod
    async def verify(self, token: str) -> Principal:
        pass

    @abstractmethod
    async def revoke(self, token: str, remaining_ttl_seconds: int) -> None:
        pass

    @abstractmethod
    def remaining_lifetime(self, token: str) -> int:
        pass

    @abstractmethod
    def decode_verified_signature(self, token: str) -> Dict[str, Any]:
        pass
