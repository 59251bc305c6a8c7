# inzozi/application/ports/outbound/session_cache_port.py

from abc import ABC, abstractmethod
from typing import Optional


class ISessionCache(ABC):
    """
    Key-value store with per-key expiration, shared by every server instance.

    Values are strings. ``ttl`` follows Redis semantics: -2 when the key does
    not exist, -1 when it has no expiration.
    """

    @abstractmethod
    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        pass

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    async def delete(self, key: str) -> int:
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        pass

    @abstractmethod
    async def ttl(self, key: str) -> int:
        pass

    @abstractmethod
    async def getdel(self, key: str) -> Optional[str]:
        """Atomically read and remove ``key``; only one concurrent caller gets the value."""
        pass
