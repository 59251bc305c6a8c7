# inzozi/adapters/outbound/cache/memory_session_cache.py

"""
In-process session cache.

Same contract as the Redis adapter, with expiry evaluated against an
injected clock. Only valid for a single process (tests, local runs).
"""

import asyncio
from typing import Dict, Optional, Tuple

from inzozi.application.ports.outbound.clock_port import IClock
from inzozi.application.ports.outbound.session_cache_port import ISessionCache
from inzozi.adapters.outbound.clock.system_clock import SystemClock


class InMemorySessionCache(ISessionCache):

    def __init__(self, clock: Optional[IClock] = None):
        self.clock = clock or SystemClock()
        self._data: Dict[str, Tuple[str, Optional[float]]] = {}
        self._lock = asyncio.Lock()

    def _now(self) -> float:
        return self.clock.now().timestamp()

    def _live(self, key: str) -> Optional[Tuple[str, Optional[float]]]:
        entry = self._data.get(key)
        if entry is None:
            return None
        _, expires_at = entry
        if expires_at is not None and expires_at <= self._now():
            del self._data[key]
            return None
        return entry

    async def set(self, key: str, value: str, ttl_seconds: int) -> None:
        async with self._lock:
            self._data[key] = (value, self._now() + max(1, int(ttl_seconds)))

    async def get(self, key: str) -> Optional[str]:
        async with self._lock:
            entry = self._live(key)
            return entry[0] if entry else None

    async def delete(self, key: str) -> int:
        async with self._lock:
            if self._live(key) is None:
                return 0
            del self._data[key]
            return 1

    async def exists(self, key: str) -> bool:
        async with self._lock:
            return self._live(key) is not None

    async def ttl(self, key: str) -> int:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return -2
            if entry[1] is None:
                return -1
            return max(0, int(entry[1] - self._now()))

    async def getdel(self, key: str) -> Optional[str]:
        async with self._lock:
            entry = self._live(key)
            if entry is None:
                return None
            del self._data[key]
            return entry[0]

    def clear(self) -> None:
        self._data.clear()
