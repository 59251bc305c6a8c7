# inzozi/application/ports/outbound/clock_port.py

from abc import ABC, abstractmethod
from datetime import datetime


class IClock(ABC):
    """Source of the current time (timezone-aware, UTC)."""

    @abstractmethod
    def now(self) -> datetime:
        pass

    def timestamp(self) -> int:
        return int(self.now().timestamp())
