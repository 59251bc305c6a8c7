# inzozi/adapters/outbound/clock/system_clock.py

from datetime import datetime, timedelta
from typing import Optional

import pytz

from inzozi.application.ports.outbound.clock_port import IClock


class SystemClock(IClock):
    """Wall clock in UTC."""

    def now(self) -> datetime:
        return datetime.now(pytz.UTC)


class FrozenClock(IClock):
    """
    Clock that only moves when told to.

    Used by tests and tools that need to simulate token or ticket expiry
    without sleeping.
    """

    def __init__(self, start: Optional[datetime] = None):
        self._now = start or datetime(2025, 1, 1, 8, 0, 0, tzinfo=pytz.UTC)
        if self._now.tzinfo is None:
            self._now = pytz.UTC.localize(self._now)

    def now(self) -> datetime:
        return self._now

    def advance(self, seconds: float = 0, **kwargs) -> datetime:
        self._now = self._now + timedelta(seconds=seconds, **kwargs)
        return self._now

    def set(self, moment: datetime) -> None:
        self._now = moment
