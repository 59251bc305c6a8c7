# inzozi/shared/utils/datetime_utils.py

"""
Utilities for datetime operations.

Storage is always UTC; dates shown to people (emails) are converted to the
configured local timezone.
"""

from datetime import datetime, timezone
from typing import Optional
import pytz

from inzozi.adapters.configuration.config import settings


class DateTimeUtil:
    """
    Static helpers for timezone handling.
    """

    LOCAL_TZ = pytz.timezone(settings.TIMEZONE)

    @staticmethod
    def utcnow() -> datetime:
        """Timezone-aware current UTC time."""
        return datetime.now(timezone.utc)

    @staticmethod
    def for_storage(dt: Optional[datetime] = None) -> datetime:
        """
        Normalise a datetime to aware UTC for the database.

        Naive values are assumed to already be UTC.
        """
        if dt is None:
            return DateTimeUtil.utcnow()
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def utc_to_local(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(DateTimeUtil.LOCAL_TZ)
