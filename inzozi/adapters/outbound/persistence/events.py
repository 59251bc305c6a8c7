# inzozi/adapters/outbound/persistence/events.py

"""
ORM lifecycle listeners for the timestamp columns.

``created_at`` / ``updated_at`` are filled in aware UTC on the application
side, so rows written through the ORM never depend on server defaults.
Registered once from the application lifespan.
"""

import logging

from sqlalchemy import event

from inzozi.shared.utils.datetime_utils import DateTimeUtil

logger = logging.getLogger(__name__)

_registered = False


def _stamp_created(mapper, connection, target) -> None:
    if getattr(target, "created_at", None) is None and hasattr(target, "created_at"):
        target.created_at = DateTimeUtil.for_storage()


def _stamp_updated(mapper, connection, target) -> None:
    if hasattr(target, "updated_at"):
        target.updated_at = DateTimeUtil.for_storage()


def register_datetime_events() -> None:
    global _registered
    if _registered:
        return

    from inzozi.adapters.outbound.persistence.models.base_model import Base

    event.listen(Base, "before_insert", _stamp_created, propagate=True)
    event.listen(Base, "before_update", _stamp_updated, propagate=True)

    _registered = True
    logger.info("Timestamp listeners registered")
