# inzozi/adapters/outbound/persistence/repositories/base_repository.py

"""
Async Base Repository

Lookups and writes shared by the role and user repositories. Models with a
``deleted_at`` column are soft-deletable: lookups never return tombstoned
rows and ``soft_remove`` stamps the tombstone instead of deleting.
"""

import logging
from typing import Any, Dict, Generic, Optional, Type, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.future import select
from sqlalchemy.sql import Select

from inzozi.adapters.outbound.persistence.models.base_model import Base
from inzozi.domain.exceptions import DatabaseOperationException, ResourceAlreadyExistsException
from inzozi.shared.utils.datetime_utils import DateTimeUtil

ModelType = TypeVar("ModelType", bound=Base)
CreateSchemaType = TypeVar("CreateSchemaType")
UpdateSchemaType = TypeVar("UpdateSchemaType")

logger = logging.getLogger(__name__)

_UNIQUE_MARKERS = ("unique", "duplicate")


class AsyncCRUDBase(Generic[ModelType, CreateSchemaType, UpdateSchemaType]):
    """
    Generic asynchronous repository.

    Every database failure leaves as a domain exception: unique violations
    as ``ResourceAlreadyExistsException``, anything else as
    ``DatabaseOperationException``.
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model
        self.name = model.__name__
        self.logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    def soft_deletable(self) -> bool:
        return hasattr(self.model, "deleted_at")

    def _select(self) -> Select:
        """Base query; excludes tombstoned rows."""
        query = select(self.model)
        if self.soft_deletable:
            query = query.where(self.model.deleted_at.is_(None))
        return query

    async def _first(self, db: AsyncSession, query: Select, what: str) -> Optional[ModelType]:
        try:
            result = await db.execute(query)
            return result.unique().scalar_one_or_none()
        except SQLAlchemyError as e:
            self.logger.error(f"Error fetching {self.name} {what}: {e}")
            raise DatabaseOperationException(message=f"Error fetching {self.name}.", original_error=e)

    async def _persist(self, db: AsyncSession, db_obj: ModelType, action: str) -> ModelType:
        """Commit ``db_obj`` and refresh it, mapping failures to domain errors."""
        try:
            db.add(db_obj)
            await db.commit()
            await db.refresh(db_obj)
            return db_obj
        except IntegrityError as e:
            await db.rollback()
            if any(marker in str(e).lower() for marker in _UNIQUE_MARKERS):
                self.logger.warning(f"Unique violation on {action} {self.name}: {e.orig}")
                raise ResourceAlreadyExistsException(detail=f"{self.name} with these data already exists")
            self.logger.error(f"Integrity error on {action} {self.name}: {e}")
            raise DatabaseOperationException(original_error=e)
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error on {action} {self.name}: {e}")
            raise DatabaseOperationException(message=f"Error on {action} {self.name}.", original_error=e)

    async def get(self, db: AsyncSession, id: Any) -> Optional[ModelType]:
        return await self._first(db, self._select().where(self.model.id == id), f"with ID {id}")

    async def get_by_field(self, db: AsyncSession, field_name: str, value: Any) -> Optional[ModelType]:
        query = self._select().where(getattr(self.model, field_name) == value)
        return await self._first(db, query, f"by {field_name}")

    async def create(self, db: AsyncSession, *, obj_in: Dict[str, Any]) -> ModelType:
        db_obj = await self._persist(db, self.model(**obj_in), "create")
        self.logger.info(f"{self.name} created with ID: {db_obj.id}")
        return db_obj

    async def update(self, db: AsyncSession, *, db_obj: ModelType, obj_in: Dict[str, Any]) -> ModelType:
        """Apply ``obj_in`` to the columns ``db_obj`` actually has."""
        for field, value in obj_in.items():
            if hasattr(db_obj, field):
                setattr(db_obj, field, value)

        db_obj = await self._persist(db, db_obj, "update")
        self.logger.info(f"{self.name} with ID {db_obj.id} updated")
        return db_obj

    async def soft_remove(self, db: AsyncSession, *, db_obj: ModelType) -> None:
        """Tombstone a record (hard delete for models without ``deleted_at``)."""
        try:
            if self.soft_deletable:
                db_obj.deleted_at = DateTimeUtil.utcnow()
                db.add(db_obj)
            else:
                await db.delete(db_obj)
            await db.commit()
        except SQLAlchemyError as e:
            await db.rollback()
            self.logger.error(f"Error removing {self.name}: {e}")
            raise DatabaseOperationException(message=f"Error removing {self.name}.", original_error=e)

        self.logger.info(f"{self.name} with ID {db_obj.id} removed")
