# inzozi/adapters/outbound/persistence/models/role_model.py

import uuid

from sqlalchemy import Column, DateTime, String, func
from sqlalchemy.dialects.postgresql import UUID

from inzozi.adapters.outbound.persistence.models.base_model import Base
from inzozi.domain.models.role import RoleName


class Role(Base):
    """
    A role row. Names are unique and limited to the RoleName enum; the
    management hierarchy between them is not stored here.
    """
    __tablename__ = "roles"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(50), unique=True, nullable=False, index=True)
    description = Column(String(255), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    @property
    def role_name(self):
        return RoleName.parse(self.name)

    def __repr__(self) -> str:
        return f"<Role(name={self.name})>"
