# inzozi/adapters/outbound/persistence/models/user_model.py

"""
User model.

Users are never hard-deleted: ``deleted_at`` is the tombstone and every
repository read filters it out.
"""

import uuid
from typing import Optional

from sqlalchemy import Column, DateTime, Enum, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import relationship

from inzozi.adapters.outbound.persistence.models.base_model import Base
from inzozi.domain.models.principal import Principal
from inzozi.domain.models.role import RoleName

GENDERS = ("Male", "Female", "Other")


class User(Base):
    """
    Platform user.

    Attributes:
        id: UUID primary key
        email: Login identifier, unique
        password: bcrypt hash, NULL for accounts created through an external provider
        role_id: Role of the user
        school_id: School the user belongs to (required for ADMISSION_MANAGER)
        deleted_at: Soft-delete tombstone
    """
    __tablename__ = "users"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    gender = Column(Enum(*GENDERS, name="user_gender"), nullable=True)
    province = Column(String(100), nullable=True)
    district = Column(String(100), nullable=True)
    sector = Column(String(100), nullable=True)
    cell = Column(String(100), nullable=True)
    village = Column(String(100), nullable=True)
    phone = Column(String(20), nullable=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password = Column(String, nullable=True)
    role_id = Column(UUID(as_uuid=True), ForeignKey("roles.id"), nullable=True, index=True)
    profile_image = Column(String, nullable=True)
    school_id = Column(UUID(as_uuid=True), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    role = relationship("Role", lazy="joined")

    @property
    def role_name(self) -> Optional[RoleName]:
        return self.role.role_name if self.role is not None else None

    def to_principal(self) -> Principal:
        return Principal(
            id=str(self.id),
            email=self.email,
            role=self.role_name,
            school_id=str(self.school_id) if self.school_id else None,
        )

    def __repr__(self) -> str:
        return f"<User(email={self.email}, role={self.role_name})>"
