# inzozi/domain/models/principal.py

from dataclasses import dataclass, field
from typing import Any, Dict, FrozenSet, Optional

from inzozi.domain.models.role import RoleName


@dataclass(frozen=True)
class Principal:
    """
    Snapshot of an authenticated user.

    This is what a session record stores and what a verified token yields.
    It is never used for authorization decisions on other users: those
    always reload the target from the credential store.
    """
    id: str
    email: str
    role: Optional[RoleName]
    school_id: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "role": self.role.value if self.role else None,
            "school_id": self.school_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Principal":
        return cls(
            id=str(data["id"]),
            email=data["email"],
            role=RoleName.parse(data.get("role")),
            school_id=str(data["school_id"]) if data.get("school_id") else None,
        )


@dataclass(frozen=True)
class ManagedScope:
    """Roles a manager may administer and the school they are confined to (if any)."""
    roles: FrozenSet[RoleName] = field(default_factory=frozenset)
    school_id: Optional[str] = None

    @property
    def is_org_scoped(self) -> bool:
        return self.school_id is not None

    def can_manage(self, role: Optional[RoleName]) -> bool:
        return role is not None and role in self.roles
