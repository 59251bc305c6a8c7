# inzozi/domain/models/role.py

"""
Roles and the static management hierarchy.

The hierarchy has exactly two levels: each top-tier role owns one
subordinate role class and each subordinate is owned by exactly one
top-tier role.
"""

from enum import Enum
from types import MappingProxyType
from typing import FrozenSet, Mapping, Optional


class RoleName(str, Enum):
    SYSTEM_ADMIN = "SYSTEM_ADMIN"
    SCHOOL_MANAGER = "SCHOOL_MANAGER"
    INSPECTOR = "INSPECTOR"
    ADMISSION_MANAGER = "ADMISSION_MANAGER"

    @classmethod
    def parse(cls, value: Optional[str]) -> Optional["RoleName"]:
        """Return the matching role or None for unknown names."""
        try:
            return cls(value)
        except ValueError:
            return None


ROLE_HIERARCHY: Mapping[RoleName, FrozenSet[RoleName]] = MappingProxyType({
    RoleName.SYSTEM_ADMIN: frozenset({RoleName.INSPECTOR}),
    RoleName.SCHOOL_MANAGER: frozenset({RoleName.ADMISSION_MANAGER}),
})

# Managers whose authority is limited to their own school
ORG_SCOPED_ROLES: FrozenSet[RoleName] = frozenset({RoleName.SCHOOL_MANAGER})

# Principals holding these roles must belong to a school
ORG_BOUND_ROLES: FrozenSet[RoleName] = frozenset({RoleName.ADMISSION_MANAGER})

DEFAULT_REGISTRATION_ROLE = RoleName.SCHOOL_MANAGER

ROLE_DESCRIPTIONS: Mapping[RoleName, str] = MappingProxyType({
    RoleName.SYSTEM_ADMIN: "Platform administrator, manages inspectors",
    RoleName.SCHOOL_MANAGER: "School manager, manages admission managers of their school",
    RoleName.INSPECTOR: "Inspector, reviews school registrations",
    RoleName.ADMISSION_MANAGER: "Admission manager, processes student applications of one school",
})
