# inzozi/domain/services/role_hierarchy_service.py

"""
Role hierarchy authorization.

Pure domain logic: given who is asking, decide which subordinate roles they
may administer and whether a concrete target (new or existing) falls inside
that scope. Nothing here touches storage or HTTP; callers pass in the target
as freshly loaded from the credential store.
"""

import logging
from typing import Any, Optional

from inzozi.domain.exceptions import (
    InsufficientPermissionsException,
    OrgUnitMismatchException,
    OrgUnitRequiredException,
    RoleNotManagedException,
)
from inzozi.domain.models.principal import ManagedScope
from inzozi.domain.models.role import ORG_BOUND_ROLES, ORG_SCOPED_ROLES, ROLE_HIERARCHY, RoleName

logger = logging.getLogger(__name__)


def _same_school(a: Any, b: Any) -> bool:
    return a is not None and b is not None and str(a) == str(b)


class RoleHierarchyService:
    """Static helpers implementing the two-level management hierarchy."""

    @staticmethod
    def resolve_managed_roles(role: Optional[RoleName], school_id: Any = None) -> ManagedScope:
        """
        Compute what a principal with ``role`` (and ``school_id``) may manage.

        Raises:
            InsufficientPermissionsException: role manages nobody, or an
                org-scoped manager has no school to be confined to.
        """
        managed = ROLE_HIERARCHY.get(role) if role else None
        if not managed:
            logger.warning("Role %s has no user management rights", role)
            raise InsufficientPermissionsException()

        if role in ORG_SCOPED_ROLES:
            if school_id is None:
                logger.warning("%s without school cannot manage users", role.value)
                raise InsufficientPermissionsException()
            return ManagedScope(roles=managed, school_id=str(school_id))

        return ManagedScope(roles=managed)

    @staticmethod
    def authorize_create(scope: ManagedScope, target_role: Optional[RoleName], target_school_id: Any = None) -> None:
        """
        Check that a manager may create a user with ``target_role`` in ``target_school_id``.

        Raises:
            RoleNotManagedException: 403, role outside the manager's set.
            OrgUnitRequiredException: 400, scoped manager omitted the school,
                or the role needs a school and none was given.
            OrgUnitMismatchException: 403, school differs from the manager's.
        """
        if not scope.can_manage(target_role):
            raise RoleNotManagedException(role=_role_label(target_role), action="create")

        if scope.is_org_scoped:
            if target_school_id is None:
                raise OrgUnitRequiredException(role=target_role.value)
            if not _same_school(target_school_id, scope.school_id):
                raise OrgUnitMismatchException("You can only create users for your school")
        elif target_role in ORG_BOUND_ROLES and target_school_id is None:
            raise OrgUnitRequiredException(role=target_role.value)

    @staticmethod
    def authorize_on_existing(scope: ManagedScope, target: Any, action: str = "manage") -> None:
        """
        Check that a manager may act on an already persisted user.

        ``target`` must expose ``role_name`` and ``school_id`` as loaded from
        storage at check time.

        Raises:
            RoleNotManagedException: 403, target's role outside the manager's set.
            OrgUnitMismatchException: 403, target belongs to another school.
        """
        target_role = getattr(target, "role_name", None)
        if not scope.can_manage(target_role):
            raise RoleNotManagedException(role=_role_label(target_role), action=action)

        if scope.is_org_scoped and not _same_school(getattr(target, "school_id", None), scope.school_id):
            raise OrgUnitMismatchException()

    @staticmethod
    def authorize_assign(scope: ManagedScope, new_role: Optional[RoleName]) -> None:
        """Check a role change on an existing user stays inside the manager's set."""
        if not scope.can_manage(new_role):
            label = _role_label(new_role)
            raise RoleNotManagedException(
                role=label,
                action="assign",
                message=f"You are not authorized to assign {label} role",
            )

    @staticmethod
    def authorize_relocate(scope: ManagedScope, new_school_id: Any) -> None:
        """A scoped manager may not move a user to another school."""
        if scope.is_org_scoped and not _same_school(new_school_id, scope.school_id):
            raise OrgUnitMismatchException()


def _role_label(role: Optional[RoleName]) -> str:
    return role.value if role else "UNKNOWN"
