# inzozi/application/use_cases/user_management_use_cases.py

"""
Service for managers administering their subordinate users.

Key design principles
---------------------
* **Asynchronous**: all public methods are async and expect an `AsyncSession`.
* **Scope first**: every method receives the caller's ``ManagedScope``
  (or a target already checked against it by the request gate) and asks
  ``RoleHierarchyService`` before writing anything.
* **Explicit exceptions**: every branch that can fail raises a domain
  exception; the HTTP layer decides the status code.
* **Mail is best effort**: a failed email is logged, never rolled back.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

from fastapi_pagination import Params
from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.configuration.config import settings
from inzozi.adapters.outbound.mail.templates import admin_reset_email, welcome_email
from inzozi.adapters.outbound.persistence.repositories import user_repository
from inzozi.adapters.outbound.security.password_manager import PasswordManager
from inzozi.application.dtos.user_dto import UserCreateByManager, UserUpdate
from inzozi.application.ports.inbound.user_management_port import IUserManagementUseCase
from inzozi.application.ports.outbound.mailer_port import IMailer
from inzozi.application.ports.outbound.user_repository_port import IUserRepository
from inzozi.domain.exceptions import (
    InsufficientPermissionsException,
    InvalidRoleException,
    OrgUnitMismatchException,
    OrgUnitRequiredException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    RoleNotManagedException,
)
from inzozi.domain.models.principal import ManagedScope
from inzozi.domain.models.role import ORG_BOUND_ROLES, RoleName
from inzozi.domain.services.role_hierarchy_service import RoleHierarchyService
from inzozi.shared.utils.messages_utils import get_message
from inzozi.shared.utils.pagination import offset_of, pagination_meta

logger = logging.getLogger(__name__)

# NOT NULL columns; an explicit null in an update leaves them unchanged
_REQUIRED_PROFILE_FIELDS = ("first_name", "last_name")


class AsyncUserManagementService(IUserManagementUseCase):
    """Service layer (async) for managing subordinate **User** entities."""

    def __init__(
            self,
            db_session: AsyncSession,
            mailer: IMailer,
            user_repo: IUserRepository = user_repository,
            frontend_url: Optional[str] = None,
    ):
        self.db = db_session
        self.mailer = mailer
        self.users = user_repo
        self.frontend_url = (frontend_url or settings.FRONTEND_URL).rstrip("/")

    # ────────────────────────────────
    # Helpers
    # ────────────────────────────────
    async def _resolve_role(self, role_id: Any) -> Any:
        role = await self.users.get_role_by_id(self.db, role_id)
        if not role or role.role_name is None:
            logger.warning("Unknown role id: %s", role_id)
            raise InvalidRoleException()
        return role

    async def _notify(self, to_address: str, subject: str, body: str) -> bool:
        sent = await self.mailer.send(to_address, subject, body)
        if not sent:
            logger.error("Email to %s could not be delivered: %s", to_address, subject)
        return sent

    # ────────────────────────────────
    # Create
    # ────────────────────────────────
    async def create_user(self, scope: ManagedScope, data: UserCreateByManager) -> Tuple[Any, Optional[str]]:
        """
        Create a subordinate user.

        Returns:
            (user, generated password or None when the caller supplied one)
        """
        role = await self._resolve_role(data.role_id)
        RoleHierarchyService.authorize_create(scope, role.role_name, data.school_id)

        generated = None
        password = data.password
        if not password:
            generated = password = PasswordManager.generate_temporary_password()

        record = data.model_dump(exclude={"password"})
        record["email"] = record["email"].lower()
        record["password"] = await PasswordManager.hash_password(password)
        record["role_id"] = role.id

        try:
            user = await self.users.create_user(self.db, record)
        except ResourceAlreadyExistsException:
            logger.warning("Create user failed - duplicate email: %s", data.email)
            raise ResourceAlreadyExistsException(detail=get_message("user_email_exists"))

        subject, body = welcome_email(
            user.first_name, user.email, password, role.role_name.value, f"{self.frontend_url}/login"
        )
        await self._notify(user.email, subject, body)

        logger.info("%s user created: %s", role.role_name.value, user.email)
        return user, generated

    # ────────────────────────────────
    # Queries
    # ────────────────────────────────
    async def list_users(
            self,
            scope: ManagedScope,
            params: Params,
            role: Optional[str] = None,
            school_id: Any = None,
            search: Optional[str] = None,
    ) -> Tuple[List[Any], Dict[str, Any]]:
        roles = scope.roles
        if role:
            wanted = RoleName.parse(role.upper())
            if wanted is None:
                raise InvalidRoleException()
            if not scope.can_manage(wanted):
                raise RoleNotManagedException(role=wanted.value, action="manage")
            roles = frozenset({wanted})

        if scope.is_org_scoped:
            if school_id is not None and str(school_id) != scope.school_id:
                raise OrgUnitMismatchException()
            school_id = scope.school_id

        users, total = await self.users.list_managed(
            self.db,
            roles=roles,
            school_id=school_id,
            search=search,
            offset=offset_of(params),
            limit=params.size,
        )
        return users, pagination_meta(params, total)

    async def get_user_stats(self, scope: ManagedScope) -> Dict[str, Any]:
        breakdown = await self.users.count_by_role(self.db, roles=scope.roles, school_id=scope.school_id)
        return {"total_users": sum(breakdown.values()), "role_breakdown": breakdown}

    async def get_available_roles(self, role: Optional[RoleName], school_id: Any = None) -> Dict[str, Any]:
        """Roles the caller may assign; an empty list when they manage nobody."""
        try:
            scope = RoleHierarchyService.resolve_managed_roles(role, school_id)
        except InsufficientPermissionsException:
            return {
                "available_roles": [],
                "current_user_role": role.value if role else None,
                "can_manage": False,
            }

        available = []
        for name in sorted(scope.roles, key=lambda r: r.value):
            row = await self.users.get_role_by_name(self.db, name)
            available.append({
                "id": str(row.id) if row else None,
                "name": name.value,
                "description": row.description if row else None,
            })
        return {
            "available_roles": available,
            "current_user_role": role.value,
            "can_manage": True,
        }

    # ────────────────────────────────
    # Update / delete / reset
    # ────────────────────────────────
    async def update_user(self, scope: ManagedScope, target: Any, data: UserUpdate) -> Any:
        """
        Apply a partial update to ``target``.

        ``target`` must already have passed ``authorize_on_existing``.
        """
        patch = data.model_dump(exclude_unset=True)
        for field in _REQUIRED_PROFILE_FIELDS:
            if field in patch and patch[field] is None:
                patch.pop(field)

        final_role = target.role_name
        if "role_id" in patch:
            if patch["role_id"] is None:
                patch.pop("role_id")
            else:
                role = await self._resolve_role(patch["role_id"])
                RoleHierarchyService.authorize_assign(scope, role.role_name)
                final_role = role.role_name

        final_school = target.school_id
        if "school_id" in patch:
            RoleHierarchyService.authorize_relocate(scope, patch["school_id"])
            final_school = patch["school_id"]

        if final_role in ORG_BOUND_ROLES and final_school is None:
            raise OrgUnitRequiredException(role=final_role.value)

        if patch.get("email"):
            patch["email"] = patch["email"].lower()
        elif "email" in patch:
            patch.pop("email")

        try:
            user = await self.users.update_fields(self.db, target, patch)
        except ResourceAlreadyExistsException:
            logger.warning("Update user failed - email in use: %s", patch.get("email"))
            raise ResourceAlreadyExistsException(detail=get_message("email_in_use"))

        logger.info("User updated: %s", user.email)
        return user

    async def delete_user(self, target: Any) -> None:
        await self.users.soft_delete(self.db, target)
        logger.info("User soft-deleted: %s", target.email)

    async def reset_user_password(self, target: Any) -> bool:
        """
        Replace the target's password with a temporary one and mail it.

        Returns:
            Whether the email was delivered.
        """
        password = PasswordManager.generate_temporary_password()
        password_hash = await PasswordManager.hash_password(password)
        if not await self.users.update_password(self.db, target.id, password_hash):
            raise ResourceNotFoundException(message=get_message("user_not_found"), resource_id=target.id)

        role_label = target.role_name.value if target.role_name else ""
        subject, body = admin_reset_email(target.first_name, password, role_label)
        sent = await self._notify(target.email, subject, body)

        logger.info("Password reset by manager for user: %s", target.email)
        return sent
