# inzozi/adapters/inbound/api/v1/dependencies/gate_deps.py

"""
Authorization stages of the request gate.

Each dependency builds on ``get_current_user``, so authentication always
runs first, then the managed scope, then the target lookup.
"""

import logging
from typing import Callable
from uuid import UUID

from fastapi import Depends, HTTPException, Path, status
from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.inbound.api.deps import get_current_user, get_session, get_user_repository
from inzozi.adapters.outbound.persistence.models import User
from inzozi.application.ports.outbound import IUserRepository
from inzozi.domain.exceptions import AuthorizationException
from inzozi.domain.models.principal import ManagedScope
from inzozi.domain.models.role import RoleName
from inzozi.domain.services.role_hierarchy_service import RoleHierarchyService
from inzozi.shared.utils.http_errors import to_http_exception
from inzozi.shared.utils.messages_utils import get_message

logger = logging.getLogger(__name__)


def require_roles(*roles: RoleName) -> Callable:
    """
    Dependency that only lets users holding one of ``roles`` through.

    Raises:
        HTTPException: 403 if the user's role is not listed.
    """
    allowed = frozenset(roles)

    async def check_role(current_user: User = Depends(get_current_user)) -> User:
        if current_user.role_name not in allowed:
            logger.warning(
                f"User {current_user.email} with role {current_user.role_name} denied; needs one of "
                f"{sorted(r.value for r in allowed)}"
            )
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail=get_message("forbidden_resource"),
            )
        return current_user

    return check_role


async def get_managed_scope(current_user: User = Depends(get_current_user)) -> ManagedScope:
    """What the current user may manage; 403 when nothing."""
    try:
        return RoleHierarchyService.resolve_managed_roles(current_user.role_name, current_user.school_id)
    except AuthorizationException as e:
        logger.warning(f"User {current_user.email} has no management scope: {e.message}")
        raise to_http_exception(e)


def load_managed_target(action: str = "manage") -> Callable:
    """
    Dependency that loads the ``user_id`` path target and checks it is in scope.

    Raises:
        HTTPException: 404 when the user does not exist (or was deleted),
            403 when it exists outside the caller's scope.
    """

    async def load_target(
            user_id: UUID = Path(..., description="ID of the managed user"),
            scope: ManagedScope = Depends(get_managed_scope),
            db: AsyncSession = Depends(get_session),
            users: IUserRepository = Depends(get_user_repository),
    ) -> User:
        target = await users.get_by_id(db, user_id)
        if not target:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=get_message("user_not_found"))

        try:
            RoleHierarchyService.authorize_on_existing(scope, target, action=action)
        except AuthorizationException as e:
            logger.warning(f"Access to user {user_id} denied: {e.message}")
            raise to_http_exception(e)
        return target

    return load_target
