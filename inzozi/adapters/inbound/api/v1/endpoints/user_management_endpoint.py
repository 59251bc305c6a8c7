# inzozi/adapters/inbound/api/v1/endpoints/user_management_endpoint.py

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi_pagination import Params
from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.inbound.api.deps import get_current_user, get_mailer, get_session, get_user_repository
from inzozi.adapters.inbound.api.v1.dependencies.gate_deps import (
    get_managed_scope,
    load_managed_target,
    require_roles,
)
from inzozi.adapters.outbound.persistence.models import User
from inzozi.application.dtos.response_dto import (
    ApiResponse,
    AvailableRolesData,
    CreatedUserData,
    PaginationMeta,
    UserData,
    UserListData,
    UserStatsData,
)
from inzozi.application.dtos.user_dto import UserCreateByManager, UserOutput, UserUpdate
from inzozi.application.ports.outbound import IMailer, IUserRepository
from inzozi.application.use_cases.user_management_use_cases import AsyncUserManagementService
from inzozi.domain.exceptions import DomainException
from inzozi.domain.models.principal import ManagedScope
from inzozi.domain.models.role import ROLE_HIERARCHY
from inzozi.shared.utils.error_responses import user_errors
from inzozi.shared.utils.http_errors import to_http_exception
from inzozi.shared.utils.messages_utils import get_message
from inzozi.shared.utils.pagination import pagination_params
from inzozi.shared.utils.success_responses import common_success, user_success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/users",
    tags=["User Management"],
)


def _internal_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=get_message("internal_error"))


def _user_data(user) -> UserData:
    return UserData(user=UserOutput.model_validate(user))


@router.post(
    "",
    response_model=ApiResponse[CreatedUserData],
    status_code=status.HTTP_201_CREATED,
    summary="Create User - Create a subordinate user",
    description="Creates a user with a role the caller manages. A temporary password is generated "
                "and emailed when none is given.",
    responses={**user_success, **user_errors}
)
async def create_user(
        user_input: UserCreateByManager,
        scope: ManagedScope = Depends(get_managed_scope),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        user, temporary_password = await service.create_user(scope, user_input)
        return ApiResponse[CreatedUserData](
            message=get_message("user_created", role=user.role_name.value),
            data=CreatedUserData(user=UserOutput.model_validate(user), temporary_password=temporary_password),
        )
    except DomainException as e:
        logger.warning(f"Create user failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error creating user: {e}")
        raise _internal_error()


@router.get(
    "",
    response_model=ApiResponse[UserListData],
    summary="List Users - Users the caller manages",
    description="Paginated list restricted to the caller's managed roles (and school for school managers).",
    responses={**common_success, **user_errors}
)
async def list_users(
        params: Params = Depends(pagination_params),
        role: Optional[str] = Query(None, description="Filter by one managed role"),
        school_id: Optional[UUID] = Query(None, description="Filter by school"),
        search: Optional[str] = Query(None, max_length=100, description="Name, email or phone contains"),
        scope: ManagedScope = Depends(get_managed_scope),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        items, meta = await service.list_users(scope, params, role=role, school_id=school_id, search=search)
        return ApiResponse[UserListData](
            message=get_message("users_retrieved"),
            data=UserListData(
                users=[UserOutput.model_validate(u) for u in items],
                pagination=PaginationMeta(**meta),
            ),
        )
    except DomainException as e:
        logger.warning(f"List users failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error listing users: {e}")
        raise _internal_error()


@router.get(
    "/stats",
    response_model=ApiResponse[UserStatsData],
    summary="User Stats - Count of managed users by role",
    responses={**common_success, **user_errors},
    dependencies=[Depends(require_roles(*ROLE_HIERARCHY))],
)
async def get_user_stats(
        scope: ManagedScope = Depends(get_managed_scope),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        stats = await service.get_user_stats(scope)
        return ApiResponse[UserStatsData](message=get_message("stats_retrieved"), data=UserStatsData(**stats))
    except DomainException as e:
        logger.warning(f"User stats failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error computing user stats: {e}")
        raise _internal_error()


@router.get(
    "/available-roles",
    response_model=ApiResponse[AvailableRolesData],
    summary="Available Roles - Roles the caller may assign",
    description="Any authenticated user may call this; callers who manage nobody get an empty list.",
    responses={**common_success, **user_errors}
)
async def get_available_roles(
        current_user: User = Depends(get_current_user),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        result = await service.get_available_roles(current_user.role_name, current_user.school_id)
        return ApiResponse[AvailableRolesData](
            message=get_message("roles_retrieved"),
            data=AvailableRolesData(**result),
        )
    except DomainException as e:
        logger.warning(f"Available roles failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error listing available roles: {e}")
        raise _internal_error()


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserData],
    summary="Get User - One managed user",
    responses={**common_success, **user_errors}
)
async def get_user(
        target: User = Depends(load_managed_target("manage")),
):
    return ApiResponse[UserData](message=get_message("user_retrieved"), data=_user_data(target))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserData],
    summary="Update User - Update a managed user",
    description="Role changes must stay inside the caller's managed roles; school managers cannot move "
                "users to another school.",
    responses={**common_success, **user_errors}
)
async def update_user(
        update_data: UserUpdate,
        target: User = Depends(load_managed_target("manage")),
        scope: ManagedScope = Depends(get_managed_scope),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        user = await service.update_user(scope, target, update_data)
        return ApiResponse[UserData](message=get_message("user_updated"), data=_user_data(user))
    except DomainException as e:
        logger.warning(f"Update user failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error updating user: {e}")
        raise _internal_error()


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    summary="Delete User - Soft-delete a managed user",
    responses={**common_success, **user_errors}
)
async def delete_user(
        target: User = Depends(load_managed_target("delete")),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    role = target.role_name.value
    try:
        await service.delete_user(target)
        return ApiResponse[None](message=get_message("user_deleted", role=role))
    except DomainException as e:
        logger.warning(f"Delete user failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error deleting user: {e}")
        raise _internal_error()


@router.post(
    "/{user_id}/reset-password",
    response_model=ApiResponse[dict],
    summary="Reset User Password - Mail a new temporary password",
    responses={**common_success, **user_errors}
)
async def reset_user_password(
        target: User = Depends(load_managed_target("reset password for")),
        db: AsyncSession = Depends(get_session),
        mailer: IMailer = Depends(get_mailer),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncUserManagementService(db, mailer, users)
    try:
        sent = await service.reset_user_password(target)
        return ApiResponse[dict](message=get_message("user_password_reset"), data={"email_sent": sent})
    except DomainException as e:
        logger.warning(f"Manager password reset failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error resetting password: {e}")
        raise _internal_error()
