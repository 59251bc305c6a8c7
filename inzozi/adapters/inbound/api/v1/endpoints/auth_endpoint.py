# inzozi/adapters/inbound/api/v1/endpoints/auth_endpoint.py

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from inzozi.adapters.inbound.api.deps import (
    get_bearer_token,
    get_clock,
    get_current_user,
    get_mailer,
    get_session,
    get_session_cache,
    get_token_service,
    get_user_repository,
)
from inzozi.adapters.outbound.persistence.models import User
from inzozi.application.dtos.auth_dto import ForgotPasswordRequest, ResetPasswordRequest
from inzozi.application.dtos.response_dto import ApiResponse, ForgotPasswordData, LoginData, UserData
from inzozi.application.dtos.user_dto import UserLogin, UserOutput, UserRegister
from inzozi.application.ports.outbound import IClock, IMailer, ISessionCache, ITokenService, IUserRepository
from inzozi.application.use_cases.auth_use_cases import AsyncAuthService
from inzozi.application.use_cases.password_reset_use_cases import PasswordResetService
from inzozi.domain.exceptions import DomainException
from inzozi.shared.utils.error_responses import auth_errors
from inzozi.shared.utils.http_errors import to_http_exception
from inzozi.shared.utils.messages_utils import get_message
from inzozi.shared.utils.success_responses import auth_success, common_success

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
)


def _internal_error() -> HTTPException:
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=get_message("internal_error"))


@router.post(
    "/register",
    response_model=ApiResponse[UserData],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="Registers a new account with the default role and no school.",
    responses={**auth_success, **auth_errors}
)
async def register_user(
        user_input: UserRegister,
        db: AsyncSession = Depends(get_session),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncAuthService(db, user_repo=users)
    try:
        user = await service.register_user(user_input)
        return ApiResponse[UserData](
            message=get_message("registration_successful"),
            data=UserData(user=UserOutput.model_validate(user)),
        )
    except DomainException as e:
        logger.warning(f"Registration failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during registration: {e}")
        raise _internal_error()


@router.post(
    "/login",
    response_model=ApiResponse[LoginData],
    status_code=status.HTTP_200_OK,
    summary="Login user",
    description="Authenticates user credentials and returns a session token.",
    responses={**common_success, **auth_errors}
)
async def login_user(
        user_input: UserLogin,
        db: AsyncSession = Depends(get_session),
        token_service: ITokenService = Depends(get_token_service),
        users: IUserRepository = Depends(get_user_repository),
):
    service = AsyncAuthService(db, token_service, users)
    try:
        user, token = await service.login_user(user_input)
        return ApiResponse[LoginData](
            message=get_message("login_successful"),
            data=LoginData(user=UserOutput.model_validate(user), token=token),
        )
    except DomainException as e:
        logger.warning(f"Login failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during login: {e}")
        raise _internal_error()


@router.post(
    "/logout",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Logout user",
    description="Revokes the bearer token for the rest of its lifetime. Calling it twice is not an error.",
    responses={**common_success, **auth_errors}
)
async def logout_user(
        token: str = Depends(get_bearer_token),
        token_service: ITokenService = Depends(get_token_service),
):
    service = AsyncAuthService(None, token_service)
    try:
        await service.logout_user(token)
        return ApiResponse[None](message=get_message("logout_successful"))
    except DomainException as e:
        logger.warning(f"Logout rejected [{e.internal_code}]: {e.message}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during logout: {e}")
        raise _internal_error()


@router.post(
    "/forgot-password",
    response_model=ApiResponse[ForgotPasswordData],
    status_code=status.HTTP_200_OK,
    summary="Request a password reset",
    description="Emails a single-use reset link valid for a few minutes.",
    responses={**common_success, **auth_errors}
)
async def forgot_password(
        request_data: ForgotPasswordRequest,
        db: AsyncSession = Depends(get_session),
        cache: ISessionCache = Depends(get_session_cache),
        mailer: IMailer = Depends(get_mailer),
        clock: IClock = Depends(get_clock),
        users: IUserRepository = Depends(get_user_repository),
):
    service = PasswordResetService(db, cache, mailer, clock, users)
    try:
        ticket = await service.request_reset(request_data.email)
        return ApiResponse[ForgotPasswordData](
            message=get_message("reset_link_sent"),
            data=ForgotPasswordData(token=ticket),
        )
    except DomainException as e:
        logger.warning(f"Password reset request failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during forgot-password: {e}")
        raise _internal_error()


@router.post(
    "/reset-password",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Reset password with a ticket",
    description="Consumes the reset ticket and sets the new password. A ticket works once.",
    responses={**common_success, **auth_errors}
)
async def reset_password(
        request_data: ResetPasswordRequest,
        db: AsyncSession = Depends(get_session),
        cache: ISessionCache = Depends(get_session_cache),
        mailer: IMailer = Depends(get_mailer),
        clock: IClock = Depends(get_clock),
        users: IUserRepository = Depends(get_user_repository),
):
    service = PasswordResetService(db, cache, mailer, clock, users)
    try:
        await service.reset_password(request_data.token, request_data.new_password)
        return ApiResponse[None](message=get_message("password_updated"))
    except DomainException as e:
        logger.warning(f"Password reset failed: {e}")
        raise to_http_exception(e)
    except Exception as e:
        logger.exception(f"Unexpected error during reset-password: {e}")
        raise _internal_error()


@router.get(
    "/me",
    response_model=ApiResponse[UserData],
    summary="Get My Data - Logged in user data",
    description="Returns the authenticated user's profile.",
    responses={**common_success, **auth_errors}
)
async def get_my_data(
        current_user: User = Depends(get_current_user),
):
    return ApiResponse[UserData](
        message=get_message("profile_retrieved"),
        data=UserData(user=UserOutput.model_validate(current_user)),
    )
