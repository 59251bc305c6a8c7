# inzozi/shared/utils/http_errors.py

"""
Domain exception → HTTP mapping.

The only place that knows which status code each failure class gets and
what the caller is allowed to read about it.
"""

from typing import Dict, Type

from fastapi import HTTPException, status

from inzozi.domain.exceptions import (
    AuthenticationException,
    AuthorizationException,
    DomainException,
    InfrastructureException,
    InvalidCredentialsException,
    ResourceAlreadyExistsException,
    ResourceNotFoundException,
    ValidationException,
)
from inzozi.shared.utils.messages_utils import get_message

STATUS_BY_EXCEPTION: Dict[Type[DomainException], int] = {
    AuthenticationException: status.HTTP_401_UNAUTHORIZED,
    AuthorizationException: status.HTTP_403_FORBIDDEN,
    ValidationException: status.HTTP_400_BAD_REQUEST,
    ResourceNotFoundException: status.HTTP_404_NOT_FOUND,
    ResourceAlreadyExistsException: status.HTTP_409_CONFLICT,
    InfrastructureException: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_for(exc: DomainException) -> int:
    for klass in type(exc).__mro__:
        if klass in STATUS_BY_EXCEPTION:
            return STATUS_BY_EXCEPTION[klass]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def public_message(exc: DomainException) -> str:
    """
    Message safe to return to the caller.

    Token failures collapse to "Unauthorized" and infrastructure failures to
    a generic message; credential errors keep their wording.
    """
    if isinstance(exc, InvalidCredentialsException):
        return exc.message
    if isinstance(exc, AuthenticationException):
        return get_message("unauthorized")
    if isinstance(exc, InfrastructureException):
        return get_message("internal_error")
    return exc.message


def to_http_exception(exc: DomainException) -> HTTPException:
    code = status_for(exc)
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return HTTPException(status_code=code, detail=public_message(exc), headers=headers)
