# inzozi/domain/exceptions.py

"""
Domain exceptions.

Every failure the core can produce is one of the classes below. They carry
a human readable message, a stable internal code and optional details, but
no HTTP status: the inbound adapter decides how each class is rendered.
"""

from typing import Any, Dict, Optional


class DomainException(Exception):
    """Base class of the error taxonomy."""

    internal_code: str = "DOMAIN_ERROR"
    default_message: str = "Domain error."

    def __init__(self, message: Optional[str] = None, details: Optional[Dict[str, Any]] = None):
        self.message = message or self.default_message
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message


# ─────────────────────────────────────────────────────────────
# Authentication (caller identity could not be established)

class AuthenticationException(DomainException):
    internal_code = "AUTHENTICATION_ERROR"
    default_message = "Unauthorized"


class MalformedTokenException(AuthenticationException):
    internal_code = "MALFORMED_TOKEN"
    default_message = "Token could not be decoded or its signature is invalid."


class TokenRevokedException(AuthenticationException):
    internal_code = "TOKEN_REVOKED"
    default_message = "Token has been blacklisted."


class SessionNotFoundException(AuthenticationException):
    internal_code = "SESSION_NOT_FOUND"
    default_message = "Session not found for token."


class TokenExpiredException(AuthenticationException):
    internal_code = "TOKEN_EXPIRED"
    default_message = "Token has expired."


class InvalidCredentialsException(AuthenticationException):
    internal_code = "INVALID_CREDENTIALS"
    default_message = "Invalid credentials"


# ─────────────────────────────────────────────────────────────
# Authorization (caller is known but not allowed)

class AuthorizationException(DomainException):
    internal_code = "AUTHORIZATION_ERROR"
    default_message = "You do not have permission to access this resource"


class InsufficientPermissionsException(AuthorizationException):
    internal_code = "INSUFFICIENT_PERMISSIONS"
    default_message = "Insufficient permissions for user management"


class RoleNotManagedException(AuthorizationException):
    internal_code = "ROLE_NOT_MANAGED"

    def __init__(self, role: str, action: str = "manage", message: Optional[str] = None):
        self.role = role
        self.action = action
        super().__init__(
            message or f"You are not authorized to {action} {role} users",
            details={"role": role, "action": action},
        )


class OrgUnitMismatchException(AuthorizationException):
    internal_code = "ORG_UNIT_MISMATCH"
    default_message = "You can only manage users within your school"


# ─────────────────────────────────────────────────────────────
# Client errors

class ValidationException(DomainException):
    internal_code = "VALIDATION_ERROR"
    default_message = "Invalid request."


class OrgUnitRequiredException(ValidationException):
    internal_code = "ORG_UNIT_REQUIRED"

    def __init__(self, role: str, message: Optional[str] = None):
        self.role = role
        super().__init__(
            message or f"School ID is required when creating {role}",
            details={"role": role},
        )


class InvalidOrExpiredTicketException(ValidationException):
    internal_code = "INVALID_OR_EXPIRED_TICKET"
    default_message = "Invalid or expired token"


class InvalidRoleException(ValidationException):
    internal_code = "INVALID_ROLE"
    default_message = "Invalid role specified"


class ResourceNotFoundException(DomainException):
    internal_code = "RESOURCE_NOT_FOUND"
    default_message = "Resource not found."

    def __init__(self, message: Optional[str] = None, resource_id: Any = None):
        self.resource_id = resource_id
        details = {"resource_id": str(resource_id)} if resource_id is not None else None
        super().__init__(message, details=details)


class ResourceAlreadyExistsException(DomainException):
    internal_code = "RESOURCE_ALREADY_EXISTS"
    default_message = "Resource already exists."

    def __init__(self, detail: Optional[str] = None):
        super().__init__(detail)


# ─────────────────────────────────────────────────────────────
# Infrastructure

class InfrastructureException(DomainException):
    internal_code = "INFRASTRUCTURE_ERROR"
    default_message = "Internal server error."

    def __init__(self, message: Optional[str] = None, original_error: Optional[Exception] = None):
        self.original_error = original_error
        super().__init__(message)


class DatabaseOperationException(InfrastructureException):
    internal_code = "DATABASE_ERROR"
    default_message = "Database operation failed."


class CacheOperationException(InfrastructureException):
    internal_code = "CACHE_ERROR"
    default_message = "Session cache operation failed."
