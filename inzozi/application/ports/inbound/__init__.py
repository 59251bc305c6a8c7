# inzozi/application/ports/inbound/__init__.py

from .auth_port import IAuthUseCase, IPasswordResetUseCase
from .user_management_port import IUserManagementUseCase

__all__ = [
    "IAuthUseCase",
    "IPasswordResetUseCase",
    "IUserManagementUseCase",
]
