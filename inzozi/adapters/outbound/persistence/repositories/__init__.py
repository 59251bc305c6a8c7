# inzozi/adapters/outbound/persistence/repositories/__init__.py

from .role_repository import role_repository
from .user_repository import user_repository

__all__ = ["role_repository", "user_repository"]
