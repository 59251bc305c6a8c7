# inzozi/adapters/outbound/persistence/models/__init__.py

from .base_model import Base
from .role_model import Role
from .user_model import User

__all__ = ["Base", "Role", "User"]
