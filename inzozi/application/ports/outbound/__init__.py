# inzozi/application/ports/outbound/__init__.py

from .session_cache_port import ISessionCache
from .clock_port import IClock
from .mailer_port import IMailer
from .token_service_port import ITokenService
from .user_repository_port import IUserRepository

__all__ = [
    "ISessionCache",
    "IClock",
    "IMailer",
    "ITokenService",
    "IUserRepository",
]
