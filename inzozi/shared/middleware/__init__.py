# inzozi/shared/middleware/__init__.py

from inzozi.shared.middleware.logging_middleware import AsyncRequestLoggingMiddleware
from inzozi.shared.middleware.error_handler_middleware import ErrorHandlerMiddleware, register_exception_handlers

__all__ = [
    "AsyncRequestLoggingMiddleware",
    "ErrorHandlerMiddleware",
    "register_exception_handlers",
]
