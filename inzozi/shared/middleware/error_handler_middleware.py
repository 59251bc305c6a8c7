# inzozi/shared/middleware/error_handler_middleware.py

"""
Uniform failure envelope.

Every error leaves the API as ``{"success": false, "message": ..., "data": ...}``.
Exception handlers cover what FastAPI routes raise; the middleware catches
anything that escapes them.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from inzozi.domain.exceptions import DomainException, InfrastructureException
from inzozi.shared.utils.http_errors import public_message, status_for
from inzozi.shared.utils.messages_utils import get_message

logger = logging.getLogger(__name__)


def error_envelope(status_code: int, message: str, data=None, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "data": data},
        headers=headers,
    )


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    if isinstance(exc, InfrastructureException):
        logger.error(f"[{exc.internal_code}] {exc.message} on {request.url.path}: {exc.original_error!r}")
    else:
        logger.warning(f"[{exc.internal_code}] {exc.message} on {request.url.path}")
    return error_envelope(status_for(exc), public_message(exc))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_envelope(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.warning(f"RequestValidationError on {request.url.path}")
    errors = [
        {"field": ".".join(str(p) for p in err.get("loc", [])[1:]), "message": err.get("msg")}
        for err in exc.errors()
    ]
    return error_envelope(422, get_message("validation_error"), data={"errors": errors})


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)

        except DomainException as e:
            return await domain_exception_handler(request, e)

        except Exception:
            logger.exception(f"Unexpected error on {request.url.path}")
            return error_envelope(500, get_message("internal_error"))
