"""Centralized exception handlers for FastAPI."""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.core.exceptions import DomainError, StoreUnavailable
from app.schemas.common import field_errors

logger = logging.getLogger(__name__)


def _error_response(exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.error, "message": exc.message, **exc.extra()},
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc)
    else:
        logger.info("%s %s rejected (%s): %s", request.method, request.url.path, exc.error, exc.message)
    return _error_response(exc)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    # 400 rather than FastAPI's default 422, with one entry per failing field
    details = field_errors(exc.errors())
    logger.info("%s %s failed validation: %s", request.method, request.url.path, details)
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": "validation_failed", "message": "Validation failed", "details": details},
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    # Log the driver error itself; the response only says the store is down
    logger.error("Database error on %s %s", request.method, request.url.path, exc_info=exc)
    return _error_response(StoreUnavailable())


async def general_500_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "internal_error", "message": "Internal server error"},
    )


EXCEPTION_HANDLERS = {
    DomainError: domain_error_handler,
    RequestValidationError: request_validation_handler,
    SQLAlchemyError: database_error_handler,
    Exception: general_500_exception_handler,
}


def register_exception_handlers(app):
    for exception_class, handler in EXCEPTION_HANDLERS.items():
        app.add_exception_handler(exception_class, handler)
