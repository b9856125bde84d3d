"""Application error taxonomy and the handlers that render it as JSON."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Internal server error"


class AppError(Exception):
    """Base class for failures that map onto an HTTP error envelope.

    The message is shown to the caller verbatim, so it must never carry
    store or upstream details.
    """

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(AppError):
    """Raised when request fields are missing or malformed."""

    status_code = status.HTTP_400_BAD_REQUEST


class ConflictError(AppError):
    """Raised when a write collides with existing state, e.g. a repeat vote."""

    status_code = status.HTTP_409_CONFLICT


class NotFoundError(AppError):
    """Raised when a referenced avatar or submission does not exist."""

    status_code = status.HTTP_404_NOT_FOUND


class UpstreamError(AppError):
    """Raised when the video-generation API rejects or fails a request."""

    status_code = status.HTTP_400_BAD_REQUEST


class InternalError(AppError):
    """Raised for store failures and other unexpected conditions."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_response(status_code: int, message: str, **extra: object) -> JSONResponse:
    """Build the JSON error envelope shared by every endpoint."""
    return JSONResponse(status_code=status_code, content={"error": message, **extra})


async def _handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return error_response(exc.status_code, exc.message)


async def _handle_request_validation(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Invalid request",
        details=jsonable_encoder(exc.errors()),
    )


async def _handle_store_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error in %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error in %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-envelope handlers to ``app``."""
    app.add_exception_handler(AppError, _handle_app_error)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, _handle_request_validation)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _handle_store_error)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _handle_unexpected)
