from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bitcoin_tracking.core.errors import (
    DuplicateNoteError,
    ExternalServiceError,
    NotFoundError,
    ValidationError,
)
from bitcoin_tracking.schemas.common import ErrorResponse
from bitcoin_tracking.utils.time import utc_now

__all__ = ["GENERIC_ERROR_MESSAGE", "error_response", "register_exception_handlers"]

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An error occurred while processing your request."


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ErrorResponse(status_code=status_code, message=message, timestamp=utc_now())
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def _external_service_error(request: Request, exc: ExternalServiceError) -> JSONResponse:
    logger.warning(
        "External service %s failed (%s, status=%s): %s",
        exc.service,
        exc.kind.value,
        exc.status_code,
        exc.message,
    )
    return error_response(
        status.HTTP_503_SERVICE_UNAVAILABLE,
        f"External service unavailable ({exc.service}, {exc.kind.value} error)",
    )


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _duplicate_note_error(request: Request, exc: DuplicateNoteError) -> JSONResponse:
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


async def _not_found_error(request: Request, exc: NotFoundError) -> JSONResponse:
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    violations = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        violations.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return error_response(status.HTTP_400_BAD_REQUEST, ", ".join(violations) or "Invalid request")


async def _unhandled_error(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, GENERIC_ERROR_MESSAGE)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ExternalServiceError, _external_service_error)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(DuplicateNoteError, _duplicate_note_error)
    app.add_exception_handler(NotFoundError, _not_found_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(Exception, _unhandled_error)
