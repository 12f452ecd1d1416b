"""Global exception handlers for FastAPI."""

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from starlette.responses import JSONResponse

from api.base import error_response, request_id_of, ErrorCodes
from core.exceptions import (
    ExportError,
    InvalidTransitionError,
    InvoiceNotFoundError,
    ShareError,
    ValidationFailedError,
)

logger = logging.getLogger(__name__)


def _json(
    request: Request,
    status_code: int,
    code: str,
    message: str,
    details: list[str] | None = None,
) -> JSONResponse:
    response = error_response(code, message, details, request_id_of(request))
    return JSONResponse(status_code=status_code, content=response.model_dump(mode="json"))


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the app."""

    @app.exception_handler(InvoiceNotFoundError)
    async def not_found_handler(request: Request, exc: InvoiceNotFoundError):
        return _json(request, 404, ErrorCodes.NOT_FOUND, str(exc))

    @app.exception_handler(ValidationFailedError)
    async def validation_failed_handler(request: Request, exc: ValidationFailedError):
        return _json(request, 400, ErrorCodes.VALIDATION_ERROR, "Invoice cannot be saved", exc.violations)

    @app.exception_handler(InvalidTransitionError)
    async def transition_handler(request: Request, exc: InvalidTransitionError):
        return _json(request, 409, ErrorCodes.INVALID_STATUS_TRANSITION, str(exc))

    @app.exception_handler(ExportError)
    async def export_handler(request: Request, exc: ExportError):
        return _json(request, 502, ErrorCodes.EXPORT_FAILED, str(exc))

    @app.exception_handler(ShareError)
    async def share_handler(request: Request, exc: ShareError):
        return _json(request, 502, ErrorCodes.SHARE_FAILED, str(exc))

    @app.exception_handler(ValueError)
    async def value_error_handler(request: Request, exc: ValueError):
        message = str(exc)
        if "not found" in message.lower():
            return _json(request, 404, ErrorCodes.NOT_FOUND, message)
        return _json(request, 400, ErrorCodes.INVALID_REQUEST, message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return _json(request, 422, ErrorCodes.VALIDATION_ERROR, str(exc.errors()))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled exception")
        return _json(request, 500, ErrorCodes.INTERNAL_ERROR, "An internal error occurred")
