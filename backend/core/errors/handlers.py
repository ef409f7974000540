"""FastAPI Exception Handlers

Boundary adapter between the validation engine and an HTTP application.
Converts raised ValidationFailures and AppErrors to JSON responses; the
engine itself never produces transport responses.
"""
from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from core.logging import get_logger

from .types import AppError

log = get_logger("errors.handlers")


class AppErrorException(Exception):
    """Exception wrapper for AppError.

    Use this when you need to raise an AppError in code that
    doesn't use the Result monad (e.g., FastAPI dependencies).
    """

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))


def result_to_response(error: AppError) -> JSONResponse:
    """Convert AppError to FastAPI JSONResponse."""
    status_code = error.code.http_status

    log_method = log.warning if status_code < 500 else log.error
    log_method(
        "error_response",
        error_code=error.code.name,
        error_code_num=error.code.value,
        message=error.message,
        category=error.code.category,
        correlation_id=error.context.correlation_id,
        origin=error.context.origin,
    )

    return JSONResponse(status_code=status_code, content=error.to_dict())


async def app_error_handler(request: Request, exc: AppErrorException) -> JSONResponse:
    """Handle AppErrorException raised in route handlers."""
    error = exc.error.with_context(
        request_id=request.headers.get("X-Request-ID"),
        correlation_id=request.headers.get("X-Correlation-ID"),
    )
    return result_to_response(error)


async def validation_failure_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle ValidationFailure raised by a caller-facing wrapper."""
    from core.validation.errors import ValidationFailure

    if not isinstance(exc, ValidationFailure):
        raise exc

    error = exc.to_app_error().with_context(
        correlation_id=request.headers.get("X-Correlation-ID"),
        request_id=request.headers.get("X-Request-ID"),
        origin="validation",
    )
    return result_to_response(error)


def register_error_handlers(app: FastAPI) -> None:
    """Register validation error handlers on a FastAPI app.

    Usage:
        app = FastAPI(...)
        register_error_handlers(app)
    """
    from core.validation.errors import ValidationFailure

    app.add_exception_handler(AppErrorException, app_error_handler)
    app.add_exception_handler(ValidationFailure, validation_failure_handler)


def raise_error(error: AppError) -> None:
    """Raise AppError as exception."""
    raise AppErrorException(error)


def raise_result(result) -> None:
    """Raise error if Result is Err, otherwise return.

    Usage:
        raise_result(validator.validate_create(payload).to_result())
    """
    if result.is_err():
        error = result.unwrap_err()
        if isinstance(error, AppError):
            raise AppErrorException(error)
        raise error
