"""Monadic Error Handling System

Type-safe error handling inspired by Haskell's Either monad and Rust's
Result type, shared by the validation engine and its HTTP adapter.

Key components:
- Result[T, E]: Monadic container for success/failure
- AppError: Base error type with full context
- ErrorCode: Hierarchical error code taxonomy

Usage:
    from core.errors import Ok, Err, AppError, ErrorCode

    match validator.validate_create(payload).to_result():
        case Ok(value):
            repository.create(value)
        case Err(failure):
            log.info("rejected", errors=failure.to_dict())
"""
from .types import (
    Result,
    Ok,
    Err,
    AppError,
    ErrorCode,
    ErrorContext,
)

from .handlers import (
    AppErrorException,
    register_error_handlers,
    result_to_response,
    raise_error,
    raise_result,
)

__all__ = [
    # Core types
    "Result",
    "Ok",
    "Err",
    "AppError",
    "ErrorCode",
    "ErrorContext",
    # Handlers
    "AppErrorException",
    "register_error_handlers",
    "result_to_response",
    "raise_error",
    "raise_result",
]
