"""Validation Error System

Structured errors with dotted field paths, a closed error taxonomy and
optional redaction of sensitive values. Supports both fail-fast and
collect-all accumulation modes.

Error Format:
{
    "error": {
        "type": "validation_error",
        "message": "Validation failed",
        "mode": "collect_all",
        "errors": [
            {
                "field": "end_date",
                "kind": "CrossFieldViolation",
                "message": "end_date must be later than start_date"
            }
        ]
    }
}
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any

from core.errors import AppError, ErrorCode

REDACTED = "[REDACTED]"


class ValidationMode(str, Enum):
    """Validation accumulation strategy."""
    FAIL_FAST = "fail_fast"
    COLLECT_ALL = "collect_all"


class ErrorKind(str, Enum):
    """Closed taxonomy of per-payload violations."""
    MISSING_REQUIRED_FIELD = "MissingRequiredField"
    TYPE_MISMATCH = "TypeMismatch"
    RANGE_VIOLATION = "RangeViolation"
    PATTERN_MISMATCH = "PatternMismatch"
    ENUM_VIOLATION = "EnumViolation"
    CROSS_FIELD_VIOLATION = "CrossFieldViolation"
    UNKNOWN_FIELD = "UnknownField"

    @property
    def error_code(self) -> ErrorCode:
        return _KIND_CODES[self]


_KIND_CODES = {
    ErrorKind.MISSING_REQUIRED_FIELD: ErrorCode.E2001_REQUIRED_FIELD_MISSING,
    ErrorKind.TYPE_MISMATCH: ErrorCode.E2004_INVALID_TYPE,
    ErrorKind.RANGE_VIOLATION: ErrorCode.E2003_OUT_OF_RANGE,
    ErrorKind.PATTERN_MISMATCH: ErrorCode.E2002_INVALID_FORMAT,
    ErrorKind.ENUM_VIOLATION: ErrorCode.E2005_CONSTRAINT_VIOLATION,
    ErrorKind.CROSS_FIELD_VIOLATION: ErrorCode.E2006_CROSS_FIELD_VIOLATION,
    ErrorKind.UNKNOWN_FIELD: ErrorCode.E2007_UNKNOWN_FIELD,
}


class SchemaConstructionError(ValueError):
    """Raised while building a malformed schema, never during validation."""

    def __init__(self, message: str, *, schema: str | None = None, field: str | None = None):
        self.schema, self.field = schema, field
        location = ".".join(p for p in (schema, field) if p)
        super().__init__(f"{location}: {message}" if location else message)

    def to_app_error(self) -> AppError:
        return AppError(code=ErrorCode.E2030_SCHEMA_INVALID, message=str(self),
            metadata={"schema": self.schema, "field": self.field})


@dataclass(frozen=True, slots=True)
class ErrorDetail:
    """A single violation.

    - field: dotted path to the offending field (e.g., "settings.theme", "tags.2")
    - kind: ErrorKind of the violation
    - message: message string carried verbatim from the rule
    - actual_value: the rejected value, redacted for sensitive fields
    """
    field: str
    kind: ErrorKind
    message: str
    actual_value: Any = None

    def nested_under(self, prefix: str) -> ErrorDetail:
        """Re-root this detail beneath a parent path."""
        return replace(self, field=f"{prefix}.{self.field}" if self.field != "$" else prefix)

    def redacted(self) -> ErrorDetail:
        return replace(self, actual_value=REDACTED)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        result = {"field": self.field, "kind": self.kind.value, "message": self.message}
        if self.actual_value is not None:
            value = self.actual_value
            result["value"] = value.isoformat() if isinstance(value, (datetime, date)) else value
        return result


@dataclass(eq=False)
class ValidationFailure(Exception):
    """Raised by caller-facing wrappers when a payload does not validate.

    The engine itself returns failures as data; this exception exists for
    callers that prefer raise-on-failure.
    """
    message: str
    details: list[ErrorDetail]
    mode: ValidationMode = ValidationMode.COLLECT_ALL
    schema: str | None = None

    def __post_init__(self):
        super().__init__(self.message)

    def __str__(self) -> str:
        if not self.details: return self.message
        if len(self.details) == 1: return f"{(d := self.details[0]).field}: {d.message}"
        return f"{self.message} ({len(self.details)} errors)"

    @property
    def field_errors(self) -> dict[str, list[ErrorDetail]]:
        """Group errors by field path."""
        result: dict[str, list[ErrorDetail]] = {}
        for detail in self.details: result.setdefault(detail.field, []).append(detail)
        return result

    @property
    def first_error(self) -> ErrorDetail | None: return self.details[0] if self.details else None

    def get_errors_for_field(self, field_path: str) -> list[ErrorDetail]:
        return [d for d in self.details if d.field == field_path]

    def to_app_error(self) -> AppError:
        """Convert to AppError for the error handling system."""
        if len(self.details) == 1:
            d = self.details[0]
            return AppError(code=d.kind.error_code, message=f"{d.field}: {d.message}",
                metadata={"schema": self.schema, "field": d.field, "kind": d.kind.value, "errors": [d.to_dict()]})

        return AppError(code=ErrorCode.E2000_VALIDATION_GENERIC, message=f"{self.message}: {len(self.details)} errors",
            metadata={"schema": self.schema, "validation_mode": self.mode.value, "error_count": len(self.details),
                "errors": [d.to_dict() for d in self.details]})

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary for API responses."""
        return {"error": {"type": "validation_error", "message": self.message, "mode": self.mode.value,
            "error_count": len(self.details), "errors": [d.to_dict() for d in self.details]}}


class ErrorAccumulator(ABC):
    """Abstract base for error accumulation strategies."""

    @abstractmethod
    def add_error(self, detail: ErrorDetail) -> bool:
        """Add error detail. Returns True if should continue, False if should stop."""

    @abstractmethod
    def get_errors(self) -> list[ErrorDetail]:
        """Get accumulated errors."""

    @abstractmethod
    def has_errors(self) -> bool:
        """Check if any errors accumulated."""

    @property
    @abstractmethod
    def mode(self) -> ValidationMode:
        """Get the accumulation mode."""

    @property
    def should_continue(self) -> bool:
        """Whether more errors may still be accepted."""
        return True

    def extend(self, details: list[ErrorDetail]) -> bool:
        """Add several details in order, stopping when the accumulator is full."""
        for detail in details:
            if not self.add_error(detail): return False
        return self.should_continue

    def raise_if_errors(self, message: str = "Validation failed", schema: str | None = None) -> None:
        if self.has_errors():
            raise ValidationFailure(message=message, details=self.get_errors(), mode=self.mode, schema=schema)


@dataclass
class FailFastAccumulator(ErrorAccumulator):
    """Fail-fast accumulator: stops on first error."""
    _error: ErrorDetail | None = None

    @property
    def mode(self) -> ValidationMode: return ValidationMode.FAIL_FAST

    @property
    def should_continue(self) -> bool: return self._error is None

    def add_error(self, detail: ErrorDetail) -> bool:
        if self._error is None: self._error = detail
        return False

    def get_errors(self) -> list[ErrorDetail]: return [self._error] if self._error else []

    def has_errors(self) -> bool: return self._error is not None


@dataclass
class CollectAllAccumulator(ErrorAccumulator):
    """Collect-all accumulator: gathers all errors up to max_errors."""
    _errors: list[ErrorDetail] = field(default_factory=list)
    max_errors: int = 50

    @property
    def mode(self) -> ValidationMode: return ValidationMode.COLLECT_ALL

    @property
    def should_continue(self) -> bool: return len(self._errors) < self.max_errors

    def add_error(self, detail: ErrorDetail) -> bool:
        if len(self._errors) < self.max_errors: self._errors.append(detail)
        return len(self._errors) < self.max_errors

    def get_errors(self) -> list[ErrorDetail]: return self._errors.copy()

    def has_errors(self) -> bool: return len(self._errors) > 0


def create_accumulator(mode: ValidationMode, max_errors: int = 50) -> ErrorAccumulator:
    """Factory for creating accumulators based on mode."""
    return FailFastAccumulator() if mode == ValidationMode.FAIL_FAST else CollectAllAccumulator(max_errors=max_errors)
