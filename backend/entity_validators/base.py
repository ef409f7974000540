"""Abstract base class for entity validators."""
from abc import ABC, abstractmethod
from typing import Any

from core.validation import (
    ConstraintSchema,
    ErrorKind,
    FieldRule,
    ValidateOptions,
    ValidationResult,
    enum,
    integer,
    uuid,
    validate,
)

# ============================================================================
# Shared field rules
# ============================================================================

CODE_PATTERN = r"^[A-Z0-9_-]+$"
EMAIL_PATTERN = r"^[^\s@]+@[^\s@]+\.[^\s@]+$"
URL_PATTERN = r"^https?://[^\s/$.?#][^\s]*$"
PASSWORD_PATTERN = r"^(?=.*[a-z])(?=.*[A-Z])(?=.*\d)"

CODE_MESSAGES = {
    ErrorKind.PATTERN_MISMATCH: "code may only contain uppercase letters, digits, hyphens and underscores",
}

PAGE = integer(minimum=1, default=1, messages={ErrorKind.RANGE_VIOLATION: "page must be greater than 0"})


def page_size(default: int | None = 10, maximum: int = 100) -> FieldRule:
    """Pagination limit; default None leaves it optional."""
    kwargs = {} if default is None else {"default": default}
    return integer(minimum=1, maximum=maximum,
        messages={ErrorKind.RANGE_VIOLATION: f"limit must be between 1 and {maximum}"}, **kwargs)


def sort_order(default: str | None = "ASC", *, lowercase: bool = False) -> FieldRule:
    values = ("ASC", "DESC", "asc", "desc") if lowercase else ("ASC", "DESC")
    kwargs = {} if default is None else {"default": default}
    return enum(*values, messages={ErrorKind.ENUM_VIOLATION: "sort order must be ASC or DESC"}, **kwargs)


def identifier_schema(name: str, field: str = "id", label: str = "ID") -> ConstraintSchema:
    """One-field schema for a path identifier."""
    return ConstraintSchema(name, fields={
        field: uuid(required=True, messages={
            ErrorKind.MISSING_REQUIRED_FIELD: f"{label} is required",
            ErrorKind.TYPE_MISMATCH: f"{label} must be a valid UUID",
        }),
    })


class EntityValidator(ABC):
    """Abstract base for the validators of one entity.

    Schemas are module constants; instances hold no state and can be shared
    across threads.
    """

    @property
    @abstractmethod
    def entity(self) -> str:
        """Entity name used as the registry key (e.g., 'career')."""
        ...

    @property
    def operations(self) -> tuple[str, ...]:
        """Names of the validate_* operations this validator exposes."""
        return tuple(sorted(name for name in dir(type(self)) if name.startswith("validate_")))

    def _validate(self, schema: ConstraintSchema, payload: Any,
                  options: ValidateOptions | None = None) -> ValidationResult:
        return validate(schema, payload, options)

    def _validate_identifier(self, schema: ConstraintSchema, value: Any) -> ValidationResult:
        """Validate a bare identifier; the cleaned value is the canonical UUID string."""
        (field,) = schema.fields
        result = validate(schema, {} if value is None else {field: value})
        return ValidationResult.success(result.value[field], schema.name) if result.ok else result

    def __repr__(self) -> str: return f"{type(self).__name__}(entity={self.entity!r})"
