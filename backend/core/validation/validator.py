"""Schema Validator

validate(schema, payload, options) is the single entry point of the engine.
It is pure: the payload and schema are never mutated, and the only side
effect is a debug log line when a payload is rejected.

Evaluation order:
1. declared fields, in declaration order (absent -> required / default)
2. unknown keys, in payload order (Strip drops them, Reject reports them)
3. cross-field rules over the defaulted values, skipping failed operands

Usage:
    result = validate(CAREER_CREATE, payload)
    if result.ok:
        repository.create(result.value)
    else:
        return [e.to_dict() for e in result.errors]
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from core.config import settings
from core.errors import AppError, Err, Ok, Result
from core.logging import validation_logger

from .coercion import DEFAULT_COERCER, ExplicitCoercion
from .cross_field import evaluate
from .errors import ErrorDetail, ErrorKind, ValidationFailure, ValidationMode, create_accumulator
from .rules import MISSING
from .schema import ConstraintSchema, UnknownFieldPolicy

log = validation_logger()

ROOT_PATH = "$"


@dataclass(frozen=True, slots=True)
class ValidateOptions:
    """Per-call overrides. None means "use the schema or settings default"."""
    abort_early: bool | None = None
    strip_unknown: bool | None = None
    coerce: bool | None = None
    max_errors: int | None = None

    @property
    def mode(self) -> ValidationMode:
        abort = settings.VALIDATION_ABORT_EARLY if self.abort_early is None else self.abort_early
        return ValidationMode.FAIL_FAST if abort else ValidationMode.COLLECT_ALL

    def policy_for(self, schema: ConstraintSchema) -> UnknownFieldPolicy:
        if self.strip_unknown is None: return schema.unknown_policy
        return UnknownFieldPolicy.STRIP if self.strip_unknown else UnknownFieldPolicy.REJECT

    def coerce_for(self, schema: ConstraintSchema) -> bool:
        return schema.coerce if self.coerce is None else self.coerce


DEFAULT_OPTIONS = ValidateOptions()


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """Outcome of one validation: a cleaned value or an ordered error report."""
    value: Any
    errors: tuple[ErrorDetail, ...] = ()
    schema: str | None = None

    @classmethod
    def success(cls, value: Any, schema: str | None = None) -> ValidationResult:
        return cls(value=value, schema=schema)

    @classmethod
    def failure(cls, errors: list[ErrorDetail] | tuple[ErrorDetail, ...], schema: str | None = None) -> ValidationResult:
        return cls(value=None, errors=tuple(errors), schema=schema)

    @property
    def ok(self) -> bool: return not self.errors

    @property
    def field_errors(self) -> dict[str, list[ErrorDetail]]:
        """Group errors by field path."""
        grouped: dict[str, list[ErrorDetail]] = {}
        for detail in self.errors: grouped.setdefault(detail.field, []).append(detail)
        return grouped

    def messages(self, separator: str = ", ") -> str:
        """Lossy single-string projection of the error list."""
        return separator.join(detail.message for detail in self.errors)

    def to_failure(self, message: str = "Validation failed") -> ValidationFailure:
        return ValidationFailure(message=message, details=list(self.errors), schema=self.schema)

    def unwrap(self) -> Any:
        """Cleaned value, or raise ValidationFailure."""
        if self.errors: raise self.to_failure()
        return self.value

    def raise_for_errors(self) -> ValidationResult:
        if self.errors: raise self.to_failure()
        return self

    def to_result(self) -> Result[Any, AppError]:
        """Bridge into the Ok/Err result monad."""
        return Ok(self.value) if self.ok else Err(self.to_failure().to_app_error())

    def to_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "value": self.value, "errors": [e.to_dict() for e in self.errors]}


def _root_mismatch(payload: Any) -> ErrorDetail:
    return ErrorDetail(field=ROOT_PATH, kind=ErrorKind.TYPE_MISMATCH,
        message=f"payload must be an object, got {type(payload).__name__}")


def validate(schema: ConstraintSchema, payload: Any, options: ValidateOptions | None = None, *,
             coercer: ExplicitCoercion = DEFAULT_COERCER) -> ValidationResult:
    """Validate a payload mapping against a schema."""
    options = options or DEFAULT_OPTIONS
    if not isinstance(payload, Mapping):
        return _finish(schema, [_root_mismatch(payload)])

    coerce = options.coerce_for(schema)
    accumulator = create_accumulator(options.mode, options.max_errors or settings.VALIDATION_MAX_ERRORS)
    cleaned: dict[str, Any] = {}
    failed: set[str] = set()

    for name, rule in schema.fields.items():
        raw = payload.get(name, MISSING)
        if raw is MISSING:
            if rule.required:
                failed.add(name)
                if not accumulator.add_error(rule.missing(name)): return _finish(schema, accumulator.get_errors())
            elif rule.has_default:
                cleaned[name] = rule.fresh_default()
            continue

        outcome = rule.check(raw, name, coerce=coerce, coercer=coercer)
        if outcome.ok:
            cleaned[name] = outcome.value
            continue
        failed.add(name)
        if not accumulator.extend(list(outcome.errors)): return _finish(schema, accumulator.get_errors())

    if options.policy_for(schema) is UnknownFieldPolicy.REJECT:
        for key in payload:
            if key in schema.fields: continue
            detail = ErrorDetail(field=str(key), kind=ErrorKind.UNKNOWN_FIELD, message=f"{key} is not allowed")
            if not accumulator.add_error(detail): return _finish(schema, accumulator.get_errors())

    accumulator.extend(evaluate(schema.cross_rules, cleaned, failed))
    if accumulator.has_errors():
        return _finish(schema, accumulator.get_errors())
    return ValidationResult.success(cleaned, schema.name)


def _finish(schema: ConstraintSchema, errors: list[ErrorDetail]) -> ValidationResult:
    log.debug("validation_failed", schema=schema.name, error_count=len(errors),
        fields=sorted({e.field for e in errors}))
    return ValidationResult.failure(errors, schema.name)


class SchemaValidator:
    """Stateless validator bound to one schema.

    Usage:
        career_create = SchemaValidator(CAREER_CREATE)
        result = career_create(payload)
    """

    __slots__ = ("schema", "options")

    def __init__(self, schema: ConstraintSchema, options: ValidateOptions | None = None):
        self.schema, self.options = schema, options or DEFAULT_OPTIONS

    def __repr__(self) -> str: return f"SchemaValidator({self.schema.name!r})"

    def validate(self, payload: Any, options: ValidateOptions | None = None) -> ValidationResult:
        return validate(self.schema, payload, options or self.options)

    __call__ = validate

    def validate_or_raise(self, payload: Any, options: ValidateOptions | None = None) -> dict[str, Any]:
        """Cleaned value, or raise ValidationFailure."""
        return self.validate(payload, options).unwrap()

    def to_result(self, payload: Any) -> Result[dict[str, Any], AppError]:
        return self.validate(payload).to_result()
