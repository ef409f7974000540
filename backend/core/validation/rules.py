"""Field Rules

A FieldRule is the complete constraint set for one field: kind, presence,
default, bounds, pattern, allowed values, nullability and emptiness.
Rules are frozen values checked for internal consistency at construction,
so a malformed rule fails at import time rather than on the first request.

Per-field checks run in a fixed order and stop at the first failure for
that field:

    null -> kind (with optional coercion) -> empty -> bounds -> pattern -> allowed values

Builders (`string`, `integer`, `date`, `enum`, ...) are the declarative
surface used by schema catalogues:

    name = string(min_length=3, max_length=100, required=True)
    status = enum("active", "inactive", default="active")
"""
from __future__ import annotations

import copy
import math
import re
from dataclasses import dataclass, field, replace
from datetime import datetime
from decimal import Decimal
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterable, Mapping, NamedTuple

from .coercion import DEFAULT_COERCER, ExplicitCoercion
from .errors import REDACTED, ErrorDetail, ErrorKind, SchemaConstructionError

if TYPE_CHECKING:
    from .schema import ConstraintSchema


class Kind(str, Enum):
    """Field value kinds."""
    STRING = "string"
    INTEGER = "integer"
    NUMBER = "number"
    BOOLEAN = "boolean"
    DATE = "date"
    UUID = "uuid"
    ENUM = "enum"
    OBJECT = "object"
    ARRAY = "array"


ORDERABLE_KINDS = frozenset({Kind.INTEGER, Kind.NUMBER, Kind.DATE})
_LENGTH_KINDS = frozenset({Kind.STRING, Kind.UUID, Kind.ENUM})
_NUMERIC_KINDS = frozenset({Kind.INTEGER, Kind.NUMBER})


class _Missing:
    """Sentinel for an absent key (distinct from an explicit null)."""
    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None: cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str: return "MISSING"

    def __bool__(self) -> bool: return False

    def __copy__(self) -> _Missing: return self

    def __deepcopy__(self, memo: dict) -> _Missing: return self


MISSING: Any = _Missing()


class FieldOutcome(NamedTuple):
    """Cleaned value plus the violations found for one field."""
    value: Any
    errors: tuple[ErrorDetail, ...] = ()

    @property
    def ok(self) -> bool: return not self.errors


@dataclass(frozen=True, slots=True)
class Bounds:
    """Inclusive lower/upper bounds.

    Interpreted as length for strings, value for numbers and dates, and
    item count for arrays.
    """
    min: Any = None
    max: Any = None

    def __post_init__(self):
        if self.min is not None and self.max is not None and self.min > self.max:
            raise SchemaConstructionError(f"bounds min {self.min!r} exceeds max {self.max!r}")

    def describe(self) -> str:
        if self.min is not None and self.max is not None: return f"between {self.min} and {self.max}"
        return f"at least {self.min}" if self.min is not None else f"at most {self.max}"


@dataclass(frozen=True, slots=True)
class FieldRule:
    """Constraint set for a single field."""
    kind: Kind
    required: bool = False
    default: Any = MISSING
    bounds: Bounds | None = None
    pattern: re.Pattern | str | None = None
    allowed_values: tuple | None = None
    nullable: bool = False
    empty_allowed: bool = False
    items: FieldRule | None = None
    schema: ConstraintSchema | None = None
    trim: bool = False
    case: str | None = None
    sensitive: bool = False
    messages: Mapping[ErrorKind, str] = field(default_factory=dict)
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "kind", Kind(self.kind))
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))
        if isinstance(self.pattern, str):
            object.__setattr__(self, "pattern", re.compile(self.pattern))
        if self.allowed_values is not None:
            object.__setattr__(self, "allowed_values", tuple(self.allowed_values))
        if self.kind is Kind.DATE and self.bounds is not None:
            object.__setattr__(self, "bounds", Bounds(
                min=None if self.bounds.min is None else DEFAULT_COERCER.coerce(self.bounds.min, "date").unwrap(),
                max=None if self.bounds.max is None else DEFAULT_COERCER.coerce(self.bounds.max, "date").unwrap(),
            ))
        self._check_consistency()

    def _check_consistency(self) -> None:
        if self.required and self.default is not MISSING:
            raise SchemaConstructionError("a required field cannot declare a default")
        if self.kind is Kind.ENUM and not self.allowed_values:
            raise SchemaConstructionError("enum fields need allowed_values")
        if self.items is not None and self.kind is not Kind.ARRAY:
            raise SchemaConstructionError("items is only valid on array fields")
        if self.schema is not None and self.kind is not Kind.OBJECT:
            raise SchemaConstructionError("schema is only valid on object fields")
        if self.pattern is not None and self.kind is not Kind.STRING:
            raise SchemaConstructionError("pattern is only valid on string fields")
        if self.bounds is not None and self.kind in (Kind.BOOLEAN, Kind.OBJECT):
            raise SchemaConstructionError(f"bounds are not valid on {self.kind.value} fields")
        if self.case not in (None, "upper", "lower"):
            raise SchemaConstructionError(f"case must be 'upper' or 'lower', got {self.case!r}")
        if self.default is not MISSING and (errors := self.check(self.default, "default").errors):
            raise SchemaConstructionError(f"default {self.default!r} violates its own rule: {errors[0].message}")

    # ------------------------------------------------------------------
    # Derivation
    # ------------------------------------------------------------------

    def evolve(self, **changes: Any) -> FieldRule:
        """Return a copy with changes applied; the original is untouched."""
        return replace(self, **changes)

    def as_optional(self) -> FieldRule:
        """Drop the required flag and any default."""
        return replace(self, required=False, default=MISSING)

    def fresh_default(self) -> Any:
        """Default value, deep-copied so callers never share schema state."""
        return copy.deepcopy(self.default)

    @property
    def has_default(self) -> bool: return self.default is not MISSING

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def message(self, kind: ErrorKind, fallback: str) -> str:
        return self.messages.get(kind, fallback)

    def missing(self, path: str) -> ErrorDetail:
        return ErrorDetail(field=path, kind=ErrorKind.MISSING_REQUIRED_FIELD,
            message=self.message(ErrorKind.MISSING_REQUIRED_FIELD, f"{path} is required"))

    def _fail(self, path: str, kind: ErrorKind, fallback: str, value: Any) -> FieldOutcome:
        detail = ErrorDetail(field=path, kind=kind, message=self.message(kind, fallback), actual_value=value)
        return FieldOutcome(value, (detail.redacted() if self.sensitive else detail,))

    def check(self, value: Any, path: str, *, coerce: bool = False,
              coercer: ExplicitCoercion = DEFAULT_COERCER) -> FieldOutcome:
        """Run every check for a present value, stopping at the first failure."""
        if value is None:
            if self.nullable: return FieldOutcome(None)
            return self._fail(path, ErrorKind.TYPE_MISMATCH, f"{path} must not be null", None)

        if isinstance(value, str) and self.kind in _LENGTH_KINDS:
            value = self._normalize_string(value) if self.kind is Kind.STRING else value
            if value == "":
                if self.empty_allowed: return FieldOutcome(value)
                return self._fail(path, ErrorKind.MISSING_REQUIRED_FIELD, f"{path} must not be empty", value)

        converted = self._convert(value, coerce, coercer)
        if converted is MISSING:
            return self._fail(path, ErrorKind.TYPE_MISMATCH,
                f"{path} must be of type {self.kind.value}, got {type(value).__name__}", value)
        value = converted

        if self.bounds is not None and (failure := self._check_bounds(value, path)) is not None:
            return failure

        if self.pattern is not None and not self.pattern.search(value):
            return self._fail(path, ErrorKind.PATTERN_MISMATCH,
                f"{path} does not match pattern {self.pattern.pattern}", value)

        if self.allowed_values is not None and value not in self.allowed_values:
            return self._fail(path, ErrorKind.ENUM_VIOLATION,
                f"{path} must be one of: {', '.join(str(v) for v in self.allowed_values)}", value)

        if self.kind is Kind.ARRAY and self.items is not None:
            return self._check_items(value, path, coerce, coercer)
        if self.kind is Kind.OBJECT and self.schema is not None:
            return self._check_nested(value, path, coerce)
        return FieldOutcome(value)

    def _normalize_string(self, value: str) -> str:
        value = value.strip() if self.trim else value
        if self.case == "upper": return value.upper()
        return value.lower() if self.case == "lower" else value

    def _convert(self, value: Any, coerce: bool, coercer: ExplicitCoercion) -> Any:
        """Return the value in its canonical Python type, or MISSING on mismatch."""
        match self.kind:
            case Kind.STRING:
                return value if isinstance(value, str) else MISSING
            case Kind.ENUM:
                return value if isinstance(value, (str, int, float)) else MISSING
            case Kind.INTEGER:
                if isinstance(value, bool): return MISSING
                if isinstance(value, int): return value
                if isinstance(value, float) and value.is_integer(): return int(value)
                if coerce and isinstance(value, str) and (result := coercer.coerce(value, "integer")).is_ok():
                    return result.unwrap()
                return MISSING
            case Kind.NUMBER:
                if isinstance(value, bool): return MISSING
                if isinstance(value, int): return value
                if isinstance(value, float): return value if math.isfinite(value) else MISSING
                if isinstance(value, Decimal): return value if value.is_finite() else MISSING
                if coerce and isinstance(value, str) and (result := coercer.coerce(value, "number")).is_ok():
                    return result.unwrap()
                return MISSING
            case Kind.BOOLEAN:
                if isinstance(value, bool): return value
                if coerce and isinstance(value, str) and (result := coercer.coerce(value, "boolean")).is_ok():
                    return result.unwrap()
                return MISSING
            case Kind.DATE | Kind.UUID:
                result = coercer.coerce(value, self.kind.value)
                return result.unwrap() if result.is_ok() else MISSING
            case Kind.OBJECT:
                return dict(value) if isinstance(value, Mapping) else MISSING
            case Kind.ARRAY:
                return list(value) if isinstance(value, (list, tuple)) else MISSING
        return MISSING

    def _check_bounds(self, value: Any, path: str) -> FieldOutcome | None:
        if self.kind in _NUMERIC_KINDS or self.kind is Kind.DATE:
            measured, unit = value, ""
        elif self.kind is Kind.ARRAY:
            measured, unit = len(value), " items"
        elif isinstance(value, str):
            measured, unit = len(value), " characters"
        else:
            return None

        if self.bounds.min is not None and measured < self.bounds.min:
            shown = value if not unit else f"{measured}{unit}"
            return self._fail(path, ErrorKind.RANGE_VIOLATION,
                f"{path} must be {self.bounds.describe()}{unit}, got {shown}", value)
        if self.bounds.max is not None and measured > self.bounds.max:
            shown = value if not unit else f"{measured}{unit}"
            return self._fail(path, ErrorKind.RANGE_VIOLATION,
                f"{path} must be {self.bounds.describe()}{unit}, got {shown}", value)
        return None

    def _check_items(self, values: list, path: str, coerce: bool, coercer: ExplicitCoercion) -> FieldOutcome:
        cleaned, errors = [], []
        for index, item in enumerate(values):
            outcome = self.items.check(item, f"{path}.{index}", coerce=coerce, coercer=coercer)
            cleaned.append(outcome.value)
            errors.extend(outcome.errors)
        return FieldOutcome(cleaned, tuple(errors))

    def _check_nested(self, value: dict, path: str, coerce: bool) -> FieldOutcome:
        from .validator import ValidateOptions, validate

        result = validate(self.schema, value, ValidateOptions(coerce=coerce))
        if result.ok: return FieldOutcome(result.value)
        return FieldOutcome(value, tuple(e.nested_under(path) for e in result.errors))


# ============================================================================
# Builders
# ============================================================================

def _bounds(low: Any, high: Any) -> Bounds | None:
    return None if low is None and high is None else Bounds(min=low, max=high)


def string(min_length: int | None = None, max_length: int | None = None, *,
           pattern: re.Pattern | str | None = None, **kwargs: Any) -> FieldRule:
    """String field with inclusive length bounds."""
    return FieldRule(Kind.STRING, bounds=_bounds(min_length, max_length), pattern=pattern, **kwargs)


def integer(minimum: int | None = None, maximum: int | None = None, **kwargs: Any) -> FieldRule:
    return FieldRule(Kind.INTEGER, bounds=_bounds(minimum, maximum), **kwargs)


def number(minimum: float | None = None, maximum: float | None = None, **kwargs: Any) -> FieldRule:
    return FieldRule(Kind.NUMBER, bounds=_bounds(minimum, maximum), **kwargs)


def boolean(**kwargs: Any) -> FieldRule:
    return FieldRule(Kind.BOOLEAN, **kwargs)


def date(earliest: datetime | str | None = None, latest: datetime | str | None = None, **kwargs: Any) -> FieldRule:
    """ISO-8601 date/datetime field, cleaned to an aware datetime."""
    return FieldRule(Kind.DATE, bounds=_bounds(earliest, latest), **kwargs)


def uuid(**kwargs: Any) -> FieldRule:
    """UUID field, cleaned to its canonical string form."""
    return FieldRule(Kind.UUID, **kwargs)


def enum(*values: Any, **kwargs: Any) -> FieldRule:
    """Field restricted to a closed set of values."""
    return FieldRule(Kind.ENUM, allowed_values=values, **kwargs)


def mapping(schema: ConstraintSchema | None = None, **kwargs: Any) -> FieldRule:
    """Object field, optionally validated against a nested schema."""
    return FieldRule(Kind.OBJECT, schema=schema, **kwargs)


def array(items: FieldRule | None = None, min_items: int | None = None, max_items: int | None = None,
          **kwargs: Any) -> FieldRule:
    return FieldRule(Kind.ARRAY, items=items, bounds=_bounds(min_items, max_items), **kwargs)


def allowed(values: Iterable[Any]) -> tuple:
    """Freeze a value set for reuse across several rules."""
    return tuple(values)
