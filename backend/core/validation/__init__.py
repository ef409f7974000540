"""Declarative Validation Engine

Constraint schemas are immutable values built at import time. Validation
receives a plain mapping and returns either a cleaned value or an ordered
list of structured errors; raising is opt-in.

Key Features:
- Field rules with construction-time consistency checks
- Cross-field ordering relations and conditional requirements
- Strip or Reject policy for unknown keys
- Explicit opt-in coercion for query-string style input
- Structured error accumulation (fail-fast or collect-all)
- Transparent validator decorators for layered checks

Usage:
    from core.validation import ConstraintSchema, CrossFieldRule, Relation, date, string, validate

    PERIOD = ConstraintSchema("period", fields={
        "name": string(3, 100, required=True),
        "start_date": date(required=True),
        "end_date": date(required=True),
    }, cross_rules=[CrossFieldRule("end_date", "start_date", relation=Relation.GREATER_THAN)])

    result = validate(PERIOD, request_json)
    if not result.ok:
        return [e.to_dict() for e in result.errors]
"""

# Field rules
from .rules import (
    Kind,
    MISSING,
    Bounds,
    FieldRule,
    FieldOutcome,
    string,
    integer,
    number,
    boolean,
    date,
    uuid,
    enum,
    mapping,
    array,
    allowed,
)

# Schemas
from .schema import (
    ConstraintSchema,
    CrossFieldRule,
    Relation,
    UnknownFieldPolicy,
    is_present,
    is_set,
    equals,
)

# Validation
from .cross_field import evaluate
from .validator import (
    ValidateOptions,
    ValidationResult,
    SchemaValidator,
    validate,
)
from .decorators import Check, ValidatorDecorator

# Errors
from .errors import (
    ErrorKind,
    ErrorDetail,
    ValidationFailure,
    ValidationMode,
    SchemaConstructionError,
    ErrorAccumulator,
    FailFastAccumulator,
    CollectAllAccumulator,
    create_accumulator,
)

# Coercion
from .coercion import (
    CoercionRule,
    StringToInt,
    StringToFloat,
    StringToBool,
    ISO8601ToDateTime,
    StringToUUID,
    ExplicitCoercion,
    DEFAULT_COERCER,
    coerce,
)

__all__ = [
    # Rules
    "Kind",
    "MISSING",
    "Bounds",
    "FieldRule",
    "FieldOutcome",
    "string",
    "integer",
    "number",
    "boolean",
    "date",
    "uuid",
    "enum",
    "mapping",
    "array",
    "allowed",
    # Schemas
    "ConstraintSchema",
    "CrossFieldRule",
    "Relation",
    "UnknownFieldPolicy",
    "is_present",
    "is_set",
    "equals",
    # Validation
    "evaluate",
    "ValidateOptions",
    "ValidationResult",
    "SchemaValidator",
    "validate",
    "Check",
    "ValidatorDecorator",
    # Errors
    "ErrorKind",
    "ErrorDetail",
    "ValidationFailure",
    "ValidationMode",
    "SchemaConstructionError",
    "ErrorAccumulator",
    "FailFastAccumulator",
    "CollectAllAccumulator",
    "create_accumulator",
    # Coercion
    "CoercionRule",
    "StringToInt",
    "StringToFloat",
    "StringToBool",
    "ISO8601ToDateTime",
    "StringToUUID",
    "ExplicitCoercion",
    "DEFAULT_COERCER",
    "coerce",
]
