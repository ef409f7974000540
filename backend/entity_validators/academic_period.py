"""Academic period schemas and validator."""
from typing import Any

from core.validation import (
    ConstraintSchema,
    CrossFieldRule,
    ErrorKind,
    Relation,
    ValidationResult,
    boolean,
    date,
    enum,
    integer,
    is_present,
    mapping,
    string,
)

from .base import CODE_MESSAGES, CODE_PATTERN, PAGE, EntityValidator, identifier_schema, page_size, sort_order

PERIOD_TYPES = ("semestre", "trimestre", "cuatrimestre", "anual")
PERIOD_STATUSES = ("active", "inactive", "upcoming", "completed")
SORT_FIELDS = ("name", "code", "type", "year", "start_date", "end_date", "created_at")

_YEAR_MESSAGES = {ErrorKind.RANGE_VIOLATION: "year must be between 2020 and 2050"}

ACADEMIC_PERIOD_CREATE = ConstraintSchema(
    "academic_period.create",
    fields={
        "name": string(3, 100, required=True),
        "code": string(2, 20, pattern=CODE_PATTERN, required=True, messages=CODE_MESSAGES),
        "type": enum(*PERIOD_TYPES, required=True),
        "year": integer(2020, 2050, required=True, messages=_YEAR_MESSAGES),
        "start_date": date(required=True),
        "end_date": date(required=True),
        "enrollment_start_date": date(),
        "enrollment_end_date": date(),
        "description": string(max_length=500, empty_allowed=True),
        "status": enum(*PERIOD_STATUSES, default="active"),
        "is_current": boolean(default=False),
        "settings": mapping(),
    },
    cross_rules=[
        CrossFieldRule("end_date", "start_date", relation=Relation.GREATER_THAN,
            message="end_date must be later than start_date"),
        CrossFieldRule("enrollment_end_date", "enrollment_start_date", relation=Relation.GREATER_THAN,
            applies_when=is_present(),
            message="enrollment_end_date must be later than enrollment_start_date",
            requirement_message="enrollment_end_date is required when enrollment_start_date is provided"),
    ],
)

ACADEMIC_PERIOD_UPDATE = ACADEMIC_PERIOD_CREATE.partial(
    "academic_period.update", nullable=("enrollment_start_date", "enrollment_end_date"))

ACADEMIC_PERIOD_FILTERS = ConstraintSchema(
    "academic_period.filters",
    fields={
        "page": PAGE,
        "limit": page_size(10),
        "search": string(max_length=200),
        "type": enum(*PERIOD_TYPES),
        "year": integer(2020, 2050, messages=_YEAR_MESSAGES),
        "status": enum(*PERIOD_STATUSES),
        "is_current": boolean(),
        "sortBy": enum(*SORT_FIELDS, default="start_date"),
        "sortOrder": sort_order("DESC"),
    },
    coerce=True,
)

ACADEMIC_PERIOD_ID = identifier_schema("academic_period.id", label="academic period ID")


class AcademicPeriodValidator(EntityValidator):
    @property
    def entity(self) -> str: return "academic_period"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(ACADEMIC_PERIOD_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        return self._validate(ACADEMIC_PERIOD_UPDATE, payload)

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(ACADEMIC_PERIOD_FILTERS, query)

    def validate_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(ACADEMIC_PERIOD_ID, value)
