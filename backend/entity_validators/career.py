"""Career schemas and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, enum, integer, mapping, string, uuid

from .base import CODE_MESSAGES, CODE_PATTERN, PAGE, EntityValidator, identifier_schema, page_size, sort_order

DEGREE_TYPES = ("licenciatura", "ingenieria", "maestria", "doctorado", "tecnico")
CAREER_STATUSES = ("active", "inactive", "suspended")

CAREER_CREATE = ConstraintSchema(
    "career.create",
    fields={
        "name": string(3, 200, required=True),
        "code": string(2, 15, pattern=CODE_PATTERN, required=True, messages=CODE_MESSAGES),
        "description": string(max_length=2000, empty_allowed=True),
        "degree_type": enum(*DEGREE_TYPES, required=True),
        "duration_years": integer(1, 12, required=True,
            messages={ErrorKind.RANGE_VIOLATION: "duration_years must be between 1 and 12"}),
        "total_credits": integer(1, 500),
        "faculty_id": uuid(required=True),
        "coordinator_id": uuid(),
        "status": enum(*CAREER_STATUSES, default="active"),
        "accreditation_info": mapping(),
    },
)

CAREER_UPDATE = CAREER_CREATE.partial("career.update", nullable=("coordinator_id",))

CAREER_FILTERS = ConstraintSchema(
    "career.filters",
    fields={
        "page": PAGE,
        "limit": page_size(10),
        "search": string(max_length=200),
        "faculty_id": uuid(),
        "degree_type": enum(*DEGREE_TYPES),
        "status": enum(*CAREER_STATUSES),
        "sortBy": enum("name", "code", "degree_type", "duration_years", "created_at", default="name"),
        "sortOrder": sort_order("ASC"),
    },
    coerce=True,
)

CAREER_ID = identifier_schema("career.id", label="career ID")
FACULTY_ID = identifier_schema("career.faculty_id", label="faculty ID")


class CareerValidator(EntityValidator):
    @property
    def entity(self) -> str: return "career"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(CAREER_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        return self._validate(CAREER_UPDATE, payload)

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(CAREER_FILTERS, query)

    def validate_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(CAREER_ID, value)

    def validate_faculty_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(FACULTY_ID, value)
