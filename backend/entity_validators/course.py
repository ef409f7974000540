"""Course schemas and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, enum, integer, string, uuid

from .base import CODE_MESSAGES, CODE_PATTERN, PAGE, EntityValidator, identifier_schema, page_size, sort_order

COURSE_TYPES = ("obligatorio", "electivo", "practica", "seminario")
COURSE_STATUSES = ("active", "inactive", "suspended")

_SEMESTER_MESSAGES = {ErrorKind.RANGE_VIOLATION: "semester must be between 1 and 12"}

COURSE_CREATE = ConstraintSchema(
    "course.create",
    fields={
        "name": string(3, 200, required=True),
        "code": string(3, 20, pattern=CODE_PATTERN, required=True, messages=CODE_MESSAGES),
        "description": string(max_length=1000, empty_allowed=True),
        "semester": integer(1, 12, required=True, messages=_SEMESTER_MESSAGES),
        "credits": integer(1, 20, required=True),
        "course_type": enum(*COURSE_TYPES, required=True),
        "career_id": uuid(required=True),
        "teacher_id": uuid(),
        "academic_period_id": uuid(),
        "status": enum(*COURSE_STATUSES, default="active"),
    },
)

COURSE_UPDATE = COURSE_CREATE.partial("course.update", nullable=("teacher_id", "academic_period_id"))

COURSE_FILTERS = ConstraintSchema(
    "course.filters",
    fields={
        "page": PAGE,
        "limit": page_size(10),
        "search": string(max_length=200),
        "career_id": uuid(),
        "semester": integer(1, 12, messages=_SEMESTER_MESSAGES),
        "course_type": enum(*COURSE_TYPES),
        "status": enum(*COURSE_STATUSES),
        "sortBy": enum("name", "code", "semester", "credits", "created_at", default="name"),
        "sortOrder": sort_order("ASC"),
    },
    coerce=True,
)

COURSE_ID = identifier_schema("course.id", label="course ID")


class CourseValidator(EntityValidator):
    @property
    def entity(self) -> str: return "course"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(COURSE_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        return self._validate(COURSE_UPDATE, payload)

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(COURSE_FILTERS, query)

    def validate_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(COURSE_ID, value)
