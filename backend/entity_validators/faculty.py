"""Faculty schemas and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, enum, mapping, string

from .base import EMAIL_PATTERN, PAGE, URL_PATTERN, EntityValidator, page_size

FACULTY_CREATE = ConstraintSchema(
    "faculty.create",
    fields={
        "name": string(3, 200, required=True),
        "code": string(2, 20, required=True, case="upper"),
        "description": string(max_length=1000),
        "dean": string(max_length=100),
        "website": string(pattern=URL_PATTERN,
            messages={ErrorKind.PATTERN_MISMATCH: "website must be a valid URL"}),
        "email": string(pattern=EMAIL_PATTERN,
            messages={ErrorKind.PATTERN_MISMATCH: "email must be a valid email address"}),
        "phone": string(pattern=r"^\+?[1-9]\d{0,15}$",
            messages={ErrorKind.PATTERN_MISMATCH: "phone must be a valid phone number"}),
        "metadata": mapping(),
    },
)

FACULTY_UPDATE = FACULTY_CREATE.partial("faculty.update").extend(
    "faculty.update", status=enum("active", "inactive"))

FACULTY_QUERY = ConstraintSchema(
    "faculty.query",
    fields={
        "page": PAGE,
        "limit": page_size(20),
        "search": string(max_length=200),
        "status": enum("active", "inactive", "all", default="active"),
    },
    coerce=True,
)


class FacultyValidator(EntityValidator):
    @property
    def entity(self) -> str: return "faculty"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(FACULTY_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        return self._validate(FACULTY_UPDATE, payload)

    def validate_query(self, query: Any) -> ValidationResult:
        return self._validate(FACULTY_QUERY, query)
