"""Category schemas and validator."""
from typing import Any

from core.validation import (
    ConstraintSchema,
    ErrorDetail,
    ErrorKind,
    ValidationResult,
    boolean,
    enum,
    integer,
    string,
    uuid,
)

from .base import PAGE, URL_PATTERN, EntityValidator, identifier_schema, page_size, sort_order

CATEGORY_STATUSES = ("active", "inactive")

CATEGORY_CREATE = ConstraintSchema(
    "category.create",
    fields={
        "name": string(2, 100, required=True),
        "description": string(max_length=1000, empty_allowed=True),
        "color": string(pattern=r"^#[0-9A-Fa-f]{6}$",
            messages={ErrorKind.PATTERN_MISMATCH: "color must be a hex value such as #1A2B3C"}),
        "icon": string(max_length=50),
        "image_url": string(pattern=URL_PATTERN,
            messages={ErrorKind.PATTERN_MISMATCH: "image_url must be a valid URL"}),
        "parent_id": uuid(nullable=True),
        "sort_order": integer(minimum=0),
        "status": enum(*CATEGORY_STATUSES),
    },
)

CATEGORY_UPDATE = CATEGORY_CREATE.partial("category.update").extend(
    "category.update",
    image_url=CATEGORY_CREATE.fields["image_url"].evolve(empty_allowed=True),
)

CATEGORY_FILTERS = ConstraintSchema(
    "category.filters",
    fields={
        "page": PAGE.as_optional(),
        "limit": page_size(None),
        "status": enum(*CATEGORY_STATUSES),
        "parent_id": uuid(nullable=True, empty_allowed=True),
        "level": integer(minimum=0),
        "search": string(1, 100),
        "orderBy": enum("name", "created_at", "updated_at", "sort_order", "level"),
        "orderDirection": sort_order(None, lowercase=True),
        "includeTree": boolean(),
    },
    coerce=True,
)

CATEGORY_ID = identifier_schema("category.id", label="category ID")


class CategoryValidator(EntityValidator):
    @property
    def entity(self) -> str: return "category"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(CATEGORY_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        """Partial update; at least one known field must be supplied."""
        result = self._validate(CATEGORY_UPDATE, payload)
        if result.ok and not result.value:
            return ValidationResult.failure([ErrorDetail(field="$", kind=ErrorKind.MISSING_REQUIRED_FIELD,
                message="at least one field must be provided")], CATEGORY_UPDATE.name)
        return result

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(CATEGORY_FILTERS, query)

    def validate_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(CATEGORY_ID, value)
