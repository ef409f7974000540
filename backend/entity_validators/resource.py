"""Resource schemas and validator."""
from typing import Any

from core.validation import (
    ConstraintSchema,
    ErrorKind,
    ValidationResult,
    array,
    boolean,
    enum,
    integer,
    mapping,
    string,
    uuid,
)

from .base import PAGE, EntityValidator, page_size, sort_order

RESOURCE_TYPES = ("document", "video", "image", "audio", "link", "other")
RESOURCE_STATUSES = ("draft", "published", "archived", "under_review", "rejected")
VISIBILITIES = ("public", "private", "restricted")
MAX_FILE_SIZE = 100_000_000

RESOURCE_CREATE = ConstraintSchema(
    "resource.create",
    fields={
        "title": string(3, 200, required=True),
        "description": string(10, 2000, required=True),
        "content": string(max_length=50_000, empty_allowed=True),
        "type": enum(*RESOURCE_TYPES, default="document"),
        "category_id": uuid(nullable=True),
        "format": string(max_length=50, empty_allowed=True),
        "file_url": string(empty_allowed=True),
        "file_path": string(max_length=500, empty_allowed=True),
        "file_size": integer(0, MAX_FILE_SIZE, nullable=True,
            messages={ErrorKind.RANGE_VIOLATION: "file_size must be between 0 and 100MB"}),
        "thumbnail_url": string(nullable=True, empty_allowed=True),
        "status": enum(*RESOURCE_STATUSES, default="draft"),
        "visibility": enum(*VISIBILITIES, default="public"),
        "tags": array(string(max_length=50), max_items=10, default=[],
            messages={ErrorKind.RANGE_VIOLATION: "a resource can have at most 10 tags"}),
        "metadata": mapping(default={}),
        "featured": boolean(default=False),
        "academic_year": integer(2020, 2050, nullable=True),
        "semester": integer(1, 12, nullable=True),
        "topic": string(3, 200, nullable=True, empty_allowed=True),
        "course_id": uuid(nullable=True),
        "faculty_id": uuid(nullable=True),
        "career_id": uuid(nullable=True),
        "language": string(2, 5, default="es"),
    },
)

RESOURCE_UPDATE = RESOURCE_CREATE.partial("resource.update")

RESOURCE_FILTERS = ConstraintSchema(
    "resource.filters",
    fields={
        "page": PAGE,
        "limit": page_size(20),
        "category_id": uuid(empty_allowed=True),
        "type": enum(*RESOURCE_TYPES, empty_allowed=True),
        "user_id": uuid(empty_allowed=True),
        "search": string(max_length=200, empty_allowed=True),
        "sort": enum("created_at", "updated_at", "title", "views_count", "likes_count", default="created_at"),
        "order": sort_order("DESC", lowercase=True),
        "status": enum(*RESOURCE_STATUSES, default="published"),
    },
    coerce=True,
)


class ResourceValidator(EntityValidator):
    @property
    def entity(self) -> str: return "resource"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(RESOURCE_CREATE, payload)

    def validate_update(self, payload: Any) -> ValidationResult:
        return self._validate(RESOURCE_UPDATE, payload)

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(RESOURCE_FILTERS, query)
