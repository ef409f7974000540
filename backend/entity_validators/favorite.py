"""Favorite schemas and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, enum, string, uuid

from .base import PAGE, EntityValidator, identifier_schema, page_size, sort_order
from .resource import RESOURCE_TYPES

FAVORITE_ADD = ConstraintSchema(
    "favorite.add",
    fields={
        "resource_id": uuid(required=True, messages={
            ErrorKind.MISSING_REQUIRED_FIELD: "resource_id is required",
            ErrorKind.TYPE_MISMATCH: "resource_id must be a valid UUID",
        }),
    },
)

FAVORITE_FILTERS = ConstraintSchema(
    "favorite.filters",
    fields={
        "page": PAGE,
        "limit": page_size(10),
        "sortBy": enum("created_at", "title", "views_count", "downloads_count", "rating_average",
            default="created_at"),
        "sortOrder": sort_order("DESC"),
        "category_id": uuid(nullable=True, empty_allowed=True),
        "type": enum(*RESOURCE_TYPES, nullable=True, empty_allowed=True),
        "format": string(max_length=50, nullable=True, empty_allowed=True),
    },
    coerce=True,
)

USER_ID = identifier_schema("favorite.user_id", field="user_id", label="User ID")
RESOURCE_ID = identifier_schema("favorite.resource_id", field="resource_id", label="Resource ID")


class FavoriteValidator(EntityValidator):
    @property
    def entity(self) -> str: return "favorite"

    def validate_add(self, payload: Any) -> ValidationResult:
        return self._validate(FAVORITE_ADD, payload)

    def validate_filters(self, query: Any) -> ValidationResult:
        return self._validate(FAVORITE_FILTERS, query)

    def validate_user_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(USER_ID, value)

    def validate_resource_id(self, value: Any) -> ValidationResult:
        return self._validate_identifier(RESOURCE_ID, value)
