"""Rating schema and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, integer, string

from .base import EntityValidator

RATING = ConstraintSchema(
    "rating.write",
    fields={
        "rating": integer(1, 5, required=True, messages={
            ErrorKind.TYPE_MISMATCH: "rating must be a whole number",
            ErrorKind.RANGE_VIOLATION: "rating must be between 1 and 5 stars",
        }),
        "content": string(max_length=1000, trim=True, empty_allowed=True),
    },
)


class RatingValidator(EntityValidator):
    @property
    def entity(self) -> str: return "rating"

    def validate_rating(self, payload: Any) -> ValidationResult:
        return self._validate(RATING, payload)
