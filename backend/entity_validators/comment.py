"""Comment schemas and validator."""
from typing import Any

from core.validation import ConstraintSchema, ErrorKind, ValidationResult, enum, string, uuid

from .base import EntityValidator

MODERATION_ACTIONS = ("approve", "hide", "delete", "flag")

COMMENT = ConstraintSchema(
    "comment.write",
    fields={
        "content": string(1, 2000, trim=True, required=True, messages={
            ErrorKind.MISSING_REQUIRED_FIELD: "comment content is required",
            ErrorKind.RANGE_VIOLATION: "comment must be between 1 and 2000 characters",
        }),
        "parent_id": uuid(messages={ErrorKind.TYPE_MISMATCH: "parent_id must be a valid UUID"}),
    },
)

COMMENT_MODERATION = ConstraintSchema(
    "comment.moderation",
    fields={
        "action": enum(*MODERATION_ACTIONS, required=True, messages={
            ErrorKind.MISSING_REQUIRED_FIELD: "moderation action is required",
            ErrorKind.ENUM_VIOLATION: "invalid moderation action",
        }),
        "reason": string(max_length=500, trim=True, empty_allowed=True),
    },
)


class CommentValidator(EntityValidator):
    @property
    def entity(self) -> str: return "comment"

    def validate_comment(self, payload: Any) -> ValidationResult:
        """Create or edit a comment (optionally as a reply)."""
        return self._validate(COMMENT, payload)

    def validate_moderation(self, payload: Any) -> ValidationResult:
        return self._validate(COMMENT_MODERATION, payload)
