"""Report schemas and validator.

Moderators resolve reports through the status update; resolving requires
both resolution notes and the action taken.
"""
from typing import Any

from core.validation import (
    ConstraintSchema,
    CrossFieldRule,
    Relation,
    ValidationResult,
    date,
    enum,
    equals,
    string,
    uuid,
)

from .base import PAGE, EntityValidator, page_size

REPORT_TYPES = (
    "inappropriate_content",
    "copyright_violation",
    "spam",
    "misleading_title",
    "wrong_category",
    "broken_file",
    "other",
)
REPORT_STATUSES = ("pending", "reviewing", "resolved", "dismissed")
ACTIONS_TAKEN = (
    "no_action",
    "warning_issued",
    "content_removed",
    "user_suspended",
    "content_modified",
    "category_changed",
)
PRIORITIES = ("low", "medium", "high", "urgent")

REPORT_CREATE = ConstraintSchema(
    "report.create",
    fields={
        "resource_id": uuid(required=True),
        "type": enum(*REPORT_TYPES, required=True),
        "reason": string(10, 1000, trim=True, required=True),
        "additional_info": string(max_length=2000, trim=True, empty_allowed=True),
    },
)

REPORT_STATUS_UPDATE = ConstraintSchema(
    "report.status_update",
    fields={
        "status": enum(*REPORT_STATUSES, required=True),
        "resolution_notes": string(max_length=1000, trim=True),
        "action_taken": enum(*ACTIONS_TAKEN),
    },
    cross_rules=[
        CrossFieldRule("resolution_notes", "status", applies_when=equals("resolved"),
            requirement_message="resolution_notes is required when resolving a report"),
        CrossFieldRule("action_taken", "status", applies_when=equals("resolved"),
            requirement_message="action_taken is required when resolving a report"),
    ],
)

REPORT_QUERY = ConstraintSchema(
    "report.query",
    fields={
        "page": PAGE,
        "limit": page_size(20),
        "status": enum(*REPORT_STATUSES),
        "type": enum(*REPORT_TYPES),
        "priority": enum(*PRIORITIES),
        "search": string(max_length=100, trim=True),
        "start_date": date(),
        "end_date": date(),
    },
    cross_rules=[
        CrossFieldRule("end_date", "start_date", relation=Relation.GREATER_OR_EQUAL,
            message="end_date must not be earlier than start_date"),
    ],
    coerce=True,
)


class ReportValidator(EntityValidator):
    @property
    def entity(self) -> str: return "report"

    def validate_create(self, payload: Any) -> ValidationResult:
        return self._validate(REPORT_CREATE, payload)

    def validate_status_update(self, payload: Any) -> ValidationResult:
        return self._validate(REPORT_STATUS_UPDATE, payload)

    def validate_query(self, query: Any) -> ValidationResult:
        return self._validate(REPORT_QUERY, query)
