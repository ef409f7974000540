"""Tests for the report validator."""

import pytest

from core.validation import ErrorKind
from entity_validators.report import ReportValidator


@pytest.fixture
def validator() -> ReportValidator:
    return ReportValidator()


class TestCreate:
    def test_reason_trimmed(self, validator, new_id) -> None:
        result = validator.validate_create({"resource_id": new_id(), "type": "spam",
            "reason": "   enlaces de publicidad repetidos   "})
        assert result.value["reason"] == "enlaces de publicidad repetidos"

    def test_reason_too_short_after_trim(self, validator, new_id) -> None:
        result = validator.validate_create({"resource_id": new_id(), "type": "spam", "reason": "  spam    "})
        assert [(e.field, e.kind) for e in result.errors] == [("reason", ErrorKind.RANGE_VIOLATION)]

    def test_unknown_type(self, validator, new_id) -> None:
        result = validator.validate_create({"resource_id": new_id(), "type": "boring", "reason": "x" * 20})
        assert result.errors[0].kind is ErrorKind.ENUM_VIOLATION


class TestStatusUpdate:
    def test_resolving_requires_notes_and_action(self, validator) -> None:
        result = validator.validate_status_update({"status": "resolved"})
        assert [(e.field, e.kind) for e in result.errors] == [
            ("resolution_notes", ErrorKind.MISSING_REQUIRED_FIELD),
            ("action_taken", ErrorKind.MISSING_REQUIRED_FIELD),
        ]
        assert result.errors[1].message == "action_taken is required when resolving a report"

    def test_resolved_with_details(self, validator) -> None:
        result = validator.validate_status_update({"status": "resolved",
            "resolution_notes": "contenido eliminado", "action_taken": "content_removed"})
        assert result.ok

    def test_other_statuses_need_nothing(self, validator) -> None:
        assert validator.validate_status_update({"status": "dismissed"}).ok

    def test_invalid_status_skips_requirements(self, validator) -> None:
        result = validator.validate_status_update({"status": "closed"})
        assert [(e.field, e.kind) for e in result.errors] == [("status", ErrorKind.ENUM_VIOLATION)]


class TestQuery:
    def test_defaults(self, validator) -> None:
        assert validator.validate_query({}).value == {"page": 1, "limit": 20}

    def test_same_day_range_allowed(self, validator) -> None:
        assert validator.validate_query({"start_date": "2025-03-01", "end_date": "2025-03-01"}).ok

    def test_inverted_range(self, validator) -> None:
        result = validator.validate_query({"start_date": "2025-03-02", "end_date": "2025-03-01"})
        assert result.errors[0].message == "end_date must not be earlier than start_date"

    def test_priority(self, validator) -> None:
        assert validator.validate_query({"priority": "urgent", "page": "3"}).value["page"] == 3
        assert not validator.validate_query({"priority": "asap"}).ok
