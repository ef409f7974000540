"""Tests for the user, comment and rating validators."""

import pytest

from core.validation import ErrorKind
from core.validation.errors import REDACTED
from entity_validators.comment import CommentValidator
from entity_validators.rating import RatingValidator
from entity_validators.user import UserValidator


def _kinds(result) -> list[tuple[str, ErrorKind]]:
    return [(e.field, e.kind) for e in result.errors]


class TestRegistration:
    @pytest.fixture
    def payload(self) -> dict:
        return {"name": "Ana Torres", "email": "  Ana.Torres@Uni.EDU ", "password": "Secret1",
            "student_id": "2025001"}

    def test_student_registration(self, payload) -> None:
        value = UserValidator().validate_registration(payload).value
        assert value["email"] == "ana.torres@uni.edu"
        assert value["role"] == "student"

    def test_student_id_required_by_default(self, payload) -> None:
        del payload["student_id"]
        result = UserValidator().validate_registration(payload)
        assert _kinds(result) == [("student_id", ErrorKind.MISSING_REQUIRED_FIELD)]
        assert result.errors[0].message == "student_id is required for students"

    def test_teacher_needs_no_student_id(self, payload) -> None:
        del payload["student_id"]
        result = UserValidator().validate_registration({**payload, "role": "teacher", "employee_id": "E-17"})
        assert result.ok

    def test_employee_id_only_for_staff(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "employee_id": "E-17"})
        assert _kinds(result) == [("employee_id", ErrorKind.CROSS_FIELD_VIOLATION)]

    def test_employee_id_reported_alongside_field_errors(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "name": "X", "employee_id": "E-17"})
        assert _kinds(result) == [
            ("name", ErrorKind.RANGE_VIOLATION),
            ("employee_id", ErrorKind.CROSS_FIELD_VIOLATION),
        ]

    def test_employee_id_rule_skipped_when_role_invalid(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "role": "dean", "employee_id": "E-17"})
        assert _kinds(result) == [("role", ErrorKind.ENUM_VIOLATION)]

    def test_weak_password_is_redacted(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "password": "secret1"})
        assert result.errors[0].message == (
            "password must contain an uppercase letter, a lowercase letter and a digit")
        assert result.errors[0].actual_value == REDACTED

    def test_short_password(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "password": "Ab1"})
        assert result.errors[0].message == "password must be at least 6 characters"

    def test_invalid_email(self, payload) -> None:
        result = UserValidator().validate_registration({**payload, "email": "ana@"})
        assert result.errors[0].message == "email must be a valid email address"


class TestAccountOperations:
    def test_login(self) -> None:
        assert UserValidator().validate_login({"email": "ana@uni.edu", "password": "x"}).ok
        assert _kinds(UserValidator().validate_login({"email": "ana@uni.edu"})) == [
            ("password", ErrorKind.MISSING_REQUIRED_FIELD),
        ]

    def test_change_password(self) -> None:
        result = UserValidator().validate_change_password({"currentPassword": "old"})
        assert result.errors[0].message == "newPassword is required"
        assert UserValidator().validate_change_password({"currentPassword": "old", "newPassword": "Newer1"}).ok

    def test_update_profile(self) -> None:
        assert UserValidator().validate_update_profile({"bio": "Docente de física"}).ok
        assert not UserValidator().validate_update_profile({"first_name": "A"}).ok

    def test_update_profile_bio_unbounded_without_decorator(self) -> None:
        assert UserValidator().validate_update_profile({"bio": "x" * 700}).ok


class TestComment:
    def test_content_trimmed(self) -> None:
        assert CommentValidator().validate_comment({"content": "  Muy útil  "}).value == {"content": "Muy útil"}

    def test_blank_content(self) -> None:
        result = CommentValidator().validate_comment({"content": "   "})
        assert _kinds(result) == [("content", ErrorKind.MISSING_REQUIRED_FIELD)]

    def test_content_messages(self) -> None:
        assert CommentValidator().validate_comment({}).errors[0].message == "comment content is required"
        too_long = CommentValidator().validate_comment({"content": "a" * 2001})
        assert too_long.errors[0].message == "comment must be between 1 and 2000 characters"

    def test_reply(self, new_id) -> None:
        assert CommentValidator().validate_comment({"content": "De acuerdo", "parent_id": new_id()}).ok
        bad = CommentValidator().validate_comment({"content": "De acuerdo", "parent_id": "1"})
        assert bad.errors[0].message == "parent_id must be a valid UUID"

    def test_moderation(self) -> None:
        assert CommentValidator().validate_moderation({"action": "hide", "reason": ""}).ok
        assert CommentValidator().validate_moderation({"action": "ban"}).errors[0].message == (
            "invalid moderation action")
        assert CommentValidator().validate_moderation({}).errors[0].message == "moderation action is required"


class TestRating:
    @pytest.mark.parametrize("stars", [1, 3, 5])
    def test_valid_ratings(self, stars: int) -> None:
        assert RatingValidator().validate_rating({"rating": stars}).value == {"rating": stars}

    @pytest.mark.parametrize("stars", [0, 6])
    def test_out_of_range(self, stars: int) -> None:
        result = RatingValidator().validate_rating({"rating": stars})
        assert result.errors[0].message == "rating must be between 1 and 5 stars"

    def test_fractional_rating(self) -> None:
        result = RatingValidator().validate_rating({"rating": 4.5})
        assert result.errors[0].message == "rating must be a whole number"

    def test_review_text(self) -> None:
        result = RatingValidator().validate_rating({"rating": 4, "content": " buen material "})
        assert result.value == {"rating": 4, "content": "buen material"}
