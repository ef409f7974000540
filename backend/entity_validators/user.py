"""User account schemas and validator.

Registration defaults the role to "student", so a student_id is required
unless another role is chosen. employee_id is only accepted for staff roles.
"""
from typing import Any, Mapping

from core.validation import (
    MISSING,
    ConstraintSchema,
    CrossFieldRule,
    ErrorDetail,
    ErrorKind,
    FieldRule,
    ValidationResult,
    enum,
    equals,
    string,
)

from .base import EMAIL_PATTERN, PASSWORD_PATTERN, EntityValidator

ROLES = ("student", "teacher", "admin")
STAFF_ROLES = frozenset({"teacher", "admin"})

_EMAIL = string(pattern=EMAIL_PATTERN, required=True, trim=True, case="lower", messages={
    ErrorKind.PATTERN_MISMATCH: "email must be a valid email address",
})


def _new_password(required_message: str) -> FieldRule:
    return string(min_length=6, pattern=PASSWORD_PATTERN, required=True, sensitive=True, messages={
        ErrorKind.MISSING_REQUIRED_FIELD: required_message,
        ErrorKind.RANGE_VIOLATION: "password must be at least 6 characters",
        ErrorKind.PATTERN_MISMATCH: "password must contain an uppercase letter, a lowercase letter and a digit",
    })


USER_REGISTRATION = ConstraintSchema(
    "user.registration",
    fields={
        "name": string(2, 100, required=True),
        "email": _EMAIL,
        "password": _new_password("password is required"),
        "role": enum(*ROLES, default="student"),
        "student_id": string(),
        "employee_id": string(),
        "department": string(),
        "position": string(),
        "phone": string(),
        "bio": string(max_length=500),
    },
    cross_rules=[
        CrossFieldRule("student_id", "role", applies_when=equals("student"),
            requirement_message="student_id is required for students"),
    ],
)

USER_LOGIN = ConstraintSchema(
    "user.login",
    fields={
        "email": _EMAIL,
        "password": string(required=True, sensitive=True),
    },
)

USER_CHANGE_PASSWORD = ConstraintSchema(
    "user.change_password",
    fields={
        "currentPassword": string(required=True, sensitive=True),
        "newPassword": _new_password("newPassword is required"),
    },
)

USER_UPDATE_PROFILE = ConstraintSchema(
    "user.update_profile",
    fields={
        "name": string(2, 100),
        "phone": string(),
        "telephone": string(),
        "first_name": string(2, 50),
        "last_name": string(2, 50),
        "bio": string(),
        "department": string(),
        "position": string(),
    },
)


def _employee_id_forbidden(values: Mapping[str, Any]) -> ErrorDetail | None:
    if values.get("employee_id", MISSING) is MISSING or values.get("role", "student") in STAFF_ROLES:
        return None
    return ErrorDetail(field="employee_id", kind=ErrorKind.CROSS_FIELD_VIOLATION,
        message="employee_id is only allowed for teacher or admin roles", actual_value=values["employee_id"])


class UserValidator(EntityValidator):
    @property
    def entity(self) -> str: return "user"

    def validate_registration(self, payload: Any) -> ValidationResult:
        """Registration schema, then the staff-only employee_id rule.

        The rule reads the cleaned value when the schema passed, otherwise
        the raw payload as long as neither role nor employee_id failed.
        """
        result = self._validate(USER_REGISTRATION, payload)
        if result.ok:
            values = result.value
        elif isinstance(payload, Mapping) and not result.field_errors.keys() & {"role", "employee_id"}:
            values = payload
        else:
            return result

        if (detail := _employee_id_forbidden(values)) is None: return result
        return ValidationResult.failure((*result.errors, detail), USER_REGISTRATION.name)

    def validate_login(self, payload: Any) -> ValidationResult:
        return self._validate(USER_LOGIN, payload)

    def validate_change_password(self, payload: Any) -> ValidationResult:
        return self._validate(USER_CHANGE_PASSWORD, payload)

    def validate_update_profile(self, payload: Any) -> ValidationResult:
        return self._validate(USER_UPDATE_PROFILE, payload)
