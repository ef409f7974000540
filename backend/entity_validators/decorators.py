"""Profile and avatar decorators for the user validator.

Both wrap a user validator (or another decorator) and forward every
operation they do not define:

    validator = AvatarValidatorDecorator(ProfileValidatorDecorator(UserValidator(), require_complete=True))
"""
import re
from typing import Any, Iterable

from core.config import settings
from core.logging import validation_logger
from core.validation import (
    Check,
    ConstraintSchema,
    ErrorDetail,
    ErrorKind,
    ValidationResult,
    ValidatorDecorator,
    enum,
    integer,
    string,
    validate,
)

log = validation_logger()

PHONE_PATTERN = re.compile(r"^\+?[\d\-()]{6,20}$")
UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9.-]")


# ============================================================================
# Profile
# ============================================================================

def _profile_complete(values: dict) -> ErrorDetail | None:
    if values.get("name"): return None
    return ErrorDetail(field="name", kind=ErrorKind.MISSING_REQUIRED_FIELD,
        message="name is required to complete the profile")


def _phone_format(values: dict) -> ErrorDetail | None:
    field = "phone" if values.get("phone") else "telephone"
    phone = values.get(field)
    if not phone or not isinstance(phone, str): return None
    if PHONE_PATTERN.match(re.sub(r"\s", "", phone)): return None
    return ErrorDetail(field=field, kind=ErrorKind.PATTERN_MISMATCH, message="invalid phone number format",
        actual_value=phone)


class ProfileValidatorDecorator(ValidatorDecorator):
    """Adds profile checks on top of validate_update_profile."""

    __slots__ = ("_require_complete", "_bio_max_length")

    def __init__(self, inner: Any, require_complete: bool = False, bio_max_length: int | None = None):
        super().__init__(inner)
        self._configure(_require_complete=require_complete,
            _bio_max_length=settings.PROFILE_BIO_MAX_LENGTH if bio_max_length is None else bio_max_length)

    @property
    def require_complete(self) -> bool: return self._require_complete

    @property
    def bio_max_length(self) -> int: return self._bio_max_length

    def _checks(self) -> Iterable[Check]:
        if self._require_complete:
            yield Check("name", _profile_complete)
        yield Check(("phone", "telephone"), _phone_format)
        yield Check.rule("bio", string(max_length=self._bio_max_length, nullable=True, empty_allowed=True,
            messages={ErrorKind.RANGE_VIOLATION: f"bio cannot exceed {self._bio_max_length} characters"}))

    def validate_update_profile(self, payload: Any) -> ValidationResult:
        return self._extend(self._inner.validate_update_profile(payload), payload, self._checks())


# ============================================================================
# Avatar
# ============================================================================

class AvatarValidatorDecorator(ValidatorDecorator):
    """Adds validate_avatar for uploaded image descriptors.

    The descriptor is {mimetype, size, originalname}; extra keys (buffers,
    temp paths) are stripped. The cleaned value gains sanitized_name.
    """

    __slots__ = ("_allowed_mime_types", "_max_bytes", "_schema")

    def __init__(self, inner: Any, allowed_mime_types: Iterable[str] | None = None, max_bytes: int | None = None):
        super().__init__(inner)
        allowed = tuple(allowed_mime_types or settings.AVATAR_ALLOWED_MIME_TYPES)
        max_bytes = settings.AVATAR_MAX_BYTES if max_bytes is None else max_bytes
        self._configure(_allowed_mime_types=allowed, _max_bytes=max_bytes, _schema=ConstraintSchema(
            "user.avatar",
            fields={
                "mimetype": enum(*allowed, required=True, messages={
                    ErrorKind.ENUM_VIOLATION: f"file type not allowed. Allowed types: {', '.join(allowed)}",
                }),
                "size": integer(0, max_bytes, required=True, messages={
                    ErrorKind.RANGE_VIOLATION: f"file is too large. Maximum size: {max_bytes / (1024 * 1024):g}MB",
                }),
                "originalname": string(1, 255, required=True),
            },
        ))

    @property
    def allowed_mime_types(self) -> tuple[str, ...]: return self._allowed_mime_types

    @property
    def max_bytes(self) -> int: return self._max_bytes

    def validate_avatar(self, file: Any) -> ValidationResult:
        if file is None:
            return ValidationResult.failure([ErrorDetail(field="avatar", kind=ErrorKind.MISSING_REQUIRED_FIELD,
                message="avatar file is required")], self._schema.name)

        result = validate(self._schema, file)
        if not result.ok: return result

        original = result.value["originalname"]
        sanitized = UNSAFE_FILENAME_CHARS.sub("", original)
        if sanitized != original:
            log.warning("avatar_filename_sanitized", original=original, sanitized=sanitized)
        return ValidationResult.success({**result.value, "sanitized_name": sanitized}, self._schema.name)
