"""Tests for the profile and avatar decorators on the user validator."""

import pytest
from structlog.testing import capture_logs

from core.config import settings
from core.validation import ErrorKind
from entity_validators import AvatarValidatorDecorator, ProfileValidatorDecorator, create_validator
from entity_validators.user import UserValidator

AVATAR = {"mimetype": "image/png", "size": 2048, "originalname": "foto.png"}


def _kinds(result) -> list[tuple[str, ErrorKind]]:
    return [(e.field, e.kind) for e in result.errors]


class TestProfileDecorator:
    def test_transparent_for_valid_profile(self) -> None:
        payload = {"name": "Ana Torres", "phone": "+51 987-654-321"}
        decorated = ProfileValidatorDecorator(UserValidator())
        assert decorated.validate_update_profile(payload) == UserValidator().validate_update_profile(payload)

    def test_phone_format(self) -> None:
        result = ProfileValidatorDecorator(UserValidator()).validate_update_profile({"phone": "call me"})
        assert _kinds(result) == [("phone", ErrorKind.PATTERN_MISMATCH)]
        assert result.errors[0].message == "invalid phone number format"

    def test_telephone_alias(self) -> None:
        result = ProfileValidatorDecorator(UserValidator()).validate_update_profile({"telephone": "12"})
        assert _kinds(result) == [("telephone", ErrorKind.PATTERN_MISMATCH)]

    def test_completion_required(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator(), require_complete=True)
        result = decorated.validate_update_profile({"bio": "Docente"})
        assert result.errors[0].message == "name is required to complete the profile"
        assert decorated.validate_update_profile({"name": "Ana Torres"}).ok

    def test_bio_limit_configurable(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator(), bio_max_length=10)
        result = decorated.validate_update_profile({"bio": "Docente de física"})
        assert result.errors[0].message == "bio cannot exceed 10 characters"
        assert decorated.bio_max_length == 10

    def test_bio_limit_above_default(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator(), bio_max_length=1000)
        assert decorated.validate_update_profile({"bio": "x" * 700}).ok
        result = decorated.validate_update_profile({"bio": "x" * 1001})
        assert _kinds(result) == [("bio", ErrorKind.RANGE_VIOLATION)]
        assert result.errors[0].message == "bio cannot exceed 1000 characters"

    def test_default_bio_limit_from_settings(self) -> None:
        result = ProfileValidatorDecorator(UserValidator()).validate_update_profile({"bio": "x" * 501})
        assert result.errors[0].message == "bio cannot exceed 500 characters"

    def test_zero_bio_limit_is_kept(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator(), bio_max_length=0)
        assert decorated.bio_max_length == 0
        assert _kinds(decorated.validate_update_profile({"bio": "x"})) == [("bio", ErrorKind.RANGE_VIOLATION)]

    def test_abort_early_setting_stops_after_first_check(self, monkeypatch) -> None:
        monkeypatch.setattr(settings, "VALIDATION_ABORT_EARLY", True)
        decorated = ProfileValidatorDecorator(UserValidator(), require_complete=True)
        result = decorated.validate_update_profile({"bio": "Docente", "phone": "x"})
        assert [e.field for e in result.errors] == ["name"]

    def test_inner_errors_first(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator(), require_complete=True)
        result = decorated.validate_update_profile({"first_name": "A", "phone": "x"})
        assert [e.field for e in result.errors] == ["first_name", "name", "phone"]

    def test_other_operations_forwarded(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator())
        assert decorated.validate_login({"email": "ana@uni.edu", "password": "x"}).ok
        assert decorated.entity == "user"

    def test_configuration_is_read_only(self) -> None:
        decorated = ProfileValidatorDecorator(UserValidator())
        with pytest.raises(AttributeError):
            decorated.require_complete = True


class TestAvatarDecorator:
    def test_valid_avatar(self) -> None:
        result = AvatarValidatorDecorator(UserValidator()).validate_avatar({**AVATAR, "buffer": b"..."})
        assert result.value == {**AVATAR, "sanitized_name": "foto.png"}

    def test_missing_file(self) -> None:
        result = AvatarValidatorDecorator(UserValidator()).validate_avatar(None)
        assert _kinds(result) == [("avatar", ErrorKind.MISSING_REQUIRED_FIELD)]
        assert result.errors[0].message == "avatar file is required"

    def test_mime_type(self) -> None:
        result = AvatarValidatorDecorator(UserValidator()).validate_avatar({**AVATAR, "mimetype": "image/bmp"})
        assert result.errors[0].message.startswith("file type not allowed. Allowed types: image/jpeg")

    def test_size_limit(self) -> None:
        result = AvatarValidatorDecorator(UserValidator()).validate_avatar({**AVATAR, "size": 6 * 1024 * 1024})
        assert result.errors[0].message == "file is too large. Maximum size: 5MB"

    def test_custom_limits(self) -> None:
        decorated = AvatarValidatorDecorator(UserValidator(), allowed_mime_types=["image/png"], max_bytes=1024)
        assert decorated.allowed_mime_types == ("image/png",)
        assert not decorated.validate_avatar(AVATAR).ok

    def test_zero_size_limit_is_kept(self) -> None:
        decorated = AvatarValidatorDecorator(UserValidator(), max_bytes=0)
        assert decorated.max_bytes == 0
        assert _kinds(decorated.validate_avatar(AVATAR)) == [("size", ErrorKind.RANGE_VIOLATION)]

    def test_filename_sanitized_and_logged(self) -> None:
        with capture_logs() as logs:
            result = AvatarValidatorDecorator(UserValidator()).validate_avatar(
                {**AVATAR, "originalname": "mi foto (1).png"})
        assert result.value["sanitized_name"] == "mifoto1.png"
        warning = next(e for e in logs if e["event"] == "avatar_filename_sanitized")
        assert warning["log_level"] == "warning"
        assert warning["original"] == "mi foto (1).png"


class TestStacking:
    def test_full_stack(self) -> None:
        stacked = AvatarValidatorDecorator(ProfileValidatorDecorator(UserValidator(), require_complete=True))
        assert stacked.validate_avatar(AVATAR).ok
        assert not stacked.validate_update_profile({"bio": "Docente"}).ok
        assert isinstance(stacked.innermost, UserValidator)

    def test_factory(self) -> None:
        assert isinstance(create_validator("user"), UserValidator)
        profile = create_validator("profile", require_complete=True)
        assert isinstance(profile, ProfileValidatorDecorator)
        assert profile.require_complete
        assert isinstance(create_validator("avatar"), AvatarValidatorDecorator)

    def test_factory_unknown_kind(self) -> None:
        with pytest.raises(ValueError, match="Unknown validator type: teacher"):
            create_validator("teacher")
