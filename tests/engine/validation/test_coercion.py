"""Tests for explicit opt-in coercion."""

from datetime import date, datetime, timedelta, timezone
from uuid import UUID

import pytest

from core.errors import ErrorCode
from core.validation import (
    DEFAULT_COERCER,
    ExplicitCoercion,
    ISO8601ToDateTime,
    StringToBool,
    StringToFloat,
    StringToInt,
    StringToUUID,
    coerce,
)


class TestScalarRules:
    def test_string_to_int(self) -> None:
        assert StringToInt().coerce(" 42 ").unwrap() == 42
        error = StringToInt().coerce("4.2").unwrap_err()
        assert error.code is ErrorCode.E2002_INVALID_FORMAT

    def test_non_string_rejected(self) -> None:
        assert StringToInt().coerce(42).unwrap_err().code is ErrorCode.E2004_INVALID_TYPE

    @pytest.mark.parametrize("raw", ["nan", "inf", "-Infinity"])
    def test_non_finite_float_rejected(self, raw: str) -> None:
        assert StringToFloat().coerce(raw).unwrap_err().code is ErrorCode.E2002_INVALID_FORMAT
        assert StringToFloat().coerce(" 2.5 ").unwrap() == 2.5

    @pytest.mark.parametrize("raw,expected", [("true", True), ("YES", True), ("0", False), ("off", False)])
    def test_string_to_bool(self, raw: str, expected: bool) -> None:
        assert StringToBool().coerce(raw).unwrap() is expected

    def test_ambiguous_bool(self) -> None:
        assert StringToBool().coerce("maybe").is_err()

    def test_can_coerce(self) -> None:
        assert StringToInt().can_coerce("7")
        assert not StringToInt().can_coerce("seven")


class TestDates:
    def test_date_only_is_utc_midnight(self) -> None:
        assert coerce("2025-02-01", "date").unwrap() == datetime(2025, 2, 1, tzinfo=timezone.utc)

    def test_z_suffix(self) -> None:
        assert coerce("2025-02-01T10:30:00Z", "date").unwrap() == datetime(2025, 2, 1, 10, 30, tzinfo=timezone.utc)

    def test_offset_preserved(self) -> None:
        value = coerce("2025-02-01T10:30:00+02:00", "date").unwrap()
        assert value.utcoffset() == timedelta(hours=2)

    def test_date_objects(self) -> None:
        assert coerce(date(2025, 2, 1), "date").unwrap().tzinfo is timezone.utc
        naive = datetime(2025, 2, 1, 8)
        assert coerce(naive, "date").unwrap() == naive.replace(tzinfo=timezone.utc)

    def test_invalid_date(self) -> None:
        assert ISO8601ToDateTime().coerce("31/02/2025").unwrap_err().code is ErrorCode.E2012_INVALID_DATE


class TestUUIDs:
    def test_canonical_form(self) -> None:
        raw = "6F9619FF-8B86-D011-B42D-00C04FC964FF"
        assert StringToUUID().coerce(raw).unwrap() == raw.lower()

    def test_uuid_object(self) -> None:
        value = UUID("6f9619ff-8b86-d011-b42d-00c04fc964ff")
        assert coerce(value, "uuid").unwrap() == str(value)

    def test_invalid(self) -> None:
        assert coerce("not-a-uuid", "uuid").unwrap_err().code is ErrorCode.E2011_INVALID_UUID


class TestExplicitCoercion:
    def test_unknown_kind(self) -> None:
        assert DEFAULT_COERCER.coerce("x", "string").is_err()

    def test_with_rule_returns_new_instance(self) -> None:
        custom = DEFAULT_COERCER.with_rule("integer", StringToBool())
        assert custom.coerce("yes", "integer").unwrap() is True
        assert DEFAULT_COERCER.coerce("yes", "integer").is_err()
        assert isinstance(custom, ExplicitCoercion)
