"""Explicit Opt-in Coercion System

Coercion rules are explicit and opt-in, never implicit. Numeric and
boolean coercion only run when a schema (or a single call) enables it,
which is how query-string payloads reach typed fields.

Dates and UUIDs are the exception: JSON has no native representation for
either, so their canonical parsing always runs.

Features:
- Type-safe coercion with Result types
- Extensible rule registry
- No silent data loss
"""
from __future__ import annotations

import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Generic, TypeVar
from uuid import UUID

from core.errors import AppError, Err, ErrorCode, Ok, Result

T = TypeVar("T")
S = TypeVar("S")


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[S, T]):
    """Base class for coercion rules.

    Each rule defines:
    - Source type(s) it can coerce from
    - Target type it coerces to
    - The actual coercion logic
    """

    @property
    @abstractmethod
    def source_types(self) -> tuple[type, ...]:
        """Types this rule can coerce from."""

    @property
    @abstractmethod
    def target_type(self) -> type[T]:
        """Type this rule coerces to."""

    @abstractmethod
    def coerce(self, value: Any) -> Result[T, AppError]:
        """Coerce value to target type. Returns Result."""

    def can_coerce(self, value: Any) -> bool:
        return isinstance(value, self.source_types) and self.coerce(value).is_ok()

    def __call__(self, value: Any) -> Result[T, AppError]:
        return self.coerce(value)


@dataclass(frozen=True, slots=True)
class StringToInt(CoercionRule[str, int]):
    """Coerce string to integer."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[int]:
        return int

    def coerce(self, value: Any) -> Result[int, AppError]:
        if not isinstance(value, str):
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"Cannot coerce {type(value).__name__} to int",
            ))

        try:
            return Ok(int(value.strip()))
        except ValueError as e:
            return Err(AppError(
                code=ErrorCode.E2002_INVALID_FORMAT,
                message=f"Cannot coerce '{value}' to int: {e}",
                metadata={"value": value, "target": "int"},
            ))


@dataclass(frozen=True, slots=True)
class StringToFloat(CoercionRule[str, float]):
    """Coerce string to float."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[float]:
        return float

    def coerce(self, value: Any) -> Result[float, AppError]:
        if not isinstance(value, str):
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"Cannot coerce {type(value).__name__} to float",
            ))

        try:
            parsed = float(value.strip())
        except ValueError as e:
            return Err(AppError(
                code=ErrorCode.E2002_INVALID_FORMAT,
                message=f"Cannot coerce '{value}' to float: {e}",
            ))
        if not math.isfinite(parsed):
            return Err(AppError(
                code=ErrorCode.E2002_INVALID_FORMAT,
                message=f"Cannot coerce '{value}' to float: not a finite number",
            ))
        return Ok(parsed)


@dataclass(frozen=True, slots=True)
class StringToBool(CoercionRule[str, bool]):
    """Coerce string to boolean.

    Truthy: "true", "1", "yes", "on", "y"
    Falsy: "false", "0", "no", "off", "n"
    """
    true_values: frozenset[str] = frozenset({"true", "1", "yes", "on", "y"})
    false_values: frozenset[str] = frozenset({"false", "0", "no", "off", "n"})

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str,)

    @property
    def target_type(self) -> type[bool]:
        return bool

    def coerce(self, value: Any) -> Result[bool, AppError]:
        if not isinstance(value, str):
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"Cannot coerce {type(value).__name__} to bool",
            ))

        lower = value.strip().lower()
        if lower in self.true_values:
            return Ok(True)
        if lower in self.false_values:
            return Ok(False)

        return Err(AppError(
            code=ErrorCode.E2002_INVALID_FORMAT,
            message=f"Cannot coerce '{value}' to bool. Valid values: {sorted(self.true_values | self.false_values)}",
        ))


@dataclass(frozen=True, slots=True)
class ISO8601ToDateTime(CoercionRule[str, datetime]):
    """Coerce ISO8601 strings and date objects to aware datetimes.

    Date-only input becomes midnight; naive values are taken in
    default_timezone so every parsed value is comparable with every other.
    """
    default_timezone: timezone = timezone.utc

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, date)

    @property
    def target_type(self) -> type[datetime]:
        return datetime

    def _normalize(self, dt: datetime) -> datetime:
        return dt.replace(tzinfo=self.default_timezone) if dt.tzinfo is None else dt

    def _parse(self, value: str) -> datetime:
        """Parse ISO8601 string handling Z suffix."""
        return datetime.fromisoformat(value.strip().replace("Z", "+00:00"))

    def coerce(self, value: Any) -> Result[datetime, AppError]:
        if isinstance(value, datetime):
            return Ok(self._normalize(value))
        if isinstance(value, date):
            return Ok(self._normalize(datetime(value.year, value.month, value.day)))
        if not isinstance(value, str):
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"Cannot coerce {type(value).__name__} to datetime",
            ))

        try:
            return Ok(self._normalize(self._parse(value)))
        except ValueError as e:
            return Err(AppError(
                code=ErrorCode.E2012_INVALID_DATE,
                message=f"Cannot coerce '{value}' to datetime: {e}",
                metadata={"value": value, "target": "datetime", "format": "ISO8601"},
            ))


@dataclass(frozen=True, slots=True)
class StringToUUID(CoercionRule[str, str]):
    """Coerce UUID strings (or UUID objects) to canonical lowercase form."""

    @property
    def source_types(self) -> tuple[type, ...]:
        return (str, UUID)

    @property
    def target_type(self) -> type[str]:
        return str

    def coerce(self, value: Any) -> Result[str, AppError]:
        if isinstance(value, UUID):
            return Ok(str(value))
        if not isinstance(value, str):
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"Cannot coerce {type(value).__name__} to UUID",
            ))

        try:
            return Ok(str(UUID(value.strip())))
        except ValueError as e:
            return Err(AppError(
                code=ErrorCode.E2011_INVALID_UUID,
                message=f"Cannot coerce '{value}' to UUID: {e}",
            ))


@dataclass(frozen=True, slots=True)
class ExplicitCoercion:
    """Coercion system with explicit opt-in rules, keyed by field kind.

    Usage:
        coercer = ExplicitCoercion()
        coercer.coerce("123", "integer")  # Ok(123)
        coercer.coerce("abc", "integer")  # Err(AppError)
    """
    rules: dict[str, CoercionRule] = field(default_factory=lambda: {
        "integer": StringToInt(),
        "number": StringToFloat(),
        "boolean": StringToBool(),
        "date": ISO8601ToDateTime(),
        "uuid": StringToUUID(),
    })

    def with_rule(self, kind: str, rule: CoercionRule) -> ExplicitCoercion:
        """Add or replace a coercion rule, returning new instance."""
        return ExplicitCoercion(rules={**self.rules, kind: rule})

    def coerce(self, value: Any, kind: str) -> Result[Any, AppError]:
        """Attempt to coerce value for a field kind."""
        if (rule := self.rules.get(kind)) is None:
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"No coercion rule for {kind}",
                metadata={"source_type": type(value).__name__, "kind": kind},
            ))
        return rule.coerce(value)


# Default coercion instance
DEFAULT_COERCER = ExplicitCoercion()


def coerce(value: Any, kind: str) -> Result[Any, AppError]:
    """Convenience function using default coercer."""
    return DEFAULT_COERCER.coerce(value, kind)
