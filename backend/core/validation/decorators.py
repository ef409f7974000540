"""Validator Decorators

A decorator wraps a validator (or another decorator), overrides or adds
operations, and forwards every other attribute to the wrapped object
unchanged. Stacking is plain composition:

    validator = AvatarValidatorDecorator(ProfileValidatorDecorator(UserValidator()))
    validator.validate_login(payload)          # forwarded verbatim
    validator.validate_update_profile(payload) # inner checks + profile checks

Overrides call the inner operation first and hand its result to _extend()
with the layer's Checks. Errors are appended after the inner errors, so a
stack reports the innermost layer first.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Iterable, Mapping

from core.config import settings

from .errors import ErrorDetail
from .rules import MISSING, FieldRule
from .validator import ValidationResult

CheckFn = Callable[[Mapping[str, Any]], "ErrorDetail | Iterable[ErrorDetail] | None"]


@dataclass(frozen=True, slots=True)
class Check:
    """An extra check over one or more fields of a payload.

    fn receives the values (cleaned when the inner validator passed, raw
    otherwise) and returns an ErrorDetail, several, or None.
    """
    fields: tuple[str, ...]
    fn: CheckFn

    def __post_init__(self):
        if isinstance(self.fields, str):
            object.__setattr__(self, "fields", (self.fields,))
        else:
            object.__setattr__(self, "fields", tuple(self.fields))

    @classmethod
    def rule(cls, name: str, rule: FieldRule) -> Check:
        """Apply a FieldRule to a field when it is present."""
        def run(values: Mapping[str, Any]) -> tuple[ErrorDetail, ...]:
            if (value := values.get(name, MISSING)) is MISSING: return ()
            return rule.check(value, name).errors
        return cls((name,), run)

    def run(self, values: Mapping[str, Any]) -> list[ErrorDetail]:
        found = self.fn(values)
        if found is None: return []
        if isinstance(found, ErrorDetail): return [found]
        return list(found)


class ValidatorDecorator:
    """Transparent wrapper around a validator.

    Configuration is fixed at construction; subclasses declare their own
    __slots__ and set them through _configure().
    """

    __slots__ = ("_inner",)

    def __init__(self, inner: Any):
        object.__setattr__(self, "_inner", inner)

    def _configure(self, **attrs: Any) -> None:
        for name, value in attrs.items(): object.__setattr__(self, name, value)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError(f"{type(self).__name__} is read-only")

    def __getattr__(self, name: str) -> Any:
        # Only reached for attributes the decorator itself lacks.
        if name == "_inner": raise AttributeError(name)
        return getattr(self._inner, name)

    def __repr__(self) -> str: return f"{type(self).__name__}({self._inner!r})"

    @property
    def inner(self) -> Any: return self._inner

    @property
    def innermost(self) -> Any:
        inner = self._inner
        while isinstance(inner, ValidatorDecorator): inner = inner.inner
        return inner

    def _extend(self, inner_result: ValidationResult, payload: Any, checks: Iterable[Check], *,
                abort_early: bool | None = None) -> ValidationResult:
        """Run this layer's checks and append their errors to the inner result.

        On an inner failure, checks still run against the raw payload for
        fields that have no inner error.
        """
        if inner_result.ok:
            values, blocked = inner_result.value, frozenset()
        else:
            values = payload if isinstance(payload, Mapping) else {}
            blocked = frozenset(e.field.split(".", 1)[0] for e in inner_result.errors)

        abort = settings.VALIDATION_ABORT_EARLY if abort_early is None else abort_early
        added: list[ErrorDetail] = []
        for check in checks:
            if blocked.intersection(check.fields): continue
            added.extend(check.run(values))
            if added and abort: break

        if not added: return inner_result
        return ValidationResult.failure((*inner_result.errors, *added), inner_result.schema)
