"""Cross-Field Rule Evaluation

Runs after per-field checks over the defaulted values. Each rule yields at
most one error, attributed to its dependent field:

- conditional requirement: applies_when(reference) holds and the dependent
  field is absent or null -> MissingRequiredField
- relation: both operands present and non-null, dependent must be greater
  than (or equal to) the reference -> CrossFieldViolation

Operands that already failed their own checks are never compared.
"""
from __future__ import annotations

from typing import Any, Iterable, Mapping

from .errors import ErrorDetail, ErrorKind
from .rules import MISSING
from .schema import CrossFieldRule


def _absent(value: Any) -> bool:
    return value is MISSING or value is None


def check_rule(rule: CrossFieldRule, values: Mapping[str, Any]) -> ErrorDetail | None:
    """Evaluate one rule against already-cleaned values."""
    dependent = values.get(rule.dependent_field, MISSING)
    reference = values.get(rule.reference_field, MISSING)

    if rule.applies_when is not None:
        if not rule.applies_when(reference): return None
        if _absent(dependent):
            return ErrorDetail(field=rule.dependent_field, kind=ErrorKind.MISSING_REQUIRED_FIELD,
                message=rule.missing_message())

    if rule.relation is None or _absent(dependent) or _absent(reference):
        return None
    if rule.relation.holds(dependent, reference):
        return None
    return ErrorDetail(field=rule.dependent_field, kind=ErrorKind.CROSS_FIELD_VIOLATION,
        message=rule.violation_message(), actual_value=dependent)


def evaluate(cross_rules: Iterable[CrossFieldRule], values: Mapping[str, Any],
             failed_fields: Iterable[str] = ()) -> list[ErrorDetail]:
    """Evaluate rules in declaration order, skipping any that touch a failed field."""
    failed = frozenset(failed_fields)
    errors = []
    for rule in cross_rules:
        if rule.dependent_field in failed or rule.reference_field in failed:
            continue
        if (detail := check_rule(rule, values)) is not None:
            errors.append(detail)
    return errors
