"""Constraint Schemas

A ConstraintSchema is an ordered, read-only mapping of field name to
FieldRule, a tuple of CrossFieldRules and an unknown-field policy. Schemas
are built once (usually as module constants) and shared by reference;
variants are derived as new values, never by mutation:

    CREATE = ConstraintSchema("career.create", fields={...}, cross_rules=[...])
    UPDATE = CREATE.partial("career.update", nullable=("coordinator_id",))

Cross-field rules relate a dependent field to a reference field:

    CrossFieldRule("end_date", "start_date", relation=Relation.GREATER_THAN)
    CrossFieldRule("enrollment_end_date", "enrollment_start_date", applies_when=is_present())
    CrossFieldRule("resolution_notes", "status", applies_when=equals("resolved"))
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Callable, Iterable, Mapping

from .errors import SchemaConstructionError
from .rules import MISSING, ORDERABLE_KINDS, FieldRule, Kind

if TYPE_CHECKING:
    from .validator import ValidateOptions, ValidationResult

Predicate = Callable[[Any], bool]


class Relation(str, Enum):
    """Ordering relation of dependent field to reference field."""
    GREATER_THAN = "greater_than"
    GREATER_OR_EQUAL = "greater_or_equal"

    def holds(self, dependent: Any, reference: Any) -> bool:
        return dependent > reference if self is Relation.GREATER_THAN else dependent >= reference

    @property
    def phrase(self) -> str:
        return "later than" if self is Relation.GREATER_THAN else "later than or equal to"


class UnknownFieldPolicy(str, Enum):
    """What happens to payload keys the schema does not declare."""
    STRIP = "strip"
    REJECT = "reject"


# ============================================================================
# Predicates for conditional requirement
# ============================================================================

def is_present() -> Predicate:
    """Holds when the reference field is present (null counts as present)."""
    return lambda value: value is not MISSING


def is_set() -> Predicate:
    """Holds when the reference field is present and not null."""
    return lambda value: value is not MISSING and value is not None


def equals(*values: Any) -> Predicate:
    """Holds when the reference field equals one of the given values."""
    return lambda value: value is not MISSING and value in values


@dataclass(frozen=True, slots=True)
class CrossFieldRule:
    """Constraint between a dependent field and a reference field.

    relation: ordering the dependent value must hold against the reference.
    applies_when: predicate over the reference value (MISSING when absent);
        when it holds, the dependent field becomes required.
    """
    dependent_field: str
    reference_field: str
    relation: Relation | None = None
    applies_when: Predicate | None = None
    message: str | None = None
    requirement_message: str | None = None

    def __post_init__(self):
        if self.relation is None and self.applies_when is None:
            raise SchemaConstructionError(
                f"cross rule {self.dependent_field} -> {self.reference_field} needs a relation or applies_when")
        if self.relation is not None:
            object.__setattr__(self, "relation", Relation(self.relation))

    @property
    def is_conditional(self) -> bool: return self.applies_when is not None

    def ordering_only(self) -> CrossFieldRule | None:
        """This rule without its conditional requirement (None if nothing is left)."""
        if not self.is_conditional: return self
        return replace(self, applies_when=None) if self.relation is not None else None

    def violation_message(self) -> str:
        return self.message or f"{self.dependent_field} must be {self.relation.phrase} {self.reference_field}"

    def missing_message(self) -> str:
        return self.requirement_message or (
            f"{self.dependent_field} is required when {self.reference_field} is provided")


@dataclass(frozen=True, slots=True)
class ConstraintSchema:
    """Immutable description of a record's fields and cross-field rules."""
    name: str
    fields: Mapping[str, FieldRule]
    cross_rules: tuple[CrossFieldRule, ...] = ()
    unknown_policy: UnknownFieldPolicy = UnknownFieldPolicy.STRIP
    coerce: bool = False
    description: str | None = None

    def __post_init__(self):
        object.__setattr__(self, "fields", MappingProxyType(dict(self.fields)))
        object.__setattr__(self, "cross_rules", tuple(self.cross_rules))
        object.__setattr__(self, "unknown_policy", UnknownFieldPolicy(self.unknown_policy))
        for name, rule in self.fields.items():
            if not isinstance(rule, FieldRule):
                raise SchemaConstructionError(f"expected FieldRule, got {type(rule).__name__}",
                    schema=self.name, field=name)
        for rule in self.cross_rules:
            self._check_cross_rule(rule)

    def _check_cross_rule(self, rule: CrossFieldRule) -> None:
        for name in (rule.dependent_field, rule.reference_field):
            if name not in self.fields:
                raise SchemaConstructionError("cross rule references an undeclared field",
                    schema=self.name, field=name)
        if rule.relation is None:
            return
        dependent, reference = self.fields[rule.dependent_field].kind, self.fields[rule.reference_field].kind
        if dependent not in ORDERABLE_KINDS or reference not in ORDERABLE_KINDS:
            raise SchemaConstructionError(f"{rule.relation.value} needs orderable fields",
                schema=self.name, field=rule.dependent_field)
        if (dependent is Kind.DATE) != (reference is Kind.DATE):
            raise SchemaConstructionError("cannot order a date against a number",
                schema=self.name, field=rule.dependent_field)

    def __contains__(self, name: object) -> bool:
        return name in self.fields

    def __iter__(self):
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def required_fields(self) -> tuple[str, ...]:
        return tuple(name for name, rule in self.fields.items() if rule.required)

    # ------------------------------------------------------------------
    # Derivation (always returns a new schema)
    # ------------------------------------------------------------------

    def partial(self, name: str, *, nullable: Iterable[str] = (), keep_requirements: bool = False,
                unknown_policy: UnknownFieldPolicy | None = None) -> ConstraintSchema:
        """Derive an update schema.

        Every field becomes optional with no default; the named optional
        references also accept null. Bounds, patterns and allowed values are
        untouched. Ordering rules survive; conditional requirements only
        survive with keep_requirements.
        """
        nullable = frozenset(nullable)
        if unknown := nullable - set(self.fields):
            raise SchemaConstructionError(f"unknown nullable fields: {sorted(unknown)}", schema=name)

        fields = {
            field_name: rule.as_optional().evolve(nullable=rule.nullable or field_name in nullable)
            for field_name, rule in self.fields.items()
        }
        cross_rules = tuple(kept for rule in self.cross_rules
            if (kept := rule if keep_requirements else rule.ordering_only()) is not None)
        return ConstraintSchema(name, fields, cross_rules, unknown_policy or self.unknown_policy, self.coerce)

    def extend(self, name: str, **fields: FieldRule) -> ConstraintSchema:
        """Derive a schema with additional (or replaced) fields."""
        return replace(self, name=name, fields={**self.fields, **fields})

    def pick(self, name: str, *field_names: str) -> ConstraintSchema:
        """Derive a schema restricted to the named fields (and the rules between them)."""
        keep = set(field_names)
        cross_rules = tuple(r for r in self.cross_rules if {r.dependent_field, r.reference_field} <= keep)
        return replace(self, name=name, fields={n: self.fields[n] for n in field_names},
            cross_rules=cross_rules)

    def with_policy(self, policy: UnknownFieldPolicy) -> ConstraintSchema:
        return replace(self, unknown_policy=policy)

    def with_rules(self, *rules: CrossFieldRule) -> ConstraintSchema:
        return replace(self, cross_rules=(*self.cross_rules, *rules))

    # ------------------------------------------------------------------
    # Validation shortcut
    # ------------------------------------------------------------------

    def validate(self, payload: Any, options: ValidateOptions | None = None) -> ValidationResult:
        from .validator import validate

        return validate(self, payload, options)
