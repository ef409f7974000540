"""Validator registry - factory pattern for entity validators."""
from typing import Any

from core.logging import schema_logger

from .base import EntityValidator

log = schema_logger()

_VALIDATORS: dict[str, EntityValidator] = {}


def register(validator: EntityValidator) -> None:
    """Register an entity validator."""
    _VALIDATORS[validator.entity] = validator
    log.debug("validator_registered", entity=validator.entity, operations=list(validator.operations))


def get_validator(entity: str) -> EntityValidator:
    """Get an entity validator by name."""
    if entity not in _VALIDATORS:
        available = ", ".join(_VALIDATORS.keys()) or "none"
        raise ValueError(f"Validator '{entity}' not registered. Available: {available}")
    return _VALIDATORS[entity]


def list_validators() -> list[dict]:
    """List all registered validators."""
    return [{"entity": v.entity, "operations": list(v.operations)} for v in _VALIDATORS.values()]


def create_validator(kind: str, **options: Any) -> Any:
    """Build the user validator stack for a kind: 'user', 'profile' or 'avatar'.

    Extra options go to the decorator (e.g., require_complete=True).
    """
    from .decorators import AvatarValidatorDecorator, ProfileValidatorDecorator

    match kind:
        case "user":
            return get_validator("user")
        case "profile":
            return ProfileValidatorDecorator(get_validator("user"), **options)
        case "avatar":
            return AvatarValidatorDecorator(get_validator("user"), **options)
    raise ValueError(f"Unknown validator type: {kind}")


def _auto_register() -> None:
    """Auto-register entity validators on import."""
    from .academic_period import AcademicPeriodValidator
    from .career import CareerValidator
    from .category import CategoryValidator
    from .comment import CommentValidator
    from .course import CourseValidator
    from .faculty import FacultyValidator
    from .favorite import FavoriteValidator
    from .rating import RatingValidator
    from .report import ReportValidator
    from .resource import ResourceValidator
    from .user import UserValidator

    for validator_cls in (AcademicPeriodValidator, CareerValidator, CategoryValidator, CommentValidator,
                          CourseValidator, FacultyValidator, FavoriteValidator, RatingValidator,
                          ReportValidator, ResourceValidator, UserValidator):
        register(validator_cls())


_auto_register()
