"""Entity validators for the academic resource catalogue.

Provides factory/registry pattern for per-entity schemas.
"""
from .registry import create_validator, get_validator, list_validators, register
from .base import EntityValidator
from .decorators import AvatarValidatorDecorator, ProfileValidatorDecorator

__all__ = [
    "create_validator",
    "get_validator",
    "list_validators",
    "register",
    "EntityValidator",
    "AvatarValidatorDecorator",
    "ProfileValidatorDecorator",
]
