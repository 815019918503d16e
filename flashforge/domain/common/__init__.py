"""
Domain common module.

Contains base classes for domain modeling:
- ValueObject: frozen single-value wrapper, the base of UserId and EntityId
- Entity: Objects with identity and lifecycle
"""

from .entity import Entity, EntityId
from .exceptions import (
    AuthorizationError,
    BusinessRuleViolationError,
    DomainError,
    ValidationError,
)
from .value_object import ValueObject

__all__ = [
    "AuthorizationError",
    "BusinessRuleViolationError",
    "DomainError",
    "Entity",
    "EntityId",
    "ValidationError",
    "ValueObject",
]
