from dataclasses import dataclass

from ..entity import EntityId
from ..value_object import ValueObject


@dataclass(frozen=True)
class UserId(ValueObject):
    """
    Strongly-typed user identifier.

    Users live in the external identity provider, so the id is the opaque
    subject string from its access tokens rather than a local integer key.
    """

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("UserId cannot be empty")


@dataclass(frozen=True)
class FlashcardId(EntityId):
    """Strongly-typed flashcard identifier."""


@dataclass(frozen=True)
class GenerationId(EntityId):
    """Strongly-typed generation attempt identifier."""


@dataclass(frozen=True)
class GenerationErrorLogId(EntityId):
    """Strongly-typed generation error log identifier."""
