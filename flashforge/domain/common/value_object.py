"""Immutable single-value wrappers used for identifiers across the domain."""

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ValueObject:
    """
    Frozen wrapper around one primitive ``value``.

    Subclasses redeclare ``value`` with its concrete type and validate it in
    ``__post_init__``. Equality and hashing come from the dataclass, which
    also compares the class, so ``UserId("7")`` never equals a raw ``"7"``.
    """

    value: Any

    def __str__(self) -> str:
        return str(self.value)
