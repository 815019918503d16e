"""Bridges FastAPI request dependencies and the flashforge container."""

from collections.abc import Callable
from typing import TypeVar

from dependency_injector.providers import Provider

from flashforge.core import container
from flashforge.database import DatabaseSession

UseCaseT = TypeVar("UseCaseT")


def inject_use_case(provider: Provider[UseCaseT]) -> Callable[[DatabaseSession], UseCaseT]:
    """
    Wrap a use case provider as a FastAPI dependency.

    The repositories behind every use case read ``container.db``, so the
    request's session is bound there only while the use case is built. The
    binding is dropped even when building fails, e.g. when the LLM client
    cannot be created because AI generation is switched off.
    """

    def build_for_request(db: DatabaseSession) -> UseCaseT:
        with container.db.override(db):
            return provider()

    return build_for_request
