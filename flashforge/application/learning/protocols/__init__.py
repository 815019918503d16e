"""Protocols the learning use cases depend on."""

from flashforge.application.learning.protocols.flashcard_repository import (
    FlashcardRepositoryProtocol,
)
from flashforge.application.learning.protocols.generation_repository import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from flashforge.application.learning.protocols.llm_client import (
    LLMClientProtocol,
    RouterResponse,
)

__all__ = [
    "FlashcardRepositoryProtocol",
    "GenerationErrorLogRepositoryProtocol",
    "GenerationRepositoryProtocol",
    "LLMClientProtocol",
    "RouterResponse",
]
