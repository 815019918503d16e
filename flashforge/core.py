from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from flashforge.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from flashforge.application.learning.use_cases.generation_history_use_case import (
    GenerationHistoryUseCase,
)
from flashforge.application.learning.use_cases.generation_use_case import GenerationUseCase
from flashforge.config import get_settings
from flashforge.infrastructure.ai.openrouter_client import get_openrouter_client
from flashforge.infrastructure.learning.repositories.flashcard_repository import (
    FlashcardRepository,
)
from flashforge.infrastructure.learning.repositories.generation_repository import (
    GenerationErrorLogRepository,
    GenerationRepository,
)


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    settings = providers.Callable(get_settings)

    # Repositories
    flashcard_repository = providers.Factory(FlashcardRepository, db=db)
    generation_repository = providers.Factory(GenerationRepository, db=db)
    generation_error_log_repository = providers.Factory(GenerationErrorLogRepository, db=db)

    # External services
    llm_client = providers.Callable(get_openrouter_client)

    # Learning module, application use cases
    flashcard_use_case = providers.Factory(
        FlashcardUseCase,
        flashcard_repository=flashcard_repository,
        generation_repository=generation_repository,
    )
    generation_use_case = providers.Factory(
        GenerationUseCase,
        generation_repository=generation_repository,
        error_log_repository=generation_error_log_repository,
        llm_client=llm_client,
        timeout_seconds=settings.provided.GENERATION_TIMEOUT_SECONDS,
    )
    generation_history_use_case = providers.Factory(
        GenerationHistoryUseCase,
        generation_repository=generation_repository,
    )


container = Container()
