"""API routes for AI flashcard generation."""

from typing import Annotated

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request, status
from slowapi import Limiter
from slowapi.util import get_remote_address

from flashforge.application.common.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Pagination
from flashforge.application.learning.use_cases.generation_history_use_case import (
    GenerationHistoryUseCase,
)
from flashforge.application.learning.use_cases.generation_use_case import GenerationUseCase
from flashforge.config import get_settings
from flashforge.core import container
from flashforge.domain.common.exceptions import DomainError
from flashforge.domain.common.value_objects import UserId
from flashforge.exceptions import FlashforgeError
from flashforge.infrastructure.common.dependencies import require_ai_enabled
from flashforge.infrastructure.common.di import inject_use_case
from flashforge.infrastructure.common.schemas import PaginatedResponse
from flashforge.infrastructure.identity.dependencies import get_current_user
from flashforge.infrastructure.learning.schemas import (
    Generation,
    GenerationCreateRequest,
    GenerationCreateResponse,
)

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/generations", tags=["generations"])
limiter = Limiter(key_func=get_remote_address)
settings = get_settings()


@router.post(
    "",
    response_model=GenerationCreateResponse,
    status_code=status.HTTP_201_CREATED,
)
@limiter.limit(settings.GENERATION_RATE_LIMIT)  # type: ignore[misc]
@require_ai_enabled
async def create_generation(
    request: Request,
    payload: GenerationCreateRequest,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: GenerationUseCase = Depends(inject_use_case(container.generation_use_case)),
) -> GenerationCreateResponse:
    """
    Generate flashcard proposals from source text.

    Proposals are not saved; the client submits the ones it keeps to
    ``POST /flashcards`` with the returned ``generation_id``.

    Raises:
        HTTPException 504: If the model does not answer in time
        HTTPException 502: If the model call fails
        HTTPException 410: If AI features are disabled
    """
    try:
        result = await use_case.generate_flashcards(payload.source_text, current_user.value)
        return GenerationCreateResponse.from_result(result)
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(
            "failed_to_generate_flashcards",
            user_id=current_user.value,
            error=str(e),
            exc_info=True,
        )
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get(
    "",
    response_model=PaginatedResponse[Generation],
    status_code=status.HTTP_200_OK,
)
def list_generations(
    current_user: Annotated[UserId, Depends(get_current_user)],
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    use_case: GenerationHistoryUseCase = Depends(
        inject_use_case(container.generation_history_use_case)
    ),
) -> PaginatedResponse[Generation]:
    """List the current user's generation attempts, newest first."""
    result = use_case.list_generations(current_user.value, Pagination(page=page, limit=limit))
    return PaginatedResponse[Generation].build(
        [Generation.from_entity(generation) for generation in result.items], result
    )


@router.get(
    "/{generation_id}",
    response_model=Generation,
    status_code=status.HTTP_200_OK,
)
def get_generation(
    generation_id: int,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: GenerationHistoryUseCase = Depends(
        inject_use_case(container.generation_history_use_case)
    ),
) -> Generation:
    generation = use_case.get_generation(generation_id, current_user.value)
    return Generation.from_entity(generation)
