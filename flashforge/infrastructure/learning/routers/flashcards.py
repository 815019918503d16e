"""API routes for flashcard management."""

import logging
from typing import Annotated, Literal

from fastapi import APIRouter, Body, Depends, HTTPException, Query, Response, status

from flashforge.application.common.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Pagination
from flashforge.application.learning.use_cases.flashcard_use_case import FlashcardUseCase
from flashforge.core import container
from flashforge.domain.common.exceptions import DomainError
from flashforge.domain.common.value_objects import UserId
from flashforge.exceptions import FlashforgeError
from flashforge.infrastructure.common.di import inject_use_case
from flashforge.infrastructure.common.schemas import PaginatedResponse
from flashforge.infrastructure.identity.dependencies import get_current_user
from flashforge.infrastructure.learning.schemas import (
    AIFlashcardCreate,
    Flashcard,
    FlashcardBatchCreateRequest,
    FlashcardBatchCreateResponse,
    FlashcardResponse,
    FlashcardUpdateRequest,
    ManualFlashcardCreate,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/flashcards", tags=["flashcards"])


def _unexpected_error() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail="An unexpected error occurred. Please try again later.",
    )


@router.post(
    "",
    response_model=FlashcardBatchCreateResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        status.HTTP_207_MULTI_STATUS: {"model": FlashcardBatchCreateResponse},
        status.HTTP_400_BAD_REQUEST: {"model": FlashcardBatchCreateResponse},
    },
)
def create_flashcards(
    payload: FlashcardBatchCreateRequest,
    response: Response,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardBatchCreateResponse:
    """
    Save several flashcards at once.

    Each flashcard is saved independently. Responds with 201 when all were
    saved, 207 when only some were, and 400 when none were.
    """
    try:
        result = use_case.create_flashcards(
            [item.to_command() for item in payload.flashcards], current_user.value
        )
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to save flashcards batch: {e!s}", exc_info=True)
        raise _unexpected_error() from e

    if result.is_full_failure:
        response.status_code = status.HTTP_400_BAD_REQUEST
    elif result.is_partial_success:
        response.status_code = status.HTTP_207_MULTI_STATUS
    return FlashcardBatchCreateResponse.from_result(result)


@router.post(
    "/single",
    response_model=FlashcardResponse,
    status_code=status.HTTP_201_CREATED,
)
def create_flashcard(
    payload: Annotated[
        ManualFlashcardCreate | AIFlashcardCreate, Body(discriminator="source")
    ],
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardResponse:
    """Create a single flashcard."""
    try:
        flashcard = use_case.create_flashcard(payload.to_command(), current_user.value)
        return FlashcardResponse(data=Flashcard.from_entity(flashcard))
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to create flashcard: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.get(
    "",
    response_model=PaginatedResponse[Flashcard],
    status_code=status.HTTP_200_OK,
)
def list_flashcards(
    current_user: Annotated[UserId, Depends(get_current_user)],
    page: int = Query(1, ge=1, description="Page number, starting at 1"),
    limit: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE, description="Items per page"),
    source: Literal["manual", "ai-full", "ai-edited"] | None = Query(
        None, description="Only return flashcards with this source"
    ),
    search: str | None = Query(
        None, max_length=200, description="Case-insensitive text to look for in front or back"
    ),
    sort: Literal["created_at", "-created_at"] = Query(
        "-created_at", description="Sort by creation time; prefix with '-' for newest first"
    ),
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> PaginatedResponse[Flashcard]:
    """List the current user's flashcards."""
    try:
        result = use_case.list_flashcards(
            current_user.value,
            Pagination(page=page, limit=limit),
            source=source,
            search=search,
            sort=sort,
        )
        return PaginatedResponse[Flashcard].build(
            [Flashcard.from_entity(flashcard) for flashcard in result.items], result
        )
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list flashcards: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.get(
    "/{flashcard_id}",
    response_model=FlashcardResponse,
    status_code=status.HTTP_200_OK,
)
def get_flashcard(
    flashcard_id: int,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardResponse:
    try:
        flashcard = use_case.get_flashcard(flashcard_id, current_user.value)
        return FlashcardResponse(data=Flashcard.from_entity(flashcard))
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to get flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.put(
    "/{flashcard_id}",
    response_model=FlashcardResponse,
    status_code=status.HTTP_200_OK,
)
def update_flashcard(
    flashcard_id: int,
    payload: FlashcardUpdateRequest,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> FlashcardResponse:
    """
    Update a flashcard's front, back and/or source.

    Args:
        flashcard_id: ID of the flashcard to update
        payload: Fields to change
        use_case: FlashcardUseCase injected via dependency container

    Returns:
        Updated flashcard

    Raises:
        HTTPException: If flashcard not found or update fails
    """
    try:
        flashcard = use_case.update_flashcard(
            flashcard_id=flashcard_id,
            user_id=current_user.value,
            command=payload.to_command(),
        )
        return FlashcardResponse(data=Flashcard.from_entity(flashcard))
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to update flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e


@router.delete(
    "/{flashcard_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_flashcard(
    flashcard_id: int,
    current_user: Annotated[UserId, Depends(get_current_user)],
    use_case: FlashcardUseCase = Depends(inject_use_case(container.flashcard_use_case)),
) -> Response:
    """Delete a flashcard."""
    try:
        use_case.delete_flashcard(flashcard_id=flashcard_id, user_id=current_user.value)
        return Response(status_code=status.HTTP_204_NO_CONTENT)
    except (FlashforgeError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to delete flashcard {flashcard_id}: {e!s}", exc_info=True)
        raise _unexpected_error() from e
