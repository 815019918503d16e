"""Use case for AI flashcard generation."""

import asyncio
import time
from typing import Any

import structlog

from flashforge.application.learning.protocols.generation_repository import (
    GenerationErrorLogRepositoryProtocol,
    GenerationRepositoryProtocol,
)
from flashforge.application.learning.protocols.llm_client import LLMClientProtocol
from flashforge.application.learning.use_cases.dtos import FlashcardProposal, GenerationResult
from flashforge.domain.common.value_objects.ids import GenerationId, UserId
from flashforge.domain.learning.entities.flashcard import FlashcardSource
from flashforge.domain.learning.entities.generation import Generation
from flashforge.domain.learning.entities.generation_error_log import GenerationErrorLog
from flashforge.exceptions import UpstreamError, UpstreamTimeoutError
from flashforge.hash_utils import compute_source_text_hash
from flashforge.infrastructure.ai.prompts import build_generation_prompt

logger = structlog.get_logger(__name__)

DEFAULT_GENERATION_TIMEOUT_SECONDS = 60.0


class GenerationUseCase:
    """Turns source text into flashcard proposals and records every attempt."""

    def __init__(
        self,
        generation_repository: GenerationRepositoryProtocol,
        error_log_repository: GenerationErrorLogRepositoryProtocol,
        llm_client: LLMClientProtocol,
        timeout_seconds: float = DEFAULT_GENERATION_TIMEOUT_SECONDS,
    ) -> None:
        """Initialize use case with repository protocols and the LLM client."""
        self.generation_repository = generation_repository
        self.error_log_repository = error_log_repository
        self.llm_client = llm_client
        self.timeout_seconds = timeout_seconds

    @property
    def timeout_ms(self) -> int:
        return int(self.timeout_seconds * 1000)

    async def generate_flashcards(self, source_text: str, user_id: str) -> GenerationResult:
        """
        Generate flashcard proposals from source text.

        The attempt is recorded before the model is called. Proposals are
        returned to the caller and are not saved as flashcards.

        Args:
            source_text: Text to generate flashcards from
            user_id: ID of the user requesting the generation

        Returns:
            GenerationResult with the proposals and the generation id

        Raises:
            PersistenceError: If the generation record cannot be created
            UpstreamTimeoutError: If the model does not answer in time
            UpstreamError: If the model call fails or returns unusable data
        """
        user_id_vo = UserId(user_id)
        source_text_hash = compute_source_text_hash(source_text)
        source_text_length = len(source_text)
        started_at = time.perf_counter()

        generation = self.generation_repository.save(
            Generation.start(
                user_id=user_id_vo,
                model_name=self.llm_client.model_name,
                source_text_length=source_text_length,
                source_text_hash=source_text_hash,
            )
        )
        logger.info(
            "generation_started",
            generation_id=generation.id.value,
            source_text_length=source_text_length,
            model=generation.model_name,
        )

        try:
            proposals = await self._request_proposals(source_text, generation.id)
        except Exception as e:
            logger.error(
                "generation_failed",
                generation_id=generation.id.value,
                error_code=getattr(e, "error_code", "UNKNOWN"),
                error=str(e),
            )
            self._record_error(user_id_vo, source_text_hash, source_text_length, e)
            raise

        duration_seconds = time.perf_counter() - started_at
        self._record_outcome(generation, len(proposals), duration_seconds)

        logger.info(
            "generation_completed",
            generation_id=generation.id.value,
            generated_count=len(proposals),
            duration_seconds=round(duration_seconds, 3),
        )

        return GenerationResult(
            generation_id=generation.id.value,
            flashcards_proposals=proposals,
            generated_count=len(proposals),
        )

    async def _request_proposals(
        self, source_text: str, generation_id: GenerationId
    ) -> list[FlashcardProposal]:
        prompt = build_generation_prompt(source_text)
        try:
            response = await asyncio.wait_for(
                self.llm_client.send_message(prompt), timeout=self.timeout_seconds
            )
        except TimeoutError as e:
            raise UpstreamTimeoutError(self.timeout_ms) from e

        if not response.is_success:
            raise UpstreamError(response.error or "LLM gateway returned an error")

        return self._to_proposals(response.data, generation_id)

    @staticmethod
    def _to_proposals(
        data: dict[str, Any], generation_id: GenerationId
    ) -> list[FlashcardProposal]:
        raw_flashcards = data.get("flashcards")
        if not isinstance(raw_flashcards, list):
            raise UpstreamError("LLM response does not contain a list of flashcards")

        proposals = []
        for item in raw_flashcards:
            if not isinstance(item, dict):
                continue
            front, back = item.get("front"), item.get("back")
            # Entries without usable text on both sides are dropped
            if not isinstance(front, str) or not isinstance(back, str):
                continue
            if not front.strip() or not back.strip():
                continue
            proposals.append(
                FlashcardProposal(
                    front=front.strip(),
                    back=back.strip(),
                    source=FlashcardSource.AI_FULL.value,
                    generated_id=generation_id.value,
                )
            )
        return proposals

    def _record_outcome(
        self, generation: Generation, generated_count: int, duration_seconds: float
    ) -> None:
        try:
            generation.record_outcome(generated_count, duration_seconds)
            self.generation_repository.save(generation)
        except Exception as e:
            logger.warning(
                "generation_outcome_not_recorded",
                generation_id=generation.id.value,
                error=str(e),
            )

    def _record_error(
        self,
        user_id: UserId,
        source_text_hash: str,
        source_text_length: int,
        error: Exception,
    ) -> None:
        try:
            self.error_log_repository.save(
                GenerationErrorLog.create(
                    user_id=user_id,
                    error_message=str(error),
                    error_code=getattr(error, "error_code", "UNKNOWN"),
                    source_text_hash=source_text_hash,
                    source_text_length=source_text_length,
                )
            )
        except Exception as e:
            logger.warning("generation_error_log_not_recorded", error=str(e))
