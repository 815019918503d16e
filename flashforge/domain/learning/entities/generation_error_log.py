from dataclasses import dataclass
from datetime import datetime

from flashforge.domain.common.entity import Entity
from flashforge.domain.common.value_objects import GenerationErrorLogId, UserId

MAX_ERROR_MESSAGE_LENGTH = 1000
MAX_ERROR_CODE_LENGTH = 100


@dataclass
class GenerationErrorLog(Entity[GenerationErrorLogId]):
    """Record of a failed generation attempt, kept for auditing."""

    id: GenerationErrorLogId
    user_id: UserId
    error_message: str
    error_code: str
    source_text_hash: str
    source_text_length: int
    created_at: datetime | None = None

    @classmethod
    def create(
        cls,
        user_id: UserId,
        error_message: str,
        error_code: str,
        source_text_hash: str,
        source_text_length: int,
    ) -> "GenerationErrorLog":
        """Create a new error log entry, truncating oversized messages."""
        return cls(
            id=GenerationErrorLogId.generate(),
            user_id=user_id,
            error_message=(error_message or "Unknown error")[:MAX_ERROR_MESSAGE_LENGTH],
            error_code=(error_code or "UNKNOWN")[:MAX_ERROR_CODE_LENGTH],
            source_text_hash=source_text_hash,
            source_text_length=source_text_length,
        )
