from dataclasses import dataclass, field
from typing import Any, Literal, Protocol

ResponseStatus = Literal["success", "error"]


@dataclass(frozen=True)
class RouterResponse:
    """Outcome of one request to the LLM gateway.

    ``data`` holds the normalized ``{"flashcards": [...]}`` payload on success.
    ``error`` holds a human-readable message on failure.
    """

    status: ResponseStatus
    data: dict[str, Any] = field(default_factory=dict)
    error: str | None = None

    @classmethod
    def success(cls, data: dict[str, Any]) -> "RouterResponse":
        return cls(status="success", data=data)

    @classmethod
    def failure(cls, error: str) -> "RouterResponse":
        return cls(status="error", error=error)

    @property
    def is_success(self) -> bool:
        return self.status == "success"


class LLMClientProtocol(Protocol):
    @property
    def model_name(self) -> str: ...

    async def send_message(self, content: str) -> RouterResponse: ...
