"""Request and configuration types for the OpenRouter gateway."""

from typing import Any, Literal

from pydantic import BaseModel, Field


class Message(BaseModel):
    role: Literal["system", "user", "assistant"]
    content: str


class ResponseFormat(BaseModel):
    """Structured-output request, sent as ``response_format`` in the payload."""

    type: Literal["json_schema", "json_object"] = "json_schema"
    json_schema: dict[str, Any] | None = None


class RetryOptions(BaseModel):
    """
    Retry policy for gateway requests.

    Attempt ``n`` waits ``initial_delay * 2 ** (n - 1)`` seconds before the
    next try, capped at ``max_delay``.
    """

    max_retries: int = Field(default=3, ge=1)
    initial_delay: float = Field(default=1.0, ge=0)
    max_delay: float = Field(default=5.0, ge=0)


class ConfigOptions(BaseModel):
    """Partial reconfiguration of a client. Unset fields keep their value."""

    model: str | None = None
    temperature: float | None = Field(default=None, ge=0, le=2)
    max_tokens: int | None = Field(default=None, gt=0)
    system_message: str | None = None
    response_format: ResponseFormat | None = None
    retry_options: RetryOptions | None = None
