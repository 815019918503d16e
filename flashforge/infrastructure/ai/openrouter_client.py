"""Async client for the OpenRouter chat-completions API."""

import asyncio
from collections.abc import Awaitable, Callable
from functools import lru_cache
from types import TracebackType
from typing import Any

import httpx
import structlog
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from flashforge.application.learning.protocols.llm_client import RouterResponse
from flashforge.config import Settings, get_settings
from flashforge.exceptions import ServiceUnavailableError, UpstreamError
from flashforge.infrastructure.ai.prompts import (
    FLASHCARD_SYSTEM_MESSAGE,
    FLASHCARDS_RESPONSE_FORMAT,
)
from flashforge.infrastructure.ai.response_normalizer import (
    extract_message_content,
    normalize_flashcards,
    parse_json_content,
)
from flashforge.infrastructure.ai.types import (
    ConfigOptions,
    Message,
    ResponseFormat,
    RetryOptions,
)

logger = structlog.get_logger(__name__)

DEFAULT_API_URL = "https://openrouter.ai/api/v1/chat/completions"
DEFAULT_MODEL = "openai/gpt-4o-mini"
DEFAULT_SYSTEM_MESSAGE = "You are a helpful assistant."

SCHEMA_ERROR_MARKERS = ("additionalProperties", "response_format", "json_schema")


class GatewayResponseError(UpstreamError):
    """The gateway answered with a non-2xx status."""

    def __init__(self, http_status: int, message: str) -> None:
        self.http_status = http_status
        super().__init__(message)


def _is_schema_compatibility_error(message: str) -> bool:
    return any(marker in message for marker in SCHEMA_ERROR_MARKERS)


def _log_retry(retry_state: RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    logger.warning(
        "openrouter_request_retry",
        attempt=retry_state.attempt_number,
        wait_seconds=retry_state.next_action.sleep if retry_state.next_action else None,
        error=str(exception),
    )


class OpenRouterClient:
    """HTTP client for OpenRouter chat completions.

    Retries transport failures and non-2xx answers with exponential backoff,
    and turns every outcome into a RouterResponse.
    """

    def __init__(
        self,
        api_key: str,
        *,
        api_url: str = DEFAULT_API_URL,
        model: str = DEFAULT_MODEL,
        temperature: float = 0.7,
        max_tokens: int = 1000,
        system_message: str = DEFAULT_SYSTEM_MESSAGE,
        response_format: ResponseFormat | None = None,
        retry_options: RetryOptions | None = None,
        referer: str | None = None,
        title: str | None = None,
        request_timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ) -> None:
        if not api_key or not api_key.strip():
            raise ValueError("OpenRouter API key is required")
        self._api_key = api_key.strip()
        self.api_url = api_url
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.system_message = system_message
        self.response_format = response_format
        self.retry_options = retry_options or RetryOptions()
        self.referer = referer
        self.title = title
        self._client = httpx.AsyncClient(timeout=request_timeout, transport=transport)
        self._sleep = sleep

    @property
    def model_name(self) -> str:
        return self.model

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()

    async def __aenter__(self) -> "OpenRouterClient":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    def configure(self, options: ConfigOptions) -> None:
        """Apply the fields set in ``options``, leaving the others unchanged."""
        if options.model is not None:
            self.model = options.model
        if options.temperature is not None:
            self.temperature = options.temperature
        if options.max_tokens is not None:
            self.max_tokens = options.max_tokens
        if options.system_message is not None:
            self.system_message = options.system_message
        if options.response_format is not None:
            self.response_format = options.response_format
        if options.retry_options is not None:
            self.retry_options = options.retry_options

    async def send_message(self, content: str) -> RouterResponse:
        """
        Send one user message and return the normalized flashcards.

        Never raises: every failure, including exhausted retries, comes back
        as a RouterResponse with status ``error``.
        """
        try:
            payload = self._build_request_payload(content)
            body = await self._send_request_with_retry(payload)
        except Exception as e:
            logger.error("openrouter_request_failed", model=self.model, error=str(e))
            return RouterResponse.failure(str(e))
        return self._handle_response(body)

    def _build_request_payload(self, content: str) -> dict[str, Any]:
        messages = [
            Message(role="system", content=self.system_message),
            Message(role="user", content=content),
        ]
        payload: dict[str, Any] = {
            "model": self.model,
            "messages": [message.model_dump() for message in messages],
            "temperature": self.temperature,
            "max_tokens": self.max_tokens,
        }
        if self.response_format is not None:
            payload["response_format"] = self.response_format.model_dump(exclude_none=True)
        return payload

    def _headers(self) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Content-Type": "application/json",
        }
        if self.referer:
            headers["HTTP-Referer"] = self.referer
        if self.title:
            headers["X-Title"] = self.title
        return headers

    async def _send_request_with_retry(self, payload: dict[str, Any]) -> Any:
        """
        Post ``payload`` with retries.

        Raises:
            GatewayResponseError: If the last attempt got a non-2xx answer
            httpx.HTTPError: If the last attempt failed at the transport level
        """
        options = self.retry_options
        retrying = AsyncRetrying(
            stop=stop_after_attempt(options.max_retries),
            wait=wait_exponential(multiplier=options.initial_delay, max=options.max_delay),
            retry=retry_if_exception_type((GatewayResponseError, httpx.HTTPError)),
            before_sleep=_log_retry,
            sleep=self._sleep,
            reraise=True,
        )
        return await retrying(self._send_request, payload)

    async def _send_request(self, payload: dict[str, Any]) -> Any:
        response = await self._client.post(self.api_url, json=payload, headers=self._headers())
        if response.is_success:
            return self._decode_body(response)

        error_message = self._extract_error_message(response)
        if "response_format" in payload and _is_schema_compatibility_error(error_message):
            logger.info(
                "openrouter_response_format_rejected",
                model=self.model,
                error=error_message,
            )
            fallback_payload = {k: v for k, v in payload.items() if k != "response_format"}
            response = await self._client.post(
                self.api_url, json=fallback_payload, headers=self._headers()
            )
            if response.is_success:
                return self._decode_body(response)
            error_message = self._extract_error_message(response)

        raise GatewayResponseError(response.status_code, error_message)

    @staticmethod
    def _decode_body(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError("LLM gateway returned a body that is not JSON") from e

    @staticmethod
    def _extract_error_message(response: httpx.Response) -> str:
        fallback = f"LLM gateway request failed with HTTP {response.status_code}"
        try:
            body = response.json()
        except ValueError:
            return fallback
        if isinstance(body, dict):
            error = body.get("error")
            if isinstance(error, dict) and error.get("message"):
                return f"{fallback}: {error['message']}"
            if isinstance(error, str) and error:
                return f"{fallback}: {error}"
        return fallback

    @staticmethod
    def _handle_response(body: Any) -> RouterResponse:
        if isinstance(body, dict) and body.get("error"):
            error = body["error"]
            message = error.get("message") if isinstance(error, dict) else str(error)
            return RouterResponse.failure(f"LLM gateway error: {message}")

        content = extract_message_content(body)
        if content is None:
            return RouterResponse.failure("LLM response does not contain message content")

        try:
            parsed = parse_json_content(content)
        except ValueError as e:
            return RouterResponse.failure(str(e))

        normalized = normalize_flashcards(parsed)
        if normalized is None:
            logger.warning("openrouter_unrecognized_response_shape", content=content[:500])
            return RouterResponse.failure("LLM response does not contain a list of flashcards")
        return RouterResponse.success(normalized)


def create_openrouter_client(settings: Settings) -> OpenRouterClient:
    """
    Build a client configured for flashcard generation.

    Raises:
        ServiceUnavailableError: If no API key is configured
    """
    if not settings.ai_enabled:
        raise ServiceUnavailableError("AI features are not enabled on this server")
    return OpenRouterClient(
        api_key=settings.OPENROUTER_API_KEY or "",
        api_url=settings.OPENROUTER_API_URL,
        model=settings.AI_MODEL_NAME,
        temperature=settings.AI_TEMPERATURE,
        max_tokens=settings.AI_MAX_TOKENS,
        system_message=FLASHCARD_SYSTEM_MESSAGE,
        response_format=FLASHCARDS_RESPONSE_FORMAT,
        retry_options=RetryOptions(
            max_retries=settings.LLM_MAX_RETRIES,
            initial_delay=settings.LLM_INITIAL_DELAY_SECONDS,
            max_delay=settings.LLM_MAX_DELAY_SECONDS,
        ),
        referer=settings.OPENROUTER_REFERER,
        title=settings.OPENROUTER_TITLE,
        request_timeout=settings.LLM_REQUEST_TIMEOUT_SECONDS,
    )


@lru_cache
def get_openrouter_client() -> OpenRouterClient:
    """Process-wide client, created on first use."""
    return create_openrouter_client(get_settings())


async def close_openrouter_client() -> None:
    if get_openrouter_client.cache_info().currsize:
        await get_openrouter_client().close()
        get_openrouter_client.cache_clear()
