"""Custom exception hierarchy for flashforge application."""

from fastapi import HTTPException
from starlette import status


class FlashforgeError(Exception):
    """Base exception for all flashforge errors."""

    error_code = "UNKNOWN"

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(FlashforgeError):
    """Resource not found error."""

    error_code = "NOT_FOUND"

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class ValidationError(FlashforgeError):
    """Validation error."""

    error_code = "VALIDATION_ERROR"

    def __init__(self, message: str, status_code: int = 400) -> None:
        """Initialize with message and 400 status code."""
        super().__init__(message, status_code=status_code)


class ServiceUnavailableError(FlashforgeError):
    """A feature is switched off on this server."""

    error_code = "SERVICE_UNAVAILABLE"

    def __init__(self, message: str) -> None:
        """Initialize with message and 410 status code."""
        super().__init__(message, status_code=410)


class UpstreamError(FlashforgeError):
    """The LLM gateway failed or answered with something unusable."""

    error_code = "UPSTREAM_ERROR"

    def __init__(self, message: str) -> None:
        """Initialize with message and 502 status code."""
        super().__init__(message, status_code=502)


class UpstreamTimeoutError(UpstreamError):
    """The LLM gateway did not answer within the configured timeout."""

    error_code = "TIMEOUT"

    def __init__(self, timeout_ms: int) -> None:
        """Initialize with the exceeded timeout in milliseconds."""
        self.timeout_ms = timeout_ms
        super().__init__(f"Timeout: no response within {timeout_ms}ms while generating flashcards")
        self.status_code = 504


class PersistenceError(FlashforgeError):
    """A data-store insert or update failed."""

    error_code = "PERSISTENCE_ERROR"

    def __init__(self, message: str) -> None:
        """Initialize with message and 500 status code."""
        super().__init__(message, status_code=500)


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
