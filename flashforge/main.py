"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from flashforge.config import configure_logging, get_settings
from flashforge.database import dispose_engine, initialize_database
from flashforge.domain.common.exceptions import AuthorizationError, DomainError
from flashforge.exceptions import FlashforgeError
from flashforge.infrastructure.ai.openrouter_client import close_openrouter_client
from flashforge.infrastructure.learning.routers import flashcards, generations

settings = get_settings()
configure_logging(settings.ENVIRONMENT)
logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: set up the database and release clients on shutdown."""
    initialize_database(settings)
    logger.info(
        "application_started",
        environment=settings.ENVIRONMENT,
        ai_enabled=settings.ai_enabled,
    )
    yield
    await close_openrouter_client()
    dispose_engine()
    logger.info("application_stopped")


app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    openapi_url=f"{settings.API_V1_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.state.limiter = generations.limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FlashforgeError)
async def flashforge_error_handler(request: Request, exc: FlashforgeError) -> JSONResponse:
    """Map application errors to their HTTP status."""
    if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "request_failed",
            path=request.url.path,
            error_code=exc.error_code,
            error=exc.message,
        )
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


@app.exception_handler(DomainError)
async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map domain rule violations to client errors."""
    if isinstance(exc, AuthorizationError):
        status_code = status.HTTP_403_FORBIDDEN
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    return JSONResponse(status_code=status_code, content={"detail": exc.message})


app.include_router(generations.router, prefix=settings.API_V1_PREFIX)
app.include_router(flashcards.router, prefix=settings.API_V1_PREFIX)


@app.get("/health", tags=["health"])
async def health() -> dict[str, str]:
    return {"status": "healthy", "version": settings.VERSION}
