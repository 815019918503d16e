"""Pytest configuration and fixtures."""

import os

# Settings are read once and cached, so the test environment must be in place
# before any flashforge module is imported.
os.environ.update(
    {
        "ENVIRONMENT": "test",
        "DATABASE_URL": "sqlite:///:memory:",
        "SECRET_KEY": "test-secret-key-with-enough-length-for-hs256",
        "OPENROUTER_API_KEY": "test-openrouter-key",
        "GENERATION_RATE_LIMIT": "1000/minute",
    }
)

from collections.abc import Generator  # noqa: E402
from typing import Any  # noqa: E402

import jwt  # noqa: E402
import pytest  # noqa: E402
from dependency_injector import providers  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from flashforge import models  # noqa: E402
from flashforge.application.learning.protocols.llm_client import RouterResponse  # noqa: E402
from flashforge.config import get_settings  # noqa: E402
from flashforge.core import container  # noqa: E402
from flashforge.database import Base, create_database_engine, get_db  # noqa: E402
from flashforge.main import app  # noqa: E402

TEST_USER_ID = "11111111-1111-1111-1111-111111111111"
OTHER_USER_ID = "22222222-2222-2222-2222-222222222222"

SOURCE_TEXT_SAMPLE = (
    "Photosynthesis is the process used by plants, algae and certain bacteria to turn "
    "light energy into chemical energy stored in glucose. "
) * 12

# Test database URL (in-memory SQLite shared across connections)
TEST_DATABASE_URL = "sqlite:///:memory:"

test_engine = create_database_engine(TEST_DATABASE_URL)

TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)


def make_token(user_id: str, **claims: Any) -> str:
    """Sign an access token the way the identity provider does."""
    settings = get_settings()
    payload = {"sub": user_id, "role": "authenticated", **claims}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def auth_headers(user_id: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token(user_id)}"}


class FakeLLMClient:
    """Stands in for the OpenRouter client; returns a canned response."""

    model_name = "test/fake-model"

    def __init__(self, response: RouterResponse | None = None) -> None:
        self.response = response or RouterResponse.success(
            {
                "flashcards": [
                    {"front": "What is photosynthesis?", "back": "Turning light into energy"},
                    {"front": "Where does it happen?", "back": "In the chloroplasts"},
                ]
            }
        )
        self.messages: list[str] = []

    async def send_message(self, content: str) -> RouterResponse:
        self.messages.append(content)
        return self.response


@pytest.fixture
def db_session() -> Generator[Session, None, None]:
    """Create a fresh database session for each test."""
    Base.metadata.create_all(bind=test_engine)

    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=test_engine)


@pytest.fixture
def fake_llm_client() -> Generator[FakeLLMClient, None, None]:
    fake = FakeLLMClient()
    container.llm_client.override(providers.Object(fake))
    yield fake
    container.llm_client.reset_override()


@pytest.fixture
def client(
    db_session: Session, fake_llm_client: FakeLLMClient
) -> Generator[TestClient, Any, None]:
    """Create a test client authenticated as TEST_USER_ID."""

    def override_get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app, headers=auth_headers(TEST_USER_ID)) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def test_generation(db_session: Session) -> models.Generation:
    return create_test_generation(db_session, TEST_USER_ID)


def create_test_generation(
    db_session: Session, user_id: str, generated_count: int = 2
) -> models.Generation:
    generation = models.Generation(
        user_id=user_id,
        model="test/fake-model",
        source_text_length=1500,
        source_text_hash="a" * 64,
        generated_count=generated_count,
        generation_duration=1.5,
    )
    db_session.add(generation)
    db_session.commit()
    db_session.refresh(generation)
    return generation


def create_test_flashcard(
    db_session: Session,
    user_id: str,
    front: str = "What is the capital of France?",
    back: str = "Paris",
    source: str = "manual",
    generated_id: int | None = None,
) -> models.Flashcard:
    flashcard = models.Flashcard(
        user_id=user_id,
        front=front,
        back=back,
        source=source,
        generated_id=generated_id,
    )
    db_session.add(flashcard)
    db_session.commit()
    db_session.refresh(flashcard)
    return flashcard
