"""Tests for application wiring: health check, authentication and feature gating."""

import jwt
import pytest
from fastapi import status
from fastapi.testclient import TestClient

from flashforge.config import get_settings
from tests.conftest import SOURCE_TEXT_SAMPLE, TEST_USER_ID, FakeLLMClient, make_token


def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == status.HTTP_200_OK
    assert response.json() == {"status": "healthy", "version": get_settings().VERSION}


class TestAuthentication:
    """Access tokens issued by the identity provider."""

    def test_missing_token_is_rejected(self, client: TestClient) -> None:
        response = client.get("/api/v1/flashcards", headers={"Authorization": ""})

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_signed_with_other_secret_is_rejected(self, client: TestClient) -> None:
        token = jwt.encode(
            {"sub": TEST_USER_ID}, "another-secret-key-of-sufficient-length", algorithm="HS256"
        )

        response = client.get(
            "/api/v1/flashcards", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_refresh_token_is_rejected(self, client: TestClient) -> None:
        token = make_token(TEST_USER_ID, type="refresh")

        response = client.get(
            "/api/v1/flashcards", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_without_subject_is_rejected(self, client: TestClient) -> None:
        token = make_token("")

        response = client.get(
            "/api/v1/flashcards", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_valid_token_is_accepted(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/flashcards",
            headers={"Authorization": f"Bearer {make_token(TEST_USER_ID)}"},
        )

        assert response.status_code == status.HTTP_200_OK


class TestAIDisabled:
    """Behaviour when no LLM gateway key is configured."""

    @pytest.fixture(autouse=True)
    def disable_ai(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(get_settings(), "OPENROUTER_API_KEY", None)

    def test_generation_is_gone(self, client: TestClient, fake_llm_client: FakeLLMClient) -> None:
        response = client.post("/api/v1/generations", json={"source_text": SOURCE_TEXT_SAMPLE})

        assert response.status_code == status.HTTP_410_GONE
        assert fake_llm_client.messages == []

    def test_history_stays_available(self, client: TestClient) -> None:
        response = client.get("/api/v1/generations")

        assert response.status_code == status.HTTP_200_OK
