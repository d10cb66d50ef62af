"""Fixtures for API tests."""

from unittest.mock import AsyncMock

import pytest
from falcon.testing import TestClient

from artdrill.infrastructure.auth.keycloak_provider import OIDCUser
from artdrill.interfaces.api.app import create_app

from tests.conftest import FakeDocumentStore

VALID_TOKEN = "valid-token"


@pytest.fixture
def keycloak_provider():
    """AsyncMock KeycloakProvider - accepts VALID_TOKEN as user u1."""

    async def _decode(token: str) -> OIDCUser | None:
        if token == VALID_TOKEN:
            return OIDCUser(user_id="u1", email="u1@example.com", username="ada", realm_roles=[])
        return None

    mock = AsyncMock()
    mock.decode_token = AsyncMock(side_effect=_decode)
    return mock


@pytest.fixture
def app(store: FakeDocumentStore, mock_chat_provider, keycloak_provider):
    """Falcon ASGI app over the in-memory store, batch size 2."""
    return create_app(
        store,
        mock_chat_provider,
        keycloak_provider=keycloak_provider,
        cors_origins=["http://localhost:3000"],
        purge_batch_size=2,
        chat_model="gemini-2.0-flash",
    )


@pytest.fixture
def client(app) -> TestClient:
    """Falcon ASGI test client."""
    return TestClient(app)
