import os
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

# main.py loads settings on import
os.environ.setdefault("SUPABASE_URL", "https://project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "anon-key")
os.environ.setdefault("GEMINI_API_KEY", "gemini-key")

from finassist.config import Settings  # noqa: E402
from finassist.dependencies import get_chatbot_service, get_identity_client, get_settings  # noqa: E402
from finassist.services.chatbot import ChatbotService  # noqa: E402
from finassist.services.identity import IdentityClient  # noqa: E402
from main import app  # noqa: E402

TEST_SETTINGS = Settings(
    supabase_url="https://project.supabase.co",
    supabase_anon_key="anon-key",
    gemini_api_key="gemini-key",
    gemini_model="gemini-2.5-flash",
)

MOCK_USER = {"id": "user-123", "email": "test@example.com", "user_metadata": {"name": "TestUser"}}
AUTH_HEADERS = {"Authorization": "Bearer valid-token"}


@pytest.fixture
def identity():
    client = AsyncMock(spec=IdentityClient)
    client.get_user.return_value = MOCK_USER
    return client


@pytest.fixture
def model():
    # Stand-in for genai.GenerativeModel
    mock_model = MagicMock()
    mock_model.generate_content_async = AsyncMock()
    mock_model.generate_content_async.return_value.text = '{"message": "Hi", "insights": ["a", "b", "c"]}'
    return mock_model


@pytest.fixture
def chatbot_service(model):
    return ChatbotService(model, TEST_SETTINGS.gemini_model)


@pytest.fixture
async def client(identity, chatbot_service):
    app.dependency_overrides[get_settings] = lambda: TEST_SETTINGS
    app.dependency_overrides[get_identity_client] = lambda: identity
    app.dependency_overrides[get_chatbot_service] = lambda: chatbot_service
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
