"""Tests for the FastAPI endpoints."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from medibot.server import app


@pytest.fixture
def mock_bot():
    """Create a mock ChatBot and attach it to app state (mirrors the lifespan)."""
    bot = MagicMock()
    bot.respond.return_value = "Hangi hastane için randevu almak istiyorsunuz?"
    app.state.bot = bot
    yield bot
    app.state.bot = None


@pytest.fixture
def client(mock_bot):
    return TestClient(app)


class TestHealthEndpoint:
    def test_health_returns_ok(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok", "service": "medibot"}


class TestChatEndpoint:
    def test_chat_returns_reply(self, client, mock_bot):
        response = client.post("/chat", json={"message": "randevu almak istiyorum"})
        assert response.status_code == 200
        assert response.json() == {"reply": "Hangi hastane için randevu almak istiyorsunuz?"}

    def test_chat_uses_default_session_when_omitted(self, client, mock_bot):
        client.post("/chat", json={"message": "merhaba"})
        mock_bot.respond.assert_called_once_with("merhaba", "default")

    def test_chat_passes_session_id(self, client, mock_bot):
        client.post("/chat", json={"message": "merhaba", "session_id": "user-42"})
        mock_bot.respond.assert_called_once_with("merhaba", "user-42")

    def test_missing_message_returns_400(self, client, mock_bot):
        response = client.post("/chat", json={})
        assert response.status_code == 400
        assert response.json() == {"error": "message alanı zorunludur"}
        mock_bot.respond.assert_not_called()

    def test_empty_message_returns_400(self, client, mock_bot):
        response = client.post("/chat", json={"message": ""})
        assert response.status_code == 400
        mock_bot.respond.assert_not_called()

    def test_whitespace_message_is_processed(self, client, mock_bot):
        response = client.post("/chat", json={"message": "   "})
        assert response.status_code == 200
        mock_bot.respond.assert_called_once_with("   ", "default")

    def test_long_message_is_accepted(self, client, mock_bot):
        message = "randevu " * 500
        response = client.post("/chat", json={"message": message})
        assert response.status_code == 200
        mock_bot.respond.assert_called_once_with(message, "default")

    def test_missing_body_returns_400(self, client):
        response = client.post("/chat")
        assert response.status_code == 400
        assert "error" in response.json()

    def test_non_string_message_returns_400(self, client):
        response = client.post("/chat", json={"message": ["a", "b"]})
        assert response.status_code == 400

    def test_bot_error_returns_500_without_leaking(self, client, mock_bot):
        mock_bot.respond.side_effect = RuntimeError("Wit.ai exploded")
        response = client.post("/chat", json={"message": "merhaba"})
        assert response.status_code == 500
        assert response.json() == {"error": "Sunucu hatası"}

    def test_response_includes_request_id_header(self, client):
        response = client.post("/chat", json={"message": "merhaba"})
        assert "X-Request-ID" in response.headers

    def test_client_supplied_request_id_is_echoed(self, client):
        response = client.post(
            "/chat",
            json={"message": "merhaba"},
            headers={"X-Request-ID": "trace-123"},
        )
        assert response.headers["X-Request-ID"] == "trace-123"


class TestBotNotReady:
    def test_returns_503_when_bot_not_initialised(self):
        with patch("medibot.server.create_chatbot", return_value=MagicMock()):
            with TestClient(app) as tc:
                app.state.bot = None
                response = tc.post("/chat", json={"message": "merhaba"})
        assert response.status_code == 503
        assert "error" in response.json()


class TestLifespan:
    def test_lifespan_builds_and_closes_bot(self):
        bot = MagicMock()
        with patch("medibot.server.create_chatbot", return_value=bot):
            with TestClient(app):
                assert app.state.bot is bot
        bot.close.assert_called_once()
        app.state.bot = None


class TestRootEndpoint:
    def test_root_returns_service_info(self, client):
        response = client.get("/")
        assert response.status_code == 200
        assert response.json()["service"] == "MediBot"
