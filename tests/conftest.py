"""Shared test fixtures for the MediBot test suite."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Set fake credentials BEFORE collection so config.py imports cleanly."""
    os.environ.setdefault("WIT_TOKEN", "test-wit-token-123")
    os.environ.setdefault("GEMINI_API_KEY", "test-gemini-key-456")


@pytest.fixture
def wit_payload():
    """Factory fixture for raw Wit.ai ``/message`` responses."""

    def _make(
        intent: str | None = None,
        confidence: float = 0.9,
        entities: dict[str, str] | None = None,
    ):
        payload: dict = {"text": "", "intents": [], "entities": {}, "traits": {}}
        if intent:
            payload["intents"].append(
                {"id": "1", "name": intent, "confidence": confidence},
            )
        for key, value in (entities or {}).items():
            payload["entities"][key] = [
                {"body": value, "confidence": 0.95, "value": value},
            ]
        return payload

    return _make


@pytest.fixture
def mock_http_response():
    """Factory fixture for mock httpx responses."""

    def _make(data, status_code: int = 200, reason: str = "OK"):
        mock = MagicMock()
        mock.status_code = status_code
        mock.reason_phrase = reason
        mock.json.return_value = data
        mock.text = str(data)
        return mock

    return _make
