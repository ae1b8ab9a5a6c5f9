"""HTTP client for the Gemini ``generateContent`` endpoint.

Unlike the Wit.ai client this one never raises: every failure is mapped to
an apology the user can read, and the details go to the log.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from medibot import prompts
from medibot.config import GEMINI_API_KEY, GEMINI_BASE_URL, GEMINI_MODEL, REQUEST_TIMEOUT_SECONDS

logger = logging.getLogger(__name__)

_INVALID_KEY_MARKER = "API key not valid"


def build_prompt(text: str, hint: str = "") -> str:
    return f"{hint}\n{text}" if hint else text


def _first_candidate_text(data: dict[str, Any]) -> str | None:
    try:
        return data["candidates"][0]["content"]["parts"][0]["text"] or None
    except (KeyError, IndexError, TypeError):
        return None


class GeminiClient:
    def __init__(
        self,
        api_key: str | None = None,
        base_url: str | None = None,
        *,
        model: str | None = None,
        timeout: float | None = REQUEST_TIMEOUT_SECONDS,
        transport: httpx.BaseTransport | None = None,
    ):
        self._model = model or GEMINI_MODEL
        # The key travels in a header so it never appears in logged URLs.
        self._client = httpx.Client(
            base_url=base_url or GEMINI_BASE_URL,
            headers={
                "x-goog-api-key": api_key or GEMINI_API_KEY,
                "Content-Type": "application/json",
            },
            timeout=timeout,
            transport=transport,
        )

    def complete(self, text: str, hint: str = "") -> str:
        """Generate a reply for *text*, optionally preceded by *hint*."""
        body = {"contents": [{"parts": [{"text": build_prompt(text, hint)}]}]}
        try:
            response = self._client.post(
                f"/models/{self._model}:generateContent",
                json=body,
            )
            data = response.json()
        except (httpx.HTTPError, ValueError):
            logger.exception("Could not reach Gemini")
            return prompts.GEMINI_CONNECTION_REPLY

        if not isinstance(data, dict):
            logger.error("Unexpected Gemini payload: %r", data)
            return prompts.NOT_UNDERSTOOD_REPLY

        error = data.get("error")
        if isinstance(error, dict):
            reply = self._map_error(error)
            if reply is not None:
                return reply

        return _first_candidate_text(data) or prompts.NOT_UNDERSTOOD_REPLY

    @staticmethod
    def _map_error(error: dict[str, Any]) -> str | None:
        logger.error("Gemini API error: %s", error)
        code = error.get("code")
        message = error.get("message") or ""
        if code == 429:
            return prompts.GEMINI_QUOTA_REPLY
        if code == 400 and _INVALID_KEY_MARKER in message:
            return prompts.GEMINI_INVALID_KEY_REPLY
        if message:
            return prompts.GEMINI_SERVICE_ERROR_TEMPLATE.format(message=message)
        return None

    def close(self) -> None:
        self._client.close()
