"""HTTP client for the Wit.ai message classification API.

Wit.ai docs: https://wit.ai/docs/http/#get__message_link
Requests are authenticated with a server access token passed as a Bearer
token.  Failed calls are not retried; the error aborts the turn.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from medibot.config import REQUEST_TIMEOUT_SECONDS, WIT_API_VERSION, WIT_BASE_URL, WIT_TOKEN
from medibot.nlu import ClassifierResult

logger = logging.getLogger(__name__)


class WitAPIError(Exception):
    """Raised when a Wit.ai call fails or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


class WitClient:
    """Thin wrapper around ``GET /message``."""

    def __init__(
        self,
        token: str | None = None,
        base_url: str | None = None,
        *,
        api_version: str | None = None,
        timeout: float | None = REQUEST_TIMEOUT_SECONDS,
    ):
        self._api_version = api_version or WIT_API_VERSION
        self._client = httpx.Client(
            base_url=base_url or WIT_BASE_URL,
            headers={"Authorization": f"Bearer {token or WIT_TOKEN}"},
            timeout=timeout,
        )

    def _get(self, path: str, params: dict[str, str]) -> dict[str, Any]:
        try:
            response = self._client.get(path, params=params)
        except httpx.HTTPError as exc:
            raise WitAPIError(f"Wit.ai request failed: {exc}") from exc

        if response.status_code >= 400:
            raise WitAPIError(
                f"Wit.ai error {response.status_code} - "
                f"{response.reason_phrase} - {response.text}",
                status_code=response.status_code,
            )
        return response.json()

    def classify(self, text: str) -> ClassifierResult:
        """Send *text* to Wit.ai and return the parsed classification."""
        data = self._get("/message", {"v": self._api_version, "q": text})
        result = ClassifierResult.from_wit(data)
        logger.debug(
            "Wit.ai: intent=%s confidence=%.2f entities=%s",
            result.top_intent_name,
            result.top_intent_confidence,
            sorted(result.entities),
        )
        return result

    def close(self) -> None:
        self._client.close()

