# ABOUTME: Client for the Gemini generateContent endpoint, plus API-key lookup and storage.
# ABOUTME: Returns the first candidate's text, or None when the reply carries none.

import logging
from typing import Any, Protocol

from shelves.catalog.http import CatalogFetchError, HttpClient
from shelves.config import Settings
from shelves.storage.keys import GEMINI_API_KEY_KEY
from shelves.storage.port import KeyValueStore

logger = logging.getLogger(__name__)

BASE_URL = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "gemini-2.0-flash-exp:generateContent"
)


class GenerationError(Exception):
    """Raised when the text-generation service cannot be reached or rejects a request."""


class TextGenerator(Protocol):
    """Anything that turns a prompt into free text."""

    def generate(
        self, prompt: str, temperature: float = 0.7, max_output_tokens: int = 200
    ) -> str | None: ...


def _candidate_text(data: dict[str, Any]) -> str | None:
    try:
        text = data["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return None
    if not isinstance(text, str) or not text.strip():
        return None
    return text


class GeminiClient:
    """Sends single prompts to Gemini with one generation config per call."""

    def __init__(self, api_key: str, http_client: HttpClient) -> None:
        self._api_key = api_key
        self._http = http_client

    def generate(
        self, prompt: str, temperature: float = 0.7, max_output_tokens: int = 200
    ) -> str | None:
        """Generate text for prompt.

        Returns:
            The reply text, or None if the reply is empty or malformed.

        Raises:
            GenerationError: If the HTTP request fails.
        """
        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_output_tokens,
            },
        }
        try:
            data = self._http.post(BASE_URL, json=body, params={"key": self._api_key})
        except CatalogFetchError as exc:
            raise GenerationError(f"Gemini request failed: {exc}") from exc

        text = _candidate_text(data)
        if text is None:
            logger.warning("Gemini reply had no candidate text")
        return text


def resolve_api_key(settings: Settings, store: KeyValueStore) -> str | None:
    """The API key from the environment, else the one saved in the store."""
    return settings.gemini_api_key or store.get(GEMINI_API_KEY_KEY) or None


def save_api_key(store: KeyValueStore, api_key: str) -> None:
    """Persist api_key for later sessions.

    Raises:
        ValueError: If api_key is blank.
    """
    key = api_key.strip()
    if not key:
        raise ValueError("API key must not be empty")
    store.set(GEMINI_API_KEY_KEY, key)
