"""Minimal client for the Gemini ``generateContent`` REST endpoint."""

import json
import logging
from typing import Any, Optional

import requests
from django.conf import settings

logger = logging.getLogger(__name__)

GEMINI_ENDPOINT = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"


class GeminiNotConfigured(Exception):
    """No API key is configured."""


class GeminiError(Exception):
    """The upstream call failed or returned something unusable."""


class GeminiClient:
    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None, timeout: Optional[float] = None):
        self.api_key = api_key if api_key is not None else settings.GEMINI_API_KEY
        self.model = model or settings.GEMINI_MODEL
        self.timeout = timeout or settings.GEMINI_TIMEOUT_SECONDS

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def generate(self, prompt: str, response_schema: Optional[dict[str, Any]] = None) -> str:
        """Send ``prompt`` and return the text of the first candidate.

        With ``response_schema`` the model is asked for JSON matching it.
        """
        if not self.configured:
            raise GeminiNotConfigured("GEMINI_API_KEY is not set")

        body: dict[str, Any] = {"contents": [{"parts": [{"text": prompt}]}]}
        if response_schema is not None:
            body["generationConfig"] = {
                "responseMimeType": "application/json",
                "responseSchema": response_schema,
            }

        try:
            response = requests.post(
                GEMINI_ENDPOINT.format(model=self.model),
                headers={"x-goog-api-key": self.api_key, "Content-Type": "application/json"},
                json=body,
                timeout=self.timeout,
            )
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Gemini request failed: %s", exc)
            raise GeminiError(str(exc)) from exc

        try:
            text = payload["candidates"][0]["content"]["parts"][0]["text"]
        except (KeyError, IndexError, TypeError) as exc:
            raise GeminiError("Empty response from AI") from exc
        if not text:
            raise GeminiError("Empty response from AI")
        return text

    def generate_json(self, prompt: str, response_schema: dict[str, Any]) -> dict[str, Any]:
        text = self.generate(prompt, response_schema=response_schema)
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise GeminiError("AI response was not valid JSON") from exc
        if not isinstance(data, dict):
            raise GeminiError("AI response was not a JSON object")
        return data


__all__ = ["GeminiClient", "GeminiError", "GeminiNotConfigured"]
