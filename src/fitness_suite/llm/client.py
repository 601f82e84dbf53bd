"""
Gemini generateContent client.

Given a prompt and an optional response schema, returns the model's text.
With a schema, the text is JSON matching it (the caller decodes it).

All failures raise a subclass of LLMError:

- MissingCredentialError: no API key configured
- LLMTransportError: network error, timeout, or non-2xx status
- InvalidResponseError: the body is not JSON or carries no text
"""

from __future__ import annotations

import logging
import os
from typing import Any

import httpx

from ..core.config_loader import LLMSettings

logger = logging.getLogger(__name__)


class LLMError(Exception):
    """Base class for LLM call failures."""

    pass


class MissingCredentialError(LLMError):
    pass


class LLMTransportError(LLMError):
    pass


class InvalidResponseError(LLMError):
    pass


def build_payload(prompt: str, schema: dict[str, Any] | None = None) -> dict[str, Any]:
    """Request body for generateContent."""
    payload: dict[str, Any] = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
    if schema is not None:
        payload["generationConfig"] = {
            "responseMimeType": "application/json",
            "responseSchema": schema,
        }
    return payload


def extract_text(body: Any) -> str:
    """
    Pull ``candidates[0].content.parts[0].text`` out of a response body.

    Raises:
        InvalidResponseError: If any level is missing or the text is not a string
    """
    try:
        text = body["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError) as e:
        raise InvalidResponseError("Invalid API response structure.") from e
    if not isinstance(text, str) or not text:
        raise InvalidResponseError("Invalid API response structure.")
    return text


class GeminiClient:
    """
    Async client for the Gemini REST API.

    Args:
        api_key: API key; None or "" makes every call raise MissingCredentialError
        model: Model name, e.g. "gemini-2.0-flash"
        base_url: API root up to the version segment
        timeout: Request timeout in seconds
        http_client: Optional shared httpx.AsyncClient (tests inject one with
            a MockTransport); when omitted a client is created per call
    """

    def __init__(
        self,
        api_key: str | None,
        model: str,
        base_url: str,
        timeout: float,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._http_client = http_client

    @classmethod
    def from_settings(cls, settings: LLMSettings, http_client: httpx.AsyncClient | None = None) -> "GeminiClient":
        """Build a client reading the API key from the configured environment variable."""
        return cls(
            api_key=os.environ.get(settings.api_key_env),
            model=settings.model,
            base_url=settings.base_url,
            timeout=settings.timeout_seconds,
            http_client=http_client,
        )

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def generate(self, prompt: str, schema: dict[str, Any] | None = None) -> str:
        """
        Send ``prompt`` and return the response text.

        Raises:
            MissingCredentialError: If no API key is configured
            LLMTransportError: On connection errors, timeouts, or HTTP errors
            InvalidResponseError: If the response has no usable text
        """
        if not self.api_key:
            raise MissingCredentialError("API key missing: set the Gemini API key environment variable.")

        payload = build_payload(prompt, schema)
        # Key goes in a header, not the URL, so it stays out of httpx request logs.
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        try:
            if self._http_client is not None:
                response = await self._http_client.post(self.endpoint, json=payload, headers=headers, timeout=self.timeout)
            else:
                async with httpx.AsyncClient(timeout=self.timeout) as client:
                    response = await client.post(self.endpoint, json=payload, headers=headers)
        except httpx.HTTPError as e:
            logger.error("Error calling Gemini API: %s", e)
            raise LLMTransportError(f"API request failed: {e}") from e

        if response.is_error:
            logger.error("Gemini API returned %s", response.status_code)
            raise LLMTransportError(f"API Error: {response.status_code} {response.reason_phrase}")

        try:
            body = response.json()
        except ValueError as e:
            raise InvalidResponseError("API response is not JSON.") from e

        return extract_text(body)
