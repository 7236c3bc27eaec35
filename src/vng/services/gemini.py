"""Google Gemini text API client (REST)."""

import logging
from typing import Optional

import requests

from ..config import config
from ..errors import RemoteCallError
from .assets import read_json

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models"


class GeminiClient:
    """Client wrapper for Gemini text generation over the REST API."""

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        """Initialize the Gemini client.

        Args:
            api_key: Gemini API key.
            model: Model to use. Defaults to config.gemini_model.
            timeout: Request timeout in seconds.
        """
        if not api_key:
            raise ValueError("Gemini API key not provided. Set GEMINI_API_KEYS env var.")

        self._api_key = api_key
        self._model = model or config.gemini_model
        self._timeout = timeout or config.request_timeout

    @property
    def model(self) -> str:
        """Return the model being used."""
        return self._model

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str:
        """Generate a text response.

        Args:
            prompt: The user prompt to send.
            max_tokens: Maximum tokens in the response.
            system: Optional system instruction.
            temperature: Sampling temperature.

        Returns:
            The concatenated text of the first candidate.

        Raises:
            RemoteCallError: If the request fails or the response has no text.
        """
        body = {
            "contents": [{"role": "user", "parts": [{"text": prompt}]}],
            "generationConfig": {
                "temperature": temperature,
                "maxOutputTokens": max_tokens,
            },
        }
        if system:
            body["systemInstruction"] = {"parts": [{"text": system}]}

        url = f"{GEMINI_API_URL}/{self._model}:generateContent"
        logger.debug(f"Sending request to Gemini ({self._model}), prompt length {len(prompt)}")

        try:
            response = requests.post(
                url,
                params={"key": self._api_key},
                json=body,
                timeout=self._timeout,
            )
        except requests.RequestException as e:
            logger.error(f"Gemini request failed: {e}")
            raise RemoteCallError(f"Gemini request failed: {e}", service="gemini") from e

        if response.status_code != 200:
            error_msg = f"{response.status_code}: {response.text[:500]}"
            logger.error(f"Gemini API error: {error_msg}")
            raise RemoteCallError(
                f"Gemini API error {error_msg}",
                service="gemini",
                status_code=response.status_code,
            )

        data = read_json(response, "gemini")

        feedback = data.get("promptFeedback")
        block_reason = feedback.get("blockReason") if isinstance(feedback, dict) else None
        if block_reason:
            raise RemoteCallError(f"Gemini blocked the prompt: {block_reason}", service="gemini")

        candidates = data.get("candidates")
        if not isinstance(candidates, list) or not candidates:
            raise RemoteCallError("No candidates in Gemini response", service="gemini")

        try:
            parts = candidates[0]["content"]["parts"]
            text = "".join(part.get("text") or "" for part in parts)
        except (KeyError, TypeError, AttributeError) as e:
            raise RemoteCallError(f"Malformed Gemini candidate: {e!r}", service="gemini") from e
        if not text:
            raise RemoteCallError("No text in Gemini response", service="gemini")

        return text
