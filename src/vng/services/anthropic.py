"""Claude as an alternate text backend."""

import logging
from typing import Any, Dict, Optional

from anthropic import Anthropic, APIError

from ..config import config
from ..errors import RemoteCallError

logger = logging.getLogger(__name__)


class AnthropicClient:
    """Text client over the Anthropic SDK.

    Args:
        api_key: Defaults to ANTHROPIC_API_KEY.
        model: Defaults to config.anthropic_model.
    """

    def __init__(self, api_key: Optional[str] = None, model: Optional[str] = None) -> None:
        self._api_key = api_key or config.anthropic_api_key
        if not self._api_key:
            raise ValueError("Anthropic API key not provided. Set ANTHROPIC_API_KEY env var.")

        # No SDK-level retries
        self._client = Anthropic(api_key=self._api_key, max_retries=0)
        self._model = model or config.anthropic_model

    @property
    def model(self) -> str:
        return self._model

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str:
        """Send one user turn and return the reply text.

        Raises:
            RemoteCallError: If the API call fails or the reply has no text.
        """
        request: Dict[str, Any] = {
            "model": self._model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}],
        }
        if system:
            request["system"] = system

        logger.debug(f"Sending request to Claude ({self._model})")
        try:
            reply = self._client.messages.create(**request)
        except APIError as e:
            logger.error(f"Claude API error: {e}")
            raise RemoteCallError(
                f"Claude API error: {e}",
                service="anthropic",
                status_code=getattr(e, "status_code", None),
            ) from e

        text = "".join(getattr(block, "text", "") for block in reply.content)
        if not text:
            raise RemoteCallError("Claude returned no text", service="anthropic")
        return text
