"""Base class for prompt-driven text agents."""

import logging
from abc import ABC, abstractmethod
from typing import Generic, Optional, Protocol, TypeVar

logger = logging.getLogger(__name__)

InputT = TypeVar("InputT")
OutputT = TypeVar("OutputT")


class TextClient(Protocol):
    """Anything that turns a prompt into text (GeminiClient, AnthropicClient)."""

    @property
    def model(self) -> str:
        ...

    def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: Optional[str] = None,
        temperature: float = 0.7,
    ) -> str:
        ...


class BaseAgent(ABC, Generic[InputT, OutputT]):
    """An agent sends its own system prompt along with every request.

    The text backend is injected, so the same agent runs on Gemini, Claude
    or a stub in tests.
    """

    def __init__(self, client: TextClient) -> None:
        self._client = client
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    @property
    @abstractmethod
    def name(self) -> str:
        ...

    @property
    @abstractmethod
    def system_prompt(self) -> str:
        ...

    @property
    def model(self) -> str:
        return self._client.model

    @abstractmethod
    def run(self, input_data: InputT) -> OutputT:
        ...

    def _create_message(self, prompt: str, max_tokens: int = 4096, temperature: float = 0.7) -> str:
        """Send `prompt` with this agent's system prompt and return the reply text."""
        self._logger.debug(f"Prompting {self.model} ({len(prompt)} characters)")
        response = self._client.create_message(
            prompt=prompt,
            max_tokens=max_tokens,
            system=self.system_prompt,
            temperature=temperature,
        )
        self._logger.debug(f"Reply of {len(response)} characters")
        return response
