"""Narration agent: analyzes source text and prepares it for voiceover."""

import json
import logging
from typing import Any, Optional

from ..errors import RemoteCallError
from ..services.base import AnalysisResult, TextAnalyzer
from .base import BaseAgent

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are a script editor preparing text for a narrated video.
Read the user's text, fix grammar and punctuation, and smooth it for being
read aloud. Keep the meaning, language and approximate length.

Output valid JSON only, with no additional text or markdown formatting.
The JSON must be an object with two keys:
  "text": the narration-ready text,
  "summary": one sentence describing the content."""


def extract_json(response: str) -> str:
    """Extract JSON from a response that may contain markdown or other text."""
    # Try to find JSON in code blocks
    if "```json" in response:
        start = response.find("```json") + 7
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()

    if "```" in response:
        start = response.find("```") + 3
        end = response.find("```", start)
        if end > start:
            return response[start:end].strip()

    # Try to find a raw JSON object
    start = response.find("{")
    if start != -1:
        depth = 0
        for i, char in enumerate(response[start:], start):
            if char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return response[start:i + 1]

    return response.strip()


def unwrap_text(text: str) -> str:
    """Return the `content` or `text` value when `text` is a JSON object.

    Plain text is returned unchanged.
    """
    try:
        parsed: Any = json.loads(text)
    except (TypeError, ValueError):
        return text

    if isinstance(parsed, dict):
        for key in ("content", "text"):
            value = parsed.get(key)
            if isinstance(value, str) and value:
                return value
    return text


class NarrationAgent(BaseAgent[str, AnalysisResult], TextAnalyzer):
    """Agent that analyzes source text and returns narration-ready text.

    When the model answers with something other than the expected JSON,
    the answer is kept as a confirmation message and the source text is
    left as it was.
    """

    @property
    def name(self) -> str:
        """Return the agent's name."""
        return "NarrationAgent"

    @property
    def system_prompt(self) -> str:
        """Return the system prompt for text analysis."""
        return SYSTEM_PROMPT

    def analyze(self, text: str) -> AnalysisResult:
        return self.run(text)

    def run(self, input_data: str) -> AnalysisResult:
        """Analyze `input_data`.

        Raises:
            RemoteCallError: If the model call fails.
        """
        self._logger.info(f"Analyzing text ({len(input_data)} characters)")

        prompt = "\n".join([
            "Prepare the following text for narration:",
            "",
            input_data,
        ])

        response = self._create_message(
            prompt=prompt,
            max_tokens=4096,
            temperature=0.3,
        )

        result = self._parse_response(response)
        if result.text:
            self._logger.info(f"Received narration text ({len(result.text)} characters)")
        return result

    def _parse_response(self, response: str) -> AnalysisResult:
        if not response or not response.strip():
            raise RemoteCallError("Empty analysis response", service="text-analysis")

        try:
            data = json.loads(extract_json(response))
        except json.JSONDecodeError as e:
            self._logger.debug(f"Analysis response is not JSON ({e}), treating as confirmation")
            return AnalysisResult(text=None, message=response.strip()[:200])

        if not isinstance(data, dict):
            return AnalysisResult(text=None, message=response.strip()[:200])

        text: Optional[str] = data.get("text")
        if not isinstance(text, str) or not text.strip():
            text = None

        summary = data.get("summary")
        message = summary if isinstance(summary, str) and summary else "Text analyzed successfully"
        return AnalysisResult(text=text.strip() if text else None, message=message)
