"""AI agents for text preparation."""

from .base import BaseAgent
from .narration import NarrationAgent

__all__ = ["BaseAgent", "NarrationAgent"]
