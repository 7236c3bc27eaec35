"""Text entry and video settings."""

import logging
from typing import Any, Dict, Optional

from ...errors import ValidationError
from ...models import AspectRatio, ProjectStatus, clamp_duration
from ..context import WizardContext
from .base import StepPanel

logger = logging.getLogger(__name__)

MIN_TEXT_LENGTH = 10

EXAMPLE_TEXTS = [
    "Welcome to our innovative platform that transforms your ideas into stunning videos. "
    "Our advanced AI technology analyzes your content and creates professional-quality videos in minutes.",
    "Imagine a world where technology seamlessly integrates with human creativity. "
    "This is the future we are building - a place where artificial intelligence empowers "
    "storytellers to bring their visions to life.",
    "The art of storytelling has evolved through the ages, from cave paintings to digital media. "
    "Today, we stand at the threshold of a new era where AI becomes the brush and creativity becomes limitless.",
]


class TextInputPanel(StepPanel):
    """Collects the source text and the video settings.

    Edits stay local to the panel until the user advances.
    """

    step_id = "text-input"

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        project = self.project
        self.text = project.text
        self.duration = project.video_duration
        self.generate_image = project.generate_image
        self.aspect_ratio = project.video_aspect_ratio

    def set_text(self, text: str) -> None:
        self.text = text

    def set_duration(self, value: Any) -> int:
        self.duration = clamp_duration(value)
        return self.duration

    def set_generate_image(self, enabled: bool) -> None:
        self.generate_image = bool(enabled)

    def set_aspect_ratio(self, ratio: str) -> None:
        self.aspect_ratio = AspectRatio(ratio)

    def use_example(self, index: int) -> str:
        self.text = EXAMPLE_TEXTS[index]
        return self.text

    @property
    def character_count(self) -> int:
        return len(self.text)

    @property
    def status_hint(self) -> str:
        return "Ready to proceed" if self.guard() else f"Minimum {MIN_TEXT_LENGTH} characters"

    def guard(self) -> bool:
        return bool(self.text.strip()) and len(self.text) >= MIN_TEXT_LENGTH

    def guard_error(self) -> ValidationError:
        if not self.text.strip():
            return ValidationError("Please input some text to convert into a video.", title="Text Required")
        return ValidationError(
            f"Please provide at least {MIN_TEXT_LENGTH} characters for better video generation.",
            title="Text Too Short",
        )

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        return ProjectStatus.PROCESSING

    def pending_changes(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "video_duration": self.duration,
            "generate_image": self.generate_image,
            "video_aspect_ratio": self.aspect_ratio,
        }

    def commit_and_advance(self) -> bool:
        moved = super().commit_and_advance()
        if moved:
            self.ctx.notifier.notify("Text Saved", "Your text has been saved. Proceeding to processing...")
        return moved
