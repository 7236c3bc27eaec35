"""Wizard step definitions."""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class StepDefinition:
    """One entry in the wizard's ordered step list."""

    id: str
    title: str
    description: str


WIZARD_STEPS: Tuple[StepDefinition, ...] = (
    StepDefinition("text-input", "Text Input", "Enter your content"),
    StepDefinition("processing", "Processing", "AI analysis"),
    StepDefinition("voice", "Voice", "Generate audio"),
    StepDefinition("image", "Image", "Create visuals"),
    StepDefinition("music", "Music", "Add soundtrack"),
    StepDefinition("video", "Video", "Generate final video"),
    StepDefinition("preview", "Preview", "Download & share"),
)


def step_index(step_id: str, steps: Tuple[StepDefinition, ...] = WIZARD_STEPS) -> Optional[int]:
    """Return the position of `step_id` in `steps`, or None."""
    for i, step in enumerate(steps):
        if step.id == step_id:
            return i
    return None
