"""Video project state model."""

import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Tuple

import yaml
from pydantic import BaseModel, Field

MIN_DURATION = 5
MAX_DURATION = 300
DEFAULT_DURATION = 30


class ProjectStatus(str, Enum):
    """Advisory status label mirroring the wizard step."""
    TEXT_INPUT = "text-input"
    PROCESSING = "processing"
    VOICE_GENERATION = "voice-generation"
    IMAGE_GENERATION = "image-generation"
    MUSIC_UPLOAD = "music-upload"
    VIDEO_GENERATION = "video-generation"
    COMPLETED = "completed"


class VoiceGender(str, Enum):
    """Narrator voice gender."""
    MALE = "male"
    FEMALE = "female"


class AspectRatio(str, Enum):
    """Supported output aspect ratios."""
    LANDSCAPE = "16:9"
    PORTRAIT = "9:16"

    @property
    def resolution(self) -> Tuple[int, int]:
        """Return the (width, height) rendered for this ratio."""
        if self is AspectRatio.PORTRAIT:
            return (1080, 1920)
        return (1920, 1080)


def clamp_duration(value: Any) -> int:
    """Coerce raw user input into the supported duration range.

    Non-numeric input falls back to the default duration.
    """
    try:
        seconds = int(value)
    except (TypeError, ValueError):
        seconds = DEFAULT_DURATION
    return max(MIN_DURATION, min(MAX_DURATION, seconds))


class VideoProject(BaseModel):
    """One video-generation attempt.

    Snapshots are immutable; use `updated()` to derive the next one.
    """

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), description="Project identifier")
    text: str = Field(default="", description="Source content for narration")
    voice_gender: VoiceGender = Field(default=VoiceGender.FEMALE, description="Narrator gender")
    voice_language: str = Field(default="en-IN", description="Narrator language code")
    audio_url: Optional[str] = Field(None, description="Generated voiceover reference")
    image_url: Optional[str] = Field(None, description="Generated background image reference")
    music_url: Optional[str] = Field(None, description="Uploaded background music reference")
    video_url: Optional[str] = Field(None, description="Rendered video reference")
    video_duration: int = Field(
        default=DEFAULT_DURATION,
        ge=MIN_DURATION,
        le=MAX_DURATION,
        description="Target video duration in seconds",
    )
    video_aspect_ratio: AspectRatio = Field(default=AspectRatio.LANDSCAPE, description="Output aspect ratio")
    generate_image: bool = Field(default=True, description="Whether to generate a background image")
    video_size_bytes: Optional[int] = Field(None, description="Rendered video size, when known")
    status: ProjectStatus = Field(default=ProjectStatus.TEXT_INPUT, description="Advisory status")
    created_at: datetime = Field(default_factory=datetime.now, description="Creation time")
    updated_at: datetime = Field(default_factory=datetime.now, description="Last mutation time")

    class Config:
        """Pydantic config."""
        frozen = True

    def updated(self, **changes: Any) -> "VideoProject":
        """Return a validated copy with `changes` applied and `updated_at` bumped.

        Raises:
            ValueError: If a change names a field the project doesn't have.
        """
        unknown = set(changes) - set(VideoProject.model_fields)
        if unknown:
            raise ValueError(f"Unknown project fields: {', '.join(sorted(unknown))}")

        data = self.model_dump()
        data.update(changes)
        data["updated_at"] = datetime.now()
        return VideoProject.model_validate(data)

    def to_yaml(self, path: Path) -> None:
        """Save a project snapshot to a YAML file."""
        with open(path, "w") as f:
            yaml.safe_dump(self.model_dump(mode="json"), f, default_flow_style=False)
