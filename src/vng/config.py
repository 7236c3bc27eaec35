"""Configuration management."""

import os
from pathlib import Path
from typing import List
from pydantic import BaseModel, Field
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _env_keys(plural: str, singular: str) -> List[str]:
    """Read a comma-separated key list, falling back to a single-key variable."""
    raw = os.getenv(plural) or os.getenv(singular, "")
    return [key.strip() for key in raw.split(",") if key.strip()]


def _env_float(name: str, default: float) -> float:
    """Read a number from the environment, using `default` when it isn't one.

    validate_required reports the bad value.
    """
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Config(BaseModel):
    """Application configuration."""

    # API Keys (first key is primary, second is the fallback)
    gemini_api_keys: List[str] = Field(
        default_factory=lambda: _env_keys("GEMINI_API_KEYS", "GEMINI_API_KEY"),
        description="Gemini API keys for text analysis"
    )
    openai_api_keys: List[str] = Field(
        default_factory=lambda: _env_keys("OPENAI_API_KEYS", "OPENAI_API_KEY"),
        description="OpenAI API keys for image generation"
    )
    json2video_api_keys: List[str] = Field(
        default_factory=lambda: _env_keys("JSON2VIDEO_API_KEYS", "JSON2VIDEO_API_KEY"),
        description="json2video API keys for remote rendering"
    )
    google_tts_api_keys: List[str] = Field(
        default_factory=lambda: _env_keys("GOOGLE_TTS_API_KEYS", "GOOGLE_TTS_API_KEY"),
        description="Google Cloud Text-to-Speech API keys"
    )
    anthropic_api_key: str = Field(
        default_factory=lambda: os.getenv("ANTHROPIC_API_KEY", ""),
        description="Anthropic API key (alternate text analyzer)"
    )
    google_cloud_project: str = Field(
        default_factory=lambda: os.getenv("GOOGLE_CLOUD_PROJECT", ""),
        description="Google Cloud project ID"
    )

    # Providers
    text_provider: str = Field(
        default_factory=lambda: os.getenv("VNG_TEXT_PROVIDER", "gemini"),
        description="Text analysis provider: 'gemini' or 'anthropic'"
    )
    image_provider: str = Field(
        default_factory=lambda: os.getenv("VNG_IMAGE_PROVIDER", "openai"),
        description="Image provider: 'openai' or 'imagen'"
    )
    video_provider: str = Field(
        default_factory=lambda: os.getenv("VNG_VIDEO_PROVIDER", "local"),
        description="Video assembly provider: 'local' or 'json2video'"
    )

    # Paths and URLs
    workspace: Path = Field(
        default_factory=lambda: Path(os.getenv("VNG_WORKSPACE", "./vng-workspace")),
        description="Directory for generated and uploaded media"
    )
    asset_base_url: str = Field(
        default_factory=lambda: os.getenv("VNG_ASSET_BASE_URL", ""),
        description="Public URL under which the workspace is served"
    )
    share_base_url: str = Field(
        default_factory=lambda: os.getenv("VNG_SHARE_BASE_URL", "http://localhost:8080"),
        description="Base URL for project share links"
    )

    # Model settings
    gemini_model: str = Field(
        default="gemini-1.5-flash",
        description="Gemini model for text analysis"
    )
    anthropic_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Claude model for text analysis"
    )
    openai_image_model: str = Field(
        default="dall-e-3",
        description="OpenAI image model"
    )

    # Timing
    request_timeout: float = Field(
        default=120.0,
        description="HTTP timeout for collaborator calls, in seconds"
    )
    progress_delay: float = Field(
        default_factory=lambda: _env_float("VNG_PROGRESS_DELAY", 0.1),
        description="Delay between simulated progress ticks, in seconds"
    )

    class Config:
        """Pydantic config."""
        frozen = False

    def validate_required(self) -> None:
        """Validate that credentials for the selected providers are set.

        Raises:
            ValueError: If any required configuration is missing.
        """
        missing: list[str] = []

        if self.text_provider == "gemini" and not self.gemini_api_keys:
            missing.append("GEMINI_API_KEYS")
        elif self.text_provider == "anthropic" and not self.anthropic_api_key:
            missing.append("ANTHROPIC_API_KEY")

        if self.image_provider == "openai" and not self.openai_api_keys:
            missing.append("OPENAI_API_KEYS")
        elif self.image_provider == "imagen" and not self.google_cloud_project:
            missing.append("GOOGLE_CLOUD_PROJECT")

        if self.video_provider == "json2video":
            if not self.json2video_api_keys:
                missing.append("JSON2VIDEO_API_KEYS")
            if not self.asset_base_url:
                missing.append("VNG_ASSET_BASE_URL")

        raw_delay = os.getenv("VNG_PROGRESS_DELAY")
        if raw_delay is not None and _env_float("VNG_PROGRESS_DELAY", -1.0) < 0:
            raise ValueError(f"VNG_PROGRESS_DELAY must be a non-negative number. Got: {raw_delay}")

        if missing:
            raise ValueError(
                f"Missing required configuration: {', '.join(missing)}. "
                "Set the corresponding environment variables."
            )

        for name, value, allowed in (
            ("VNG_TEXT_PROVIDER", self.text_provider, ("gemini", "anthropic")),
            ("VNG_IMAGE_PROVIDER", self.image_provider, ("openai", "imagen")),
            ("VNG_VIDEO_PROVIDER", self.video_provider, ("local", "json2video")),
        ):
            if value not in allowed:
                raise ValueError(
                    f"{name} must be one of {', '.join(allowed)}. Got: {value}"
                )


# Global config instance
config = Config()
