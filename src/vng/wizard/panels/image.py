"""Background image generation."""

import logging
from typing import Dict, List, Optional

from ...errors import ValidationError
from ...models import ProjectStatus
from ...services import ImageRequest
from ..context import WizardContext
from .base import StepPanel

logger = logging.getLogger(__name__)

IMAGE_STYLES = [
    "Divine Temple Architecture",
    "Sacred Lotus Garden",
    "Mystical Mountain Sunset",
    "Golden Mandala Background",
    "Ancient Sanskrit Scrolls",
    "Celestial Star Field",
    "Peaceful River Ganga",
    "Holy Fire Ceremony",
]

COLOR_SCHEMES: Dict[str, List[str]] = {
    "Saffron Sacred": ["#ff6600", "#ffaa44", "#ffe699"],
    "Divine Blue": ["#1e3a8a", "#3b82f6", "#93c5fd"],
    "Lotus Pink": ["#ec4899", "#f472b6", "#fbcfe8"],
    "Golden Temple": ["#f59e0b", "#fbbf24", "#fef3c7"],
    "Emerald Vishnu": ["#059669", "#10b981", "#86efac"],
    "Crimson Shakti": ["#dc2626", "#ef4444", "#fca5a5"],
}

MIN_QUALITY = 50
MAX_QUALITY = 100
QUALITY_STEP = 10
DEFAULT_QUALITY = 80

PROMPT_TEMPLATE = """Create a devotional background image for a narrated video based on this content: "{text}"

Style requirements:
- High resolution, cinematic quality in {style} style
- Warm, divine lighting using the {palette} color scheme ({colors})
- Sacred elements such as lotus flowers, temple architecture and mandala patterns
- Peaceful, spiritual atmosphere
- Suitable for a video background at {quality}% quality
- No text or watermarks, {aspect} aspect ratio
{extra}"""


def build_prompt(
    text: str,
    style: str,
    palette: str,
    quality: int,
    aspect: str,
    extra: str = "",
) -> str:
    """Compose the image prompt from the narration and the chosen settings."""
    return PROMPT_TEMPLATE.format(
        text=text.strip(),
        style=style,
        palette=palette,
        colors=", ".join(COLOR_SCHEMES.get(palette, [])),
        quality=quality,
        aspect=aspect,
        extra=f"\nAdditional elements: {extra.strip()}" if extra.strip() else "",
    ).strip()


class ImageGenerationPanel(StepPanel):
    step_id = "image"
    guard_title = "Image Required"
    guard_message = "Please generate a background image before proceeding."

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        self.style = IMAGE_STYLES[0]
        self.palette = next(iter(COLOR_SCHEMES))
        self.quality = DEFAULT_QUALITY
        self.extra_elements = ""

    def select_style(self, style: str) -> None:
        if style not in IMAGE_STYLES:
            raise ValueError(f"Unknown image style: {style}")
        self.style = style

    def select_palette(self, palette: str) -> None:
        if palette not in COLOR_SCHEMES:
            raise ValueError(f"Unknown color scheme: {palette}")
        self.palette = palette

    def set_quality(self, quality: int) -> int:
        """Snap quality to the nearest step within the allowed range."""
        snapped = int(round(quality / QUALITY_STEP)) * QUALITY_STEP
        self.quality = max(MIN_QUALITY, min(MAX_QUALITY, snapped))
        return self.quality

    def set_extra_elements(self, text: str) -> None:
        self.extra_elements = text

    @property
    def prompt(self) -> str:
        return build_prompt(
            self.project.text,
            self.style,
            self.palette,
            self.quality,
            self.project.video_aspect_ratio.value,
            self.extra_elements,
        )

    def guard(self) -> bool:
        return bool(self.project.image_url)

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        return ProjectStatus.MUSIC_UPLOAD

    def generate(self) -> bool:
        """Generate the background image, replacing any earlier one."""
        return self._attempt(self._generate, "Image Generation Failed")

    regenerate = generate

    def _generate(self) -> None:
        if not self.project.text.strip():
            raise ValidationError("There is no text to illustrate.", title="Text Required")

        logger.info(f"Generating image: {self.style} / {self.palette} at {self.quality}%")
        image_url = self.ctx.services.images.generate(ImageRequest(
            prompt=self.prompt,
            style=self.style,
            palette=self.palette,
            quality=self.quality,
            aspect_ratio=self.project.video_aspect_ratio,
            name=f"background-{self.project.id}",
        ))

        self.ctx.session.update(image_url=image_url)
        self.ctx.notifier.notify("Image Generated Successfully", "Your background image has been created.")
