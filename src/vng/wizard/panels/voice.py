"""Voiceover generation."""

import logging
from typing import List, Optional

from ...agents.narration import unwrap_text
from ...errors import ValidationError
from ...models import VOICE_OPTIONS, ProjectStatus, VoiceOption, get_voice, voice_for
from ...services import SpeechRequest
from ..context import WizardContext
from .base import StepPanel

logger = logging.getLogger(__name__)

PREVIEW_TEXT = "Hello, this is a preview of the {name}."


class VoiceGenerationPanel(StepPanel):
    step_id = "voice"
    guard_title = "Voiceover Required"
    guard_message = "Please generate a voiceover before proceeding to the next step."

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        project = self.project
        self.voice = voice_for(project.voice_gender, project.voice_language)
        self.text = unwrap_text(project.text)

    @property
    def voices(self) -> List[VoiceOption]:
        return list(VOICE_OPTIONS)

    @property
    def display_text(self) -> str:
        return self.text

    def select_voice(self, voice_id: str) -> bool:
        voice = get_voice(voice_id)
        if voice is None:
            self.ctx.notifier.error(ValidationError(f"Unknown voice: {voice_id}", title="Voice Not Found"))
            return False
        self.voice = voice
        return True

    def edit_text(self, text: str) -> None:
        self.text = text

    def guard(self) -> bool:
        return bool(self.project.audio_url)

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        if self.project.generate_image:
            return ProjectStatus.IMAGE_GENERATION
        return ProjectStatus.MUSIC_UPLOAD

    def skip_next(self) -> bool:
        return not self.project.generate_image

    def generate(self) -> bool:
        """Synthesize the voiceover for the edited text."""
        return self._attempt(self._generate, "Voice Generation Failed")

    def _generate(self) -> None:
        if not self.text.strip():
            raise ValidationError("Please enter some text to narrate.", title="Text Required")

        voice = self.voice
        logger.info(f"Generating voiceover with {voice.name}")
        audio_url = self.ctx.services.speech.synthesize(SpeechRequest(
            text=self.text,
            voice=voice,
            name=f"voiceover-{self.project.id}",
        ))

        self.ctx.session.update(
            audio_url=audio_url,
            text=self.text,
            voice_gender=voice.gender,
            voice_language=voice.language,
        )
        self.ctx.notifier.notify("Voiceover Generated", f"Your narration has been created with {voice.name}.")

    def preview_voice(self, voice_id: str) -> bool:
        """Synthesize and play a short sample of a voice."""
        def preview() -> None:
            voice = get_voice(voice_id)
            if voice is None:
                raise ValidationError(f"Unknown voice: {voice_id}", title="Voice Not Found")
            sample = self.ctx.services.speech.synthesize(SpeechRequest(
                text=PREVIEW_TEXT.format(name=voice.name),
                voice=voice,
                name=f"preview-{voice.id}",
            ))
            self.ctx.player.play(sample)

        return self._attempt(preview, "Voice Preview Failed")

    def play_generated(self) -> bool:
        return self._attempt(lambda: self.ctx.player.play(self.project.audio_url))
