"""Final video assembly."""

import logging
from typing import Optional

from ...errors import ValidationError
from ...models import ProjectStatus
from ...services import VideoRequest, VideoResult
from ..context import WizardContext
from ..progress import Phase, PhaseTracker
from .base import StepPanel

logger = logging.getLogger(__name__)

PHASES = [
    Phase("preparation", "Preparing Assets", "Organizing audio, image, and text components"),
    Phase("audio-sync", "Audio Synchronization", "Syncing voiceover with background music"),
    Phase("visual-composition", "Visual Composition", "Composing background image with the voiceover"),
    Phase("video-rendering", "Video Rendering", "Rendering the final video"),
    Phase("finalization", "Finalization", "Optimizing and preparing for download"),
]


class VideoGenerationPanel(StepPanel):
    """Runs the video assembler through its phases in order."""

    step_id = "video"
    guard_title = "Video Generation In Progress"
    guard_message = "Please wait for the video generation to complete."

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        self.tracker = PhaseTracker(PHASES, listener=ctx.progress_listener)
        self.result: Optional[VideoResult] = None

    @property
    def overall_progress(self) -> float:
        return self.tracker.overall_progress

    def guard(self) -> bool:
        return bool(self.project.video_url) and self.project.status == ProjectStatus.COMPLETED

    def on_enter(self) -> None:
        # Written by the music step on every forward commit
        if self.project.status == ProjectStatus.VIDEO_GENERATION:
            self.generate()

    def generate(self) -> bool:
        self.tracker.reset()
        return self._attempt(self._generate, "Video Generation Failed")

    def _generate(self) -> None:
        project = self.project
        if not project.audio_url:
            raise ValidationError("A voiceover is required to build the video.", title="Voiceover Required")

        request = VideoRequest(
            project_id=project.id,
            text=project.text,
            audio_url=project.audio_url,
            image_url=project.image_url,
            music_url=project.music_url,
            duration=project.video_duration,
            aspect_ratio=project.video_aspect_ratio,
        )
        assembler = self.ctx.services.video
        run = self.tracker.run

        job = run("preparation", lambda report: assembler.prepare(request, report))
        run("audio-sync", lambda report: assembler.sync_audio(job, report))
        run("visual-composition", lambda report: assembler.compose(job, report))
        run("video-rendering", lambda report: assembler.render(job, report))
        self.result = run("finalization", lambda report: assembler.finalize(job, report))

        self.ctx.session.update(
            video_url=self.result.url,
            video_size_bytes=self.result.size_bytes,
            status=ProjectStatus.COMPLETED,
        )
        logger.info(f"Video ready: {self.result.url}")
        self.ctx.notifier.notify(
            "Video Generated Successfully!",
            "Your video has been created and is ready for preview and download.",
        )
