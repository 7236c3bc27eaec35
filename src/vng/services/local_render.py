"""Local video assembly with moviepy."""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from ..config import config
from ..errors import RemoteCallError, WizardError
from ..editor import blank_clip, export, fit_audio, load_audio, mix_audio, still_clip
from .assets import fetch_reference
from .base import AssemblyJob, ProgressCallback, VideoAssembler, VideoRequest, VideoResult

logger = logging.getLogger(__name__)


def _suffix(reference: str, default: str) -> str:
    suffix = Path(reference.split("?", 1)[0]).suffix
    return suffix if suffix else default


class MoviepyAssembler(VideoAssembler):
    """Renders the narrated video on this machine.

    The background image (or a black frame) is held for the project's
    duration under the voiceover, with background music looped, faded and
    mixed in at reduced volume.

    Every clip opened along the way is kept in `job.artifacts["clips"]`
    and closed once rendering ends or any phase fails.
    """

    MUSIC_VOLUME = 0.3
    MUSIC_FADE_OUT = 2.0

    def __init__(
        self,
        output_dir: Optional[Path] = None,
        fps: int = 24,
        preset: str = "medium",
    ) -> None:
        self._output_dir = Path(output_dir or config.workspace / "renders")
        self._fps = fps
        self._preset = preset

    @staticmethod
    def release(job: AssemblyJob) -> None:
        """Close every clip the job has opened."""
        clips = job.artifacts.pop("clips", [])
        for clip in reversed(clips):
            try:
                clip.close()
            except Exception as e:
                logger.warning(f"Failed to close {clip}: {e}")

    @contextmanager
    def _phase(self, name: str, job: Optional[AssemblyJob] = None) -> Iterator[None]:
        """Report a failed phase the same way remote failures are reported."""
        try:
            yield
        except Exception as e:
            if job is not None:
                self.release(job)
            if isinstance(e, WizardError):
                raise
            logger.error(f"Local {name} failed: {e}")
            raise RemoteCallError(f"Local {name} failed: {e}", service="moviepy") from e

    def prepare(self, request: VideoRequest, report: ProgressCallback) -> AssemblyJob:
        """Copy or download every asset into a per-project work directory."""
        workdir = self._output_dir / request.project_id
        job = AssemblyJob(request=request, workdir=workdir)

        assets = {
            "audio": (request.audio_url, ".mp3"),
            "image": (request.image_url, ".png"),
            "music": (request.music_url, ".mp3"),
        }
        present = {name: item for name, item in assets.items() if item[0]}

        with self._phase("asset preparation"):
            workdir.mkdir(parents=True, exist_ok=True)
            for i, (name, (reference, default_suffix)) in enumerate(present.items(), start=1):
                dest = workdir / f"{name}{_suffix(reference, default_suffix)}"
                logger.debug(f"Fetching {name} asset: {reference}")
                job.artifacts[f"{name}_path"] = fetch_reference(reference, dest)
                report(100.0 * i / len(present))

        return job

    def sync_audio(self, job: AssemblyJob, report: ProgressCallback) -> None:
        """Fit the voiceover to the duration and mix in the music."""
        duration = job.request.duration
        clips = job.artifacts.setdefault("clips", [])

        with self._phase("audio sync", job):
            source = load_audio(job.artifacts["audio_path"])
            clips.append(source)
            voice = fit_audio(source, duration, loop=False)
            audio = voice
            report(50.0)

            music_path = job.artifacts.get("music_path")
            if music_path:
                music = load_audio(music_path)
                clips.append(music)
                music = fit_audio(music, duration, loop=True, fade_out=self.MUSIC_FADE_OUT)
                audio = mix_audio(voice, music, music_volume=self.MUSIC_VOLUME)

        job.artifacts["audio"] = audio

    def compose(self, job: AssemblyJob, report: ProgressCallback) -> None:
        """Build the picture track and attach the mixed audio."""
        request = job.request
        size = request.aspect_ratio.resolution

        with self._phase("composition", job):
            image_path = job.artifacts.get("image_path")
            if image_path:
                video = still_clip(image_path, request.duration, size)
            else:
                video = blank_clip(request.duration, size)
            job.artifacts.setdefault("clips", []).append(video)

            job.artifacts["video"] = video.with_audio(job.artifacts["audio"])

    def render(self, job: AssemblyJob, report: ProgressCallback) -> None:
        output_path = self._output_dir / f"{job.request.project_id}.mp4"
        logger.info(f"Rendering {output_path}")
        with self._phase("rendering", job):
            try:
                export(job.artifacts["video"], output_path, fps=self._fps, preset=self._preset)
            finally:
                job.artifacts["video"].close()
        self.release(job)
        job.artifacts["output_path"] = output_path

    def finalize(self, job: AssemblyJob, report: ProgressCallback) -> VideoResult:
        output_path: Path = job.artifacts["output_path"]
        width, height = job.request.aspect_ratio.resolution
        with self._phase("finalization"):
            size_bytes = output_path.stat().st_size
        return VideoResult(
            url=output_path.resolve().as_uri(),
            size_bytes=size_bytes,
            width=width,
            height=height,
            duration=float(job.request.duration),
        )
