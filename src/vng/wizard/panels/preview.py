"""Preview, download and share of the finished video."""

import logging
from pathlib import Path
from typing import Dict, Optional

from ...errors import StorageError, ValidationError
from ...models import format_file_size, voice_for
from ...services.assets import fetch_reference
from .base import StepPanel

logger = logging.getLogger(__name__)

# kind -> (project field, label, default suffix)
DOWNLOADS = {
    "video": ("video_url", "Video", ".mp4"),
    "image": ("image_url", "Image", ".png"),
    "audio": ("audio_url", "Audio", ".mp3"),
    "music": ("music_url", "Music", ".mp3"),
}


class PreviewPanel(StepPanel):
    """The last step. Nothing follows it, so Next stays disabled."""

    step_id = "preview"
    guard_title = "Last Step"
    guard_message = "This is the final step. Start a new project to make another video."

    def guard(self) -> bool:
        return False

    def summary(self) -> Dict[str, str]:
        project = self.project
        width, height = project.video_aspect_ratio.resolution
        size = project.video_size_bytes
        return {
            "Duration": f"{project.video_duration}s",
            "Resolution": f"{width}x{height}",
            "Aspect Ratio": project.video_aspect_ratio.value,
            "Size": format_file_size(size) if size else "Unknown",
            "Format": "MP4",
            "Created": project.created_at.strftime("%Y-%m-%d %H:%M"),
            "Voice": voice_for(project.voice_gender, project.voice_language).name,
            "Background Music": "Yes" if project.music_url else "No",
        }

    def download(self, kind: str, dest_dir: Path) -> Optional[Path]:
        """Save one of the project's media files into `dest_dir`."""
        saved: Dict[str, Path] = {}

        def download() -> None:
            if kind not in DOWNLOADS:
                raise ValidationError(f"Unknown download type: {kind}", title="Download Failed")
            field, label, default_suffix = DOWNLOADS[kind]
            reference = getattr(self.project, field)
            if not reference:
                raise ValidationError(f"No {label.lower()} is available yet.", title="Download Failed")

            suffix = Path(reference.split("?", 1)[0]).suffix or default_suffix
            dest = Path(dest_dir) / f"{kind}-{self.project.id[:8]}{suffix}"
            saved["path"] = fetch_reference(reference, dest, timeout=self.ctx.config.request_timeout)
            self.ctx.notifier.notify(
                f"{label} Downloaded",
                f"Your {label.lower()} has been downloaded to {dest}.",
            )

        self._attempt(download, "Download Failed")
        return saved.get("path")

    def export_project(self, dest_dir: Path) -> Optional[Path]:
        """Write the project's details as YAML."""
        dest = Path(dest_dir) / f"project-{self.project.id}.yaml"

        def export() -> None:
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                self.project.to_yaml(dest)
            except OSError as e:
                raise StorageError(f"Can't write {dest}: {e}", title="Export Failed") from e
            self.ctx.notifier.notify("Project Info Downloaded", f"Project details saved to {dest}.")

        return dest if self._attempt(export) else None

    def share_link(self) -> str:
        link = f"{self.ctx.config.share_base_url.rstrip('/')}/share/{self.project.id}"
        self.ctx.notifier.notify("Share Link Ready", link)
        return link

    def play(self) -> bool:
        def play() -> None:
            self.ctx.player.play(self.project.video_url)
            self.ctx.notifier.notify("Video Playing", "Playing your generated video.")

        return self._attempt(play)

    def create_new(self) -> None:
        """Discard the current project and start again from the first step."""
        self.ctx.session.reset()
        self.ctx.sequencer.reset()
        self.ctx.notifier.notify("New Project Started", "Ready to create your next video!")
