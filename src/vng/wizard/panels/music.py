"""Optional background music upload."""

import logging
import shutil
from pathlib import Path
from typing import Optional, Union

from ...errors import StorageError, ValidationError
from ...models import MusicFile, ProjectStatus, format_file_size
from ...models.media import MAX_MUSIC_BYTES
from ..context import WizardContext
from .base import StepPanel

logger = logging.getLogger(__name__)


def check_music(music: MusicFile) -> None:
    """Apply the intake policy. Type is checked before size.

    Raises:
        ValidationError: If the file is rejected.
    """
    if not music.type_allowed:
        raise ValidationError(
            "Please upload an MP3, WAV, or MP4 audio file.",
            title="Invalid File Type",
        )
    if not music.size_allowed:
        raise ValidationError(
            f"Please upload a file smaller than {format_file_size(MAX_MUSIC_BYTES)} "
            f"(got {format_file_size(music.size)}).",
            title="File Too Large",
        )


class MusicUploadPanel(StepPanel):
    step_id = "music"
    guard_title = "Music Required"
    guard_message = "Upload background music or skip this step."

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        self.skipped = False
        self.music: Optional[MusicFile] = None

    def guard(self) -> bool:
        return bool(self.project.music_url) or self.skipped

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        return ProjectStatus.VIDEO_GENERATION

    def upload(self, file: Union[MusicFile, Path, str]) -> bool:
        return self._attempt(lambda: self._upload(file), "Upload Failed")

    def _upload(self, file: Union[MusicFile, Path, str]) -> None:
        if isinstance(file, MusicFile):
            music = file
        else:
            try:
                music = MusicFile.from_path(Path(file))
            except OSError as e:
                raise ValidationError(str(e), title="Upload Failed") from e

        check_music(music)

        dest = self.ctx.config.workspace / "music" / f"{self.project.id}-{music.name}"
        try:
            dest.parent.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(music.path, dest)
        except OSError as e:
            raise StorageError(f"Failed to copy {music.name}: {e}", title="Upload Failed") from e

        self.ctx.session.update(music_url=dest.resolve().as_uri())
        self.music = music
        self.skipped = False
        logger.info(f"Music stored at {dest}")
        self.ctx.notifier.notify(
            "Music Uploaded Successfully",
            f"{music.name} has been uploaded and is ready to use.",
        )

    def skip(self) -> None:
        self.skipped = True
        self.ctx.notifier.notify("Music Skipped", "Your video will be created without background music.")

    def remove(self) -> None:
        if self.project.music_url:
            self.ctx.session.update(music_url=None)
        self.music = None
        self.skipped = False

    def play(self) -> bool:
        return self._attempt(lambda: self.ctx.player.play(self.project.music_url))
