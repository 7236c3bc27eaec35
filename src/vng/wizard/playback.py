"""Local playback of generated media."""

import logging
from pathlib import Path
from typing import Optional

import typer

from ..errors import PlaybackError
from ..services.assets import is_remote, to_local_path

logger = logging.getLogger(__name__)


class MediaPlayer:
    """Opens media with the system's default application."""

    def play(self, reference: Optional[str]) -> None:
        """
        Play an audio or video reference.

        Raises:
            PlaybackError: If there is nothing to play or the player failed.
        """
        if not reference:
            raise PlaybackError("There is no media to play.")

        if is_remote(reference):
            target = reference
        else:
            path = to_local_path(reference)
            if path is None or not Path(path).exists():
                raise PlaybackError(f"Media file not found: {reference}")
            target = str(path)

        logger.info(f"Playing {target}")
        try:
            code = typer.launch(target)
        except OSError as e:
            raise PlaybackError(f"Failed to play media: {e}") from e
        if code != 0:
            raise PlaybackError(f"Player exited with status {code}")
