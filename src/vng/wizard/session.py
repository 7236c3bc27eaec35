"""The project being edited by one wizard run."""

import logging
from typing import Any, Optional

from ..models import VideoProject

logger = logging.getLogger(__name__)


class WizardSession:
    """Holds the current project snapshot.

    Panels never mutate the project in place; `update()` swaps in a new
    snapshot, and the last writer wins.
    """

    def __init__(self, project: Optional[VideoProject] = None) -> None:
        self._project = project or VideoProject()

    @property
    def project(self) -> VideoProject:
        return self._project

    def update(self, **changes: Any) -> VideoProject:
        self._project = self._project.updated(**changes)
        logger.debug(f"Project {self._project.id} updated: {', '.join(sorted(changes))}")
        return self._project

    def reset(self) -> VideoProject:
        """Start over with a fresh project."""
        self._project = VideoProject()
        logger.info(f"Started new project {self._project.id}")
        return self._project
