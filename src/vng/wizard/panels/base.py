"""Base class for wizard step panels."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Optional

from ...errors import RemoteCallError, ValidationError, WizardError
from ...models import ProjectStatus, VideoProject
from ..context import WizardContext

logger = logging.getLogger(__name__)


class StepPanel(ABC):
    """One wizard step.

    A panel gates the Next control with `guard()`. Its actions validate
    locally, call at most one collaborator, and write results back through
    the session. Failures are reported as notifications and leave the
    project as it was.
    """

    step_id: str = ""
    guard_title = "Step Incomplete"
    guard_message = "Please complete this step before proceeding."

    def __init__(self, ctx: WizardContext) -> None:
        self.ctx = ctx

    @property
    def project(self) -> VideoProject:
        return self.ctx.session.project

    @property
    def next_enabled(self) -> bool:
        return self.guard()

    @abstractmethod
    def guard(self) -> bool:
        """Return True when the user may advance past this step."""
        ...

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        """Status written when leaving this step forwards."""
        return None

    def skip_next(self) -> bool:
        return False

    def pending_changes(self) -> Dict[str, Any]:
        """Panel-local edits to write when the user advances."""
        return {}

    def guard_error(self) -> ValidationError:
        return ValidationError(self.guard_message, title=self.guard_title)

    def on_enter(self) -> None:
        """Called when the panel becomes the active step."""

    def commit_and_advance(self) -> bool:
        """Advance to the next step if the guard allows it.

        Returns:
            True if the cursor moved.
        """
        if not self.guard():
            self.ctx.notifier.error(self.guard_error())
            return False

        changes = self.pending_changes()
        if self.forward_status is not None:
            changes["status"] = self.forward_status
        if changes:
            self.ctx.session.update(**changes)

        self.ctx.sequencer.advance(skip=self.skip_next())
        logger.debug(f"Advanced from {self.step_id} to step {self.ctx.sequencer.cursor}")
        return True

    def retreat(self) -> None:
        self.ctx.sequencer.retreat()

    def _attempt(self, action: Callable[[], Any], failure_title: Optional[str] = None) -> bool:
        """Run an action, reporting any wizard error instead of raising it.

        Remote failures are reported under `failure_title` when given.
        """
        try:
            action()
        except WizardError as e:
            logger.error(f"{self.step_id}: {e}")
            if failure_title and isinstance(e, RemoteCallError):
                e.title = failure_title
            self.ctx.notifier.error(e)
            return False
        return True
