"""The wizard shell: owns the context and routes to the active panel."""

import logging
from typing import Dict, List, Optional

from ..config import Config, config as default_config
from ..services.registry import Services, build_services
from .context import WizardContext
from .indicator import IndicatorItem, indicator_items, render_indicator
from .notifications import Notifier
from .panels import PANEL_TYPES, StepPanel
from .playback import MediaPlayer
from .progress import PhaseListener
from .sequencer import StepSequencer
from .session import WizardSession

logger = logging.getLogger(__name__)

NOT_FOUND_TITLE = "Step Not Found"
NOT_FOUND_MESSAGE = "Please navigate to a valid step"


class WizardShell:
    """Drives one wizard run.

    Panels are created on demand and kept for the lifetime of a project;
    a new project id discards them so no panel state carries over.
    """

    def __init__(self, ctx: WizardContext) -> None:
        self.ctx = ctx
        self._panels: Dict[str, StepPanel] = {}
        self._project_id = ctx.session.project.id

    @classmethod
    def create(
        cls,
        cfg: Optional[Config] = None,
        services: Optional[Services] = None,
        notifier: Optional[Notifier] = None,
        player: Optional[MediaPlayer] = None,
        progress_listener: Optional[PhaseListener] = None,
    ) -> "WizardShell":
        cfg = cfg or default_config
        ctx = WizardContext(
            session=WizardSession(),
            sequencer=StepSequencer(),
            services=services or build_services(cfg),
            config=cfg,
            notifier=notifier or Notifier(),
            player=player or MediaPlayer(),
            progress_listener=progress_listener,
        )
        return cls(ctx)

    @property
    def panel(self) -> Optional[StepPanel]:
        """The active panel, or None when the cursor is out of range."""
        step = self.ctx.sequencer.current
        if step is None:
            return None

        project_id = self.ctx.session.project.id
        if project_id != self._project_id:
            logger.debug(f"Project changed to {project_id}; rebuilding panels")
            self._panels.clear()
            self._project_id = project_id

        if step.id not in self._panels:
            self._panels[step.id] = PANEL_TYPES[step.id](self.ctx)
        return self._panels[step.id]

    def start(self) -> None:
        self._enter()

    def go_next(self) -> bool:
        panel = self.panel
        if panel is None:
            return False
        moved = panel.commit_and_advance()
        if moved:
            self._enter()
        return moved

    def go_back(self) -> None:
        panel = self.panel
        if panel is None:
            self.ctx.sequencer.retreat()
        else:
            panel.retreat()
        self._enter()

    def create_new_project(self) -> None:
        self.ctx.session.reset()
        self.ctx.sequencer.reset()
        self.ctx.notifier.notify("New Project Started", "Ready to create your next video!")
        self._enter()

    def indicator(self) -> List[IndicatorItem]:
        seq = self.ctx.sequencer
        return indicator_items(seq.steps, seq.cursor, seq.completed_steps)

    def render_indicator(self) -> str:
        seq = self.ctx.sequencer
        return render_indicator(seq.steps, seq.cursor, seq.completed_steps)

    def _enter(self) -> None:
        # Entering a panel may advance the cursor again (processing does)
        entered = None
        while self.ctx.sequencer.cursor != entered:
            entered = self.ctx.sequencer.cursor
            panel = self.panel
            if panel is None:
                return
            panel.on_enter()
