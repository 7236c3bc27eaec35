"""AI analysis of the source text."""

import logging
import time
from typing import Callable, Optional

from ...models import ProjectStatus
from ...services import AnalysisResult
from ..context import WizardContext
from ..progress import Phase, PhaseTracker
from .base import StepPanel

logger = logging.getLogger(__name__)

PHASES = [
    Phase("text-analysis", "Text Analysis", "Analyzing your content with AI"),
]

# Simulated progress stops here until the analyzer answers
SIMULATED_CEILING = 90
SIMULATED_STEP = 10


class ProcessingPanel(StepPanel):
    step_id = "processing"
    guard_title = "Processing Incomplete"
    guard_message = "Please wait for text analysis to finish."

    def __init__(self, ctx: WizardContext) -> None:
        super().__init__(ctx)
        self.tracker = PhaseTracker(PHASES, listener=ctx.progress_listener)
        self.result: Optional[AnalysisResult] = None

    def guard(self) -> bool:
        return self.tracker.is_complete

    @property
    def forward_status(self) -> Optional[ProjectStatus]:
        return ProjectStatus.VOICE_GENERATION

    def on_enter(self) -> None:
        if self.project.status == ProjectStatus.PROCESSING:
            self.execute()

    def execute(self) -> bool:
        """Analyze the text, write any rewrite back and move on."""
        self.tracker.reset()
        if not self._attempt(lambda: self.tracker.run("text-analysis", self._analyze), "Processing Error"):
            return False

        if self.result and self.result.text:
            self.ctx.session.update(text=self.result.text)
        self.ctx.notifier.notify(
            "Processing Complete",
            "Text analysis completed successfully. Ready for voice generation.",
        )
        return self.commit_and_advance()

    def _analyze(self, report: Callable[[float], None]) -> None:
        delay = self.ctx.config.progress_delay
        for pct in range(0, SIMULATED_CEILING + 1, SIMULATED_STEP):
            report(pct)
            if delay > 0:
                time.sleep(delay)

        logger.info("Analyzing text...")
        self.result = self.ctx.services.text_analyzer.analyze(self.project.text)
        logger.info(f"Analysis: {self.result.message}")
