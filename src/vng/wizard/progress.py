"""Progress tracking for steps made of ordered sub-phases."""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, List, Optional, Sequence, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PhaseStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


@dataclass
class Phase:
    """One sub-phase of a long-running step."""

    id: str
    title: str
    description: str = ""
    status: PhaseStatus = PhaseStatus.PENDING
    progress: float = 0.0
    error_message: Optional[str] = None


PhaseListener = Callable[[Phase, float], None]


class PhaseTracker:
    """Runs phases strictly in declared order and tracks their progress.

    Phase progress never decreases, and overall progress is the mean over
    all phases, so it only reaches 100 once every phase has.

    Args:
        phases: Phase definitions in execution order.
        listener: Called with the changed phase and the overall progress.
    """

    def __init__(self, phases: Sequence[Phase], listener: Optional[PhaseListener] = None) -> None:
        if not phases:
            raise ValueError("At least one phase is required")
        self._definitions = [replace(p) for p in phases]
        self.phases: List[Phase] = []
        self.listener = listener
        self.reset()

    def reset(self) -> None:
        self.phases = [
            replace(p, status=PhaseStatus.PENDING, progress=0.0, error_message=None)
            for p in self._definitions
        ]

    def phase(self, phase_id: str) -> Phase:
        for phase in self.phases:
            if phase.id == phase_id:
                return phase
        raise KeyError(f"Unknown phase: {phase_id}")

    @property
    def overall_progress(self) -> float:
        return sum(p.progress for p in self.phases) / len(self.phases)

    @property
    def is_complete(self) -> bool:
        return all(p.status == PhaseStatus.COMPLETED for p in self.phases)

    @property
    def current(self) -> Optional[Phase]:
        """The first phase that has not completed."""
        for phase in self.phases:
            if phase.status != PhaseStatus.COMPLETED:
                return phase
        return None

    def report(self, phase_id: str, progress: float) -> None:
        """Record progress for a phase, clamped to 0..100 and never lowered."""
        phase = self.phase(phase_id)
        progress = max(0.0, min(100.0, float(progress)))
        if progress > phase.progress:
            phase.progress = progress
            self._emit(phase)

    def run(self, phase_id: str, work: Callable[[Callable[[float], None]], T]) -> T:
        """Run `work` as the given phase.

        `work` receives a callback for reporting the phase's own progress.

        Raises:
            ValueError: If an earlier phase hasn't completed yet.
        """
        phase = self.phase(phase_id)
        expected = self.current
        if expected is None or expected.id != phase_id:
            raise ValueError(
                f"Phase '{phase_id}' cannot run now; next phase is "
                f"{expected.id if expected else 'none'}"
            )

        phase.status = PhaseStatus.PROCESSING
        phase.error_message = None
        self._emit(phase)
        logger.debug(f"Phase started: {phase.title}")

        try:
            result = work(lambda pct: self.report(phase_id, pct))
        except Exception as e:
            phase.status = PhaseStatus.ERROR
            phase.error_message = str(e)
            self._emit(phase)
            raise

        phase.status = PhaseStatus.COMPLETED
        self.report(phase_id, 100.0)
        self._emit(phase)
        logger.debug(f"Phase completed: {phase.title}")
        return result

    def _emit(self, phase: Phase) -> None:
        if self.listener:
            self.listener(phase, self.overall_progress)
