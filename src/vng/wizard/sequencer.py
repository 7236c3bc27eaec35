"""Cursor over the ordered wizard steps."""

from typing import List, Optional, Tuple

from ..models import WIZARD_STEPS, StepDefinition


class StepSequencer:
    """Tracks the active step index.

    Every step before the cursor counts as completed. The cursor is not
    clamped at the top, so `current` may be None past the last step.
    """

    def __init__(self, steps: Tuple[StepDefinition, ...] = WIZARD_STEPS, cursor: int = 0) -> None:
        self.steps = steps
        self._cursor = cursor

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def completed_steps(self) -> List[int]:
        return list(range(self._cursor))

    @property
    def current(self) -> Optional[StepDefinition]:
        if 0 <= self._cursor < len(self.steps):
            return self.steps[self._cursor]
        return None

    def advance(self, skip: bool = False) -> int:
        """Move forward one step, or two when the next step is skipped."""
        self._cursor += 2 if skip else 1
        return self._cursor

    def retreat(self) -> int:
        self._cursor = max(self._cursor - 1, 0)
        return self._cursor

    def reset(self) -> int:
        self._cursor = 0
        return self._cursor
