"""Step indicator shown above the active panel."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Sequence

from ..models import StepDefinition


class StepState(str, Enum):
    COMPLETED = "completed"
    CURRENT = "current"
    PENDING = "pending"


@dataclass(frozen=True)
class IndicatorItem:
    index: int
    step: StepDefinition
    state: StepState


_MARKERS = {
    StepState.COMPLETED: "✅",
    StepState.CURRENT: "▶️ ",
    StepState.PENDING: "⏳",
}


def indicator_items(
    steps: Sequence[StepDefinition],
    cursor: int,
    completed: Iterable[int],
) -> List[IndicatorItem]:
    """Map each step to its display state. Completed wins over current."""
    done = set(completed)
    items = []
    for index, step in enumerate(steps):
        if index in done:
            state = StepState.COMPLETED
        elif index == cursor:
            state = StepState.CURRENT
        else:
            state = StepState.PENDING
        items.append(IndicatorItem(index=index, step=step, state=state))
    return items


def render_indicator(
    steps: Sequence[StepDefinition],
    cursor: int,
    completed: Iterable[int],
) -> str:
    return "  ".join(
        f"{_MARKERS[item.state]} {item.step.title}"
        for item in indicator_items(steps, cursor, completed)
    )
