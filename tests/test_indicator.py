from __future__ import annotations

from vng.models import WIZARD_STEPS
from vng.wizard import StepState, indicator_items, render_indicator


def test_states_follow_cursor() -> None:
    items = indicator_items(WIZARD_STEPS, 2, [0, 1])

    assert [item.state for item in items[:4]] == [
        StepState.COMPLETED,
        StepState.COMPLETED,
        StepState.CURRENT,
        StepState.PENDING,
    ]
    assert items[2].step.title == "Voice"


def test_completed_wins_over_current() -> None:
    items = indicator_items(WIZARD_STEPS, 1, [0, 1])

    assert items[1].state == StepState.COMPLETED


def test_render_lists_every_title() -> None:
    line = render_indicator(WIZARD_STEPS, 0, [])

    for step in WIZARD_STEPS:
        assert step.title in line
