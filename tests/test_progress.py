from __future__ import annotations

import pytest

from vng.wizard import Phase, PhaseStatus, PhaseTracker


def _tracker(listener=None) -> PhaseTracker:
    return PhaseTracker([Phase("a", "A"), Phase("b", "B")], listener=listener)


def test_phases_must_run_in_order() -> None:
    tracker = _tracker()

    with pytest.raises(ValueError, match="cannot run now"):
        tracker.run("b", lambda report: None)

    tracker.run("a", lambda report: None)
    tracker.run("b", lambda report: None)
    assert tracker.is_complete


def test_progress_never_decreases() -> None:
    tracker = _tracker()

    def work(report) -> None:
        report(60)
        report(30)
        report(150)

    seen = []
    tracker.listener = lambda phase, overall: seen.append(overall)
    tracker.run("a", work)

    assert tracker.phase("a").progress == 100
    assert seen == sorted(seen)
    assert tracker.overall_progress == 50


def test_overall_reaches_100_only_when_all_complete() -> None:
    tracker = _tracker()

    tracker.run("a", lambda report: None)
    tracker.report("b", 99)
    assert tracker.overall_progress < 100

    tracker.run("b", lambda report: None)
    assert tracker.overall_progress == 100
    assert tracker.current is None


def test_failure_marks_phase_error_and_propagates() -> None:
    tracker = _tracker()

    def boom(report) -> None:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        tracker.run("a", boom)

    phase = tracker.phase("a")
    assert phase.status == PhaseStatus.ERROR
    assert phase.error_message == "boom"
    assert tracker.current is phase


def test_reset_clears_progress() -> None:
    tracker = _tracker()
    tracker.run("a", lambda report: None)

    tracker.reset()

    assert tracker.overall_progress == 0
    assert all(p.status == PhaseStatus.PENDING for p in tracker.phases)
