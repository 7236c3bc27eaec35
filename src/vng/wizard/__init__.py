"""Step-by-step wizard turning text into a narrated video."""

from .indicator import IndicatorItem, StepState, indicator_items, render_indicator
from .notifications import Notification, Notifier, Variant
from .progress import Phase, PhaseStatus, PhaseTracker
from .sequencer import StepSequencer
from .session import WizardSession
from .shell import WizardShell

__all__ = [
    "IndicatorItem",
    "StepState",
    "indicator_items",
    "render_indicator",
    "Notification",
    "Notifier",
    "Variant",
    "Phase",
    "PhaseStatus",
    "PhaseTracker",
    "StepSequencer",
    "WizardSession",
    "WizardShell",
]
