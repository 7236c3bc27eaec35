"""Everything a step panel needs, passed explicitly."""

from dataclasses import dataclass, field
from typing import Optional

from ..config import Config
from ..services.registry import Services
from .notifications import Notifier
from .playback import MediaPlayer
from .progress import PhaseListener
from .sequencer import StepSequencer
from .session import WizardSession


@dataclass
class WizardContext:
    session: WizardSession
    sequencer: StepSequencer
    services: Services
    config: Config
    notifier: Notifier = field(default_factory=Notifier)
    player: MediaPlayer = field(default_factory=MediaPlayer)
    progress_listener: Optional[PhaseListener] = None
