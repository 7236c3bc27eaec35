"""User-facing notifications (the wizard's toasts)."""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Callable, List, Optional

from ..errors import WizardError

logger = logging.getLogger(__name__)


class Variant(str, Enum):
    DEFAULT = "default"
    DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: Variant = Variant.DEFAULT


NotificationSink = Callable[[Notification], None]


class Notifier:
    """Collects notifications and forwards them to an optional sink."""

    def __init__(self, sink: Optional[NotificationSink] = None) -> None:
        self._sink = sink
        self._history: List[Notification] = []

    def notify(self, title: str, description: str, variant: Variant = Variant.DEFAULT) -> Notification:
        notification = Notification(title=title, description=description, variant=variant)
        self._history.append(notification)

        if variant is Variant.DESTRUCTIVE:
            logger.warning(f"{title}: {description}")
        else:
            logger.info(f"{title}: {description}")

        if self._sink:
            self._sink(notification)
        return notification

    def error(self, exc: WizardError) -> Notification:
        """Report a recoverable error."""
        return self.notify(exc.title, str(exc), Variant.DESTRUCTIVE)

    @property
    def history(self) -> List[Notification]:
        return list(self._history)

    @property
    def last(self) -> Optional[Notification]:
        return self._history[-1] if self._history else None

    def clear(self) -> None:
        self._history.clear()
