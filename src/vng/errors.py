"""Exceptions raised by wizard panels and collaborator services."""
from typing import Optional


class WizardError(RuntimeError):
    """Base exception for recoverable wizard errors.

    Attributes:
        title: Short user-facing heading for the notification.
    """

    default_title = "Something Went Wrong"

    def __init__(self, message: str, title: Optional[str] = None):
        super().__init__(message)
        self.title = title or self.default_title


class ValidationError(WizardError):
    """Raised when a local guard fails. Never reaches a remote service."""

    default_title = "Validation Error"


class RemoteCallError(WizardError):
    """
    Raised when a collaborator service call fails or returns non-success.

    Attributes:
        service: Name of the collaborator that failed.
        status_code: HTTP status code, when the service answered at all.
    """

    default_title = "Service Error"

    def __init__(
        self,
        message: str,
        service: str = "",
        status_code: Optional[int] = None,
        title: Optional[str] = None,
    ):
        super().__init__(message, title=title)
        self.service = service
        self.status_code = status_code


class PlaybackError(WizardError):
    """Raised when local media playback fails."""

    default_title = "Playback Error"


class StorageError(WizardError):
    """Raised when a media file can't be written to or read from local disk."""

    default_title = "Storage Error"
