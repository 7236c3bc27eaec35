"""Capability interfaces for the collaborator services.

Each generative collaborator sits behind one small interface so the wizard
can be driven by real HTTP clients or by deterministic fakes.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, Generic, Optional, Sequence, TypeVar

from ..errors import RemoteCallError
from ..models import AspectRatio, VoiceOption

logger = logging.getLogger(__name__)

T = TypeVar("T")
R = TypeVar("R")

ProgressCallback = Callable[[float], None]


@dataclass
class AnalysisResult:
    """Outcome of text analysis.

    `text` is a rewritten narration when the service returned one, or None
    when it only confirmed the input.
    """

    text: Optional[str] = None
    message: str = ""


@dataclass
class SpeechRequest:
    """Input for speech synthesis."""

    text: str
    voice: VoiceOption
    name: str = "voiceover"


@dataclass
class ImageRequest:
    """Input for image synthesis."""

    prompt: str
    style: str
    palette: str
    quality: int = 80
    aspect_ratio: AspectRatio = AspectRatio.LANDSCAPE
    name: str = "background"


@dataclass
class VideoRequest:
    """Everything the video collaborator needs for one render."""

    project_id: str
    text: str
    audio_url: str
    image_url: Optional[str]
    music_url: Optional[str]
    duration: int
    aspect_ratio: AspectRatio


@dataclass
class VideoResult:
    """A rendered video."""

    url: str
    size_bytes: Optional[int] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None


@dataclass
class AssemblyJob:
    """State carried between the phases of one video assembly."""

    request: VideoRequest
    workdir: Optional[Path] = None
    payload: Dict[str, Any] = field(default_factory=dict)
    artifacts: Dict[str, Any] = field(default_factory=dict)


class TextAnalyzer(ABC):
    """Text-analysis collaborator."""

    @abstractmethod
    def analyze(self, text: str) -> AnalysisResult:
        ...


class SpeechSynthesizer(ABC):
    """Speech-synthesis collaborator."""

    @abstractmethod
    def synthesize(self, request: SpeechRequest) -> str:
        """Return a playable audio reference."""
        ...


class ImageSynthesizer(ABC):
    """Image-synthesis collaborator."""

    @abstractmethod
    def generate(self, request: ImageRequest) -> str:
        """Return an image reference."""
        ...


class VideoAssembler(ABC):
    """Video-assembly collaborator.

    One assembly runs through five phases in order. Each phase receives a
    progress callback taking a percentage for that phase.
    """

    @abstractmethod
    def prepare(self, request: VideoRequest, report: ProgressCallback) -> AssemblyJob:
        ...

    @abstractmethod
    def sync_audio(self, job: AssemblyJob, report: ProgressCallback) -> None:
        ...

    @abstractmethod
    def compose(self, job: AssemblyJob, report: ProgressCallback) -> None:
        ...

    @abstractmethod
    def render(self, job: AssemblyJob, report: ProgressCallback) -> None:
        ...

    @abstractmethod
    def finalize(self, job: AssemblyJob, report: ProgressCallback) -> VideoResult:
        ...


class KeyFallback(Generic[T]):
    """Try a capability built with the primary key, then once with the fallback.

    Args:
        build: Factory creating the capability for one API key.
        keys: Configured keys; only the first two are used.
        service: Collaborator name for error messages.
    """

    def __init__(self, build: Callable[[str], T], keys: Sequence[str], service: str) -> None:
        self._build = build
        self._keys = list(keys)[:2]
        self._service = service

    def call(self, action: Callable[[T], R]) -> R:
        if not self._keys:
            raise RemoteCallError(
                f"No API key configured for {self._service}",
                service=self._service,
            )

        primary = self._keys[0]
        try:
            return action(self._build(primary))
        except RemoteCallError as e:
            if len(self._keys) < 2:
                raise
            logger.warning(f"{self._service} failed with primary key ({e}). Trying fallback key...")

        return action(self._build(self._keys[1]))


class FallbackTextAnalyzer(TextAnalyzer):
    """Text analyzer with a single fallback credential."""

    def __init__(self, fallback: KeyFallback[TextAnalyzer]) -> None:
        self._fallback = fallback

    def analyze(self, text: str) -> AnalysisResult:
        return self._fallback.call(lambda analyzer: analyzer.analyze(text))


class FallbackImageSynthesizer(ImageSynthesizer):
    """Image synthesizer with a single fallback credential."""

    def __init__(self, fallback: KeyFallback[ImageSynthesizer]) -> None:
        self._fallback = fallback

    def generate(self, request: ImageRequest) -> str:
        return self._fallback.call(lambda synthesizer: synthesizer.generate(request))
