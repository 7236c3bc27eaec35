from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import pytest

from vng.config import Config
from vng.errors import PlaybackError, RemoteCallError
from vng.services import (
    AnalysisResult,
    AssemblyJob,
    ImageRequest,
    ImageSynthesizer,
    SpeechRequest,
    SpeechSynthesizer,
    TextAnalyzer,
    VideoAssembler,
    VideoRequest,
    VideoResult,
)
from vng.services.registry import Services
from vng.wizard import WizardShell
from vng.wizard.playback import MediaPlayer


class FakeAnalyzer(TextAnalyzer):
    def __init__(self, result: Optional[AnalysisResult] = None, error: Optional[Exception] = None):
        self.result = result or AnalysisResult(text=None, message="Looks good")
        self.error = error
        self.calls: List[str] = []

    def analyze(self, text: str) -> AnalysisResult:
        self.calls.append(text)
        if self.error:
            raise self.error
        return self.result


class FakeSpeech(SpeechSynthesizer):
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.requests: List[SpeechRequest] = []

    def synthesize(self, request: SpeechRequest) -> str:
        self.requests.append(request)
        if self.error:
            raise self.error
        return f"https://cdn.test/{request.name}.mp3"


class FakeImages(ImageSynthesizer):
    def __init__(self, error: Optional[Exception] = None):
        self.error = error
        self.requests: List[ImageRequest] = []

    def generate(self, request: ImageRequest) -> str:
        self.requests.append(request)
        if self.error:
            raise self.error
        return f"https://cdn.test/image-{len(self.requests)}.png"


class FakeAssembler(VideoAssembler):
    """Records the phase order and reports partial progress in each phase."""

    def __init__(self, fail_at: Optional[str] = None):
        self.fail_at = fail_at
        self.calls: List[str] = []
        self.request: Optional[VideoRequest] = None

    def _phase(self, name: str, report) -> None:
        self.calls.append(name)
        report(50.0)
        if self.fail_at == name:
            raise RemoteCallError(f"{name} exploded", service="fake-video")
        report(75.0)

    def prepare(self, request: VideoRequest, report) -> AssemblyJob:
        self.request = request
        self._phase("prepare", report)
        return AssemblyJob(request=request)

    def sync_audio(self, job: AssemblyJob, report) -> None:
        self._phase("sync_audio", report)

    def compose(self, job: AssemblyJob, report) -> None:
        self._phase("compose", report)

    def render(self, job: AssemblyJob, report) -> None:
        self._phase("render", report)

    def finalize(self, job: AssemblyJob, report) -> VideoResult:
        self._phase("finalize", report)
        return VideoResult(url=f"https://cdn.test/{job.request.project_id}.mp4", size_bytes=2_500_000)


class FakePlayer(MediaPlayer):
    def __init__(self, error: bool = False):
        self.error = error
        self.played: List[Optional[str]] = []

    def play(self, reference: Optional[str]) -> None:
        self.played.append(reference)
        if self.error or not reference:
            raise PlaybackError("Player unavailable")


@pytest.fixture
def cfg(tmp_path: Path) -> Config:
    return Config(
        workspace=tmp_path / "workspace",
        progress_delay=0.0,
        share_base_url="https://vng.test",
    )


@pytest.fixture
def services() -> Services:
    return Services(
        text_analyzer=FakeAnalyzer(),
        speech=FakeSpeech(),
        images=FakeImages(),
        video=FakeAssembler(),
    )


@pytest.fixture
def player() -> FakePlayer:
    return FakePlayer()


@pytest.fixture
def shell(cfg: Config, services: Services, player: FakePlayer) -> WizardShell:
    shell = WizardShell.create(cfg, services=services, player=player)
    shell.start()
    return shell


def write_file(path: Path, size: int) -> Path:
    """Create a file of `size` bytes without writing them all."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "wb") as f:
        f.truncate(size)
    return path


def advance_to(shell: WizardShell, step_id: str) -> None:
    """Drive the wizard forward with valid input until `step_id` is active."""
    while shell.ctx.sequencer.current is not None and shell.ctx.sequencer.current.id != step_id:
        panel = shell.panel
        if panel.step_id == "text-input":
            panel.set_text("Hello world, this is a narrated video.")
        elif panel.step_id == "voice":
            panel.generate()
        elif panel.step_id == "image":
            panel.generate()
        elif panel.step_id == "music":
            panel.skip()
        assert shell.go_next(), f"stuck at {panel.step_id}"
