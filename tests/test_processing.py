from __future__ import annotations

import requests

from vng.agents import NarrationAgent
from vng.errors import RemoteCallError
from vng.models import ProjectStatus
from vng.services import AnalysisResult
from vng.services.gemini import GeminiClient
from vng.wizard import PhaseStatus, Variant, WizardShell


def _enter_processing(shell: WizardShell) -> None:
    shell.panel.set_text("Hello world, this is my story.")
    shell.go_next()


def test_rewrite_overwrites_text(shell: WizardShell, services) -> None:
    services.text_analyzer.result = AnalysisResult(text="Hello, world. This is my story.", message="Polished")

    _enter_processing(shell)

    project = shell.ctx.session.project
    assert project.text == "Hello, world. This is my story."
    assert project.status == ProjectStatus.VOICE_GENERATION
    assert shell.ctx.sequencer.cursor == 2
    assert shell.ctx.notifier.history[-1].title == "Processing Complete"


def test_confirmation_keeps_text(shell: WizardShell) -> None:
    _enter_processing(shell)

    assert shell.ctx.session.project.text == "Hello world, this is my story."


def test_failure_stays_on_processing(shell: WizardShell, services) -> None:
    services.text_analyzer.error = RemoteCallError("quota exceeded", service="gemini")

    _enter_processing(shell)

    panel = shell.panel
    assert panel.step_id == "processing"
    assert not panel.next_enabled
    assert panel.tracker.phase("text-analysis").status == PhaseStatus.ERROR
    assert shell.ctx.notifier.last.title == "Processing Error"
    assert shell.ctx.session.project.status == ProjectStatus.PROCESSING

    services.text_analyzer.error = None
    assert panel.execute()
    assert shell.ctx.sequencer.current.id == "voice"


def test_retreat_into_processing_does_not_rerun(shell: WizardShell, services) -> None:
    _enter_processing(shell)

    shell.go_back()

    assert shell.ctx.sequencer.current.id == "processing"
    assert len(services.text_analyzer.calls) == 1
    assert shell.panel.next_enabled


def test_non_json_reply_from_gemini_is_reported(shell: WizardShell, services, monkeypatch) -> None:
    proxy_page = requests.Response()
    proxy_page.status_code = 200
    proxy_page.encoding = "utf-8"
    proxy_page._content = b"<html>proxy error</html>"
    monkeypatch.setattr("vng.services.gemini.requests.post", lambda url, **kwargs: proxy_page)
    services.text_analyzer = NarrationAgent(GeminiClient("secret"))

    _enter_processing(shell)

    assert shell.panel.step_id == "processing"
    assert not shell.panel.next_enabled
    assert shell.ctx.notifier.last.title == "Processing Error"
    assert shell.ctx.notifier.last.variant is Variant.DESTRUCTIVE
    assert shell.ctx.session.project.text == "Hello world, this is my story."
