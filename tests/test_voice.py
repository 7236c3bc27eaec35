from __future__ import annotations

import json

from conftest import advance_to

from vng.errors import RemoteCallError
from vng.models import ProjectStatus, VoiceGender
from vng.wizard import WizardShell


def test_generate_writes_audio_and_voice(shell: WizardShell, services) -> None:
    advance_to(shell, "voice")
    panel = shell.panel
    assert not panel.next_enabled

    assert panel.select_voice("hindi-male")
    panel.edit_text("Edited narration text")
    assert panel.generate()

    project = shell.ctx.session.project
    assert project.audio_url == f"https://cdn.test/voiceover-{project.id}.mp3"
    assert project.text == "Edited narration text"
    assert project.voice_gender == VoiceGender.MALE
    assert project.voice_language == "hi-IN"
    assert services.speech.requests[-1].voice.provider_voice == "hi-IN-Wavenet-B"
    assert panel.next_enabled


def test_display_text_unwraps_json(shell: WizardShell) -> None:
    shell.panel.set_text(json.dumps({"content": "Narrate me please"}))
    shell.go_next()

    assert shell.panel.display_text == "Narrate me please"


def test_failure_leaves_project_unchanged(shell: WizardShell, services) -> None:
    advance_to(shell, "voice")
    before = shell.ctx.session.project
    services.speech.error = RemoteCallError("503", service="text-to-speech")

    assert not shell.panel.generate()

    assert shell.ctx.session.project == before
    assert shell.ctx.notifier.last.title == "Voice Generation Failed"
    assert not shell.go_next()
    assert shell.ctx.notifier.last.title == "Voiceover Required"


def test_skips_image_step_when_disabled(shell: WizardShell) -> None:
    shell.panel.set_text("Hello world, no pictures")
    shell.panel.set_generate_image(False)
    shell.go_next()
    shell.panel.generate()

    assert shell.go_next()

    assert shell.ctx.sequencer.current.id == "music"
    assert shell.ctx.session.project.status == ProjectStatus.MUSIC_UPLOAD
    assert 3 in shell.ctx.sequencer.completed_steps


def test_preview_voice_plays_sample(shell: WizardShell, services, player) -> None:
    advance_to(shell, "voice")

    assert shell.panel.preview_voice("english-india-female")

    assert player.played == ["https://cdn.test/preview-english-india-female.mp3"]
    assert shell.ctx.session.project.audio_url is None


def test_play_without_audio_reports_playback_error(shell: WizardShell) -> None:
    advance_to(shell, "voice")

    assert not shell.panel.play_generated()
    assert shell.ctx.notifier.last.title == "Playback Error"


def test_unknown_voice_is_rejected(shell: WizardShell) -> None:
    advance_to(shell, "voice")

    assert not shell.panel.select_voice("robot")
    assert shell.ctx.notifier.last.title == "Voice Not Found"
