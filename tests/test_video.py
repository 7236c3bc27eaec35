from __future__ import annotations

from conftest import FakeAssembler, advance_to, write_file

from vng.models import ProjectStatus
from vng.services.local_render import MoviepyAssembler
from vng.wizard import PhaseStatus, WizardShell
from vng.wizard.panels.video import PHASES


def test_phases_run_in_declared_order(shell: WizardShell, services) -> None:
    advance_to(shell, "video")

    assert services.video.calls == ["prepare", "sync_audio", "compose", "render", "finalize"]
    assert [p.id for p in shell.panel.tracker.phases] == [p.id for p in PHASES]
    assert all(p.status == PhaseStatus.COMPLETED for p in shell.panel.tracker.phases)


def test_completion_writes_video(shell: WizardShell) -> None:
    advance_to(shell, "video")

    project = shell.ctx.session.project
    assert project.video_url == f"https://cdn.test/{project.id}.mp4"
    assert project.video_size_bytes == 2_500_000
    assert project.status == ProjectStatus.COMPLETED
    assert shell.panel.next_enabled
    assert shell.ctx.notifier.last.title == "Video Generated Successfully!"


def test_overall_progress_is_monotonic(cfg, services, player) -> None:
    video_phases = {p.id for p in PHASES}
    seen = []

    def listener(phase, overall) -> None:
        if phase.id in video_phases:
            seen.append(overall)

    shell = WizardShell.create(cfg, services=services, player=player, progress_listener=listener)
    shell.start()

    advance_to(shell, "video")

    assert seen == sorted(seen)
    assert seen[-1] == 100
    assert shell.panel.overall_progress == 100


def test_overall_below_100_until_last_phase(shell: WizardShell, services) -> None:
    services.video = FakeAssembler(fail_at="finalize")

    advance_to(shell, "music")
    shell.panel.skip()
    shell.go_next()

    panel = shell.panel
    assert panel.step_id == "video"
    assert panel.overall_progress < 100
    assert panel.tracker.phase("finalization").status == PhaseStatus.ERROR
    assert not panel.next_enabled
    assert shell.ctx.session.project.video_url is None
    assert shell.ctx.notifier.last.title == "Video Generation Failed"


def test_retry_after_failure(shell: WizardShell, services) -> None:
    services.video.fail_at = "render"
    advance_to(shell, "music")
    shell.panel.skip()
    shell.go_next()
    panel = shell.panel
    assert not panel.next_enabled

    services.video.fail_at = None
    assert panel.generate()

    assert panel.next_enabled
    assert panel.overall_progress == 100


def test_reentering_from_music_renders_again(shell: WizardShell, services, tmp_path) -> None:
    advance_to(shell, "video")
    shell.go_back()
    shell.panel.upload(write_file(tmp_path / "late.mp3", 1024))

    assert shell.go_next()

    assert services.video.calls.count("prepare") == 2
    assert services.video.request.music_url == shell.ctx.session.project.music_url
    assert shell.panel.next_enabled


class _Clip:
    def __init__(self) -> None:
        self.closed = False

    def close(self) -> None:
        self.closed = True


def test_corrupt_image_fails_local_render(shell: WizardShell, services, tmp_path, monkeypatch) -> None:
    voice = _Clip()

    def broken_still(image_path, duration, size):
        raise OSError("cannot identify image file")

    monkeypatch.setattr("vng.services.local_render.load_audio", lambda path: voice)
    monkeypatch.setattr("vng.services.local_render.fit_audio", lambda clip, seconds, **kwargs: clip)
    monkeypatch.setattr("vng.services.local_render.still_clip", broken_still)
    services.video = MoviepyAssembler(output_dir=tmp_path / "renders")

    advance_to(shell, "music")
    shell.ctx.session.update(
        audio_url=write_file(tmp_path / "voice.mp3", 512).as_uri(),
        image_url=write_file(tmp_path / "image.png", 64).as_uri(),
    )
    shell.panel.skip()
    shell.go_next()

    panel = shell.panel
    assert panel.step_id == "video"
    assert not panel.next_enabled
    assert panel.tracker.phase("visual-composition").status == PhaseStatus.ERROR
    assert shell.ctx.notifier.last.title == "Video Generation Failed"
    assert voice.closed
