from __future__ import annotations

from pathlib import Path

import yaml

from conftest import advance_to, write_file

from vng.wizard import Variant, WizardShell
from vng.wizard.console import preview_actions


def _finish_with_local_video(shell: WizardShell, tmp_path: Path) -> None:
    advance_to(shell, "video")
    video = write_file(tmp_path / "render.mp4", 4096)
    shell.ctx.session.update(video_url=video.as_uri(), video_size_bytes=4096)
    shell.go_next()


def test_next_is_disabled_on_last_step(shell: WizardShell) -> None:
    advance_to(shell, "preview")

    assert not shell.panel.next_enabled
    assert not shell.go_next()
    assert shell.ctx.sequencer.current.id == "preview"


def test_summary(shell: WizardShell) -> None:
    advance_to(shell, "preview")

    summary = shell.panel.summary()

    assert summary["Duration"] == "30s"
    assert summary["Resolution"] == "1920x1080"
    assert summary["Size"] == "2.38 MB"
    assert summary["Format"] == "MP4"
    assert summary["Voice"] == "Indian English Female Voice"


def test_download_video(shell: WizardShell, tmp_path: Path) -> None:
    _finish_with_local_video(shell, tmp_path)

    saved = shell.panel.download("video", tmp_path / "downloads")

    assert saved is not None
    assert saved.read_bytes() == b"\0" * 4096
    assert shell.ctx.notifier.last.title == "Video Downloaded"


def test_download_missing_asset(shell: WizardShell, tmp_path: Path) -> None:
    advance_to(shell, "preview")

    assert shell.panel.download("music", tmp_path) is None
    assert shell.ctx.notifier.last.title == "Download Failed"


def test_export_project(shell: WizardShell, tmp_path: Path) -> None:
    advance_to(shell, "preview")

    path = shell.panel.export_project(tmp_path)

    data = yaml.safe_load(path.read_text())
    assert data["id"] == shell.ctx.session.project.id
    assert data["status"] == "completed"


def test_share_link(shell: WizardShell) -> None:
    advance_to(shell, "preview")

    link = shell.panel.share_link()

    assert link == f"https://vng.test/share/{shell.ctx.session.project.id}"


def test_play_video(shell: WizardShell, player) -> None:
    advance_to(shell, "preview")

    assert shell.panel.play()
    assert player.played == [shell.ctx.session.project.video_url]
    assert shell.ctx.notifier.last.title == "Video Playing"


def test_download_into_a_file_is_reported(shell: WizardShell, tmp_path: Path) -> None:
    _finish_with_local_video(shell, tmp_path)
    blocker = write_file(tmp_path / "blocker", 0)

    assert shell.panel.download("video", blocker) is None
    assert shell.ctx.notifier.last.title == "Save Failed"
    assert shell.ctx.notifier.last.variant is Variant.DESTRUCTIVE


def test_export_into_a_file_is_reported(shell: WizardShell, tmp_path: Path) -> None:
    advance_to(shell, "preview")
    blocker = write_file(tmp_path / "blocker", 0)

    assert shell.panel.export_project(blocker) is None
    assert shell.ctx.notifier.last.title == "Export Failed"
    assert shell.ctx.sequencer.current.id == "preview"


def test_download_music(shell: WizardShell, tmp_path: Path) -> None:
    advance_to(shell, "music")
    shell.panel.upload(write_file(tmp_path / "song.mp3", 1024))
    advance_to(shell, "preview")

    saved = shell.panel.download("music", tmp_path / "downloads")

    assert saved is not None
    assert saved.suffix == ".mp3"
    assert shell.ctx.notifier.last.title == "Music Downloaded"


def test_preview_menu_offers_every_download() -> None:
    actions = preview_actions()

    for label in ("Download video", "Download image", "Download audio", "Download music"):
        assert label in actions
    assert actions[-1] == "Quit"
