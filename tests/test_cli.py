from __future__ import annotations

from pathlib import Path

from typer.testing import CliRunner

from vng import __version__
from vng.cli import app

from conftest import write_file

runner = CliRunner()


def test_version() -> None:
    result = runner.invoke(app, ["--version"])

    assert result.exit_code == 0
    assert __version__ in result.output


def test_steps_marks_current_step() -> None:
    result = runner.invoke(app, ["steps", "--at", "2"])

    assert result.exit_code == 0
    assert "▶️  3. Voice" in result.output
    assert "✅ 1. Text Input" in result.output
    assert "Step Not Found" not in result.output


def test_steps_past_the_end() -> None:
    result = runner.invoke(app, ["steps", "--at", "9"])

    assert result.exit_code == 0
    assert "Step Not Found" in result.output


def test_voices_lists_catalogue() -> None:
    result = runner.invoke(app, ["voices"])

    assert result.exit_code == 0
    assert "hindi-female" in result.output
    assert "english-india-male" in result.output


def test_check_music_accepts_small_mp3(tmp_path: Path) -> None:
    song = write_file(tmp_path / "song.mp3", 2 * 1024 * 1024)

    result = runner.invoke(app, ["check-music", str(song)])

    assert result.exit_code == 0
    assert "2 MB" in result.output
    assert "Accepted" in result.output


def test_check_music_rejects_large_wav(tmp_path: Path) -> None:
    song = write_file(tmp_path / "song.wav", 12 * 1024 * 1024)

    result = runner.invoke(app, ["check-music", str(song)])

    assert result.exit_code == 1
    assert "File Too Large" in result.output


def test_run_reports_missing_configuration(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("vng.cli.config.gemini_api_keys", [])
    monkeypatch.setattr("vng.cli.config.text_provider", "gemini")
    monkeypatch.setattr("vng.cli.config.workspace", tmp_path)

    result = runner.invoke(app, ["run", "--workspace", str(tmp_path / "ws")])

    assert result.exit_code == 1
    assert "GEMINI_API_KEYS" in result.output
