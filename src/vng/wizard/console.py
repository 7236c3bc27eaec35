"""Interactive terminal front end for the wizard shell."""

import logging
from pathlib import Path
from typing import List

import typer

from ..models import VOICE_OPTIONS
from .notifications import Notification, Variant
from .panels import (
    ImageGenerationPanel,
    MusicUploadPanel,
    PreviewPanel,
    ProcessingPanel,
    TextInputPanel,
    VideoGenerationPanel,
    VoiceGenerationPanel,
)
from .panels.image import COLOR_SCHEMES, IMAGE_STYLES
from .panels.preview import DOWNLOADS
from .panels.text_input import EXAMPLE_TEXTS
from .progress import Phase
from .shell import NOT_FOUND_MESSAGE, NOT_FOUND_TITLE, WizardShell

logger = logging.getLogger(__name__)


def echo_notification(notification: Notification) -> None:
    icon = "❌" if notification.variant is Variant.DESTRUCTIVE else "✅"
    typer.echo(f"{icon} {notification.title}: {notification.description}")


def echo_phase(phase: Phase, overall: float) -> None:
    typer.echo(f"   [{overall:5.1f}%] {phase.title}: {phase.status.value} ({phase.progress:.0f}%)")


def _choose(options, prompt: str) -> int:
    for i, option in enumerate(options, start=1):
        typer.echo(f"   {i}. {option}")
    choice = typer.prompt(prompt, type=int, default=1)
    return max(1, min(len(options), choice)) - 1


def _text_input(panel: TextInputPanel) -> None:
    typer.echo("\nExample texts:")
    for i, example in enumerate(EXAMPLE_TEXTS, start=1):
        typer.echo(f"   {i}. {example[:70]}...")
    text = typer.prompt("Text (or example number)", default=panel.text or "1")
    if text.strip().isdigit() and 1 <= int(text) <= len(EXAMPLE_TEXTS):
        panel.use_example(int(text) - 1)
    else:
        panel.set_text(text)
    typer.echo(f"   {panel.character_count} characters. {panel.status_hint}")

    panel.set_duration(typer.prompt("Duration in seconds (5-300)", default=str(panel.duration)))
    panel.set_generate_image(typer.confirm("Generate a background image?", default=panel.generate_image))
    portrait = typer.confirm("Portrait (9:16) video?", default=panel.aspect_ratio.value == "9:16")
    panel.set_aspect_ratio("9:16" if portrait else "16:9")


def _processing(panel: ProcessingPanel) -> None:
    if not panel.guard() and typer.confirm("Analyze the text now?", default=True):
        panel.execute()


def _voice(panel: VoiceGenerationPanel) -> None:
    typer.echo(f"\nText to narrate:\n{panel.display_text}\n")
    if typer.confirm("Edit the text?", default=False):
        panel.edit_text(typer.prompt("Text", default=panel.display_text))

    index = _choose([f"{v.name} ({v.language})" for v in VOICE_OPTIONS], "Voice")
    panel.select_voice(VOICE_OPTIONS[index].id)
    if typer.confirm("Preview this voice?", default=False):
        panel.preview_voice(panel.voice.id)

    if not panel.guard() or typer.confirm("Regenerate the voiceover?", default=False):
        panel.generate()
    if panel.guard() and typer.confirm("Play the voiceover?", default=False):
        panel.play_generated()


def _image(panel: ImageGenerationPanel) -> None:
    if panel.guard() and not typer.confirm("Regenerate the image?", default=False):
        return
    panel.select_style(IMAGE_STYLES[_choose(IMAGE_STYLES, "Style")])
    schemes = list(COLOR_SCHEMES)
    panel.select_palette(schemes[_choose(schemes, "Color scheme")])
    panel.set_quality(typer.prompt("Quality (50-100)", type=int, default=panel.quality))
    panel.set_extra_elements(typer.prompt("Additional elements", default="", show_default=False))
    panel.generate()


def _music(panel: MusicUploadPanel) -> None:
    if panel.project.music_url:
        if typer.confirm("Remove the uploaded music?", default=False):
            panel.remove()
        return
    path = typer.prompt("Music file (leave empty to skip)", default="", show_default=False)
    if path:
        panel.upload(Path(path).expanduser())
    else:
        panel.skip()


def _video(panel: VideoGenerationPanel) -> None:
    if not panel.guard() and typer.confirm("Generate the video?", default=True):
        panel.generate()


def preview_actions() -> List[str]:
    return ["Play video", *(f"Download {kind}" for kind in DOWNLOADS),
            "Export project info", "Share link", "Create new video", "Quit"]


def _preview(panel: PreviewPanel, shell: WizardShell) -> None:
    typer.echo("\n🎞️  Your video:")
    for key, value in panel.summary().items():
        typer.echo(f"   {key}: {value}")

    kinds = list(DOWNLOADS)
    index = _choose(preview_actions(), "Action")
    if index == 0:
        panel.play()
    elif 1 <= index <= len(kinds):
        dest = typer.prompt("Save to directory", default=".")
        panel.download(kinds[index - 1], Path(dest))
    elif index == len(kinds) + 1:
        panel.export_project(Path(typer.prompt("Save to directory", default=".")))
    elif index == len(kinds) + 2:
        panel.share_link()
    elif index == len(kinds) + 3:
        shell.create_new_project()
    else:
        raise typer.Exit()


def run_console(shell: WizardShell) -> None:
    """Prompt through the wizard until the user quits."""
    shell.start()
    while True:
        typer.echo(f"\n{shell.render_indicator()}")
        panel = shell.panel
        if panel is None:
            typer.echo(f"⚠️  {NOT_FOUND_TITLE}: {NOT_FOUND_MESSAGE}")
            shell.create_new_project()
            continue

        step = shell.ctx.sequencer.current
        typer.echo(f"\n📌 {step.title}: {step.description}")

        if isinstance(panel, PreviewPanel):
            _preview(panel, shell)
            continue

        handlers = {
            TextInputPanel: _text_input,
            ProcessingPanel: _processing,
            VoiceGenerationPanel: _voice,
            ImageGenerationPanel: _image,
            MusicUploadPanel: _music,
            VideoGenerationPanel: _video,
        }
        handlers[type(panel)](panel)

        cursor = shell.ctx.sequencer.cursor
        if shell.ctx.sequencer.current is not step:
            # The panel moved on by itself
            continue

        action = typer.prompt("[n]ext, [b]ack, [r]etry or [q]uit", default="n" if panel.next_enabled else "r")
        action = action.strip().lower()[:1]
        if action == "n":
            shell.go_next()
        elif action == "b":
            shell.go_back()
        elif action == "q":
            raise typer.Exit()
        logger.debug(f"Cursor {cursor} -> {shell.ctx.sequencer.cursor}")
