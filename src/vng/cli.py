"""CLI entry point for Video Narrative Genie."""

import logging
import typer
from pathlib import Path
from typing import Optional

from . import __version__
from .config import config
from .models import VOICE_OPTIONS, WIZARD_STEPS, MusicFile, format_file_size
from .errors import ValidationError

app = typer.Typer(
    name="vng",
    help="Turn text into a narrated video, step by step",
    no_args_is_help=True
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"vng version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit"
    )
) -> None:
    """Video Narrative Genie - Create narrated videos from text using AI."""
    pass


@app.command()
def run(
    workspace: Optional[Path] = typer.Option(
        None,
        "--workspace",
        "-w",
        help="Directory for generated and uploaded media",
        file_okay=False,
        dir_okay=True
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging"
    )
) -> None:
    """Start the interactive video wizard."""
    from .wizard import WizardShell
    from .wizard.console import echo_notification, echo_phase, run_console
    from .wizard.notifications import Notifier

    setup_logging(verbose)

    if workspace:
        config.workspace = workspace

    try:
        config.validate_required()
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    config.workspace.mkdir(parents=True, exist_ok=True)
    typer.echo("🎬 Video Narrative Genie")
    typer.echo(f"   Workspace: {config.workspace}")
    typer.echo(f"   Providers: text={config.text_provider}, image={config.image_provider}, "
               f"video={config.video_provider}")

    try:
        shell = WizardShell.create(
            config,
            notifier=Notifier(sink=echo_notification),
            progress_listener=echo_phase,
        )
    except ValueError as e:
        typer.echo(f"❌ Configuration error: {e}")
        raise typer.Exit(1)

    try:
        run_console(shell)
    except (KeyboardInterrupt, typer.Abort):
        typer.echo("\n👋 Bye")


@app.command()
def steps(
    at: int = typer.Option(
        0,
        "--at",
        help="Show the indicator with this step active",
        min=0
    )
) -> None:
    """List the wizard steps."""
    from .wizard import StepState, indicator_items

    icons = {
        StepState.COMPLETED: "✅",
        StepState.CURRENT: "▶️ ",
        StepState.PENDING: "⏳",
    }

    typer.echo("🧭 Wizard steps:")
    for item in indicator_items(WIZARD_STEPS, at, range(at)):
        typer.echo(f"   {icons[item.state]} {item.index + 1}. {item.step.title} - {item.step.description}")

    if at >= len(WIZARD_STEPS):
        typer.echo("⚠️  Step Not Found: Please navigate to a valid step")


@app.command()
def voices() -> None:
    """List the available narrator voices."""
    typer.echo("🎙️  Voices:")
    for voice in VOICE_OPTIONS:
        typer.echo(f"   {voice.id}: {voice.name} ({voice.gender.value}, {voice.language}, {voice.accent} accent)")


@app.command("check-music")
def check_music(
    file: Path = typer.Argument(
        ...,
        help="Audio file to check",
        exists=True,
        file_okay=True,
        dir_okay=False
    )
) -> None:
    """Check whether a file would be accepted as background music."""
    from .wizard.panels.music import check_music as check

    music = MusicFile.from_path(file)
    typer.echo(f"🎵 {music.name}")
    typer.echo(f"   Type: {music.mime_type or 'unknown'}")
    typer.echo(f"   Size: {format_file_size(music.size)}")

    try:
        check(music)
    except ValidationError as e:
        typer.echo(f"❌ {e.title}: {e}")
        raise typer.Exit(1)

    typer.echo("✅ Accepted")


if __name__ == "__main__":
    app()
