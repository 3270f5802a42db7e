"""Main CLI entry point for slashterm."""

import logging
from pathlib import Path

import typer
from rich.console import Console

from slashterm import __version__
from slashterm.config.paths import SlashtermPaths
from slashterm.config.settings import Settings

# Create main app
app = typer.Typer(
    name="slashterm",
    help="slashterm - chat with a local LLM from a slash-command terminal",
    no_args_is_help=False,
    rich_markup_mode="rich",
)

# Rich console for pretty output
_console = Console()


def setup_logging(log_dir: Path) -> None:
    """Log to a file so log records never land in the terminal."""
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / "slashterm.log"

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.FileHandler(log_file)],
    )

    # Reduce noise from some libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("openai").setLevel(logging.WARNING)


def _launch_console() -> None:
    from .console.app import ConsoleApp

    paths = SlashtermPaths()
    setup_logging(paths.log_dir)
    ConsoleApp(paths=paths).run()


@app.command()
def console() -> None:
    """
    Launch the interactive console.

    Slash commands manage the model (/download, /load, /unload); any other
    line is sent to the model as chat.
    """
    _launch_console()


@app.command()
def status() -> None:
    """
    Show configuration and model cache status.
    """
    from .console.renderer import make_table

    paths = SlashtermPaths()
    settings = Settings.load(paths=paths)
    model_path = settings.models_dir / settings.model_filename

    rows = [
        ["Config", str(paths.config_file) if paths.config_exists() else "[dim]defaults[/dim]"],
        ["Model", f"{settings.model_name} ({settings.model_size_mb:g}MB)"],
        ["Cache", str(settings.models_dir)],
        [
            "Downloaded",
            "[green]yes[/green]" if model_path.exists() else "[yellow]no (run /download)[/yellow]",
        ],
        ["Server", settings.server_base_url],
    ]
    errors = settings.validate()
    for error in errors:
        rows.append(["Error", f"[red]{error}[/red]"])

    _console.print()
    make_table("slashterm Status", [("Item", "bold"), ("Value", "")], rows)
    _console.print()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        is_eager=True,
    ),
) -> None:
    """slashterm - chat with a local LLM."""
    if version:
        _console.print(f"slashterm v{__version__}")
        raise typer.Exit()

    # If no subcommand, launch interactive console
    if ctx.invoked_subcommand is None:
        _launch_console()


if __name__ == "__main__":
    app()
