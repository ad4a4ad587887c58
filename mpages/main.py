"""
Main entry point for the mpages CLI.
Handles commands: init, start, path, count, config
"""

import typer
from pathlib import Path
from typing import Optional
from pydantic import ValidationError
from rich.markup import escape

from .config import ConfigError, ConfigManager, MpagesConfig
from .core.errors import MpagesError
from .core.formatter import format_count
from .interface.console import configure_logging, console
from .interface.live import run_live_session, summary_text
from .ingestion.documents import DocumentWordCounter, todays_document

app = typer.Typer(help="mpages: daily free-writing with a live word count")

DEFAULT_DIRECTORY = "~/mpages"


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging.")):
    """Write every day until you reach your word target."""
    configure_logging(verbose)


def _prompt_directory(default: str = DEFAULT_DIRECTORY) -> str:
    console.print("[yellow]Where should daily documents be stored?[/yellow]")
    return typer.prompt("Documents directory", default=default)


def _load_config(config_manager: ConfigManager) -> MpagesConfig:
    """Load config, asking for the documents directory once on first run."""
    try:
        config = config_manager.load_or_default()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print("[dim]Run 'mpages init' to fix it.[/dim]")
        raise typer.Exit(1)

    if not config.is_configured():
        config.directory = _prompt_directory()
        config_manager.save(config)
        console.print(f"[dim]Config saved to: {config_manager.config_file}[/dim]")
    return config


def _todays_document(config: MpagesConfig) -> Path:
    try:
        return todays_document(config.directory, extension=config.extension)
    except (ValueError, OSError) as e:
        console.print(f"[red]Error:[/red] Could not prepare today's document: {escape(str(e))}")
        raise typer.Exit(1)


def _open_in_editor(document: Path, editor: Optional[str]) -> None:
    import shlex
    import subprocess

    if editor:
        try:
            subprocess.Popen(shlex.split(editor) + [str(document)])
        except OSError as e:
            console.print(f"[yellow]Warning:[/yellow] Could not start editor '{editor}': {escape(str(e))}")
    else:
        typer.launch(str(document))


@app.command()
def init():
    """Choose the documents directory and daily targets."""
    config_manager = ConfigManager()
    try:
        config = config_manager.load_or_default()
    except ConfigError as e:
        # Re-initializing is how a broken config gets repaired
        console.print(f"[yellow]Warning:[/yellow] {escape(str(e))}")
        console.print("[dim]Starting from default settings.[/dim]")
        config = MpagesConfig()

    console.print("[bold blue]Setting up mpages...[/bold blue]")

    directory = _prompt_directory(config.directory or DEFAULT_DIRECTORY)
    threshold = typer.prompt("Daily word target", default=config.word_threshold, type=int)
    interval = typer.prompt("Status refresh interval (seconds)", default=config.update_interval, type=int)

    try:
        config = MpagesConfig(
            directory=directory,
            word_threshold=threshold,
            update_interval=interval,
            extension=config.extension,
            editor=config.editor,
        )
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    config_manager.save(config)

    console.print("\n[green]✓[/green] mpages initialized successfully!")
    console.print(f"[dim]Config saved to: {config_manager.config_file}[/dim]")
    console.print("\n[dim]Run 'mpages start' to begin writing.[/dim]")


@app.command()
def start(
    open_document: bool = typer.Option(True, "--open/--no-open", help="Open today's document in an editor."),
    threshold: Optional[int] = typer.Option(None, "--threshold", "-t", help="Word target for this session."),
    interval: Optional[int] = typer.Option(None, "--interval", "-i", help="Seconds between status updates."),
):
    """Start today's writing session."""
    config_manager = ConfigManager()
    config = _load_config(config_manager)

    overrides = {}
    if threshold is not None:
        overrides["word_threshold"] = threshold
    if interval is not None:
        overrides["update_interval"] = interval
    try:
        config = MpagesConfig(**{**config.model_dump(), **overrides})
    except ValidationError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    document = _todays_document(config)
    console.print(f"[bold blue]Writing to[/bold blue] {document}")
    if open_document:
        _open_in_editor(document, config.editor)
    console.print("[dim]Save as you go. Press Enter or Ctrl+C to finish.[/dim]")

    try:
        summary = run_live_session(document, config.to_session_config())
    except MpagesError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    console.print(summary_text(summary))


@app.command()
def path():
    """Print the path of today's document."""
    config = _load_config(ConfigManager())
    console.print(str(_todays_document(config)), soft_wrap=True)


@app.command()
def count():
    """Show today's word count against the target."""
    config = _load_config(ConfigManager())
    document = _todays_document(config)

    words = DocumentWordCounter(document)()
    text = format_count(words, config.word_threshold)
    text.append(f" / {config.word_threshold} words")
    console.print(text)


@app.command(name="config")
def show_config():
    """Show the current configuration."""
    config_manager = ConfigManager()

    if not config_manager.exists():
        console.print("[red]Error:[/red] mpages is not initialized. Run 'mpages init' first.")
        raise typer.Exit(1)

    try:
        config = config_manager.load()
    except ConfigError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        console.print("[dim]Run 'mpages init' to fix it.[/dim]")
        raise typer.Exit(1)
    if config is None:
        console.print("[red]Error:[/red] Failed to load config. Please run 'mpages init' again.")
        raise typer.Exit(1)

    console.print("[bold cyan]Configuration[/bold cyan]")
    console.print(f"  • Directory: {config.directory or '[dim]not set[/dim]'}")
    console.print(f"  • Word target: {config.word_threshold}")
    console.print(f"  • Refresh interval: {config.update_interval}s")
    console.print(f"  • Extension: {config.extension}")
    console.print(f"  • Editor: {config.editor or '[dim]system default[/dim]'}")
    console.print(f"[dim]Config file: {config_manager.config_file}[/dim]")


if __name__ == "__main__":
    app()
