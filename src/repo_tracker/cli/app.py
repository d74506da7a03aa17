"""Main CLI application for Repository Tracker."""

from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from repo_tracker import __version__
from repo_tracker.cli import github as github_cmd
from repo_tracker.cli import repos as repos_cmd
from repo_tracker.cli.track import track
from repo_tracker.config import get_settings
from repo_tracker.logging import setup_logging

app = typer.Typer(
    name="repotracker",
    help="Keep a local store of GitHub repositories and their open issues up to date.",
    add_completion=False,
)
console = Console()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"repotracker version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress non-error output (WARNING level).",
        ),
    ] = False,
) -> None:
    """Repository Tracker - sync GitHub repository data into a local store."""
    settings = get_settings()
    log_config = settings.logging

    setup_logging(
        level=settings.log_level,
        verbose=verbose,
        quiet=quiet,
        log_file=Path(log_config.log_file) if log_config.log_file else None,
        rotation=log_config.rotation,
        retention=log_config.retention,
        serialize=log_config.serialize,
    )


app.command("track")(track)
app.add_typer(repos_cmd.app, name="repos")
app.add_typer(github_cmd.app, name="github")


if __name__ == "__main__":
    app()
