"""Commands for managing tracked repositories."""

import json

import typer
from rich.table import Table

from repo_tracker.cli.common import (
    OutputFormat,
    OutputFormatOption,
    RepositoryUrlArgument,
    console,
    run_async_command,
    validate_repository_url,
)
from repo_tracker.db import SQLTrackerStore, create_tables, dispose_engine, get_session_factory
from repo_tracker.schemas import RepositoryRead

app = typer.Typer(help="Manage tracked repositories")


@app.command("add")
def add_repository(url: RepositoryUrlArgument) -> None:
    """Register a repository for tracking.

    Examples:
        repotracker repos add https://github.com/owner/repo
    """
    url = validate_repository_url(url)

    async def _add() -> tuple[RepositoryRead, bool]:
        await create_tables()
        try:
            return await SQLTrackerStore(get_session_factory()).register_repository(url)
        finally:
            await dispose_engine()

    repo, created = run_async_command(_add(), error_prefix="Could not register repository")
    if created:
        console.print(f"[green]Registered[/green] {repo.url}")
    else:
        console.print(f"[dim]Already registered:[/dim] {repo.url}")


@app.command("list")
def list_repositories(output_format: OutputFormatOption = OutputFormat.TEXT) -> None:
    """List tracked repositories.

    Examples:
        repotracker repos list
        repotracker repos list --format json
    """

    async def _list() -> list[RepositoryRead]:
        await create_tables()
        try:
            return await SQLTrackerStore(get_session_factory()).list_repositories()
        finally:
            await dispose_engine()

    repos = run_async_command(_list(), error_prefix="Could not list repositories")

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([r.model_dump(mode="json") for r in repos]))
        return

    if not repos:
        console.print("[dim]No repositories registered.[/dim]")
        return

    table = Table(title="Tracked repositories")
    table.add_column("Repository", style="cyan")
    table.add_column("Stars", justify="right")
    table.add_column("Languages")
    table.add_column("Last tracked")
    for repo in repos:
        table.add_row(
            repo.url,
            str(repo.stars) if repo.stars is not None else "-",
            ", ".join(repo.languages or [])[:40],
            repo.last_tracked_at.strftime("%Y-%m-%d %H:%M") if repo.last_tracked_at else "never",
        )
    console.print(table)
