"""Tracker run command."""

from __future__ import annotations

import json
from typing import Any

import typer
from rich.table import Table

from repo_tracker.cli.common import (
    OutputFormat,
    OutputFormatOption,
    console,
    run_async_command,
)
from repo_tracker.config import get_settings
from repo_tracker.db import SQLTrackerStore, create_tables, dispose_engine, get_session_factory
from repo_tracker.exceptions import TrackerRunError
from repo_tracker.github import GitHubRemote
from repo_tracker.tracker import (
    CredentialPool,
    QuotaReporter,
    TrackerRunResult,
    TrackingScheduler,
)


async def run_tracker() -> TrackerRunResult:
    """Track all due repositories with the configured settings.

    Raises:
        CredentialsMissingError: If no GitHub tokens are configured
        TrackerRunError: If one or more repositories failed
    """
    settings = get_settings()
    pool = CredentialPool(settings.github_tokens)

    await create_tables()
    try:
        async with GitHubRemote() as remote:
            scheduler = TrackingScheduler(
                store=SQLTrackerStore(
                    get_session_factory(),
                    track_interval=settings.tracker.track_interval,
                ),
                remote=remote,
                pool=pool,
                concurrency=settings.tracker.concurrency,
                repository_timeout=settings.tracker.repository_timeout_seconds,
                quota_reporter=QuotaReporter(remote, settings.rate_limit),
            )
            return await scheduler.run()
    finally:
        await dispose_engine()


def _print_result(result: TrackerRunResult) -> None:
    if not result.outcomes:
        console.print("[dim]No repositories due for tracking.[/dim]")
        return

    table = Table(title="Tracked repositories")
    table.add_column("Repository", style="cyan")
    table.add_column("Metadata")
    table.add_column("New", justify="right")
    table.add_column("Updated", justify="right")
    table.add_column("Deleted", justify="right")
    table.add_column("Status")

    for outcome in result.outcomes:
        r = outcome.result
        if r is None:
            table.add_row(outcome.url, "-", "-", "-", "-", "[red]failed[/red]")
            continue
        table.add_row(
            outcome.url,
            "updated" if r.metadata_updated else "unchanged",
            str(r.issues_created),
            str(r.issues_updated),
            str(r.issues_deleted),
            "[green]ok[/green]",
        )
    console.print(table)
    console.print(
        f"{len(result.succeeded)} succeeded, {len(result.failures)} failed "
        f"in {result.duration_seconds:.1f}s"
    )


def track(output_format: OutputFormatOption = OutputFormat.TEXT) -> None:
    """Track all repositories that are due, then report token quotas.

    Examples:
        repotracker track
        repotracker -v track --format json
    """

    async def _track() -> tuple[TrackerRunResult, TrackerRunError | None]:
        try:
            return await run_tracker(), None
        except TrackerRunError as e:
            return e.result, e

    result, error = run_async_command(_track(), error_prefix="Tracker failed")

    if output_format == OutputFormat.JSON:
        payload: dict[str, Any] = result.to_dict()
        console.print_json(json.dumps(payload))
    else:
        _print_result(result)

    if error is not None:
        console.print(f"[red]Tracker failed:[/red]\n{error}")
        raise typer.Exit(1)
