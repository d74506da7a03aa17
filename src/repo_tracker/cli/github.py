"""GitHub API verification commands."""

import typer
from rich.table import Table

from repo_tracker.cli.common import console, run_async_command
from repo_tracker.config import get_settings
from repo_tracker.github import GitHubRemote
from repo_tracker.tracker import CredentialPool, QuotaReport, QuotaReporter

app = typer.Typer(help="GitHub API commands")


@app.command("rate-limit")
def rate_limit() -> None:
    """Show the remaining GitHub quota of every configured token.

    Examples:
        repotracker github rate-limit
    """

    async def _check() -> list[QuotaReport]:
        settings = get_settings()
        pool = CredentialPool(settings.github_tokens)
        async with GitHubRemote() as remote:
            return await QuotaReporter(remote, settings.rate_limit).report(pool.credentials)

    reports = run_async_command(_check(), error_prefix="Rate limit check failed")

    table = Table(title="GitHub rate limits")
    table.add_column("Token", style="cyan")
    table.add_column("Pool")
    table.add_column("Remaining", justify="right")
    table.add_column("Resets at")
    table.add_column("Status")

    thresholds = get_settings().rate_limit
    for report in reports:
        if report.snapshot is None:
            table.add_row(str(report.credential_index), "-", "-", "-", f"[red]{report.error}[/red]")
            continue
        for pool_name, limit in sorted(report.snapshot.pools.items()):
            status = limit.get_status(
                thresholds.healthy_threshold_pct,
                thresholds.warning_threshold_pct,
            )
            table.add_row(
                str(report.credential_index),
                pool_name.value,
                f"{limit.remaining}/{limit.limit}",
                limit.reset_at.strftime("%H:%M:%S UTC"),
                status.value,
            )
    console.print(table)
