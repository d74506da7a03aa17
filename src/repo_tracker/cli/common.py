"""Common CLI option factories and helpers.

Provides:
- `run_async_command`: async execution with unified error handling
- Reusable option type aliases
"""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from enum import Enum
from typing import Annotated, TypeVar

import typer
from rich.console import Console

console = Console()

T = TypeVar("T")


class OutputFormat(str, Enum):
    """Output format for CLI commands."""

    TEXT = "text"
    """Human-readable text output."""

    JSON = "json"
    """Machine-readable JSON output."""


def run_async_command(
    coro: Coroutine[object, object, T],
    *,
    error_prefix: str = "Error",
) -> T:
    """Execute async code from a synchronous CLI command.

    Catches exceptions, prints a user-friendly message, and exits with
    code 1.

    Raises:
        typer.Exit: Re-raised from deliberate exits, or raised with code 1 on error
    """
    try:
        return asyncio.run(coro)
    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]{error_prefix}:[/red] {e}")
        raise typer.Exit(1) from None


OutputFormatOption = Annotated[
    OutputFormat,
    typer.Option(
        "--format",
        "-f",
        help="Output format",
    ),
]
"""Output format option type for CLI commands.

Usage:
    def command(output_format: OutputFormatOption = OutputFormat.TEXT):
"""

RepositoryUrlArgument = Annotated[
    str,
    typer.Argument(
        help="Repository URL (e.g., https://github.com/owner/repo)",
    ),
]
"""Required positional repository URL argument."""


def validate_repository_url(url: str) -> str:
    """Validate a repository URL, exiting with an error if malformed.

    Returns:
        The URL normalized to https://github.com/owner/name
    """
    from repo_tracker.schemas import parse_repository_url

    try:
        owner, name = parse_repository_url(url)
    except ValueError:
        console.print(
            "[red]Error:[/red] Repository must be a URL like https://github.com/owner/repo"
        )
        raise typer.Exit(1) from None
    return f"https://github.com/{owner}/{name}"
