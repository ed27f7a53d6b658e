"""Shared helpers for CLI commands."""

import asyncio
from collections.abc import AsyncIterator, Coroutine, Sequence
from contextlib import asynccontextmanager
from typing import Any, TypeVar

import httpx
import typer
from loguru import logger
from rich.console import Console
from rich.prompt import Prompt
from rich.table import Table

from src.dashboard.core.errors import ApiError
from src.dashboard.core.services.api_client import ApiClient, RequestContext

console = Console()

T = TypeVar("T")


def get_transport() -> httpx.AsyncBaseTransport | None:
    """Transport for backend calls; ``None`` means a real network connection."""
    return None


@asynccontextmanager
async def open_api() -> AsyncIterator[ApiClient]:
    """Open a client with a request context read from the stored session."""
    context = await RequestContext.from_session()
    async with ApiClient(context, transport=get_transport()) as api:
        yield api


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Run a command coroutine, turning expected failures into exit code 1."""
    try:
        return asyncio.run(coro)
    except ApiError as e:
        if e.status_code == 401:
            console.print("[red]❌ Not authorized. Run 'dashboard auth login' first.[/red]")
        else:
            console.print(f"[red]❌ {e.message} (HTTP {e.status_code})[/red]")
        raise typer.Exit(code=1) from e
    except httpx.HTTPError as e:
        console.print(f"[red]❌ Could not reach the backend: {e}[/red]")
        raise typer.Exit(code=1) from e
    except ValueError as e:
        logger.debug(f"Command rejected: {e}")
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e


def choose(
    title: str,
    options: Sequence[tuple[str, str]],
    allow_empty: bool = True,
    empty_label: str = "none",
) -> str | None:
    """Ask the user to pick one of ``(id, label)`` options by number.

    Returns:
        The chosen id, or None when the user skips an optional choice.
    """
    if not options:
        return None

    table = Table(title=title, show_header=False)
    table.add_column("#", style="cyan", justify="right")
    table.add_column("Option")
    if allow_empty:
        table.add_row("0", f"[dim]{empty_label}[/dim]")
    for index, (_, label) in enumerate(options, start=1):
        table.add_row(str(index), label)
    console.print(table)

    low = 0 if allow_empty else 1
    while True:
        answer = Prompt.ask("Choice", default=str(low), console=console).strip()
        if answer.isdigit() and low <= int(answer) <= len(options):
            index = int(answer)
            return None if index == 0 else options[index - 1][0]
        console.print(f"[red]Enter a number between {low} and {len(options)}[/red]")
