"""Admin login CLI commands."""

import typer

from src.dashboard.core.services.auth_service import AuthService
from src.dashboard.core.storage.session_storage import get_session_storage

from .utils import console, open_api, run

auth_app = typer.Typer(help="Log in and out of the dashboard backend")


@auth_app.command("login")
def login(
    email: str = typer.Option(..., "--email", "-e", prompt=True, help="Admin email"),
    password: str = typer.Option(
        ..., "--password", "-p", prompt=True, hide_input=True, help="Admin password"
    ),
) -> None:
    """Log in and store the admin token."""

    async def _login():
        async with open_api() as api:
            return await AuthService(api, get_session_storage()).login(email, password)

    session = run(_login())
    console.print(f"[green]✅ Logged in as {session.display_name}[/green]")


@auth_app.command("logout")
def logout() -> None:
    """Forget the stored admin token."""

    async def _logout():
        async with open_api() as api:
            await AuthService(api, get_session_storage()).logout()

    run(_logout())
    console.print("[green]✅ Logged out[/green]")


@auth_app.command("whoami")
def whoami() -> None:
    """Show the stored admin session."""

    async def _current():
        async with open_api() as api:
            return await AuthService(api, get_session_storage()).current_session()

    session = run(_current())
    if session is None:
        console.print("[yellow]Not logged in[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"Logged in as [cyan]{session.display_name}[/cyan]")
