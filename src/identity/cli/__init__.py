"""Main CLI application module."""

import typer
from rich.console import Console

from src.identity.core.services.database.db_manage import DbManageService
from src.identity.core.services.database.db_session import DbSessionService
from src.identity.runtime.logging_setup import configure_logging

from .user_commands import users_app

console = Console()

app = typer.Typer(
    help="Identity core CLI - manage users and linked provider accounts",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(users_app, name="users")


@app.callback()
def setup() -> None:
    """Configure logging before any command runs."""
    configure_logging()


@app.command("init-db")
def init_db() -> None:
    """Create the identity tables."""
    DbManageService(DbSessionService()).create_all()
    console.print("[green]✅ Database tables created[/green]")


@app.command("check")
def check() -> None:
    """Check that the identity store is reachable."""
    if DbSessionService().health_check():
        console.print("[green]✅ Database is reachable[/green]")
        return
    console.print("[red]❌ Database is not reachable[/red]")
    raise typer.Exit(code=1)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
