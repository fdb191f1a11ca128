"""User and provider account CLI commands."""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from src.identity.core.exceptions import Conflict, IdentityError, StoreUnavailable
from src.identity.core.services.database.db_session import DbSessionService
from src.identity.core.services.database.identity_store import IdentityStore
from src.identity.core.services.user.identity_service import IdentityService

console = Console()

users_app = typer.Typer(help="Manage users and their linked provider accounts")


def get_identity_store() -> IdentityStore:
    return IdentityStore(DbSessionService())


@users_app.command("create-magic")
def create_magic_user(
    email: str = typer.Argument(..., help="Email address of the new user"),
) -> None:
    """Register a user for magic-link sign in."""
    service = IdentityService(get_identity_store())
    try:
        user = asyncio.run(service.create_user_magic(email))
    except Conflict as e:
        console.print(f"[yellow]⚠️  {email} is already registered[/yellow]")
        raise typer.Exit(code=1) from e
    except IdentityError as e:
        console.print(f"[red]❌ Failed to create user: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[green]✅ Created user {user.id} for {user.email}[/green]")


@users_app.command("show")
def show_user(
    email: str = typer.Argument(..., help="Email address to look up"),
) -> None:
    """Show a user and the provider accounts linked to it."""
    store = get_identity_store()
    service = IdentityService(store)
    try:
        user = asyncio.run(service.find_user_by_email(email))
        if user is None:
            console.print(f"[yellow]No user registered for {email}[/yellow]")
            raise typer.Exit(code=1)
        accounts = store.list_provider_accounts(user.id)
    except StoreUnavailable as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[bold]{user.name or '-'}[/bold] <{user.email}> ({user.id})")

    # Token values are never printed, only whether one was issued
    table = Table(title="Linked provider accounts")
    table.add_column("Provider", style="cyan")
    table.add_column("Account ID", style="green")
    table.add_column("Access token", style="magenta")
    table.add_column("Refresh token", style="magenta")
    table.add_column("Linked at", style="blue")

    for account in accounts:
        table.add_row(
            account.provider,
            account.provider_account_id,
            "✅" if account.provider_access_token else "❌",
            "✅" if account.provider_refresh_token else "❌",
            account.created_at.isoformat(timespec="seconds"),
        )

    console.print(table)
