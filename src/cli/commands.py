"""CLI commands using Typer."""

import asyncio
from datetime import datetime, timezone
from typing import Annotated

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from src.api.startup import seed_default_roles
from src.auth.exceptions import TokenError
from src.auth.jwt import ACCESS_TOKEN_TYPE, REFRESH_TOKEN_TYPE, verify_token
from src.auth.roles import RoleProvisioner, ordered_role_names
from src.db.repositories.user import UserRepository
from src.db.session import get_session, init_db

app = typer.Typer(
    name="worku",
    help="Worku identity service administration CLI",
    add_completion=False,
)

console = Console()


async def _grant_role(email: str, role_name: str) -> list[str] | None:
    async with get_session() as db:
        user = await UserRepository(db).get_by_email(email)
        if user is None:
            return None

        role = await RoleProvisioner(db).get_or_create(role_name)
        if role.name not in user.role_names:
            user.roles.append(role)
            await db.flush()
        return ordered_role_names(user)


async def _deactivate(email: str) -> bool:
    async with get_session() as db:
        users = UserRepository(db)
        user = await users.get_by_email(email)
        if user is None:
            return False
        return await users.deactivate(user.id)


@app.command()
def init_database() -> None:
    """Create any missing tables."""
    asyncio.run(init_db())
    console.print("[green]Database schema ready[/green]")


@app.command()
def seed_roles() -> None:
    """Provision every known role (safe to repeat)."""
    names = asyncio.run(seed_default_roles())

    table = Table(title="Roles")
    table.add_column("Name", style="cyan")
    for name in names:
        table.add_row(name)
    console.print(table)


@app.command()
def grant_role(
    email: Annotated[str, typer.Argument(help="Email of an existing user")],
    role: Annotated[str, typer.Argument(help="Role name, e.g. ROLE_ADMIN")],
) -> None:
    """Add a role to an existing user, creating the role if needed."""
    role = role.upper()
    if not role.startswith("ROLE_"):
        raise typer.BadParameter("Role names start with ROLE_")

    roles = asyncio.run(_grant_role(email, role))
    if roles is None:
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[green]{email}[/green] now holds: {', '.join(roles)}")


@app.command()
def deactivate(
    email: Annotated[str, typer.Argument(help="Email of the user to deactivate")],
) -> None:
    """Deactivate a user. Users are never deleted."""
    if not asyncio.run(_deactivate(email)):
        console.print(f"[red]No user with email {email}[/red]")
        raise typer.Exit(code=1)

    console.print(f"[yellow]{email} deactivated[/yellow]")


@app.command()
def decode_token(
    token: Annotated[str, typer.Argument(help="Encoded JWT")],
    refresh: Annotated[
        bool, typer.Option("--refresh", "-r", help="Expect a refresh token")
    ] = False,
) -> None:
    """Validate a token and show its claims."""
    token_type = REFRESH_TOKEN_TYPE if refresh else ACCESS_TOKEN_TYPE
    try:
        claims = verify_token(token, token_type=token_type)
    except TokenError as e:
        console.print(f"[red]{type(e).__name__}:[/red] {e.message}")
        raise typer.Exit(code=1) from e

    lines = []
    for key, value in claims.items():
        if key in ("iat", "exp"):
            value = datetime.fromtimestamp(value, tz=timezone.utc).isoformat()
        lines.append(f"[bold]{key}[/bold]: {value}")

    console.print(Panel("\n".join(lines), title=f"{token_type} token", border_style="green"))


if __name__ == "__main__":
    app()
