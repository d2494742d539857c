"""CLI commands for the API session."""

from __future__ import annotations

import click

from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import auth_service


@click.command("login")
@click.option("--email", required=True, help="Account email.")
@click.password_option("--password", confirmation_prompt=False, help="Account password.")
def auth_login(email: str, password: str) -> None:
    """Sign in to the warehouse API."""
    service = auth_service()

    try:
        user = service.login(email, password)
    except DomainException as exc:
        raise click.ClickException(str(exc))

    click.echo(f"Signed in as {user.name} <{user.email}> ({user.role}).")


@click.command("whoami")
def auth_whoami() -> None:
    """Show the signed-in user, verifying the stored session."""
    service = auth_service()

    try:
        restored = service.restore()
    except DomainException as exc:
        raise click.ClickException(str(exc))

    if not restored or service.user is None:
        click.echo("Not signed in.")
        return
    user = service.user
    click.echo(f"{user.name} <{user.email}> ({user.role})")


@click.command("refresh")
def auth_refresh() -> None:
    """Exchange the stored refresh token for a new token pair."""
    service = auth_service()
    if not service.restore():
        raise click.ClickException("Not signed in.")
    if not service.refresh():
        raise click.ClickException("Token refresh failed.")
    click.echo("Session refreshed.")


@click.command("logout")
def auth_logout() -> None:
    """Sign out and forget the stored session."""
    service = auth_service()
    service.restore()
    service.logout()
    click.echo("Signed out.")
