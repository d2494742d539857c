"""CLI commands for client preferences."""

from __future__ import annotations

import click

from wms.application.preferences import Language, Theme
from wms.domain.exceptions import DomainException
from wms.infrastructure.bootstrap import preferences


@click.command("show")
def prefs_show() -> None:
    """Show the current theme and language."""
    prefs = preferences()
    click.echo(f"theme:    {prefs.theme.value}")
    click.echo(f"language: {prefs.language.value}")


@click.command("theme")
@click.argument("value", type=click.Choice([t.value for t in Theme]))
def prefs_theme(value: str) -> None:
    """Set the colour theme."""
    try:
        theme = preferences().set_theme(value)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Theme set to {theme.value}.")


@click.command("language")
@click.argument("value", type=click.Choice([lang.value for lang in Language]))
def prefs_language(value: str) -> None:
    """Set the interface language."""
    try:
        language = preferences().set_language(value)
    except DomainException as exc:
        raise click.ClickException(str(exc))
    click.echo(f"Language set to {language.value}.")
