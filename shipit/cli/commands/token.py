"""
Native Click implementation of the token command.

Usage: shipit token [set|clear|status]
"""

from __future__ import annotations

import click

from ...core.container import get_container
from ...core.exceptions import ShipitSecretError
from ...core.interfaces.secrets import ISecretStore
from ...services.secrets.store import FileSecretStore
from ..context import ShipitContext


def _store(ctx: ShipitContext) -> ISecretStore:
    store = get_container().try_resolve(ISecretStore)  # type: ignore[type-abstract]
    return store or FileSecretStore.from_settings(ctx.settings)


def _mask(value: str) -> str:
    return f"{value[:4]}...{value[-4:]}" if len(value) > 12 else "*" * len(value)


@click.group("token", invoke_without_command=True)
@click.pass_context
def token(ctx: click.Context) -> None:
    """Manage the stored Vercel token.

    The token is kept in ~/.shipit/secrets.json (owner read/write only)
    and used by 'shipit deploy' when no --token is given.
    """
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


@token.command("set")
@click.argument("value", required=False)
@click.pass_obj
def token_set(ctx: ShipitContext, value: str | None) -> None:
    """Save a Vercel token (prompted when VALUE is omitted)."""
    if not value:
        value = click.prompt("Vercel token", hide_input=True)
    value = value.strip()
    if not value:
        raise click.ClickException("Token must not be empty.")

    try:
        _store(ctx).store(ctx.settings.vercel.secret_key, value)
    except ShipitSecretError as e:
        raise click.ClickException(str(e)) from e
    click.echo("Token saved securely.")


@token.command("clear")
@click.pass_obj
def token_clear(ctx: ShipitContext) -> None:
    """Remove the stored Vercel token."""
    try:
        removed = _store(ctx).delete(ctx.settings.vercel.secret_key)
    except ShipitSecretError as e:
        raise click.ClickException(str(e)) from e
    if removed:
        click.echo("Vercel token removed from secure storage.")
    else:
        click.echo("No Vercel token stored.")


@token.command("status")
@click.pass_obj
def token_status(ctx: ShipitContext) -> None:
    """Show whether a Vercel token is stored."""
    try:
        value = _store(ctx).get(ctx.settings.vercel.secret_key)
    except ShipitSecretError as e:
        raise click.ClickException(str(e)) from e
    if value:
        click.echo(f"Vercel token: {_mask(value)}")
    else:
        click.echo("Vercel token: (not set)")
