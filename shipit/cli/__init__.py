"""
Click-based CLI for shipit.

This module provides the main Click command group and serves as the
entry point for the shipit CLI.

Usage:
    from shipit.cli import cli
    cli()  # Invokes the CLI
"""

from __future__ import annotations

from pathlib import Path

import click

from .context import ShipitContext

# Version is loaded from package metadata
try:
    from importlib.metadata import version

    __version__ = version("shipit-cli")
except Exception:
    __version__ = "0.1.0"


@click.group(invoke_without_command=True)
@click.version_option(version=__version__, prog_name="shipit")
@click.option(
    "--project",
    "-C",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: the enclosing git repository).",
)
@click.pass_context
def cli(ctx: click.Context, project: Path | None) -> None:
    """shipit - push to GitHub and deploy to Vercel in one step

    \b
    Deploy:
        shipit deploy              Commit, push and deploy everything
        shipit deploy --github     Only commit and push
        shipit deploy --vercel     Only build and deploy

    \b
    Information:
        shipit status              List changed files
        shipit preview FILE        Show the diff of one file

    \b
    Configuration:
        shipit init                Create .shipit/config.toml
        shipit config              View or set configuration
        shipit token               Manage the stored Vercel token
        shipit panel               Serve the deploy panel protocol on stdio
    """
    ctx.ensure_object(dict)

    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())
        ctx.exit(0)
    else:
        from ..core.bootstrap import bootstrap

        start = project.resolve() if project else Path.cwd()
        bootstrap(str(start) if start.is_dir() else None)
        ctx.obj = ShipitContext.create(project=project.resolve() if project else None)
        if ctx.obj.settings.config_error:
            click.echo(f"Warning: {ctx.obj.settings.config_error}", err=True)


def register_commands() -> None:
    """Register all CLI commands with the main group."""
    from .commands import COMMANDS

    for cmd in COMMANDS:
        cli.add_command(cmd)


# Register commands at module load time
register_commands()


__all__ = [
    "ShipitContext",
    "__version__",
    "cli",
    "register_commands",
]
