"""
Native Click implementation of the status command.

Usage: shipit status
"""

from __future__ import annotations

import asyncio

import click

from ...services.deploy.orchestrator import DeployOrchestrator
from ..context import ShipitContext
from ..decorators import require_git, require_project_root


@click.command("status")
@click.pass_obj
@require_project_root
@require_git
def status(ctx: ShipitContext) -> None:
    """List files with uncommitted changes."""
    orchestrator = DeployOrchestrator(settings=ctx.settings)
    files = asyncio.run(orchestrator.status(str(ctx.project_root)))

    if not files:
        click.echo("Working tree clean.")
        return

    click.echo(f"Changed files ({len(files)}):")
    for path in files:
        click.echo(f"  {path}")
