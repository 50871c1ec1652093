"""
Native Click implementation of the preview command.

Usage: shipit preview FILE
"""

from __future__ import annotations

import asyncio

import click

from ...services.deploy.orchestrator import DeployOrchestrator
from ..context import ShipitContext
from ..decorators import require_git, require_project_root


@click.command("preview")
@click.argument("file")
@click.pass_obj
@require_project_root
@require_git
def preview(ctx: ShipitContext, file: str) -> None:
    """Show the uncommitted diff of FILE.

    FILE is relative to the project root, as listed by 'shipit status'.
    """
    orchestrator = DeployOrchestrator(settings=ctx.settings)
    text = asyncio.run(orchestrator.preview(str(ctx.project_root), file))
    click.echo(text, nl=not text.endswith("\n"))
