"""
Native Click implementation of the panel command.

Usage: shipit panel
"""

from __future__ import annotations

import asyncio
import sys

import click

from ...services.deploy.orchestrator import DeployOrchestrator
from ...services.panel.session import DeployPanel, json_lines_writer, serve_json_lines
from ..context import ShipitContext
from ..decorators import require_project_root


@click.command("panel")
@click.pass_obj
@require_project_root
def panel(ctx: ShipitContext) -> None:
    """Serve the deploy panel protocol on stdin/stdout.

    Reads one JSON message per line (requestStatus, saveToken, clearToken,
    preview, deploy) and writes one JSON message per line (log, status,
    preview, tokenSaved, tokenCleared, error, deployResult). The current
    status is sent as soon as the session starts. Ends when stdin closes.
    """
    session = DeployPanel(
        str(ctx.project_root),
        json_lines_writer(sys.stdout),
        orchestrator=DeployOrchestrator(settings=ctx.settings),
    )
    asyncio.run(serve_json_lines(session, sys.stdin))
