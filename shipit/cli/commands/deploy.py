"""
Native Click implementation of the deploy command.

Usage: shipit deploy [--github] [--vercel] [--file PATH]... [--token TOKEN]
"""

from __future__ import annotations

import asyncio

import click

from ...core.di import resolve_or_default
from ...core.exceptions import DeployCancelledError, ShipitException
from ...core.interfaces.presenter import IPresenter
from ...core.models.deploy import DeployReport, DeployRequest, DeployTarget
from ...presenters.console import ConsolePresenter
from ...services.deploy.orchestrator import DeployOrchestrator
from ...services.execution.signal_handler import DeploySignalHandler
from ..context import ShipitContext
from ..decorators import require_project_root


def _sink_line(presenter: IPresenter):
    """Log sink that ends every message with a newline."""

    def write(text: str) -> None:
        presenter.write(text if text.endswith("\n") else text + "\n")

    return write


async def _deploy_with_interrupts(
    orchestrator: DeployOrchestrator,
    request: DeployRequest,
    project_root: str,
    presenter: IPresenter,
) -> DeployReport:
    """Run the deploy; the first Ctrl-C cancels it, the second exits."""

    def on_first_interrupt() -> None:
        presenter.print_warning("Cancelling deploy... (press Ctrl-C again to abort)")
        orchestrator.cancel()

    handler = DeploySignalHandler(on_first_interrupt=on_first_interrupt)
    handler.install()
    try:
        return await orchestrator.deploy(request, project_root, _sink_line(presenter))
    finally:
        handler.restore()


@click.command("deploy")
@click.option("--github", is_flag=True, default=False, help="Stage, commit and push.")
@click.option("--vercel", is_flag=True, default=False, help="Build and deploy to Vercel.")
@click.option(
    "--file",
    "-f",
    "files",
    multiple=True,
    help="File to stage (repeatable). Default: all changes.",
)
@click.option(
    "--token",
    envvar="VERCEL_TOKEN",
    default=None,
    help="Vercel token for this deploy (default: the stored token).",
)
@click.pass_obj
@require_project_root
def deploy(
    ctx: ShipitContext,
    github: bool,
    vercel: bool,
    files: tuple[str, ...],
    token: str | None,
) -> None:
    """Commit, push and deploy the project.

    Without --github or --vercel both targets run. The github target
    stages, commits and pushes the current branch; the vercel target runs
    the build and a production deploy. Exits with status 1 if any target
    failed.

    \b
    Examples:

        shipit deploy                      # Push and deploy

        shipit deploy --github -f app.js   # Commit and push one file

        shipit deploy --vercel --token XYZ # Deploy with an explicit token
    """
    targets = set()
    if github:
        targets.add(DeployTarget.GITHUB)
    if vercel:
        targets.add(DeployTarget.VERCEL)
    if not targets:
        targets = {DeployTarget.GITHUB, DeployTarget.VERCEL}

    request = DeployRequest(targets=frozenset(targets), files=list(files), token=token)

    presenter = resolve_or_default(IPresenter, ConsolePresenter)  # type: ignore[type-abstract]

    orchestrator = DeployOrchestrator(settings=ctx.settings)
    try:
        report = asyncio.run(
            _deploy_with_interrupts(orchestrator, request, str(ctx.project_root), presenter)
        )
    except DeployCancelledError as e:
        presenter.print_warning(str(e))
        raise SystemExit(e.exit_code) from e
    except ShipitException as e:
        presenter.print_error(str(e))
        raise SystemExit(e.exit_code) from e

    presenter.print_report(report)
    if not report.succeeded:
        raise SystemExit(1)
