"""
Deploy orchestration.

Runs the github leg (stage, commit, push) and the vercel leg (build, token,
deploy) for one DeployRequest, relaying every line of tool output to a log
sink, and reports the outcome of each leg.
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from ...core.exceptions import (
    DeployCancelledError,
    DeployInProgressError,
    ProjectRootNotFoundError,
)
from ...core.interfaces.deploy import IDeployProvider
from ...core.interfaces.logger import ILogger
from ...core.interfaces.secrets import ISecretStore
from ...core.interfaces.vcs import IVCSProvider
from ...core.models.deploy import (
    DeployReport,
    DeployRequest,
    DeployTarget,
    LegFailure,
    LegResult,
)
from .naming import derive_project_name

if TYPE_CHECKING:
    from ...core.settings import ShipitSettings

LogSink = Callable[[str], None]

NO_FILE_PREVIEW = "No file"


def _discard(_text: str) -> None:
    pass


class DeployOrchestrator:
    """
    Sequences the commands of a deploy.

    The legs are independent: a failed push never stops the vercel leg.
    Inside the vercel leg each step short-circuits the next. One deploy runs
    at a time per orchestrator; overlapping calls are rejected.

    Usage:
        orchestrator = DeployOrchestrator()
        request = DeployRequest(targets={"github", "vercel"})
        report = await orchestrator.deploy(request, "/path/to/project", print)
    """

    def __init__(
        self,
        vcs: IVCSProvider | None = None,
        deployer: IDeployProvider | None = None,
        secrets: ISecretStore | None = None,
        settings: ShipitSettings | None = None,
        logger: ILogger | None = None,
    ) -> None:
        self._vcs = vcs
        self._deployer = deployer
        self._secrets = secrets
        self._settings = settings
        self._logger = logger
        self._task: asyncio.Task | None = None
        self._cancel_requested = False

    # -------------------------------------------------------------------------
    # Lazily resolved collaborators
    # -------------------------------------------------------------------------

    @property
    def settings(self) -> ShipitSettings:
        if self._settings is None:
            from ...core.di import resolve_or_default
            from ...core.settings import ShipitSettings, load_settings

            self._settings = resolve_or_default(ShipitSettings, load_settings)
        return self._settings

    @property
    def vcs(self) -> IVCSProvider:
        if self._vcs is None:
            from ...core.container import get_container

            container = get_container()
            if "git" in container.list_vcs_providers():
                self._vcs = container.get_vcs_provider("git")
            else:
                from ...plugins.vcs.git import GitVCSProvider

                self._vcs = GitVCSProvider()
        return self._vcs

    @property
    def deployer(self) -> IDeployProvider:
        if self._deployer is None:
            from ...core.container import get_container

            container = get_container()
            if "vercel" in container.list_deploy_providers():
                self._deployer = container.get_deploy_provider("vercel")
            else:
                from ...plugins.deploy.vercel import VercelDeployProvider

                self._deployer = VercelDeployProvider()
        return self._deployer

    @property
    def secrets(self) -> ISecretStore:
        if self._secrets is None:
            from ...core.di import resolve_or_default
            from ..secrets.store import FileSecretStore

            self._secrets = resolve_or_default(
                ISecretStore,  # type: ignore[type-abstract]
                lambda: FileSecretStore.from_settings(self.settings),
            )
        return self._secrets

    @property
    def logger(self) -> ILogger:
        if self._logger is None:
            from ...core.di import resolve_or_default
            from ..logging import NullLogger

            self._logger = resolve_or_default(ILogger, NullLogger)  # type: ignore[type-abstract]
        return self._logger

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    @property
    def in_progress(self) -> bool:
        return self._task is not None

    async def status(self, project_root: str, log_sink: LogSink | None = None) -> list[str]:
        """Get the paths with working-tree changes."""
        return await self.vcs.get_status(project_root, log_sink)

    async def preview(
        self, project_root: str, file: str | None, log_sink: LogSink | None = None
    ) -> str:
        """Get the diff text for file, or a placeholder when no file is given."""
        if not file:
            return NO_FILE_PREVIEW
        result = await self.vcs.diff(project_root, file, log_sink)
        return result.stdout or result.stderr

    # -------------------------------------------------------------------------
    # Deploy
    # -------------------------------------------------------------------------

    async def deploy(
        self,
        request: DeployRequest,
        project_root: str,
        log_sink: LogSink | None = None,
    ) -> DeployReport:
        """
        Run a deploy and report each requested leg.

        Raises:
            DeployInProgressError: Another deploy is running on this orchestrator
            ProjectRootNotFoundError: project_root is not a directory
            DeployCancelledError: cancel() was called before the deploy finished
        """
        if self._task is not None:
            raise DeployInProgressError("A deploy is already in progress")
        if not Path(project_root).is_dir():
            raise ProjectRootNotFoundError(project_root=project_root)

        sink = log_sink or _discard
        self._cancel_requested = False
        self._task = asyncio.ensure_future(self._run(request, project_root, sink))
        try:
            return await self._task
        except asyncio.CancelledError:
            if not self._cancel_requested:
                raise
            self.logger.info("Deploy cancelled in %s", project_root)
            sink("Deploy cancelled.")
            raise DeployCancelledError("Deploy cancelled") from None
        finally:
            self._task = None
            self._cancel_requested = False

    def cancel(self) -> bool:
        """
        Cancel the in-flight deploy, killing the running command.

        Returns:
            True if a deploy was running
        """
        if self._task is None or self._task.done():
            return False
        self._cancel_requested = True
        self._task.cancel()
        return True

    async def _run(self, request: DeployRequest, project_root: str, sink: LogSink) -> DeployReport:
        sink("Starting deploy...")
        self.logger.info(
            "Deploy started in %s: targets=%s files=%d",
            project_root,
            sorted(t.value for t in request.targets),
            len(request.files),
        )

        branch = await self.vcs.get_branch(project_root)
        legs: list[LegResult] = []

        if request.wants(DeployTarget.GITHUB):
            legs.append(await self._github_leg(request, project_root, branch, sink))

        if request.wants(DeployTarget.VERCEL):
            legs.append(await self._vercel_leg(request, project_root, sink))

        sink("Deploy finished.")
        files = await self.vcs.get_status(project_root, sink)
        report = DeployReport(branch=branch, legs=legs, files=files)
        self.logger.info("Deploy finished in %s: succeeded=%s", project_root, report.succeeded)
        return report

    async def _github_leg(
        self, request: DeployRequest, project_root: str, branch: str, sink: LogSink
    ) -> LegResult:
        target = DeployTarget.GITHUB

        staged = await self.vcs.stage(project_root, request.files, sink)
        if not staged.success:
            sink("Staging failed.")
            return LegResult.fail(target, LegFailure.STAGE_FAILED, staged.stderr)

        committed = await self.vcs.commit(project_root, self.settings.git.commit_message, sink)
        if not committed.success:
            if await self.vcs.has_staged_changes(project_root):
                sink("Commit failed.")
                return LegResult.fail(target, LegFailure.COMMIT_FAILED, committed.output)
            sink("Nothing to commit.")

        pushed = await self.vcs.push(project_root, branch, sink)
        if not pushed.success:
            sink(f"Git push to {branch} failed.")
            return LegResult.fail(target, LegFailure.PUSH_FAILED, pushed.stderr)

        sink(f"Git push to {branch} finished.")
        return LegResult.ok(target, f"Pushed to {branch}")

    async def _vercel_leg(
        self, request: DeployRequest, project_root: str, sink: LogSink
    ) -> LegResult:
        target = DeployTarget.VERCEL

        built = await self.deployer.build(project_root, sink)
        if not built.success:
            sink("Build failed.")
            return LegResult.fail(target, LegFailure.BUILD_FAILED, built.stderr or "Build failed")
        sink("Build finished.")

        token = request.token or self.secrets.get(self.settings.vercel.secret_key)
        if not token:
            message = "Vercel token not set. Save a token first."
            sink(message)
            return LegResult.fail(target, LegFailure.TOKEN_MISSING, message)

        project_name = derive_project_name(project_root, self.settings.vercel.default_name)
        deployed = await self.deployer.deploy(project_root, token, project_name, sink)
        if not deployed.success:
            sink("Vercel deploy failed.")
            return LegResult.fail(target, LegFailure.DEPLOY_FAILED, deployed.stderr)

        sink("Vercel deploy finished.")
        return LegResult.ok(target, f"Deployed {project_name}")
