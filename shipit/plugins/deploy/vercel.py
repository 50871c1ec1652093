"""
Vercel deploy provider.

Builds with the project's npm build script and deploys to production with
the Vercel CLI.
"""

from __future__ import annotations

from ...core.interfaces.runner import ICommandRunner
from ...utils.shell import quote_arg
from .base import BaseDeployProvider


class VercelDeployProvider(BaseDeployProvider):
    """
    Deploys through `npx vercel --prod`.

    The build and CLI commands come from the [build] and [vercel] config
    sections unless given explicitly.
    """

    def __init__(
        self,
        runner: ICommandRunner | None = None,
        build_cmd: str | None = None,
        vercel_cmd: str | None = None,
    ) -> None:
        super().__init__(runner)
        self._build_cmd = build_cmd
        self._vercel_cmd = vercel_cmd

    @property
    def name(self) -> str:
        return "vercel"

    def build_command(self) -> str:
        if self._build_cmd is None:
            self._build_cmd = _settings().build.command
        return self._build_cmd

    def deploy_command(self, token: str, project_name: str) -> str:
        """
        Build the production deploy command.

        >>> VercelDeployProvider(vercel_cmd="npx vercel").deploy_command("abc", "site")
        'npx vercel --prod --token="abc" --yes --name="site"'
        """
        if self._vercel_cmd is None:
            self._vercel_cmd = _settings().vercel.command
        return (
            f"{self._vercel_cmd} --prod --token={quote_arg(token)} --yes "
            f"--name={quote_arg(project_name)}"
        )


def _settings():
    from ...core.di import resolve_or_default
    from ...core.settings import ShipitSettings, load_settings

    return resolve_or_default(ShipitSettings, load_settings)
