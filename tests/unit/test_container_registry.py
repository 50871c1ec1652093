"""
Tests for the service container, plugin discovery and bootstrap.
"""

import pytest

from shipit.core.bootstrap import bootstrap, is_initialized
from shipit.core.container import get_container
from shipit.core.di import resolve_or_default
from shipit.core.exceptions import PluginNotFoundError
from shipit.core.interfaces.logger import ILogger
from shipit.core.interfaces.runner import ICommandRunner
from shipit.core.interfaces.secrets import ISecretStore
from shipit.core.registry import discover_plugins, register_plugin
from shipit.core.settings import ShipitSettings
from shipit.plugins.deploy.base import BaseDeployProvider
from shipit.plugins.deploy.vercel import VercelDeployProvider
from shipit.plugins.vcs.git import GitVCSProvider
from shipit.services.execution.runner import CommandRunner
from shipit.services.logging import NullLogger, ShipitLogger
from shipit.services.secrets.store import FileSecretStore


class TestPluginDiscovery:
    def test_builtin_providers_registered(self):
        discover_plugins()
        container = get_container()

        assert "git" in container.list_vcs_providers()
        assert "vercel" in container.list_deploy_providers()
        assert isinstance(container.get_vcs_provider("git"), GitVCSProvider)
        assert isinstance(container.get_deploy_provider("vercel"), VercelDeployProvider)

    def test_base_classes_not_registered(self):
        discover_plugins()

        assert "base" not in get_container().list_deploy_providers()
        assert len(get_container().list_vcs_providers()) == 1

    def test_unknown_provider(self):
        with pytest.raises(PluginNotFoundError) as exc_info:
            get_container().get_deploy_provider("netlify")

        assert exc_info.value.context["plugin_name"] == "netlify"

    def test_register_plugin_decorator(self):
        @register_plugin
        class NetlifyDeployProvider(BaseDeployProvider):
            @property
            def name(self) -> str:
                return "netlify"

            def build_command(self) -> str:
                return "npm run build"

            def deploy_command(self, token: str, project_name: str) -> str:
                return f"npx netlify deploy --prod --auth={token}"

        assert isinstance(get_container().get_deploy_provider("netlify"), NetlifyDeployProvider)


class TestBootstrap:
    def test_registers_core_services(self, tmp_path):
        container = bootstrap(str(tmp_path))

        assert is_initialized()
        assert isinstance(container.resolve(ShipitSettings), ShipitSettings)
        assert isinstance(container.resolve(ILogger), ShipitLogger)
        assert isinstance(container.resolve(ISecretStore), FileSecretStore)
        assert isinstance(container.resolve(ICommandRunner), CommandRunner)
        assert "git" in container.list_vcs_providers()

    def test_bootstrap_is_idempotent(self, tmp_path):
        first = bootstrap(str(tmp_path))

        assert bootstrap(str(tmp_path)) is first
        assert first.resolve(ILogger) is first.resolve(ILogger)

    def test_settings_come_from_start_dir(self, tmp_path):
        shipit_dir = tmp_path / ".shipit"
        shipit_dir.mkdir()
        (shipit_dir / "config.toml").write_text('[git]\nremote = "upstream"\n')

        container = bootstrap(str(tmp_path))

        assert container.resolve(ShipitSettings).git.remote == "upstream"
        assert GitVCSProvider().remote == "upstream"

    def test_resolve_or_default_before_bootstrap(self):
        assert isinstance(resolve_or_default(ILogger, NullLogger), NullLogger)
