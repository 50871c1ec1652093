"""
Shared pytest fixtures for shipit tests.

- isolate_environment: keeps tests away from ~/.shipit and SHIPIT_* variables
- temp_git_repo: an isolated git repository with one commit
- RecordingRunner / fake_runner: a command runner that records commands and
  answers with scripted results instead of spawning processes
- MemorySecretStore / memory_secrets: an in-memory secret store
"""

from __future__ import annotations

import asyncio
import os
import subprocess
from pathlib import Path

import pytest

from shipit.core.bootstrap import reset as reset_container
from shipit.core.interfaces.runner import ICommandRunner, OutputListener
from shipit.core.interfaces.secrets import ISecretStore
from shipit.core.models.command import CommandResult
from shipit.core.settings import ShipitSettings, load_settings
from shipit.services import logging as logging_module
from shipit.services.secrets import store as store_module


class RecordingRunner(ICommandRunner):
    """
    Records every command and answers from a prefix -> CommandResult table.

    Commands matching `block_on` wait until cancelled, so tests can observe
    a deploy while it is in flight.
    """

    def __init__(
        self,
        responses: dict[str, CommandResult] | None = None,
        block_on: str | None = None,
    ) -> None:
        self.responses = dict(responses or {})
        self.block_on = block_on
        self.commands: list[str] = []
        self.cwds: list[str] = []
        self.blocked = asyncio.Event() if block_on else None

    async def run(
        self,
        command: str,
        cwd: str,
        on_output: OutputListener | None = None,
        *,
        timeout: float | None = None,
    ) -> CommandResult:
        self.commands.append(command)
        self.cwds.append(cwd)
        if self.block_on and command.startswith(self.block_on):
            self.blocked.set()
            await asyncio.Event().wait()

        for prefix, result in self.responses.items():
            if command.startswith(prefix):
                if on_output is not None and result.output:
                    on_output(result.output)
                return result
        return CommandResult(success=True, exit_code=0)

    def called(self, prefix: str) -> list[str]:
        """Commands that start with prefix."""
        return [c for c in self.commands if c.startswith(prefix)]


class MemorySecretStore(ISecretStore):
    """Secret store kept in a dict."""

    def __init__(self, values: dict[str, str] | None = None) -> None:
        self.values = dict(values or {})

    def get(self, key: str) -> str | None:
        return self.values.get(key)

    def store(self, key: str, value: str) -> None:
        self.values[key] = value

    def delete(self, key: str) -> bool:
        return self.values.pop(key, None) is not None


@pytest.fixture(autouse=True)
def isolate_environment(tmp_path_factory, monkeypatch):
    """Redirect ~/.shipit files into a temp dir and reset the container."""
    home = tmp_path_factory.mktemp("home")
    monkeypatch.setattr(logging_module.ShipitLogger, "LOG_FILE_PATH", home / ".shipit" / "shipit.log")
    monkeypatch.setattr(store_module, "DEFAULT_SECRETS_PATH", home / ".shipit" / "secrets.json")
    for name in list(os.environ):
        if name.startswith("SHIPIT_"):
            monkeypatch.delenv(name)
    monkeypatch.delenv("VERCEL_TOKEN", raising=False)

    reset_container()
    yield home
    reset_container()


@pytest.fixture
def settings(tmp_path: Path) -> ShipitSettings:
    """Default settings, unaffected by config files around the test run."""
    return load_settings(start_dir=str(tmp_path))


@pytest.fixture
def make_runner():
    """Factory for RecordingRunner(responses, block_on)."""
    return RecordingRunner


@pytest.fixture
def fake_runner() -> RecordingRunner:
    return RecordingRunner()


@pytest.fixture
def memory_secrets() -> MemorySecretStore:
    return MemorySecretStore()


@pytest.fixture
def make_secrets():
    """Factory for MemorySecretStore(values)."""
    return MemorySecretStore


def _git(*args: str, cwd: Path) -> subprocess.CompletedProcess:
    return subprocess.run(["git", *args], cwd=cwd, capture_output=True, text=True, check=True)


@pytest.fixture
def temp_git_repo(tmp_path: Path) -> Path:
    """
    Create a temporary git repository with an initial commit.

    Returns:
        Path to the temporary repository root
    """
    repo = tmp_path / "project"
    repo.mkdir()
    _git("init", cwd=repo)
    _git("config", "user.email", "test@example.com", cwd=repo)
    _git("config", "user.name", "Test User", cwd=repo)
    _git("config", "commit.gpgsign", "false", cwd=repo)

    (repo / "README.md").write_text("# project\n")
    _git("add", "README.md", cwd=repo)
    _git("commit", "-m", "Initial commit", cwd=repo)
    return repo


@pytest.fixture
def git_remote(temp_git_repo: Path, tmp_path: Path) -> Path:
    """Attach a bare repository as 'origin' of temp_git_repo."""
    remote = tmp_path / "remote.git"
    _git("init", "--bare", str(remote), cwd=tmp_path)
    _git("remote", "add", "origin", str(remote), cwd=temp_git_repo)
    return remote
