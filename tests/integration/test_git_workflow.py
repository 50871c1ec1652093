"""
Integration tests running the github leg and the panel against real git.
"""

import asyncio
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from shipit.core.models.deploy import DeployRequest, DeployTarget, LegFailure
from shipit.plugins.vcs.git import GitVCSProvider
from shipit.services.deploy.orchestrator import DeployOrchestrator
from shipit.services.execution.runner import CommandRunner


def _git(repo: Path, *args: str) -> str:
    return subprocess.run(
        ["git", *args], cwd=repo, capture_output=True, text=True, check=True
    ).stdout


@pytest.fixture
def orchestrator(settings, memory_secrets):
    runner = CommandRunner()
    return DeployOrchestrator(
        vcs=GitVCSProvider(runner=runner, remote="origin", default_branch="main"),
        secrets=memory_secrets,
        settings=settings,
    )


def _deploy(orchestrator, repo: Path, files=None):
    lines: list[str] = []
    request = DeployRequest(targets={DeployTarget.GITHUB}, files=files)
    report = asyncio.run(orchestrator.deploy(request, str(repo), lines.append))
    return report, lines


class TestGithubLeg:
    def test_commits_and_pushes_changes(self, orchestrator, temp_git_repo, git_remote):
        (temp_git_repo / "index.html").write_text("<h1>Hello</h1>\n")

        report, lines = _deploy(orchestrator, temp_git_repo)

        assert report.succeeded, lines
        branch = _git(temp_git_repo, "rev-parse", "--abbrev-ref", "HEAD").strip()
        assert report.branch == branch
        assert report.files == []
        assert f"Git push to {branch} finished." in lines

        remote_log = _git(git_remote, "log", "--format=%s", branch)
        assert remote_log.splitlines()[0] == "deploy: automatic"

    def test_stages_only_selected_files(self, orchestrator, temp_git_repo, git_remote):
        (temp_git_repo / "a.txt").write_text("a\n")
        (temp_git_repo / "-b.txt").write_text("b\n")
        (temp_git_repo / "c d.txt").write_text("c\n")

        report, _ = _deploy(orchestrator, temp_git_repo, files=["-b.txt", "c d.txt"])

        assert report.succeeded
        assert report.files == ["a.txt"]
        committed = _git(temp_git_repo, "show", "--name-only", "--format=", "HEAD").split("\n")
        assert "-b.txt" in committed
        assert "c d.txt" in committed

    def test_nothing_to_commit_still_pushes(self, orchestrator, temp_git_repo, git_remote):
        report, lines = _deploy(orchestrator, temp_git_repo)

        assert report.succeeded, lines
        assert "Nothing to commit." in lines

    def test_push_without_remote_fails(self, orchestrator, temp_git_repo):
        (temp_git_repo / "index.html").write_text("x\n")

        report, lines = _deploy(orchestrator, temp_git_repo)

        leg = report.leg(DeployTarget.GITHUB)
        assert leg.reason == LegFailure.PUSH_FAILED
        assert any(line.endswith("failed.") for line in lines)
        # The commit happened locally before the push failed
        assert _git(temp_git_repo, "log", "-1", "--format=%s").strip() == "deploy: automatic"

    def test_status_and_preview(self, orchestrator, temp_git_repo):
        (temp_git_repo / "README.md").write_text("# project\nmore\n")

        files = asyncio.run(orchestrator.status(str(temp_git_repo)))
        diff = asyncio.run(orchestrator.preview(str(temp_git_repo), "README.md"))

        assert files == ["README.md"]
        assert "+more" in diff


class TestPanelProcess:
    def test_json_lines_session(self, temp_git_repo, isolate_environment):
        (temp_git_repo / "README.md").write_text("# project\nmore\n")
        stdin = "\n".join(
            [
                json.dumps({"type": "preview", "file": "README.md"}),
                json.dumps({"type": "saveToken", "token": "tok_panel"}),
                json.dumps({"type": "bogus"}),
            ]
        )

        result = subprocess.run(
            [sys.executable, "-m", "shipit", "-C", str(temp_git_repo), "panel"],
            input=stdin + "\n",
            capture_output=True,
            text=True,
            timeout=60,
            env={**os.environ, "HOME": str(isolate_environment)},
        )

        assert result.returncode == 0, result.stderr
        messages = [json.loads(line) for line in result.stdout.splitlines()]
        replies = [m for m in messages if m["type"] != "log"]
        assert messages[0] == {"type": "log", "text": " M README.md\n"}
        assert replies[0] == {"type": "status", "files": ["README.md"]}

        by_type = {m["type"]: m for m in messages}
        assert "+more" in by_type["preview"]["text"]
        assert "tokenSaved" in by_type
        assert "bogus" in by_type["error"]["text"]

        secrets = json.loads((isolate_environment / ".shipit" / "secrets.json").read_text())
        assert secrets == {"vercelToken": "tok_panel"}
