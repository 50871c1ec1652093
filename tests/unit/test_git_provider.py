"""
Tests for the git VCS provider.

Command strings are checked against a recording runner; parsing is checked
on literal porcelain output.
"""

import asyncio
import subprocess

import pytest

from shipit.core.models.command import CommandResult
from shipit.plugins.vcs.git import GitVCSProvider, parse_porcelain


def _ok(stdout: str = "") -> CommandResult:
    return CommandResult(success=True, stdout=stdout, exit_code=0)


@pytest.fixture
def provider(fake_runner):
    return GitVCSProvider(runner=fake_runner, remote="origin", default_branch="main")


class TestParsePorcelain:
    def test_strips_status_prefix(self):
        assert parse_porcelain(" M foo.txt\n?? bar/baz.txt\n") == ["foo.txt", "bar/baz.txt"]

    def test_prefixes_are_fixed_width(self):
        output = "M  staged.txt\nMM both.txt\nA  added.txt\n D deleted.txt\n"
        assert parse_porcelain(output) == ["staged.txt", "both.txt", "added.txt", "deleted.txt"]

    def test_skips_blank_lines(self):
        assert parse_porcelain("\n M a.txt\n\n   \n") == ["a.txt"]

    def test_empty_output(self):
        assert parse_porcelain("") == []

    def test_rename_yields_new_path(self):
        assert parse_porcelain("R  old/name.txt -> new/name.txt\n") == ["new/name.txt"]

    def test_arrow_in_untracked_name_is_kept(self):
        assert parse_porcelain('?? "a -> b.txt"\n') == ["a -> b.txt"]
        assert parse_porcelain(" M x -> y.txt\n") == ["x -> y.txt"]

    def test_rename_with_quoted_paths(self):
        output = 'R  "old -> name.txt" -> "new name.txt"\nC  plain.txt -> "a -> b.txt"\n'
        assert parse_porcelain(output) == ["new name.txt", "a -> b.txt"]

    def test_unquotes_c_quoted_paths(self):
        output = '?? "with\\"quote.txt"\n?? "caf\\303\\251.txt"\n?? "tab\\there.txt"\n'
        assert parse_porcelain(output) == ['with"quote.txt', "café.txt", "tab\there.txt"]

    def test_path_with_spaces(self):
        assert parse_porcelain("?? my file.txt\n") == ["my file.txt"]

    def test_returns_fresh_list(self):
        first = parse_porcelain(" M a.txt\n")
        first.append("mutated")
        assert parse_porcelain(" M a.txt\n") == ["a.txt"]


class TestGetBranch:
    def test_trims_output(self, provider, fake_runner):
        fake_runner.responses["git rev-parse"] = _ok("feature/x\n")

        assert asyncio.run(provider.get_branch("/repo")) == "feature/x"
        assert fake_runner.commands == ["git rev-parse --abbrev-ref HEAD"]

    def test_empty_output_uses_default(self, provider, fake_runner):
        fake_runner.responses["git rev-parse"] = _ok("  \n")

        assert asyncio.run(provider.get_branch("/repo")) == "main"

    def test_failed_query_uses_default(self, provider, fake_runner):
        fake_runner.responses["git rev-parse"] = CommandResult.failed("fatal: not a git repository")

        assert asyncio.run(provider.get_branch("/repo")) == "main"

    def test_configured_default(self, fake_runner):
        provider = GitVCSProvider(runner=fake_runner, default_branch="trunk")
        fake_runner.responses["git rev-parse"] = _ok("")

        assert asyncio.run(provider.get_branch("/repo")) == "trunk"


class TestCommands:
    def test_status(self, provider, fake_runner):
        fake_runner.responses["git status"] = _ok(" M foo.txt\n?? bar/baz.txt\n")

        files = asyncio.run(provider.get_status("/repo"))

        assert files == ["foo.txt", "bar/baz.txt"]
        assert fake_runner.commands == ["git status --porcelain"]
        assert fake_runner.cwds == ["/repo"]

    def test_stage_files_are_quoted(self, provider, fake_runner):
        asyncio.run(provider.stage("/repo", ["a.txt", 'we"ird $name.txt']))

        assert fake_runner.commands == ['git add "a.txt" "we\\"ird \\$name.txt"']

    def test_stage_dash_prefixed_path(self, provider, fake_runner):
        asyncio.run(provider.stage("/repo", ["-n"]))

        assert fake_runner.commands == ['git add "./-n"']

    def test_stage_everything(self, provider, fake_runner):
        asyncio.run(provider.stage("/repo", []))
        asyncio.run(provider.stage("/repo", None))

        assert fake_runner.commands == ["git add .", "git add ."]

    def test_commit(self, provider, fake_runner):
        asyncio.run(provider.commit("/repo", "deploy: automatic"))

        assert fake_runner.commands == ['git commit -m "deploy: automatic"']

    def test_diff(self, provider, fake_runner):
        asyncio.run(provider.diff("/repo", "src/app.js"))

        assert fake_runner.commands == ['git diff -- "src/app.js"']

    def test_push(self, provider, fake_runner):
        asyncio.run(provider.push("/repo", "main"))

        assert fake_runner.commands == ["git push origin main"]

    def test_push_quotes_unusual_branch(self, fake_runner):
        provider = GitVCSProvider(runner=fake_runner, remote="my remote")
        asyncio.run(provider.push("/repo", "main"))

        assert fake_runner.commands == ['git push "my remote" main']

    def test_has_staged_changes(self, provider, fake_runner):
        fake_runner.responses["git diff --cached"] = CommandResult(success=False, exit_code=1)
        assert asyncio.run(provider.has_staged_changes("/repo")) is True

        fake_runner.responses["git diff --cached"] = _ok()
        assert asyncio.run(provider.has_staged_changes("/repo")) is False

        assert fake_runner.called("git diff --cached") == ["git diff --cached --quiet"] * 2


class TestRepoRoot:
    def test_finds_repo_root(self, temp_git_repo):
        sub = temp_git_repo / "src"
        sub.mkdir()

        root = GitVCSProvider().get_repo_root(str(sub))

        assert root is not None
        assert root.endswith(temp_git_repo.name)

    def test_outside_repo(self, tmp_path):
        outside = tmp_path / "plain"
        outside.mkdir()

        assert GitVCSProvider().get_repo_root(str(outside)) is None


class TestStatusAgainstGit:
    def test_untracked_name_with_arrow(self, temp_git_repo):
        (temp_git_repo / "a -> b.txt").write_text("x\n")

        files = asyncio.run(GitVCSProvider().get_status(str(temp_git_repo)))

        assert files == ["a -> b.txt"]
        assert (temp_git_repo / files[0]).is_file()

    def test_staged_rename_yields_new_path(self, temp_git_repo):
        subprocess.run(
            ["git", "mv", "README.md", "read me -> now.md"],
            cwd=temp_git_repo,
            check=True,
            capture_output=True,
        )

        files = asyncio.run(GitVCSProvider().get_status(str(temp_git_repo)))

        assert files == ["read me -> now.md"]
