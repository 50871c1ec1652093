"""
Git VCS provider.

Builds the git command strings used by a deploy and runs them through the
command runner.
"""

from __future__ import annotations

import re
import subprocess

from ...core.interfaces.runner import OutputListener
from ...core.models.command import CommandResult
from ...utils.shell import quote_arg, quote_arg_if_needed, quote_args
from .base import BaseVCSProvider

# Width of the "XY " status prefix in porcelain v1 output
STATUS_PREFIX_WIDTH = 3

_ESCAPE_RE = re.compile(rb"\\([0-7]{3}|.)")
_ESCAPES = {
    b"a": b"\a",
    b"b": b"\b",
    b"t": b"\t",
    b"n": b"\n",
    b"v": b"\v",
    b"f": b"\f",
    b"r": b"\r",
    b'"': b'"',
    b"\\": b"\\",
}


def _unquote_path(path: str) -> str:
    """Undo git's C-style quoting of unusual paths ("a\\tb", "caf\\303\\251")."""
    if len(path) < 2 or not (path.startswith('"') and path.endswith('"')):
        return path

    def _replace(match: re.Match) -> bytes:
        token = match.group(1)
        if len(token) == 3:
            return bytes([int(token, 8) & 0xFF])
        return _ESCAPES.get(token, token)

    raw = _ESCAPE_RE.sub(_replace, path[1:-1].encode("utf-8"))
    return raw.decode("utf-8", errors="replace")


# Status codes whose entries read "ORIG -> PATH"
RENAME_CODES = frozenset("RC")
RENAME_SEPARATOR = " -> "

_QUOTED_FIELD = re.compile(r'"(?:[^"\\]|\\.)*"')


def _rename_target(field: str) -> str:
    """Get PATH from an "ORIG -> PATH" field; either side may be C-quoted."""
    if field.startswith('"'):
        match = _QUOTED_FIELD.match(field)
        if match is None:
            return field
        rest = field[match.end():]
        return rest[len(RENAME_SEPARATOR):] if rest.startswith(RENAME_SEPARATOR) else field
    if RENAME_SEPARATOR in field:
        return field.split(RENAME_SEPARATOR, 1)[1]
    return field


def parse_porcelain(output: str) -> list[str]:
    """
    Extract paths from `git status --porcelain` output.

    Each line loses its fixed-width status prefix. Renames and copies
    ("old -> new") yield the new path; the arrow is only read for R and C
    entries, so a file literally named "a -> b" keeps its name.

    >>> parse_porcelain(" M foo.txt\\n?? bar/baz.txt\\n")
    ['foo.txt', 'bar/baz.txt']
    """
    files = []
    for line in output.splitlines():
        if not line.strip():
            continue
        if len(line) > STATUS_PREFIX_WIDTH:
            path = line[STATUS_PREFIX_WIDTH:].strip()
        else:
            path = line.strip()
        if RENAME_CODES & set(line[:2]):
            path = _rename_target(path)
        files.append(_unquote_path(path))
    return files


def _pathspec(path: str) -> str:
    # Keep paths like "-n" from being read as options
    return f"./{path}" if path.startswith("-") else path


class GitVCSProvider(BaseVCSProvider):
    """
    Git version control provider.

    Status, diff, stage, commit and push for a deploy, plus the read-only
    branch query.
    """

    @property
    def name(self) -> str:
        return "git"

    def get_repo_root(self, path: str | None = None) -> str | None:
        """Get the git repository root directory."""
        try:
            cmd = ["git", "rev-parse", "--show-toplevel"]
            if path:
                out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL, cwd=path)
            else:
                out = subprocess.check_output(cmd, stderr=subprocess.DEVNULL)
            return out.decode().strip()
        except (subprocess.CalledProcessError, FileNotFoundError, NotADirectoryError):
            return None

    async def get_branch(self, repo_root: str) -> str:
        """Get the current branch, or the default branch if git reports none."""
        result = await self.runner.run("git rev-parse --abbrev-ref HEAD", repo_root)
        branch = result.stdout.strip() if result.success else ""
        return branch or self.default_branch

    async def get_status(
        self, repo_root: str, on_output: OutputListener | None = None
    ) -> list[str]:
        """Get changed paths from the working tree status."""
        result = await self.runner.run("git status --porcelain", repo_root, on_output)
        return parse_porcelain(result.stdout)

    async def diff(
        self, repo_root: str, path: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        """Get the diff for one path."""
        return await self.runner.run(f"git diff -- {quote_arg(path)}", repo_root, on_output)

    async def stage(
        self,
        repo_root: str,
        paths: list[str] | None = None,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        """Stage the given paths, or every change when paths is empty."""
        if paths:
            command = f"git add {quote_args([_pathspec(p) for p in paths])}"
        else:
            command = "git add ."
        return await self.runner.run(command, repo_root, on_output)

    async def commit(
        self, repo_root: str, message: str, on_output: OutputListener | None = None
    ) -> CommandResult:
        """Commit the staged changes with message."""
        return await self.runner.run(f"git commit -m {quote_arg(message)}", repo_root, on_output)

    async def has_staged_changes(self, repo_root: str) -> bool:
        """Check whether the index differs from HEAD.

        Exit code 0 means nothing is staged; anything else (changes, or an
        error such as a repository without commits) counts as staged.
        """
        result = await self.runner.run("git diff --cached --quiet", repo_root)
        return result.exit_code != 0

    async def push(
        self,
        repo_root: str,
        branch: str,
        on_output: OutputListener | None = None,
    ) -> CommandResult:
        """Push branch to the configured remote."""
        command = f"git push {quote_arg_if_needed(self.remote)} {quote_arg_if_needed(branch)}"
        return await self.runner.run(command, repo_root, on_output)
