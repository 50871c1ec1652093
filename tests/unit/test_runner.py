"""
Tests for CommandRunner against a real shell.
"""

import asyncio
import time
from unittest.mock import MagicMock

import pytest

from shipit.services.execution.runner import CommandRunner
from shipit.utils.shell import quote_arg


def _run(runner, command, cwd, on_output=None, **kwargs):
    return asyncio.run(runner.run(command, str(cwd), on_output, **kwargs))


class TestResults:
    def test_success_captures_stdout(self, tmp_path):
        result = _run(CommandRunner(), "echo hello", tmp_path)

        assert result.success
        assert result.exit_code == 0
        assert result.stdout == "hello\n"
        assert result.output == "hello\n"

    def test_runs_in_cwd(self, tmp_path):
        (tmp_path / "marker.txt").write_text("x")

        result = _run(CommandRunner(), "ls", tmp_path)

        assert "marker.txt" in result.stdout

    def test_non_zero_exit(self, tmp_path):
        result = _run(CommandRunner(), "echo oops 1>&2; exit 3", tmp_path)

        assert not result.success
        assert result.exit_code == 3
        assert result.stderr == "oops\n"
        assert result.output == "oops\n"

    def test_command_not_found(self, tmp_path):
        result = _run(CommandRunner(), "shipit-no-such-command-xyz", tmp_path)

        assert not result.success
        assert result.exit_code == 127

    def test_missing_cwd_is_a_failed_result(self, tmp_path):
        result = _run(CommandRunner(), "echo hi", tmp_path / "does-not-exist")

        assert not result.success
        assert result.exit_code is None
        assert result.stderr

    def test_invalid_utf8_is_replaced(self, tmp_path):
        result = _run(CommandRunner(), "printf 'a\\377b'", tmp_path)

        assert result.stdout == "a�b"


class TestStreaming:
    def test_listener_sees_both_streams(self, tmp_path):
        chunks: list[str] = []

        result = _run(CommandRunner(), "echo out; echo err 1>&2", tmp_path, chunks.append)

        assert result.success
        joined = "".join(chunks)
        assert "out\n" in joined
        assert "err\n" in joined

    def test_listener_gets_output_before_exit(self, tmp_path):
        seen_at: list[float] = []

        def on_output(_text):
            seen_at.append(time.monotonic())

        start = time.monotonic()
        _run(CommandRunner(), "echo first; sleep 1; echo second", tmp_path, on_output)

        assert len(seen_at) >= 2
        assert seen_at[0] - start < 0.9


class TestLimits:
    def test_buffer_exceeded(self, tmp_path):
        runner = CommandRunner(max_buffer=1024)

        result = _run(runner, "yes abcdefgh | head -n 100000", tmp_path)

        assert not result.success
        assert result.buffer_exceeded
        assert len(result.stdout.encode()) <= 1024
        assert "exceeded" in result.stderr

    def test_timeout_kills_command(self, tmp_path):
        runner = CommandRunner(timeout=0.5)

        start = time.monotonic()
        result = _run(runner, "sleep 5", tmp_path)

        assert time.monotonic() - start < 4
        assert not result.success
        assert result.timed_out
        assert "timed out" in result.stderr

    def test_per_call_timeout(self, tmp_path):
        result = _run(CommandRunner(timeout=None), "sleep 5", tmp_path, timeout=0.3)

        assert result.timed_out

    def test_timeout_kills_child_processes(self, tmp_path):
        marker = tmp_path / "late.txt"
        runner = CommandRunner(timeout=0.5)

        _run(runner, f"(sleep 1.5; touch {quote_arg(str(marker))}) & wait", tmp_path)
        time.sleep(2)

        assert not marker.exists()

    def test_from_settings(self, settings):
        runner = CommandRunner.from_settings(settings)

        assert runner._max_buffer == 10 * 1024 * 1024
        assert runner._timeout == 900


class TestCancellation:
    def test_cancel_kills_and_reraises(self, tmp_path):
        runner = CommandRunner()

        async def scenario():
            task = asyncio.ensure_future(runner.run("sleep 5", str(tmp_path)))
            await asyncio.sleep(0.3)
            task.cancel()
            with pytest.raises(asyncio.CancelledError):
                await task

        start = time.monotonic()
        asyncio.run(scenario())

        assert time.monotonic() - start < 4


class TestShellQuoting:
    @pytest.mark.parametrize(
        "value",
        [
            "with space.txt",
            'quote"inside.txt',
            "dollar $HOME.txt",
            "subshell $(echo pwned).txt",
            "back`echo tick`.txt",
            "back\\slash.txt",
            "single'quote.txt",
            "mixed \"$x\" `y` \\z",
        ],
    )
    def test_shell_sees_original_value(self, tmp_path, value):
        result = _run(CommandRunner(), f"printf '%s' {quote_arg(value)}", tmp_path)

        assert result.success
        assert result.stdout == value


class TestLogging:
    def test_command_is_logged_with_token_redacted(self, tmp_path):
        logger = MagicMock()
        runner = CommandRunner(logger=logger)

        _run(runner, 'echo deploy --token="s3cr3t-value" --yes', tmp_path)

        logged = " ".join(str(arg) for call in logger.debug.call_args_list for arg in call.args)
        assert "s3cr3t-value" not in logged
        assert "[REDACTED]" in logged

    def test_quoted_token_with_spaces_is_redacted(self, tmp_path):
        logger = MagicMock()
        runner = CommandRunner(logger=logger)

        _run(runner, 'echo --token="two words" done', tmp_path)

        logged = " ".join(str(arg) for call in logger.debug.call_args_list for arg in call.args)
        assert "two words" not in logged
        assert "done" in logged
