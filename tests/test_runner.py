"""Tests for the async command runner (real child processes)."""

import asyncio
import sys

import pytest

from prdeps.errors import CommandTimeoutError, ExternalToolError
from prdeps.runner import CommandResult, run_command


class TestRunCommand:
    """run_command collects both streams and never fails on exit status."""

    def test_collects_stdout_and_stderr(self):
        script = "import sys; sys.stdout.write('out'); sys.stderr.write('err')"
        result = asyncio.run(run_command(sys.executable, ["-c", script]))

        assert isinstance(result, CommandResult)
        assert result.stdout == "out"
        assert result.stderr == "err"
        assert result.returncode == 0
        assert result.command == (sys.executable, "-c", script)

    def test_nonzero_exit_is_not_an_error(self):
        """npm audit exits 1 whenever it finds vulnerabilities."""
        script = "import sys; print('{\"ok\": true}'); sys.exit(1)"
        result = asyncio.run(run_command(sys.executable, ["-c", script]))

        assert result.returncode == 1
        assert result.stdout.strip() == '{"ok": true}'

    def test_large_output_is_read_completely(self):
        script = "import sys; sys.stdout.write('x' * 1_000_000)"
        result = asyncio.run(run_command(sys.executable, ["-c", script]))

        assert len(result.stdout) == 1_000_000

    def test_arguments_are_not_shell_interpolated(self):
        script = "import sys; print(sys.argv[1])"
        result = asyncio.run(run_command(sys.executable, ["-c", script, "$HOME; echo pwned"]))

        assert result.stdout.strip() == "$HOME; echo pwned"

    def test_cwd_is_respected(self, tmp_path):
        script = "import os; print(os.getcwd())"
        result = asyncio.run(run_command(sys.executable, ["-c", script], cwd=str(tmp_path)))

        assert result.stdout.strip() == str(tmp_path.resolve())

    def test_stdin_is_closed(self):
        """A child that prompts (npx install confirmation) reads EOF instead of blocking."""
        script = "import sys; print(repr(sys.stdin.read()))"
        result = asyncio.run(run_command(sys.executable, ["-c", script], timeout=10))

        assert result.stdout.strip() == "''"

    def test_timeout_kills_child(self):
        script = "import time; time.sleep(30)"
        with pytest.raises(CommandTimeoutError) as exc_info:
            asyncio.run(run_command(sys.executable, ["-c", script], timeout=0.5))

        assert exc_info.value.timeout == 0.5

    def test_missing_executable_raises_tool_error(self):
        with pytest.raises(ExternalToolError, match="could not start"):
            asyncio.run(run_command("prdeps-no-such-binary-xyz", ["--json"]))

    def test_invocations_are_independent(self):
        async def both():
            return await asyncio.gather(
                run_command(sys.executable, ["-c", "print('a')"]),
                run_command(sys.executable, ["-c", "print('b')"]),
            )

        first, second = asyncio.run(both())
        assert first.stdout.strip() == "a"
        assert second.stdout.strip() == "b"
