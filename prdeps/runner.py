"""Command runner for the external npm tooling.

AsyncIO + memory pipes: the child's stdout and stderr are collected in full
by ``communicate()`` and handed back as one immutable result. Arguments are
always passed as a vector to ``create_subprocess_exec``; nothing is ever
interpolated into a shell string.
"""

import asyncio
import time
from dataclasses import dataclass
from typing import Protocol

from prdeps.errors import CommandTimeoutError, ExternalToolError
from prdeps.utils.logging import logger

DEFAULT_TIMEOUT = 600


@dataclass(frozen=True)
class CommandResult:
    """Output of one finished child process."""

    command: tuple[str, ...]
    stdout: str
    stderr: str
    returncode: int
    elapsed: float


class CommandRunner(Protocol):
    """Anything that can run ``command args...`` and return a CommandResult."""

    async def __call__(
        self,
        command: str,
        args: list[str],
        *,
        cwd: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> CommandResult: ...


async def run_command(
    command: str,
    args: list[str],
    *,
    cwd: str | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> CommandResult:
    """Run one external command and wait for it to exit.

    A non-zero exit status is NOT treated as failure: ``npm audit``,
    ``npm outdated`` and ``depcheck`` all exit non-zero when they find
    something. Callers decide from the output whether the run was usable.

    Args:
        command: Executable name, resolved through PATH
        args: Argument vector
        cwd: Working directory for the child
        timeout: Seconds before the child is killed

    Returns:
        CommandResult with decoded stdout/stderr and the exit status

    Raises:
        ExternalToolError: The executable could not be started
        CommandTimeoutError: The child outlived ``timeout``
    """
    argv = (command, *args)
    label = " ".join(argv)
    logger.debug("Spawning: {argv}", argv=list(argv))
    start_time = time.time()

    try:
        process = await asyncio.create_subprocess_exec(
            *argv,
            stdin=asyncio.subprocess.DEVNULL,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
            cwd=cwd,
        )
    except OSError as e:
        raise ExternalToolError(f"could not start {label}: {e}", tool=label) from e

    try:
        stdout_data, stderr_data = await asyncio.wait_for(process.communicate(), timeout=timeout)
    except TimeoutError:
        logger.error(f"[TIMEOUT] {label} timed out after {timeout:g}s")
        process.kill()
        await process.wait()
        raise CommandTimeoutError(label, timeout) from None

    elapsed = time.time() - start_time
    logger.info(f"{label} exited {process.returncode} in {elapsed:.1f}s")

    return CommandResult(
        command=argv,
        stdout=stdout_data.decode("utf-8", errors="replace"),
        stderr=stderr_data.decode("utf-8", errors="replace"),
        returncode=process.returncode,
        elapsed=elapsed,
    )
