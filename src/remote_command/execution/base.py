"""Execution engine base types and interfaces."""

from __future__ import annotations

import asyncio
import os
import signal
from abc import ABC, abstractmethod
from dataclasses import dataclass

from remote_command.host import PlatformProfile
from remote_command.util.logging import get_logger


@dataclass(frozen=True)
class Success:
    """A command that ran to completion.

    Attributes:
        stdout: Captured standard output.
        stderr: Captured standard error. Informational only.
        exit_code: Exit code of the shell, when known.
    """

    stdout: str
    stderr: str
    exit_code: int | None = None


@dataclass(frozen=True)
class Failure:
    """A command that could not be run or did not complete.

    Attributes:
        reason: Human-readable failure description.
        exit_code: Exit code of the shell for exit-status failures.
    """

    reason: str
    exit_code: int | None = None


ExecutionOutcome = Success | Failure


class OutcomeLatch:
    """One-shot holder that accepts the first outcome and discards the rest.

    Must be created while an event loop is running.
    """

    def __init__(self) -> None:
        self._future: asyncio.Future[ExecutionOutcome] = (
            asyncio.get_running_loop().create_future()
        )

    def settle(self, outcome: ExecutionOutcome) -> bool:
        """Offer an outcome to the latch.

        Args:
            outcome: Candidate outcome.

        Returns:
            True if this outcome was accepted, False if one was already set.
        """

        if self._future.done():
            return False
        self._future.set_result(outcome)
        return True

    async def wait(self) -> ExecutionOutcome:
        """Wait for the accepted outcome."""

        return await self._future


class ExecutionStrategy(ABC):
    """Abstract base class for the ways a command string can be executed."""

    def __init__(
        self,
        profile: PlatformProfile,
        timeout_s: float,
        kill_on_timeout: bool = True,
    ) -> None:
        """Initialize the strategy.

        Args:
            profile: Shell invocation details for the host.
            timeout_s: Wall-clock budget for the command.
            kill_on_timeout: Whether to terminate the process when the budget expires.
        """

        self._profile = profile
        self._timeout_s = timeout_s
        self._kill_on_timeout = kill_on_timeout
        self._logger = get_logger(self.__class__.__name__)

    @property
    def timeout_s(self) -> float:
        return self._timeout_s

    @abstractmethod
    async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
        """Run a command and resolve its outcome.

        Args:
            command: Sanitized and normalized command string.
            cwd: Optional working directory for the command.

        Returns:
            Success or Failure describing how the command ended.
        """

    def _terminate(self, process: asyncio.subprocess.Process) -> None:
        if process.returncode is not None:
            return
        self._logger.warning("Terminating timed-out process %s.", process.pid)
        try:
            if self._profile.is_windows:
                process.kill()
            else:
                # The shell leads its own session, so its children go too.
                os.killpg(process.pid, signal.SIGKILL)
        except ProcessLookupError:
            return


def timeout_reason(timeout_s: float) -> str:
    """Return the failure reason reported for an expired budget."""

    return f"Command timed out after {timeout_s:g} seconds"


def decode_output(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")
