"""Process runner entrypoint used by the command tool."""

from __future__ import annotations

import time

from remote_command.config import ExecutionConfig
from remote_command.execution.base import ExecutionOutcome, Failure
from remote_command.execution.selector import select_strategy
from remote_command.host import PlatformProfile
from remote_command.util.logging import get_logger

EMPTY_COMMAND_REASON = "Command is empty after sanitization"


class ProcessRunner:
    """Run one command through the selected strategy and always return an outcome."""

    def __init__(self, profile: PlatformProfile, config: ExecutionConfig) -> None:
        """Initialize the runner.

        Args:
            profile: Platform profile resolved at startup.
            config: Execution settings shared by every request.
        """

        self._profile = profile
        self._config = config
        self._logger = get_logger(self.__class__.__name__)

    @property
    def profile(self) -> PlatformProfile:
        return self._profile

    async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
        """Execute a prepared command exactly once.

        Args:
            command: Sanitized and normalized command string.
            cwd: Optional working directory. Defaults to the server's own.

        Returns:
            Success or Failure. Errors raised by a strategy are converted to
            Failure here.
        """

        if self._config.reject_empty_commands and not command.strip():
            self._logger.warning("Rejected empty command.")
            return Failure(reason=EMPTY_COMMAND_REASON)

        strategy = select_strategy(command, self._profile, self._config)
        start = time.monotonic()
        try:
            outcome = await strategy.run(command, cwd=cwd)
        except Exception as exc:
            self._logger.exception("Command raised while running: %s", command)
            outcome = Failure(reason=str(exc) or exc.__class__.__name__)
        duration = time.monotonic() - start

        if isinstance(outcome, Failure):
            self._logger.warning(
                "Command failed after %.2fs: %s",
                duration,
                outcome.reason,
            )
        else:
            self._logger.info(
                "Command finished with exit code %s in %.2fs.",
                outcome.exit_code,
                duration,
            )
        return outcome
