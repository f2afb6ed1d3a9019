"""Choose how a command string is executed."""

from __future__ import annotations

from remote_command.config import ExecutionConfig
from remote_command.execution.base import ExecutionStrategy
from remote_command.execution.buffered_exec import BufferedExecutor
from remote_command.execution.streaming_exec import StreamingExecutor
from remote_command.host import PlatformProfile

PIPE_CHARACTER = "|"


def uses_pipes(command: str) -> bool:
    """Return True if the command needs the shell to compose a pipeline."""

    return PIPE_CHARACTER in command


def select_strategy(
    command: str,
    profile: PlatformProfile,
    config: ExecutionConfig,
) -> ExecutionStrategy:
    """Return the buffered strategy for piped commands, streaming otherwise.

    Args:
        command: Normalized command string.
        profile: Platform profile of the host.
        config: Execution settings supplying the timeout budget.

    Returns:
        A strategy instance ready to run ``command``.
    """

    strategy_cls: type[ExecutionStrategy]
    strategy_cls = BufferedExecutor if uses_pipes(command) else StreamingExecutor
    return strategy_cls(
        profile,
        timeout_s=config.timeout_s,
        kill_on_timeout=config.kill_on_timeout,
    )
