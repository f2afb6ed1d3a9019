"""Execution engine package."""

from remote_command.execution.base import (
    ExecutionOutcome,
    ExecutionStrategy,
    Failure,
    OutcomeLatch,
    Success,
)
from remote_command.execution.buffered_exec import BufferedExecutor
from remote_command.execution.runner import ProcessRunner
from remote_command.execution.selector import select_strategy, uses_pipes
from remote_command.execution.streaming_exec import StreamingExecutor

__all__ = [
    "BufferedExecutor",
    "ExecutionOutcome",
    "ExecutionStrategy",
    "Failure",
    "OutcomeLatch",
    "ProcessRunner",
    "StreamingExecutor",
    "Success",
    "select_strategy",
    "uses_pipes",
]
