"""Conversion of execution outcomes into caller-facing text."""

from __future__ import annotations

from dataclasses import dataclass

from remote_command.execution.base import ExecutionOutcome, Failure

NO_OUTPUT_MESSAGE = "Command completed successfully (no output)"
STDERR_MARKER = "STDERR:"
ERROR_HEADER = "Command execution error:"


@dataclass(frozen=True)
class CommandResponse:
    """Text payload returned to the caller.

    Attributes:
        text: Human-readable output or error description.
        is_error: True when the command failed.
    """

    text: str
    is_error: bool = False


def format_outcome(outcome: ExecutionOutcome, original_command: str) -> CommandResponse:
    """Render an outcome for the caller.

    Args:
        outcome: Result produced by the process runner.
        original_command: Command exactly as the caller sent it, before sanitization.

    Returns:
        CommandResponse with merged output, or a failure report naming the command.
    """

    if isinstance(outcome, Failure):
        lines = [
            ERROR_HEADER,
            f"Command: {original_command}",
            f"Error: {outcome.reason or 'Unknown error'}",
        ]
        return CommandResponse(text="\n".join(lines), is_error=True)

    output: list[str] = []
    stdout = outcome.stdout.strip()
    stderr = outcome.stderr.strip()
    if stdout:
        output.append(stdout)
    if stderr:
        output.extend([STDERR_MARKER, stderr])
    return CommandResponse(text="\n".join(output) or NO_OUTPUT_MESSAGE)
