"""Built-in command execution tool."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from remote_command.commands import normalize, sanitize
from remote_command.execution.runner import ProcessRunner
from remote_command.formatting import format_outcome
from remote_command.tools.base import Tool, ToolArgumentError, ToolResult
from remote_command.tools.registry import ToolRegistry

EXECUTE_REMOTE_COMMAND = "execute_remote_command"


@dataclass
class ExecuteRemoteCommandTool(Tool):
    """Tool that runs a shell command on the host and reports its output."""

    runner: ProcessRunner

    @property
    def name(self) -> str:  # noqa: D401 - short description
        return EXECUTE_REMOTE_COMMAND

    @property
    def description(self) -> str:
        return "Execute a command on the host machine"

    @property
    def input_schema(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "command": {
                    "type": "string",
                    "description": "Command to execute",
                },
                "cwd": {
                    "type": "string",
                    "description": "Working directory for command execution",
                },
            },
            "required": ["command"],
        }

    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        command = arguments.get("command")
        if not isinstance(command, str):
            raise ToolArgumentError("Invalid command execution arguments: 'command' must be a string")
        cwd = arguments.get("cwd")
        if cwd is not None and not isinstance(cwd, str):
            raise ToolArgumentError("Invalid command execution arguments: 'cwd' must be a string")

        profile = self.runner.profile
        prepared = normalize(sanitize(command, profile), profile)
        outcome = await self.runner.run(prepared, cwd=cwd)
        response = format_outcome(outcome, command)
        return ToolResult(name=self.name, text=response.text, is_error=response.is_error)


def build_default_tool_registry(runner: ProcessRunner) -> ToolRegistry:
    """Create a registry pre-populated with built-in tools.

    Args:
        runner: Process runner backing command execution.

    Returns:
        ToolRegistry with built-in tools registered.
    """

    registry = ToolRegistry()
    registry.register(ExecuteRemoteCommandTool(runner=runner))
    return registry
