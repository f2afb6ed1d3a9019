"""Tooling infrastructure for the remote command server."""

from remote_command.tools.base import Tool, ToolArgumentError, ToolExecutionError, ToolResult
from remote_command.tools.registry import ToolNotFoundError, ToolRegistry, ToolRegistryError

__all__ = [
    "Tool",
    "ToolArgumentError",
    "ToolExecutionError",
    "ToolResult",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolRegistryError",
]
