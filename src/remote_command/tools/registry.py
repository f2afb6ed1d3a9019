"""Name-to-tool lookup behind the server's ``tools/list`` and ``tools/call``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

from remote_command.tools.base import Tool, ToolResult


class ToolRegistryError(RuntimeError):
    """Base class for tool lookup and registration failures."""


class ToolNotFoundError(ToolRegistryError):
    """A client asked for a tool the server does not serve."""


class ToolRegistrationError(ToolRegistryError):
    """Two tools were registered under the same name."""


@dataclass
class ToolRegistry:
    """Tools served to transport clients, keyed by their advertised name.

    The default server holds a single entry, ``execute_remote_command``.
    Registration order is the order ``tools/list`` reports.
    """

    _tools: dict[str, Tool]

    def __init__(self) -> None:
        self._tools = {}

    def register(self, tool: Tool) -> None:
        """Serve ``tool`` under its name.

        Raises:
            ToolRegistrationError: If the name is already served.
        """

        if tool.name in self._tools:
            raise ToolRegistrationError(f"Tool '{tool.name}' is already registered")
        self._tools[tool.name] = tool

    def get(self, name: str) -> Tool:
        try:
            return self._tools[name]
        except KeyError as exc:
            raise ToolNotFoundError(f"Unknown tool: {name}") from exc

    def list_tools(self) -> Iterable[Tool]:
        """Return the served tools in registration order."""

        return list(self._tools.values())

    async def execute(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Dispatch one ``tools/call`` request.

        A failed command is not an exception here; it comes back as a
        ``ToolResult`` with ``is_error`` set.

        Args:
            name: Tool name from the request.
            arguments: Request arguments. ``None`` is treated as empty.

        Returns:
            ToolResult carrying the text sent back to the client.

        Raises:
            ToolNotFoundError: If ``name`` is not served.
            ToolArgumentError: If the tool rejects ``arguments``.
        """

        tool = self.get(name)
        return await tool.execute(dict(arguments or {}))
