"""Tool abstractions exposed to transport clients."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


class ToolExecutionError(RuntimeError):
    """Raised when a tool fails to execute successfully."""


class ToolArgumentError(ToolExecutionError):
    """Raised when a tool receives missing or wrongly typed arguments."""


@dataclass(frozen=True)
class ToolResult:
    """Result of executing a tool.

    Attributes:
        name: Tool name that produced the result.
        text: Text content returned to the caller.
        is_error: Whether the result describes a failure.
    """

    name: str
    text: str
    is_error: bool = False


class Tool(ABC):
    """Base class for tools served to clients."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the unique name of the tool."""

    @property
    @abstractmethod
    def description(self) -> str:
        """Return a human-readable description of the tool."""

    @property
    @abstractmethod
    def input_schema(self) -> dict[str, Any]:
        """Return a JSON schema describing expected tool input."""

    @abstractmethod
    async def execute(self, arguments: dict[str, Any]) -> ToolResult:
        """Execute the tool with the provided arguments.

        Args:
            arguments: Structured input arguments for the tool.

        Returns:
            ToolResult describing the execution outcome.

        Raises:
            ToolArgumentError: If the arguments do not match the input schema.
        """
