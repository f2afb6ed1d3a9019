"""Model Context Protocol binding for the tool registry."""

from __future__ import annotations

from typing import Any

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server
from mcp.shared.exceptions import McpError

from remote_command.config import ServerConfig
from remote_command.tools.base import ToolArgumentError, ToolResult
from remote_command.tools.registry import ToolNotFoundError, ToolRegistry
from remote_command.util.logging import get_logger

_LOGGER = get_logger("remote_command.server")


def describe_tools(registry: ToolRegistry) -> list[types.Tool]:
    """Return protocol tool descriptors for every registered tool."""

    return [
        types.Tool(
            name=tool.name,
            description=tool.description,
            inputSchema=tool.input_schema,
        )
        for tool in registry.list_tools()
    ]


async def dispatch_tool_call(
    registry: ToolRegistry,
    name: str,
    arguments: dict[str, Any] | None,
) -> ToolResult:
    """Execute a tool call, translating registry errors to protocol errors.

    Args:
        registry: Registry holding the served tools.
        name: Requested tool name.
        arguments: Raw arguments from the request.

    Returns:
        ToolResult produced by the tool.

    Raises:
        McpError: ``METHOD_NOT_FOUND`` for unknown tools, ``INVALID_PARAMS`` for
            malformed arguments.
    """

    try:
        return await registry.execute(name, arguments)
    except ToolNotFoundError as exc:
        raise McpError(types.ErrorData(code=types.METHOD_NOT_FOUND, message=str(exc))) from exc
    except ToolArgumentError as exc:
        raise McpError(types.ErrorData(code=types.INVALID_PARAMS, message=str(exc))) from exc


def build_server(registry: ToolRegistry, config: ServerConfig) -> Server:
    """Create a protocol server that serves the registry's tools.

    The call handler is installed directly in ``request_handlers`` rather than
    through ``Server.call_tool()``: that decorator reports every exception as
    an ``isError`` result, which would hide ``METHOD_NOT_FOUND`` and
    ``INVALID_PARAMS`` from the client.

    Args:
        registry: Registry holding the served tools.
        config: Server identity settings.

    Returns:
        Configured low-level MCP server.
    """

    server: Server = Server(config.name, version=config.version)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return describe_tools(registry)

    async def call_tool(request: types.CallToolRequest) -> types.ServerResult:
        result = await dispatch_tool_call(
            registry,
            request.params.name,
            request.params.arguments,
        )
        return types.ServerResult(
            types.CallToolResult(
                content=[types.TextContent(type="text", text=result.text)],
                isError=result.is_error,
            )
        )

    server.request_handlers[types.CallToolRequest] = call_tool
    return server


async def serve_stdio(server: Server) -> None:
    """Serve requests over stdin/stdout until the stream closes."""

    async with stdio_server() as (read_stream, write_stream):
        _LOGGER.info("Remote command server running on stdio")
        await server.run(
            read_stream,
            write_stream,
            server.create_initialization_options(),
        )
