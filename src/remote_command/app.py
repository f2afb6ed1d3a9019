"""Application wiring for the CLI and the stdio server."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from pathlib import Path

from remote_command.config import AppConfig, config_to_dict, load_config
from remote_command.execution.runner import ProcessRunner
from remote_command.host import PlatformProfile, detect_platform
from remote_command.server import build_server, serve_stdio
from remote_command.tools.base import ToolResult
from remote_command.tools.builtins import EXECUTE_REMOTE_COMMAND, build_default_tool_registry
from remote_command.tools.registry import ToolRegistry
from remote_command.util.logging import get_logger

CONFIG_FILE_NAME = "remote_command.yaml"


class AppConfigError(RuntimeError):
    """Raised when configuration or runtime setup fails."""


@dataclass(frozen=True)
class RuntimeContext:
    """Container for the services shared by every request."""

    config: AppConfig
    profile: PlatformProfile
    runner: ProcessRunner
    registry: ToolRegistry


_LOGGER = get_logger("remote_command.app")


def initialize_config(workspace: Path) -> Path:
    """Create a default configuration file in the workspace.

    Args:
        workspace: Directory where the config should be written.

    Returns:
        Path to the generated configuration file.

    Raises:
        AppConfigError: If the config file already exists.
    """

    workspace = workspace.resolve()
    config_path = workspace / CONFIG_FILE_NAME
    if config_path.exists():
        raise AppConfigError(
            f"Config file already exists at {config_path}. Remove it or choose another "
            "directory."
        )
    config_path.write_text(
        json.dumps(config_to_dict(AppConfig()), indent=2),
        encoding="utf-8",
    )
    _LOGGER.info("Initialized configuration at %s", config_path)
    return config_path


def load_runtime(config_path: Path | None = None) -> RuntimeContext:
    """Load configuration from disk and build the runtime.

    Raises:
        AppConfigError: If the configuration cannot be read or parsed.
    """

    try:
        config = load_config(config_path)
    except (OSError, ValueError) as exc:
        raise AppConfigError(f"Could not load configuration: {exc}") from exc
    return build_runtime(config)


def build_runtime(
    config: AppConfig,
    *,
    profile: PlatformProfile | None = None,
) -> RuntimeContext:
    """Build runtime services.

    Args:
        config: Application configuration.
        profile: Optional platform profile (for testing). Detected from the
            host when omitted.

    Returns:
        RuntimeContext with initialized services.
    """

    host_profile = profile or detect_platform()
    runner = ProcessRunner(host_profile, config.execution)
    registry = build_default_tool_registry(runner)
    _LOGGER.info(
        "Runtime initialized for %s (timeout %.0fs).",
        host_profile.shell_path,
        config.execution.timeout_s,
    )
    return RuntimeContext(
        config=config,
        profile=host_profile,
        runner=runner,
        registry=registry,
    )


async def execute_command_async(
    runtime: RuntimeContext,
    command: str,
    cwd: str | None = None,
) -> ToolResult:
    """Run one command through the full tool pipeline."""

    arguments: dict[str, object] = {"command": command}
    if cwd is not None:
        arguments["cwd"] = cwd
    return await runtime.registry.execute(EXECUTE_REMOTE_COMMAND, arguments)


def execute_command(runtime: RuntimeContext, command: str, cwd: str | None = None) -> ToolResult:
    """Synchronous wrapper around ``execute_command_async``."""

    return asyncio.run(execute_command_async(runtime, command, cwd))


def run_server(runtime: RuntimeContext) -> None:
    """Serve the registry over stdio until the client disconnects or SIGINT arrives."""

    server = build_server(runtime.registry, runtime.config.server)
    try:
        asyncio.run(serve_stdio(server))
    except KeyboardInterrupt:
        _LOGGER.info("Interrupted, shutting down.")
    _LOGGER.info("Remote command server stopped.")
