"""Configuration models and loaders for the remote command server."""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

DEFAULT_TIMEOUT_S: float = 30.0
CONFIG_FILE_NAMES: tuple[str, ...] = ("remote_command.yaml", "remote_command.yml", "pyproject.toml")


@dataclass(frozen=True)
class AppConfig:
    """Top-level configuration for the application.

    Attributes:
        server: Identity advertised to transport clients.
        execution: Settings shared by every command execution.
        log_level: Default logging level name.
    """

    server: ServerConfig = field(default_factory=lambda: ServerConfig())
    execution: ExecutionConfig = field(default_factory=lambda: ExecutionConfig())
    log_level: str = "INFO"


@dataclass(frozen=True)
class ServerConfig:
    """Server identity reported during the transport handshake."""

    name: str = "remote-command-server"
    version: str = "0.1.0"


@dataclass(frozen=True)
class ExecutionConfig:
    """Configuration for the command execution core.

    Attributes:
        timeout_s: Wall-clock budget applied to every command.
        kill_on_timeout: Whether timed-out processes are forcibly terminated.
        reject_empty_commands: Whether commands that are empty after
            sanitization fail without spawning a shell.
    """

    timeout_s: float = DEFAULT_TIMEOUT_S
    kill_on_timeout: bool = True
    reject_empty_commands: bool = True


def load_config(path: Path | None = None) -> AppConfig:
    """Load application configuration from disk.

    Args:
        path: Optional path to a configuration file or directory.

    Returns:
        Parsed AppConfig with defaults applied when no config exists.
    """

    config_path = _resolve_config_path(path)
    if config_path is None:
        return AppConfig()

    if config_path.suffix in {".yaml", ".yml"}:
        raw_data = _load_yaml(config_path)
    elif config_path.name == "pyproject.toml" or config_path.suffix == ".toml":
        raw_data = _load_toml(config_path)
    else:
        raise ValueError(f"Unsupported config file type: {config_path}")

    return _parse_app_config(raw_data)


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Serialize an AppConfig into a JSON-compatible dictionary."""

    return {
        "log_level": config.log_level,
        "server": {
            "name": config.server.name,
            "version": config.server.version,
        },
        "execution": {
            "timeout_s": config.execution.timeout_s,
            "kill_on_timeout": config.execution.kill_on_timeout,
            "reject_empty_commands": config.execution.reject_empty_commands,
        },
    }


def _resolve_config_path(path: Path | None) -> Path | None:
    candidate_paths: list[Path] = []
    if path is None:
        candidate_paths.extend(Path(name) for name in CONFIG_FILE_NAMES)
    elif path.is_dir():
        candidate_paths.extend(path / name for name in CONFIG_FILE_NAMES)
    else:
        candidate_paths.append(path)

    for candidate in candidate_paths:
        if candidate.exists():
            return candidate
    return None


def _load_toml(path: Path) -> dict[str, Any]:
    with path.open("rb") as handle:
        data = tomllib.load(handle)
    if path.name == "pyproject.toml":
        tool_config = data.get("tool", {}).get("remote_command", {})
        if not isinstance(tool_config, dict):
            raise ValueError("tool.remote_command must be a mapping.")
        return tool_config
    if not isinstance(data, dict):
        raise ValueError("TOML configuration must be a mapping.")
    return data


def _load_yaml(path: Path) -> dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        data = None
    if data is not None:
        if not isinstance(data, dict):
            raise ValueError("YAML configuration must be a mapping.")
        return data
    import yaml

    try:
        parsed = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML configuration in {path}") from exc
    if parsed is None:
        return {}
    if not isinstance(parsed, dict):
        raise ValueError("YAML configuration must be a mapping.")
    return parsed


def _parse_app_config(raw_data: dict[str, Any]) -> AppConfig:
    return AppConfig(
        server=_parse_server_config(raw_data.get("server", {})),
        execution=_parse_execution_config(raw_data.get("execution", {})),
        log_level=str(raw_data.get("log_level", "INFO")),
    )


def _parse_server_config(raw: Any) -> ServerConfig:
    if not isinstance(raw, dict):
        raise ValueError("server configuration must be a mapping.")
    return ServerConfig(
        name=str(raw.get("name", "remote-command-server")),
        version=str(raw.get("version", "0.1.0")),
    )


def _parse_execution_config(raw: Any) -> ExecutionConfig:
    if not isinstance(raw, dict):
        raise ValueError("execution configuration must be a mapping.")
    timeout_s = float(raw.get("timeout_s", DEFAULT_TIMEOUT_S))
    if timeout_s <= 0:
        raise ValueError("execution.timeout_s must be positive.")
    return ExecutionConfig(
        timeout_s=timeout_s,
        kill_on_timeout=bool(raw.get("kill_on_timeout", True)),
        reject_empty_commands=bool(raw.get("reject_empty_commands", True)),
    )
