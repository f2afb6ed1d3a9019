"""CLI entrypoints for the remote command server."""

from __future__ import annotations

from pathlib import Path

import typer

from remote_command.app import (
    AppConfigError,
    RuntimeContext,
    execute_command,
    initialize_config,
    load_runtime,
    run_server,
)
from remote_command.util.logging import configure_logging

app = typer.Typer(help="Execute host shell commands for MCP clients.")


@app.callback()
def main(
    ctx: typer.Context,
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        help="Logging level (e.g., DEBUG, INFO, WARNING). Overrides the config file.",
    ),
) -> None:
    """Configure CLI-level options."""

    ctx.obj = {"log_level": log_level}


@app.command()
def init(workspace: Path = typer.Argument(Path("."))) -> None:
    """Write a default configuration file."""

    try:
        config_path = initialize_config(workspace)
    except AppConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    typer.echo(f"Created configuration at {config_path}")


@app.command()
def serve(
    ctx: typer.Context,
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file or directory containing one.",
    ),
) -> None:
    """Serve the command tool over stdio until interrupted."""

    runtime = _prepare_runtime(ctx, config)
    run_server(runtime)


@app.command("exec")
def exec_command(
    ctx: typer.Context,
    command: str = typer.Argument(..., help="Command to execute."),
    cwd: str | None = typer.Option(
        None,
        "--cwd",
        help="Working directory for command execution.",
    ),
    config: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file or directory containing one.",
    ),
) -> None:
    """Run a single command through the same pipeline the server uses."""

    runtime = _prepare_runtime(ctx, config)
    result = execute_command(runtime, command, cwd=cwd)
    typer.echo(result.text)
    if result.is_error:
        raise typer.Exit(code=1)


def _prepare_runtime(ctx: typer.Context, config_path: Path | None) -> RuntimeContext:
    try:
        runtime = load_runtime(config_path)
    except AppConfigError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc
    cli_level = (ctx.obj or {}).get("log_level")
    configure_logging(cli_level or runtime.config.log_level)
    return runtime
