"""Utility helpers package."""

from remote_command.util.logging import configure_logging, get_logger

__all__ = ["configure_logging", "get_logger"]
