"""Command preprocessing applied before execution."""

from remote_command.commands.normalizer import normalize
from remote_command.commands.sanitizer import sanitize

__all__ = ["normalize", "sanitize"]
