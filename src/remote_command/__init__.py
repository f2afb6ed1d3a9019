"""Remote command execution server."""

__version__ = "0.1.0"
