"""Host platform detection and shell invocation profile."""

from __future__ import annotations

import platform
from dataclasses import dataclass


@dataclass(frozen=True)
class PlatformProfile:
    """Shell invocation details for the host operating system.

    Attributes:
        is_windows: True when running on Windows.
        shell_path: Shell binary used to interpret commands.
        shell_flag: Flag that makes the shell run a single command string.
    """

    is_windows: bool
    shell_path: str
    shell_flag: str

    def shell_argv(self, command: str) -> list[str]:
        """Return the argument vector that runs ``command`` through the shell."""

        return [self.shell_path, self.shell_flag, command]


POSIX_PROFILE = PlatformProfile(is_windows=False, shell_path="/bin/sh", shell_flag="-c")
WINDOWS_PROFILE = PlatformProfile(is_windows=True, shell_path="cmd.exe", shell_flag="/c")


def detect_platform(system_name: str | None = None) -> PlatformProfile:
    """Resolve the platform profile for the current host.

    Args:
        system_name: Optional override of ``platform.system()``.

    Returns:
        The Windows profile on Windows hosts, the POSIX profile otherwise.
    """

    system = (system_name if system_name is not None else platform.system()).lower()
    if system == "windows":
        return WINDOWS_PROFILE
    return POSIX_PROFILE
