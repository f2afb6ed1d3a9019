"""Cross-platform rewriting of the directory listing command."""

from __future__ import annotations

import re

from remote_command.host import PlatformProfile

_UNIX_LISTING = re.compile(r"^ls\s+")
_WINDOWS_LISTING = re.compile(r"^dir\s+")


def normalize(command: str, profile: PlatformProfile) -> str:
    """Translate ``ls``/``dir`` to the host's listing command.

    Only a leading listing token followed by whitespace is rewritten; every
    other command is returned unchanged.
    """

    if profile.is_windows:
        return _UNIX_LISTING.sub("dir ", command, count=1)
    return _WINDOWS_LISTING.sub("ls ", command, count=1)
