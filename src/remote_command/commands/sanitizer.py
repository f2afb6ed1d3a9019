"""Best-effort command sanitization.

This is not a security boundary. Only null bytes, the ``||`` chain operator
and (outside Windows) the ``;`` statement separator are removed. Command
substitution, backticks, redirection, ``&&`` and single pipes all reach the
shell untouched.
"""

from __future__ import annotations

from remote_command.host import PlatformProfile

NULL_BYTE = "\0"
OR_OPERATOR = "||"
STATEMENT_SEPARATOR = ";"


def sanitize(raw: str, profile: PlatformProfile) -> str:
    """Strip chaining tokens from a raw command string.

    Args:
        raw: Command string as received from the caller.
        profile: Platform profile of the host.

    Returns:
        The filtered command. May be empty.
    """

    command = raw.replace(NULL_BYTE, "")
    if not profile.is_windows:
        command = command.replace(STATEMENT_SEPARATOR, "")
    # A run of pipes collapses to at most one, so no "||" survives.
    return command.replace(OR_OPERATOR, "")
