"""Buffered execution for commands composed with pipes."""

from __future__ import annotations

import asyncio

from remote_command.execution.base import (
    ExecutionOutcome,
    ExecutionStrategy,
    Failure,
    Success,
    decode_output,
    timeout_reason,
)


class BufferedExecutor(ExecutionStrategy):
    """Hand the whole command string to the shell and collect output on exit.

    The exit code never turns a completed run into a failure; only spawn
    errors and timeouts do.
    """

    async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
        self._logger.debug(
            "Executing piped command: %s (%s %s)",
            command,
            self._profile.shell_path,
            self._profile.shell_flag,
        )
        try:
            process = await asyncio.create_subprocess_shell(
                command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                executable=None if self._profile.is_windows else self._profile.shell_path,
                start_new_session=not self._profile.is_windows,
            )
        except OSError as exc:
            return Failure(reason=str(exc))

        try:
            stdout, stderr = await asyncio.wait_for(
                process.communicate(),
                timeout=self._timeout_s,
            )
        except asyncio.TimeoutError:
            if self._kill_on_timeout:
                self._terminate(process)
                await process.wait()
            return Failure(reason=timeout_reason(self._timeout_s))

        return Success(
            stdout=decode_output(stdout),
            stderr=decode_output(stderr),
            exit_code=process.returncode,
        )
