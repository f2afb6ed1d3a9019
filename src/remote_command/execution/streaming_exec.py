"""Streaming execution for simple commands."""

from __future__ import annotations

import asyncio

from remote_command.execution.base import (
    ExecutionOutcome,
    ExecutionStrategy,
    Failure,
    OutcomeLatch,
    Success,
    decode_output,
    timeout_reason,
)

CHUNK_SIZE = 4096


class StreamingExecutor(ExecutionStrategy):
    """Spawn the shell with an explicit argument vector and read output as it arrives.

    Process exit, a read error and the deadline race to settle a single
    ``OutcomeLatch``; whichever comes first wins and the deadline is always
    cancelled afterwards.
    """

    async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
        argv = self._profile.shell_argv(command)
        self._logger.debug("Executing command: %s (%s)", command, " ".join(argv))
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
                cwd=cwd,
                start_new_session=not self._profile.is_windows,
            )
        except OSError as exc:
            return Failure(reason=str(exc))

        latch = OutcomeLatch()
        deadline = asyncio.get_running_loop().call_later(
            self._timeout_s,
            latch.settle,
            Failure(reason=timeout_reason(self._timeout_s)),
        )
        collector = asyncio.create_task(self._collect(process, latch))
        try:
            outcome = await latch.wait()
        except asyncio.CancelledError:
            collector.cancel()
            raise
        finally:
            deadline.cancel()

        if not collector.done():
            # Only the deadline settles the latch while output is still open.
            if self._kill_on_timeout:
                self._terminate(process)
            collector.cancel()
            try:
                await collector
            except asyncio.CancelledError:
                pass
            if self._kill_on_timeout:
                await process.wait()
        return outcome

    async def _collect(self, process: asyncio.subprocess.Process, latch: OutcomeLatch) -> None:
        stdout_chunks: list[bytes] = []
        stderr_chunks: list[bytes] = []
        try:
            await asyncio.gather(
                _drain(process.stdout, stdout_chunks),
                _drain(process.stderr, stderr_chunks),
            )
            exit_code = await process.wait()
        except Exception as exc:
            latch.settle(Failure(reason=str(exc)))
            return
        latch.settle(
            classify_exit(
                exit_code,
                decode_output(b"".join(stdout_chunks)),
                decode_output(b"".join(stderr_chunks)),
            )
        )


def classify_exit(exit_code: int, stdout: str, stderr: str) -> ExecutionOutcome:
    """Map a finished process to an outcome.

    A non-zero exit code still counts as success when the command wrote
    anything to stdout.
    """

    if exit_code == 0 or stdout:
        return Success(stdout=stdout, stderr=stderr, exit_code=exit_code)
    reason = f"Command failed with exit code {exit_code}"
    if stderr:
        reason = f"{reason}: {stderr}"
    return Failure(reason=reason, exit_code=exit_code)


async def _drain(stream: asyncio.StreamReader | None, chunks: list[bytes]) -> None:
    if stream is None:
        return
    while True:
        chunk = await stream.read(CHUNK_SIZE)
        if not chunk:
            return
        chunks.append(chunk)
