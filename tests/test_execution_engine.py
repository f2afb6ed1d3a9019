from __future__ import annotations

import asyncio
import logging
import sys
import time
from pathlib import Path

import pytest

from remote_command.config import ExecutionConfig
from remote_command.execution.base import (
    ExecutionOutcome,
    ExecutionStrategy,
    Failure,
    OutcomeLatch,
    Success,
)
from remote_command.execution.buffered_exec import BufferedExecutor
from remote_command.execution.runner import EMPTY_COMMAND_REASON, ProcessRunner
from remote_command.execution.selector import select_strategy, uses_pipes
from remote_command.execution.streaming_exec import StreamingExecutor, classify_exit
from remote_command.host import POSIX_PROFILE

posix_only = pytest.mark.skipif(sys.platform == "win32", reason="requires /bin/sh")


def _streaming(timeout_s: float = 5.0) -> StreamingExecutor:
    return StreamingExecutor(POSIX_PROFILE, timeout_s=timeout_s)


def _buffered(timeout_s: float = 5.0) -> BufferedExecutor:
    return BufferedExecutor(POSIX_PROFILE, timeout_s=timeout_s)


def test_select_strategy_routes_pipes_to_buffered() -> None:
    config = ExecutionConfig(timeout_s=12.0)

    piped = select_strategy("ps aux | grep python", POSIX_PROFILE, config)
    simple = select_strategy("echo hi", POSIX_PROFILE, config)

    assert isinstance(piped, BufferedExecutor)
    assert isinstance(simple, StreamingExecutor)
    assert piped.timeout_s == 12.0
    assert simple.timeout_s == 12.0
    assert uses_pipes("a | b") is True
    assert uses_pipes("a && b") is False


def test_classify_exit_applies_leniency_policy() -> None:
    assert classify_exit(0, "", "") == Success(stdout="", stderr="", exit_code=0)
    assert classify_exit(1, "partial\n", "") == Success(stdout="partial\n", stderr="", exit_code=1)
    assert classify_exit(2, "", "") == Failure(
        reason="Command failed with exit code 2",
        exit_code=2,
    )
    assert classify_exit(2, "", "bad flag") == Failure(
        reason="Command failed with exit code 2: bad flag",
        exit_code=2,
    )


def test_outcome_latch_accepts_first_outcome_only() -> None:
    async def scenario() -> tuple[bool, bool, ExecutionOutcome]:
        latch = OutcomeLatch()
        first = latch.settle(Failure(reason="Command timed out after 1 seconds"))
        second = latch.settle(Success(stdout="late", stderr=""))
        return first, second, await latch.wait()

    first, second, outcome = asyncio.run(scenario())

    assert first is True
    assert second is False
    assert outcome == Failure(reason="Command timed out after 1 seconds")


@posix_only
def test_streaming_collects_stdout() -> None:
    outcome = asyncio.run(_streaming().run("echo hello"))

    assert outcome == Success(stdout="hello\n", stderr="", exit_code=0)


@posix_only
def test_streaming_exit_zero_without_output_is_success() -> None:
    outcome = asyncio.run(_streaming().run("true"))

    assert isinstance(outcome, Success)
    assert outcome.stdout == ""


@posix_only
def test_streaming_nonzero_exit_with_stdout_is_success() -> None:
    outcome = asyncio.run(_streaming().run("echo partial && exit 1"))

    assert isinstance(outcome, Success)
    assert outcome.stdout == "partial\n"
    assert outcome.exit_code == 1


@posix_only
def test_streaming_nonzero_exit_without_stdout_fails() -> None:
    outcome = asyncio.run(_streaming().run("exit 2"))

    assert isinstance(outcome, Failure)
    assert outcome.exit_code == 2
    assert outcome.reason == "Command failed with exit code 2"


@posix_only
def test_streaming_failure_reason_includes_stderr() -> None:
    outcome = asyncio.run(_streaming().run("echo boom >&2 && exit 3"))

    assert outcome == Failure(reason="Command failed with exit code 3: boom\n", exit_code=3)


@posix_only
def test_streaming_keeps_stderr_on_success() -> None:
    outcome = asyncio.run(_streaming().run("echo out && echo warn >&2"))

    assert outcome == Success(stdout="out\n", stderr="warn\n", exit_code=0)


@posix_only
def test_streaming_runs_in_requested_cwd(tmp_path: Path) -> None:
    outcome = asyncio.run(_streaming().run("pwd", cwd=str(tmp_path)))

    assert isinstance(outcome, Success)
    assert Path(outcome.stdout.strip()).resolve() == tmp_path.resolve()


@posix_only
def test_streaming_reports_spawn_error(tmp_path: Path) -> None:
    outcome = asyncio.run(_streaming().run("echo hi", cwd=str(tmp_path / "missing")))

    assert isinstance(outcome, Failure)
    assert outcome.exit_code is None
    assert outcome.reason


@posix_only
def test_streaming_read_error_settles_before_deadline(monkeypatch: pytest.MonkeyPatch) -> None:
    async def failing_drain(stream: asyncio.StreamReader | None, chunks: list[bytes]) -> None:
        raise RuntimeError("read failed")

    monkeypatch.setattr("remote_command.execution.streaming_exec._drain", failing_drain)

    start = time.monotonic()
    outcome = asyncio.run(_streaming(timeout_s=30.0).run("echo hi"))
    elapsed = time.monotonic() - start

    assert outcome == Failure(reason="read failed")
    assert elapsed < 5


@posix_only
def test_streaming_times_out_with_single_outcome() -> None:
    start = time.monotonic()
    outcome = asyncio.run(_streaming(timeout_s=0.2).run("sleep 5"))
    elapsed = time.monotonic() - start

    assert outcome == Failure(reason="Command timed out after 0.2 seconds")
    assert elapsed < 4


@posix_only
def test_streaming_timeout_kills_shell_children(tmp_path: Path) -> None:
    marker = tmp_path / "marker"

    outcome = asyncio.run(_streaming(timeout_s=0.2).run(f"sleep 1 && touch {marker}"))
    time.sleep(1.5)

    assert isinstance(outcome, Failure)
    assert not marker.exists()


@posix_only
def test_buffered_runs_pipeline() -> None:
    outcome = asyncio.run(_buffered().run("printf 'a\\nb\\n' | wc -l"))

    assert isinstance(outcome, Success)
    assert outcome.stdout.strip() == "2"


@posix_only
def test_buffered_nonzero_exit_is_success() -> None:
    outcome = asyncio.run(_buffered().run("echo ignored | false"))

    assert isinstance(outcome, Success)
    assert outcome.exit_code == 1
    assert outcome.stdout == ""


@posix_only
def test_buffered_times_out() -> None:
    outcome = asyncio.run(_buffered(timeout_s=0.2).run("sleep 5 | cat"))

    assert outcome == Failure(reason="Command timed out after 0.2 seconds")


@posix_only
def test_buffered_reports_spawn_error(tmp_path: Path) -> None:
    outcome = asyncio.run(_buffered().run("echo a | cat", cwd=str(tmp_path / "missing")))

    assert isinstance(outcome, Failure)


def test_runner_rejects_empty_command(caplog: pytest.LogCaptureFixture) -> None:
    caplog.set_level(logging.WARNING, logger="remote_command.ProcessRunner")
    runner = ProcessRunner(POSIX_PROFILE, ExecutionConfig())

    outcome = asyncio.run(runner.run("   "))

    assert outcome == Failure(reason=EMPTY_COMMAND_REASON)
    assert any("empty" in record.message for record in caplog.records)


@posix_only
def test_runner_hands_empty_command_to_shell_when_allowed() -> None:
    runner = ProcessRunner(POSIX_PROFILE, ExecutionConfig(reject_empty_commands=False))

    outcome = asyncio.run(runner.run(""))

    assert outcome == Success(stdout="", stderr="", exit_code=0)


def test_runner_converts_strategy_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    class ExplodingStrategy(ExecutionStrategy):
        async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
            raise RuntimeError("boom")

    monkeypatch.setattr(
        "remote_command.execution.runner.select_strategy",
        lambda command, profile, config: ExplodingStrategy(profile, timeout_s=1.0),
    )
    runner = ProcessRunner(POSIX_PROFILE, ExecutionConfig())

    outcome = asyncio.run(runner.run("echo hi"))

    assert outcome == Failure(reason="boom")


def test_runner_uses_selected_strategy(monkeypatch: pytest.MonkeyPatch) -> None:
    calls: dict[str, object] = {}

    class RecordingStrategy(ExecutionStrategy):
        async def run(self, command: str, cwd: str | None = None) -> ExecutionOutcome:
            calls["command"] = command
            calls["cwd"] = cwd
            return Success(stdout="ok", stderr="", exit_code=0)

    def fake_select(command: str, profile: object, config: ExecutionConfig) -> ExecutionStrategy:
        calls["timeout_s"] = config.timeout_s
        return RecordingStrategy(POSIX_PROFILE, timeout_s=config.timeout_s)

    monkeypatch.setattr("remote_command.execution.runner.select_strategy", fake_select)
    runner = ProcessRunner(POSIX_PROFILE, ExecutionConfig(timeout_s=7.0))

    outcome = asyncio.run(runner.run("ls | wc -l", cwd="/tmp"))

    assert outcome == Success(stdout="ok", stderr="", exit_code=0)
    assert calls == {"timeout_s": 7.0, "command": "ls | wc -l", "cwd": "/tmp"}
