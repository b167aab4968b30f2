# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Run the ESDoc executable as a child process and monitor its output."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Final

from .errors import ProcessExecutionError
from .logging import fail, info, ok, relay_output, warn
from .transient import TransientConfigFile

DEFAULT_TERMINATE_TIMEOUT: Final[float] = 5.0
READ_CHUNK_SIZE: Final[int] = 64 * 1024

LineSink = Callable[[str], None]


@dataclass(frozen=True, slots=True)
class ProcessResult:
    """Exit status and output captured from an ESDoc run."""

    returncode: int | None
    stdout: tuple[str, ...]
    stderr: tuple[str, ...]
    fail_on_stderr: bool = True

    @property
    def ok(self) -> bool:
        """Return whether the run succeeded under the configured failure policy.

        A non-zero exit status always fails. Captured stderr content fails the
        run as well unless :attr:`fail_on_stderr` is disabled.
        """

        if self.returncode != 0:
            return False
        return not (self.fail_on_stderr and self.stderr)


def esdoc_arguments(config_file: Path) -> list[str]:
    """Return the command-line arguments pointing ESDoc at ``config_file``."""

    return ["-c", str(config_file)]


def _emit_line(raw: bytes, sink: list[str], forward: LineSink | None) -> None:
    line = raw.decode("utf-8", errors="replace").rstrip("\r")
    sink.append(line)
    if forward is not None:
        forward(line)


async def _drain(stream: asyncio.StreamReader | None, sink: list[str], forward: LineSink | None) -> None:
    """Collect ``stream`` line by line until EOF, forwarding each line.

    The stream is read in fixed-size chunks and split on newlines here, so a
    single line may be arbitrarily long.
    """

    if stream is None:
        return
    pending = bytearray()
    while True:
        chunk = await stream.read(READ_CHUNK_SIZE)
        if not chunk:
            break
        pending.extend(chunk)
        boundary = pending.rfind(b"\n")
        if boundary < 0:
            continue
        complete = bytes(pending[:boundary])
        del pending[: boundary + 1]
        for raw in complete.split(b"\n"):
            _emit_line(raw, sink, forward)
    if pending:
        _emit_line(bytes(pending), sink, forward)


async def _terminate(process: asyncio.subprocess.Process, timeout: float) -> None:
    """Stop ``process``, escalating to ``kill`` when it ignores ``terminate``."""

    if process.returncode is not None:
        return
    try:
        process.terminate()
    except ProcessLookupError:
        return
    try:
        await asyncio.wait_for(process.wait(), timeout)
    except asyncio.TimeoutError:
        try:
            process.kill()
        except ProcessLookupError:
            return
        await process.wait()


async def run_esdoc(
    executable: Path,
    args: Sequence[str],
    *,
    cwd: Path,
    show_output: bool = False,
    fail_on_stderr: bool = True,
    transient: TransientConfigFile | None = None,
    preserve_tmp_file: bool = True,
    terminate_timeout: float = DEFAULT_TERMINATE_TIMEOUT,
) -> ProcessResult:
    """Execute ESDoc and wait for it to exit.

    Output is read as it is produced. With ``show_output`` each stdout line is
    relayed to the console with its leading token highlighted. Whatever the
    outcome, including cancellation, the transient configuration file is
    removed afterwards unless ``preserve_tmp_file`` is set.

    Args:
        executable: Absolute path of the ESDoc executable.
        args: Arguments passed to the executable.
        cwd: Working directory for the child process.
        show_output: Whether to stream stdout to the console.
        fail_on_stderr: Whether stderr content fails a run that exits with 0.
        transient: Transient configuration file to clean up after the run.
        preserve_tmp_file: Keep ``transient`` on disk when ``True``.
        terminate_timeout: Seconds to wait after ``terminate`` before killing
            the child on cancellation.

    Returns:
        ProcessResult: Captured output of a successful run.

    Raises:
        ProcessExecutionError: If the process cannot be started or fails.
        asyncio.CancelledError: If the awaiting task is cancelled; the child is
            terminated first.
    """

    stdout_lines: list[str] = []
    stderr_lines: list[str] = []
    try:
        try:
            process = await asyncio.create_subprocess_exec(
                str(executable),
                *args,
                cwd=str(cwd),
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessExecutionError(None, [f"Unable to start {executable}: {exc}"]) from exc

        if show_output:
            info("Beginning output.")
        try:
            await asyncio.gather(
                _drain(process.stdout, stdout_lines, relay_output if show_output else None),
                _drain(process.stderr, stderr_lines, None),
            )
            returncode = await process.wait()
        except asyncio.CancelledError:
            warn("Build cycle cancelled, stopping ESDoc.")
            await _terminate(process, terminate_timeout)
            raise
        except (OSError, ValueError) as exc:
            await _terminate(process, terminate_timeout)
            raise ProcessExecutionError(process.returncode, [f"Failed reading ESDoc output: {exc}"]) from exc
    finally:
        if transient is not None:
            transient.remove(preserve=preserve_tmp_file)

    result = ProcessResult(
        returncode=returncode,
        stdout=tuple(stdout_lines),
        stderr=tuple(stderr_lines),
        fail_on_stderr=fail_on_stderr,
    )
    if not result.ok:
        fail(f"Exited with code {returncode}")
        raise ProcessExecutionError(returncode, result.stderr)
    for line in result.stderr:
        warn(line)
    ok("Emitted files to output directory.")
    return result


__all__ = [
    "DEFAULT_TERMINATE_TIMEOUT",
    "ProcessResult",
    "esdoc_arguments",
    "run_esdoc",
]
