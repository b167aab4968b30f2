# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Lifecycle coordinator binding ESDoc runs to a build pipeline's hooks."""

from __future__ import annotations

import asyncio
import os
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from .errors import CycleCancelledError, ExecutableNotFoundError, TransientConfigError
from .locator import executable_candidates, lookup_file, search_directories
from .logging import PLUGIN_NAME, fail, info
from .options import PluginOptions, load_options
from .pipeline import Compilation, Compiler, Continuation, Stats
from .process import ProcessResult, esdoc_arguments, run_esdoc
from .resolver import resolve_config
from .transient import TransientConfigFile


class CycleStage(str, Enum):
    """Stages a build cycle moves through, each gating the next."""

    IDLE = "idle"
    LOCATE_EXECUTABLE = "locate_executable"
    RESOLVE_CONFIG = "resolve_config"
    WRITE_TRANSIENT_CONFIG = "write_transient_config"
    RUN_PROCESS = "run_process"
    REPORT = "report"


@dataclass(frozen=True, slots=True)
class PluginEnvironment:
    """Process-wide facts the plugin depends on, captured once at construction."""

    process_cwd: Path
    platform: str
    install_dir: Path

    @classmethod
    def current(cls) -> PluginEnvironment:
        """Return the environment of the running interpreter."""

        return cls(
            process_cwd=Path.cwd(),
            platform=sys.platform,
            install_dir=Path(__file__).resolve().parent,
        )


def format_duration(millis: float) -> str:
    """Return ``millis`` formatted as ``m:ss``.

    Args:
        millis: Duration in milliseconds.

    Returns:
        str: Minutes and zero-padded seconds, e.g. ``"1:05"``.
    """

    minutes, remainder = divmod(max(millis, 0.0), 60000)
    seconds = round(remainder / 1000)
    if seconds == 60:
        minutes, seconds = minutes + 1, 0
    return f"{int(minutes)}:{seconds:02d}"


class ESDocPlugin:
    """Run ESDoc whenever the host pipeline emits a build.

    Each cycle locates the ESDoc executable, resolves the effective
    configuration, writes it to a transient file, runs ESDoc against it and
    reports the outcome to the pipeline exactly once. Cycles never overlap.
    """

    name = PLUGIN_NAME

    def __init__(
        self,
        options: PluginOptions | Mapping[str, object] | None = None,
        *,
        environment: PluginEnvironment | None = None,
    ) -> None:
        """Validate ``options`` and capture the runtime environment.

        Args:
            options: Constructor options; see :class:`PluginOptions`.
            environment: Working directory, platform and installation
                directory to use instead of the interpreter's own.

        Raises:
            OptionsValidationError: If a recognised option has the wrong type.
        """

        self.options = load_options(options)
        self.environment = environment or PluginEnvironment.current()
        self._lock = asyncio.Lock()
        self._stage = CycleStage.IDLE
        if self.options.show_output:
            info(f"Initializing with Options: {self.options.resolved()}")

    @property
    def stage(self) -> CycleStage:
        """Return the stage the current build cycle is in."""

        return self._stage

    @property
    def config_path(self) -> Path:
        """Return the absolute path of the ESDoc configuration file."""

        base = self.environment.process_cwd / self.options.cwd
        return Path(os.path.normpath(base / self.options.conf))

    @property
    def config_dir(self) -> Path:
        """Return the directory holding the configuration file."""

        return self.config_path.parent

    def search_directories(self) -> list[Path]:
        """Return the directories probed for the ESDoc executable, in order."""

        return search_directories(
            config_dir=self.config_dir,
            given_dir=Path(os.path.normpath(self.environment.process_cwd / self.options.cwd)),
            process_cwd=self.environment.process_cwd,
            install_dir=self.environment.install_dir,
        )

    def locate_executable(self) -> Path:
        """Return the ESDoc executable to run.

        Raises:
            ExecutableNotFoundError: If no candidate exists in any directory.
        """

        candidates = executable_candidates(self.environment.platform)
        directories = self.search_directories()
        found = lookup_file(candidates, directories, base=self.environment.process_cwd)
        if found is None:
            raise ExecutableNotFoundError(candidates, directories)
        return found

    def apply(self, compiler: Compiler) -> None:
        """Bind the plugin to ``compiler``'s lifecycle hooks."""

        compiler.hooks.emit.tap_async(self.name, self._on_emit)
        compiler.hooks.done.tap(self.name, self._on_done)
        compiler.hooks.watch_run.tap(self.name, self._on_watch_run)

    async def run_cycle(
        self,
        file_dependencies: Iterable[str],
        *,
        report: Continuation | None = None,
    ) -> ProcessResult:
        """Run one build cycle and report its outcome.

        Args:
            file_dependencies: File paths the host build reported.
            report: Continuation called exactly once with ``None`` on success
                or the failure otherwise.

        Returns:
            ProcessResult: Output of the successful ESDoc run.

        Raises:
            PluginError: The failure that was reported.
            asyncio.CancelledError: If the cycle was torn down mid-run.
        """

        async with self._lock:
            try:
                result = await self._run_stages(file_dependencies)
            except asyncio.CancelledError:
                self._report(report, CycleCancelledError("Build cycle cancelled while ESDoc was running."))
                raise
            except Exception as exc:
                self._report(report, exc)
                raise
            self._report(report, None)
            return result

    async def _run_stages(self, file_dependencies: Iterable[str]) -> ProcessResult:
        self._stage = CycleStage.LOCATE_EXECUTABLE
        executable = self.locate_executable()

        self._stage = CycleStage.RESOLVE_CONFIG
        config_path = self.config_path
        resolved = resolve_config(config_path, self.options, file_dependencies)

        self._stage = CycleStage.WRITE_TRANSIENT_CONFIG
        transient = TransientConfigFile.for_config(config_path)
        try:
            written = transient.write(resolved.effective)
        except TransientConfigError:
            transient.remove(preserve=self.options.preserve_tmp_file)
            raise
        info(f"Using esdoc located at {executable}")

        self._stage = CycleStage.RUN_PROCESS
        return await run_esdoc(
            executable,
            esdoc_arguments(written),
            cwd=self.config_dir,
            show_output=self.options.show_output,
            fail_on_stderr=self.options.fail_on_stderr,
            transient=transient,
            preserve_tmp_file=self.options.preserve_tmp_file,
        )

    def _report(self, report: Continuation | None, error: BaseException | None) -> None:
        self._stage = CycleStage.REPORT
        try:
            if error is not None:
                fail(str(error))
            if report is not None:
                report(error)
        finally:
            self._stage = CycleStage.IDLE

    async def _on_emit(self, compilation: Compilation, callback: Continuation) -> None:
        info("Compiling...")
        try:
            await self.run_cycle(compilation.file_dependencies, report=callback)
        except Exception:  # noqa: BLE001 - already delivered through ``callback``
            return

    def _on_done(self, stats: Stats) -> None:
        info(f"Total run time {format_duration(stats.duration)}")

    def _on_watch_run(self, _compiler: Compiler) -> None:
        info("Watch cycle started.")


__all__ = ["CycleStage", "ESDocPlugin", "PluginEnvironment", "format_duration"]
