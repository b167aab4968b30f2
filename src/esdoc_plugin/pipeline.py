# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build-pipeline hook surface the plugin binds to.

The classes here model the lifecycle hooks of a JavaScript bundler: an
asynchronous ``emit`` hook fired before output is written, a synchronous
``done`` hook fired once all work has finished, and a ``watch_run`` hook
fired at the start of each watch cycle. :class:`Compiler` is a minimal host
that drives those hooks for one build cycle; any host exposing the same hook
objects can apply the plugin.
"""

from __future__ import annotations

import asyncio
import inspect
import time
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field

Continuation = Callable[[BaseException | None], None]
SyncTap = Callable[..., None]
AsyncTap = Callable[..., Awaitable[None] | None]


class HookProtocolError(RuntimeError):
    """Raised when a tap violates the hook's completion contract."""


@dataclass(frozen=True, slots=True)
class _Tap:
    name: str
    fn: Callable[..., object]


class _Continuation:
    """One-shot completion callback handed to asynchronous taps."""

    def __init__(self, tap_name: str, future: asyncio.Future[BaseException | None]) -> None:
        self._tap_name = tap_name
        self._future = future

    def __call__(self, error: BaseException | None = None) -> None:
        if self._future.done():
            raise HookProtocolError(f"Tap '{self._tap_name}' called its callback more than once")
        self._future.set_result(error)

    @property
    def called(self) -> bool:
        return self._future.done()


class SyncHook:
    """Hook whose taps run synchronously in registration order."""

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: list[_Tap] = []

    @property
    def taps(self) -> tuple[str, ...]:
        """Return the names of registered taps."""

        return tuple(tap.name for tap in self._taps)

    def tap(self, name: str, fn: SyncTap) -> None:
        """Register ``fn`` under ``name``."""

        self._taps.append(_Tap(name=name, fn=fn))

    def call(self, *args: object) -> None:
        """Invoke every tap with ``args``."""

        for tap in self._taps:
            tap.fn(*args)


class AsyncSeriesHook:
    """Hook whose taps complete asynchronously, one after another.

    Each tap receives the hook arguments followed by a continuation that it
    must call exactly once: with ``None`` on success or with an exception on
    failure. The first failure stops the series and is raised to the caller.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._taps: list[_Tap] = []

    @property
    def taps(self) -> tuple[str, ...]:
        """Return the names of registered taps."""

        return tuple(tap.name for tap in self._taps)

    def tap_async(self, name: str, fn: AsyncTap) -> None:
        """Register ``fn`` under ``name``; it may be a coroutine function."""

        self._taps.append(_Tap(name=name, fn=fn))

    async def call_async(self, *args: object) -> None:
        """Run every tap in order and wait for each continuation.

        Raises:
            HookProtocolError: If a coroutine tap finishes without calling
                its continuation.
            BaseException: The error a tap passed to its continuation.
        """

        loop = asyncio.get_running_loop()
        for tap in self._taps:
            future: asyncio.Future[BaseException | None] = loop.create_future()
            continuation = _Continuation(tap.name, future)
            outcome = tap.fn(*args, continuation)
            if inspect.isawaitable(outcome):
                await outcome
                if not continuation.called:
                    raise HookProtocolError(f"Tap '{tap.name}' finished without calling its callback")
            error = await future
            if error is not None:
                raise error


@dataclass(frozen=True, slots=True)
class Compilation:
    """Single build cycle as seen by emit taps."""

    file_dependencies: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class Stats:
    """Timing information handed to ``done`` taps, in milliseconds."""

    start_time: float
    end_time: float

    @property
    def duration(self) -> float:
        """Return the elapsed milliseconds between start and end."""

        return self.end_time - self.start_time


@dataclass(slots=True)
class CompilerHooks:
    """Lifecycle hooks exposed by :class:`Compiler`."""

    emit: AsyncSeriesHook = field(default_factory=lambda: AsyncSeriesHook("emit"))
    done: SyncHook = field(default_factory=lambda: SyncHook("done"))
    watch_run: SyncHook = field(default_factory=lambda: SyncHook("watchRun"))


class Compiler:
    """Minimal host pipeline driving the lifecycle hooks of a build cycle."""

    def __init__(self, *, clock: Callable[[], float] = time.monotonic) -> None:
        self.hooks = CompilerHooks()
        self._clock = clock

    def _now_ms(self) -> float:
        return self._clock() * 1000.0

    async def run(self, file_dependencies: Iterable[str]) -> Stats:
        """Run one build cycle over ``file_dependencies``.

        Args:
            file_dependencies: File paths that took part in the build.

        Returns:
            Stats: Timing of the cycle, also passed to ``done`` taps.
        """

        start = self._now_ms()
        compilation = Compilation(file_dependencies=tuple(str(path) for path in file_dependencies))
        await self.hooks.emit.call_async(compilation)
        stats = Stats(start_time=start, end_time=self._now_ms())
        self.hooks.done.call(stats)
        return stats

    async def watch_cycle(self, file_dependencies: Iterable[str]) -> Stats:
        """Run a build cycle as a watcher would, firing ``watch_run`` first."""

        self.hooks.watch_run.call(self)
        return await self.run(file_dependencies)


__all__ = [
    "AsyncSeriesHook",
    "Compilation",
    "Compiler",
    "CompilerHooks",
    "Continuation",
    "HookProtocolError",
    "Stats",
    "SyncHook",
]
