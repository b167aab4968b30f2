# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Command-line entry point driving a single ESDoc build cycle."""

from __future__ import annotations

import asyncio
import json
import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Annotated, Optional

import typer

from . import __version__
from .errors import OptionsValidationError, PluginError
from .logging import fail, ok
from .options import (
    CONF_KEY,
    CWD_KEY,
    FAIL_ON_STDERR_KEY,
    PRESERVE_TMP_FILE_KEY,
    SHOW_OUTPUT_KEY,
    ConfigValue,
)
from .pipeline import Compiler, HookProtocolError
from .plugin import ESDocPlugin, format_duration

app = typer.Typer(
    name="esdoc-plugin",
    help="Run ESDoc over a set of build dependencies.",
    no_args_is_help=True,
    add_completion=False,
)


class CLIError(RuntimeError):
    """Error raised when a CLI command fails and should exit with a status code."""

    def __init__(self, message: str, *, exit_code: int = 1) -> None:
        super().__init__(message)
        self.exit_code = exit_code


def parse_option_pairs(pairs: Sequence[str]) -> dict[str, ConfigValue]:
    """Return ``KEY=VALUE`` pairs as pass-through options.

    Values are decoded as JSON when possible and kept as plain strings
    otherwise, so ``excludes=["a"]`` yields a list and ``destination=./docs``
    a string.

    Args:
        pairs: Raw ``--option`` values.

    Returns:
        dict[str, ConfigValue]: Parsed options in the order given.

    Raises:
        CLIError: If a pair lacks ``=`` or has an empty key.
    """

    parsed: dict[str, ConfigValue] = {}
    for pair in pairs:
        key, sep, raw = pair.partition("=")
        key = key.strip()
        if not sep or not key:
            raise CLIError(f"Invalid --option '{pair}', expected KEY=VALUE", exit_code=2)
        try:
            parsed[key] = json.loads(raw)
        except json.JSONDecodeError:
            parsed[key] = raw
    return parsed


def collect_dependencies(paths: Iterable[Path]) -> list[str]:
    """Return absolute file paths for ``paths``, walking directories recursively."""

    collected: list[str] = []
    for path in paths:
        if path.is_dir():
            collected.extend(os.path.abspath(child) for child in sorted(path.rglob("*")) if child.is_file())
        else:
            collected.append(os.path.abspath(path))
    return collected


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"esdoc-plugin {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        Optional[bool],
        typer.Option("--version", callback=_version_callback, is_eager=True, help="Show the version and exit."),
    ] = None,
) -> None:
    """Run ESDoc the way a build pipeline would."""


@app.command("run")
def run(
    paths: Annotated[
        Optional[list[Path]],
        typer.Argument(help="Files or directories that took part in the build."),
    ] = None,
    conf: Annotated[Optional[str], typer.Option("--conf", help="ESDoc configuration filename.")] = None,
    cwd: Annotated[Optional[str], typer.Option("--cwd", help="Directory the configuration is resolved from.")] = None,
    show_output: Annotated[
        Optional[bool],
        typer.Option("--show-output/--quiet", help="Stream ESDoc output to the console."),
    ] = None,
    preserve_tmp_file: Annotated[
        Optional[bool],
        typer.Option("--preserve-tmp/--no-preserve-tmp", help="Keep the transient configuration file."),
    ] = None,
    fail_on_stderr: Annotated[
        Optional[bool],
        typer.Option("--fail-on-stderr/--allow-stderr", help="Treat stderr output as a failure."),
    ] = None,
    option: Annotated[
        Optional[list[str]],
        typer.Option("--option", "-o", help="Pass-through ESDoc option as KEY=VALUE (VALUE may be JSON)."),
    ] = None,
) -> None:
    """Run one build cycle over PATHS and report the outcome."""

    try:
        options: dict[str, object] = dict(parse_option_pairs(option or []))
        recognised = {
            CONF_KEY: conf,
            CWD_KEY: cwd,
            SHOW_OUTPUT_KEY: show_output,
            PRESERVE_TMP_FILE_KEY: preserve_tmp_file,
            FAIL_ON_STDERR_KEY: fail_on_stderr,
        }
        options.update({key: value for key, value in recognised.items() if value is not None})
        try:
            plugin = ESDocPlugin(options)
        except OptionsValidationError as exc:
            raise CLIError(str(exc)) from exc
        compiler = Compiler()
        plugin.apply(compiler)
        stats = asyncio.run(compiler.run(collect_dependencies(paths or [])))
    except CLIError as exc:
        fail(str(exc))
        raise typer.Exit(code=exc.exit_code) from exc
    except PluginError as exc:
        raise typer.Exit(code=1) from exc
    except HookProtocolError as exc:
        fail(str(exc))
        raise typer.Exit(code=1) from exc
    ok(f"Documentation generated in {format_duration(stats.duration)}")


__all__ = ["CLIError", "app", "collect_dependencies", "parse_option_pairs"]
