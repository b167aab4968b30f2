# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Error hierarchy surfaced to the host pipeline by the ESDoc plugin."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path


class PluginError(RuntimeError):
    """Base class for every failure reported by the plugin."""


class OptionsValidationError(PluginError):
    """Raised when constructor options do not match their declared types."""

    def __init__(self, problems: Sequence[str]) -> None:
        """Initialise the error with one message per offending option.

        Args:
            problems: Human-readable descriptions of each invalid option.
        """

        joined = "; ".join(problems) or "invalid options"
        super().__init__(f"Invalid ESDoc plugin options: {joined}")
        self.problems = tuple(problems)


class ExecutableNotFoundError(PluginError):
    """Raised when no ESDoc executable exists in any candidate directory."""

    def __init__(self, candidates: Sequence[str], directories: Sequence[Path]) -> None:
        """Initialise the error with the search space that was exhausted.

        Args:
            candidates: Relative executable paths that were tried.
            directories: Base directories that were searched.
        """

        super().__init__("ESDoc was not found, exiting.")
        self.candidates = tuple(candidates)
        self.directories = tuple(directories)


class ConfigParseError(PluginError):
    """Raised when an on-disk configuration file cannot be parsed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to parse ESDoc configuration {path}: {reason}")
        self.path = path
        self.reason = reason


class ConfigInferenceError(PluginError):
    """Raised when no usable configuration exists and none can be inferred."""


class TransientConfigError(PluginError):
    """Raised when the transient configuration file cannot be written or removed."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Unable to manage temporary ESDoc configuration {path}: {reason}")
        self.path = path
        self.reason = reason


class ProcessExecutionError(PluginError):
    """Raised when the ESDoc process reports a failure."""

    def __init__(self, returncode: int | None, stderr: Sequence[str]) -> None:
        """Initialise the error with the captured process diagnostics.

        Args:
            returncode: Exit status reported by the process.
            stderr: Lines captured from the process' standard error stream.
        """

        detail = "\n".join(stderr) if stderr else "<no stderr>"
        super().__init__(f"ESDoc exited with code {returncode}. stderr: {detail}")
        self.returncode = returncode
        self.stderr = tuple(stderr)


class CycleCancelledError(PluginError):
    """Raised when a build cycle is torn down while ESDoc is still running."""


__all__ = [
    "ConfigInferenceError",
    "ConfigParseError",
    "CycleCancelledError",
    "ExecutableNotFoundError",
    "OptionsValidationError",
    "PluginError",
    "ProcessExecutionError",
    "TransientConfigError",
]
