# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Build-pipeline plugin that runs ESDoc on every compile and recompile."""

from __future__ import annotations

from importlib import metadata

try:
    __version__ = metadata.version("esdoc-pipeline-plugin")
except metadata.PackageNotFoundError:  # pragma: no cover - local development fallback
    __version__ = "0.0.0"

from .errors import (
    ConfigInferenceError,
    ConfigParseError,
    CycleCancelledError,
    ExecutableNotFoundError,
    OptionsValidationError,
    PluginError,
    ProcessExecutionError,
    TransientConfigError,
)
from .options import PluginOptions, merge_config
from .pipeline import Compilation, Compiler, Stats
from .plugin import CycleStage, ESDocPlugin, PluginEnvironment
from .process import ProcessResult

__all__ = [
    "Compilation",
    "Compiler",
    "ConfigInferenceError",
    "ConfigParseError",
    "CycleCancelledError",
    "CycleStage",
    "ESDocPlugin",
    "ExecutableNotFoundError",
    "OptionsValidationError",
    "PluginEnvironment",
    "PluginError",
    "PluginOptions",
    "ProcessExecutionError",
    "ProcessResult",
    "Stats",
    "TransientConfigError",
    "__version__",
    "merge_config",
]
