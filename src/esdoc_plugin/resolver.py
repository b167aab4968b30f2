# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Decide between an on-disk ESDoc configuration and one inferred from the build."""

from __future__ import annotations

import json
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .errors import ConfigInferenceError, ConfigParseError
from .logging import info
from .options import (
    SOURCE_KEY,
    ConfigValue,
    PluginOptions,
    build_effective_config,
    is_usable_config,
)
from .paths import collect_entry_points, longest_common_directory


class ConfigOrigin(str, Enum):
    """Enumerate where the discovered configuration came from."""

    FILE = "file"
    INFERRED = "inferred"


@dataclass(frozen=True, slots=True)
class ResolvedConfig:
    """Effective configuration together with its provenance."""

    effective: dict[str, ConfigValue]
    origin: ConfigOrigin
    entry_points: tuple[str, ...] = field(default_factory=tuple)


def read_config_file(path: Path) -> dict[str, ConfigValue] | None:
    """Return the JSON object stored at ``path``.

    Args:
        path: Location of the ESDoc configuration file.

    Returns:
        dict[str, ConfigValue] | None: Parsed object, ``None`` when the file is absent.

    Raises:
        ConfigParseError: If the file exists but is not a JSON object.
    """

    if not path.is_file():
        return None
    try:
        payload = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise ConfigParseError(path, str(exc)) from exc
    except json.JSONDecodeError as exc:
        raise ConfigParseError(path, f"{exc.msg} (line {exc.lineno}, column {exc.colno})") from exc
    if not isinstance(payload, dict):
        raise ConfigParseError(path, f"expected a JSON object, found {type(payload).__name__}")
    return payload


def infer_config(dependencies: Iterable[str]) -> tuple[dict[str, ConfigValue], tuple[str, ...]]:
    """Return a configuration whose ``source`` is the entry points' shared root.

    Args:
        dependencies: File paths reported by the host build.

    Returns:
        tuple[dict[str, ConfigValue], tuple[str, ...]]: Inferred configuration
        and the entry points it was derived from.

    Raises:
        ConfigInferenceError: If no entry point survives filtering.
    """

    entry_points = collect_entry_points(dependencies)
    if not entry_points:
        raise ConfigInferenceError(
            "No configuration file with 'source' and 'includes' was found and the build "
            "reported no entry points outside node_modules to infer a source from.",
        )
    return {SOURCE_KEY: longest_common_directory(entry_points)}, tuple(entry_points)


def resolve_config(
    config_path: Path,
    options: PluginOptions,
    dependencies: Iterable[str],
) -> ResolvedConfig:
    """Return the effective configuration for the current build cycle.

    A configuration file carrying both ``source`` and ``includes`` is
    authoritative; otherwise ``source`` is inferred from ``dependencies``. In
    both cases the plugin options are merged on top.

    Args:
        config_path: Absolute path of the ESDoc configuration file.
        options: Validated plugin options.
        dependencies: File paths reported by the host build.

    Returns:
        ResolvedConfig: Effective configuration and its origin.

    Raises:
        ConfigParseError: If the configuration file exists but cannot be parsed.
        ConfigInferenceError: If inference is required but impossible.
    """

    discovered = read_config_file(config_path)
    if discovered is not None and is_usable_config(discovered):
        info("Pulling data from the configuration file.")
        return ResolvedConfig(
            effective=build_effective_config(discovered, options),
            origin=ConfigOrigin.FILE,
        )

    info(
        "Provided configuration either not found or does not contain an includes key. "
        "Generating from the bundles.",
    )
    inferred, entry_points = infer_config(dependencies)
    base = dict(discovered or {})
    base.update(inferred)
    return ResolvedConfig(
        effective=build_effective_config(base, options),
        origin=ConfigOrigin.INFERRED,
        entry_points=entry_points,
    )


__all__ = [
    "ConfigOrigin",
    "ResolvedConfig",
    "infer_config",
    "read_config_file",
    "resolve_config",
]
