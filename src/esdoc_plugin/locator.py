# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Locate the ESDoc executable installed alongside a project."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Final

POSIX_CANDIDATES: Final[tuple[str, ...]] = (
    "node_modules/.bin/esdoc",
    "node_modules/esdoc/esdoc.js",
)
WINDOWS_CANDIDATES: Final[tuple[str, ...]] = ("node_modules/.bin/esdoc.cmd",)


def is_windows(platform: str) -> bool:
    """Return whether ``platform`` names a Windows host (``win32``, ``windows``...)."""

    return platform.lower().startswith("win")


def executable_candidates(platform: str) -> tuple[str, ...]:
    """Return relative ESDoc executable paths to probe on ``platform``.

    Args:
        platform: Platform identifier such as :data:`sys.platform`.

    Returns:
        tuple[str, ...]: Candidate paths ordered by preference.
    """

    return WINDOWS_CANDIDATES if is_windows(platform) else POSIX_CANDIDATES


def search_directories(
    *,
    config_dir: Path,
    given_dir: Path,
    process_cwd: Path,
    install_dir: Path,
) -> list[Path]:
    """Return base directories in lookup order, dropping duplicates.

    Project-local directories precede the plugin's own installation so a
    locally installed ESDoc wins over one bundled next to the plugin.
    """

    ordered: list[Path] = []
    for directory in (config_dir, given_dir, process_cwd, install_dir):
        if directory not in ordered:
            ordered.append(directory)
    return ordered


def lookup_file(
    files: Iterable[str],
    dirs: Sequence[Path | str],
    *,
    base: Path | None = None,
) -> Path | None:
    """Return the first existing ``dir / file`` combination.

    Each filename is tried in every directory before the next filename is
    considered.

    Args:
        files: Relative candidate paths in preference order.
        dirs: Base directories in preference order.
        base: Directory relative ``dirs`` are anchored to. Defaults to the
            interpreter's working directory.

    Returns:
        Path | None: Absolute path of the first match, ``None`` when nothing exists.
    """

    for filename in files:
        for dirname in dirs:
            if base is None:
                candidate = Path(os.path.abspath(Path(dirname) / filename))
            else:
                candidate = Path(os.path.normpath(base / dirname / filename))
            if candidate.exists():
                return candidate
    return None


__all__ = [
    "POSIX_CANDIDATES",
    "WINDOWS_CANDIDATES",
    "executable_candidates",
    "is_windows",
    "lookup_file",
    "search_directories",
]
