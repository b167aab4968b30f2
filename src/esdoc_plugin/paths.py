# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.
"""Path helpers used to infer the ESDoc source root from build dependencies."""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from typing import Final

DEPENDENCY_DIR_PATTERN: Final[re.Pattern[str]] = re.compile(r"(^|[/\\])node_modules([/\\]|$)")
ENTRY_POINT_PATTERN: Final[re.Pattern[str]] = re.compile(r"index\.js$")


def longest_common_directory(paths: Sequence[str], *, sep: str = "/") -> str:
    """Return the longest directory shared by every entry in ``paths``.

    The common leading substring is computed character by character against
    the first path and then trimmed back to the last ``sep`` so the result
    names a directory rather than a partial filename.

    Args:
        paths: Absolute file paths; must not be empty.
        sep: Path separator used to trim the shared prefix.

    Returns:
        str: Shared directory without a trailing separator. Paths with no
        common directory yield ``""``.

    Raises:
        ValueError: If ``paths`` is empty.
    """

    if not paths:
        raise ValueError("longest_common_directory requires at least one path")
    first = paths[0]
    limit = len(first)
    for candidate in paths[1:]:
        limit = min(limit, len(candidate))
        for index in range(limit):
            if candidate[index] != first[index]:
                limit = index
                break
    shared = first[:limit]
    return shared[: shared.rfind(sep)] if sep in shared else ""


def collect_entry_points(
    dependencies: Iterable[str],
    *,
    exclude: re.Pattern[str] = DEPENDENCY_DIR_PATTERN,
    include: re.Pattern[str] = ENTRY_POINT_PATTERN,
) -> list[str]:
    """Return documentation entry points drawn from ``dependencies``.

    Args:
        dependencies: File paths reported by the host build.
        exclude: Pattern marking paths inside third-party dependency directories.
        include: Pattern a path must match to count as an entry point.

    Returns:
        list[str]: Matching paths, deduplicated in order of first appearance.
    """

    selected: list[str] = []
    seen: set[str] = set()
    for raw in dependencies:
        filepath = str(raw)
        if filepath in seen or exclude.search(filepath) or not include.search(filepath):
            continue
        seen.add(filepath)
        selected.append(filepath)
    return selected


__all__ = [
    "DEPENDENCY_DIR_PATTERN",
    "ENTRY_POINT_PATTERN",
    "collect_entry_points",
    "longest_common_directory",
]
