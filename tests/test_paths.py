# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Blackcat Informatics® Inc.

"""Tests for source-root inference helpers."""

from __future__ import annotations

import re

import pytest

from esdoc_plugin.paths import collect_entry_points, longest_common_directory


def test_common_directory_trims_partial_segment() -> None:
    paths = ["/a/b/index.js", "/a/b/c/index.js", "/a/bb/index.js"]
    assert longest_common_directory(paths) == "/a"


def test_common_directory_of_nested_entry_points() -> None:
    assert longest_common_directory(["/proj/src/index.js", "/proj/src/sub/index.js"]) == "/proj/src"


def test_common_directory_single_path_is_its_parent() -> None:
    assert longest_common_directory(["/proj/src/index.js"]) == "/proj/src"


def test_common_directory_handles_shorter_later_paths() -> None:
    assert longest_common_directory(["/proj/src/deep/index.js", "/proj/index.js"]) == "/proj"


@pytest.mark.parametrize(
    "paths",
    [
        ["/a/index.js", "/b/index.js"],
        ["a/index.js", "b/index.js"],
    ],
)
def test_common_directory_without_shared_root_is_empty(paths: list[str]) -> None:
    assert longest_common_directory(paths) == ""


def test_common_directory_rejects_empty_input() -> None:
    with pytest.raises(ValueError):
        longest_common_directory([])


def test_common_directory_honours_custom_separator() -> None:
    assert longest_common_directory([r"C:\proj\src\index.js", r"C:\proj\lib\index.js"], sep="\\") == r"C:\proj"


def test_collect_entry_points_filters_and_deduplicates() -> None:
    dependencies = [
        "/proj/node_modules/x/index.js",
        "/proj/src/index.js",
        "/proj/src/util.js",
        "/proj/src/sub/index.js",
        "/proj/src/index.js",
    ]
    assert collect_entry_points(dependencies) == ["/proj/src/index.js", "/proj/src/sub/index.js"]


def test_collect_entry_points_accepts_custom_patterns() -> None:
    dependencies = ["/proj/vendor/main.ts", "/proj/src/main.ts", "/proj/src/other.ts"]
    selected = collect_entry_points(
        dependencies,
        exclude=re.compile(r"/vendor/"),
        include=re.compile(r"main\.ts$"),
    )
    assert selected == ["/proj/src/main.ts"]


def test_collect_entry_points_empty_when_nothing_matches() -> None:
    assert collect_entry_points(["/proj/node_modules/a/index.js", "/proj/src/app.js"]) == []
